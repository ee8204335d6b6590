"""Vote routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from tally.db import get_session
from tally.schemas.vote import TimeRangeSchema, VoteListQuerySchema, VoteSchema, VoteWriteSchema
from tally.services.registry import get_services
from tally.utils.responses import ok

votes_bp = Blueprint("votes", __name__)
candidates_bp = Blueprint("candidates", __name__)

_vote_schema = VoteSchema()
_votes_schema = VoteSchema(many=True)
_write_schema = VoteWriteSchema()
_list_query_schema = VoteListQuerySchema()
_range_schema = TimeRangeSchema()


@votes_bp.post("")
def add_vote():
    payload = request.get_json(silent=True) or {}
    data = _write_schema.load(payload)

    vote = get_services().votes.add_vote(get_session(), data["candidate"], data["voter"])
    return ok(_vote_schema.dump(vote), status_code=201)


@votes_bp.get("")
def list_votes():
    """List votes, optionally filtered by candidate and/or voter and sorted."""

    args = _list_query_schema.load(request.args.to_dict())
    votes = get_services().votes.list_votes(
        get_session(),
        candidate=args["candidate"],
        voter=args["voter"],
        sort_by_timestamp=args["sort"] == "timestamp",
        ascending=args["order"] == "asc",
    )
    return ok(_votes_schema.dump(votes))


@votes_bp.delete("")
def clear_votes():
    removed = get_services().votes.clear_votes(get_session())
    return ok({"removed": removed})


@votes_bp.get("/<int:vote_id>")
def get_vote(vote_id: int):
    vote = get_services().votes.get_vote(get_session(), vote_id)
    return ok(_vote_schema.dump(vote))


@votes_bp.put("/<int:vote_id>")
def update_vote(vote_id: int):
    payload = request.get_json(silent=True) or {}
    data = _write_schema.load(payload)

    vote = get_services().votes.update_vote(get_session(), vote_id, data["candidate"], data["voter"])
    return ok(_vote_schema.dump(vote))


@votes_bp.delete("/<int:vote_id>")
def delete_vote(vote_id: int):
    vote = get_services().votes.delete_vote(get_session(), vote_id)
    return ok(_vote_schema.dump(vote))


@votes_bp.get("/total")
def total_votes():
    return ok({"total": get_services().votes.total_votes(get_session())})


@votes_bp.get("/latest-timestamp")
def latest_vote_timestamp():
    return ok({"timestamp": get_services().votes.get_latest_vote_timestamp(get_session())})


@votes_bp.get("/range")
def votes_in_time_range():
    """Votes with start <= timestamp <= end (both in nanoseconds)."""

    args = _range_schema.load(request.args.to_dict())
    votes = get_services().votes.get_votes_in_time_range(get_session(), args["start"], args["end"])
    return ok(_votes_schema.dump(votes))


@candidates_bp.get("")
def list_candidates():
    return ok(get_services().votes.get_candidates(get_session()))


@candidates_bp.get("/counts")
def candidate_vote_counts():
    return ok(get_services().votes.get_all_candidate_votes(get_session()))


@candidates_bp.get("/most-voted")
def most_voted_candidate():
    return ok({"candidate": get_services().votes.get_most_voted_candidate(get_session())})


@candidates_bp.get("/least-voted")
def least_voted_candidate():
    return ok({"candidate": get_services().votes.get_least_voted_candidate(get_session())})
