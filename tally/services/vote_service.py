"""Service layer for voting use-cases."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from tally.errors import ConflictError, ValidationError
from tally.repositories.vote_repository import VoteRecord, VoteRepository
from tally.services import queries

logger = logging.getLogger(__name__)


def _require_name(value: object, field: str) -> str:
    name = str(value or "").strip()
    if not name:
        raise ValidationError(
            message=f"Invalid {field}",
            details={field: ["Must be a non-empty string"]},
        )
    return name


class VoteService:
    """Votes: one per (candidate, voter) pair."""

    def __init__(self, repository: VoteRepository | None = None) -> None:
        self._repo = repository or VoteRepository()

    def _ensure_unique_pair(
        self, session: Session, candidate: str, voter: str, ignore_id: int | None = None
    ) -> None:
        clashes = queries.filter_by(
            self._repo.snapshot(session),
            lambda v: v.candidate == candidate and v.voter == voter and v.id != ignore_id,
        )
        if clashes:
            logger.info("Rejected duplicate vote candidate=%s voter=%s", candidate, voter)
            raise ConflictError(
                message=f"{voter!r} already voted for {candidate!r}",
                details={"vote_id": clashes[0].id},
            )

    # --- writes -----------------------------------------------------------

    def add_vote(self, session: Session, candidate: str, voter: str) -> VoteRecord:
        candidate = _require_name(candidate, "candidate")
        voter = _require_name(voter, "voter")
        self._ensure_unique_pair(session, candidate, voter)
        return self._repo.insert(session, candidate=candidate, voter=voter)

    def update_vote(self, session: Session, vote_id: int, candidate: str, voter: str) -> VoteRecord:
        self._repo.get(session, vote_id)
        candidate = _require_name(candidate, "candidate")
        voter = _require_name(voter, "voter")
        self._ensure_unique_pair(session, candidate, voter, ignore_id=int(vote_id))
        return self._repo.update(session, vote_id, candidate=candidate, voter=voter)

    def delete_vote(self, session: Session, vote_id: int) -> VoteRecord:
        return self._repo.delete(session, vote_id)

    def clear_votes(self, session: Session) -> int:
        return self._repo.clear(session)

    # --- reads ------------------------------------------------------------

    def get_vote(self, session: Session, vote_id: int) -> VoteRecord:
        return self._repo.get(session, vote_id)

    def get_votes(self, session: Session) -> list[VoteRecord]:
        return self._repo.snapshot(session)

    def total_votes(self, session: Session) -> int:
        return self._repo.count(session)

    def get_votes_by_candidate(self, session: Session, candidate: str) -> list[VoteRecord]:
        return queries.filter_by(self._repo.snapshot(session), lambda v: v.candidate == candidate)

    def get_votes_by_voter(self, session: Session, voter: str) -> list[VoteRecord]:
        return queries.filter_by(self._repo.snapshot(session), lambda v: v.voter == voter)

    def get_latest_vote_timestamp(self, session: Session) -> int:
        return int(queries.latest_by(self._repo.snapshot(session), lambda v: v.timestamp, default=0))

    def get_candidates(self, session: Session) -> list[str]:
        return queries.distinct_by(self._repo.snapshot(session), lambda v: v.candidate)

    def get_all_candidate_votes(self, session: Session) -> dict[str, int]:
        return queries.aggregate_by(self._repo.snapshot(session), lambda v: v.candidate)

    def get_votes_in_time_range(self, session: Session, start_time: int, end_time: int) -> list[VoteRecord]:
        return queries.range_by(
            self._repo.snapshot(session), lambda v: v.timestamp, int(start_time), int(end_time)
        )

    def get_most_voted_candidate(self, session: Session) -> str:
        return queries.max_by_count(self.get_all_candidate_votes(session))

    def get_least_voted_candidate(self, session: Session) -> str:
        return queries.min_by_count(self.get_all_candidate_votes(session))

    def list_votes(
        self,
        session: Session,
        candidate: str | None = None,
        voter: str | None = None,
        sort_by_timestamp: bool = False,
        ascending: bool = True,
    ) -> list[VoteRecord]:
        """Votes matching every given filter, optionally ordered by timestamp."""

        votes = self._repo.snapshot(session)
        if candidate is not None:
            votes = queries.filter_by(votes, lambda v: v.candidate == candidate)
        if voter is not None:
            votes = queries.filter_by(votes, lambda v: v.voter == voter)
        if sort_by_timestamp:
            votes = queries.sort_by(votes, lambda v: v.timestamp, ascending=ascending)
        return votes

    def get_votes_sorted_by_timestamp(self, session: Session, ascending: bool = True) -> list[VoteRecord]:
        return queries.sort_by(self._repo.snapshot(session), lambda v: v.timestamp, ascending=ascending)
