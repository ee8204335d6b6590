from __future__ import annotations

import pytest

from tally.errors import ConflictError, NoDataError, NotFoundError, ValidationError


def test_duplicate_vote_is_rejected(session, vote_service):
    vote_service.add_vote(session, "X", "v1")

    with pytest.raises(ConflictError):
        vote_service.add_vote(session, "X", "v1")
    assert vote_service.total_votes(session) == 1


def test_same_voter_may_vote_for_different_candidates(session, vote_service):
    vote_service.add_vote(session, "X", "v1")
    vote_service.add_vote(session, "Y", "v1")

    assert [v.candidate for v in vote_service.get_votes_by_voter(session, "v1")] == ["X", "Y"]


def test_blank_names_are_invalid(session, vote_service):
    with pytest.raises(ValidationError):
        vote_service.add_vote(session, "  ", "v1")
    with pytest.raises(ValidationError):
        vote_service.add_vote(session, "X", "")
    assert vote_service.total_votes(session) == 0


def test_most_and_least_voted(session, vote_service):
    for voter, candidate in [("v1", "A"), ("v2", "A"), ("v3", "B")]:
        vote_service.add_vote(session, candidate, voter)

    assert vote_service.get_most_voted_candidate(session) == "A"
    assert vote_service.get_least_voted_candidate(session) == "B"
    assert vote_service.get_all_candidate_votes(session) == {"A": 2, "B": 1}
    assert vote_service.get_candidates(session) == ["A", "B"]


def test_extremes_without_votes_raise_no_data(session, vote_service):
    with pytest.raises(NoDataError):
        vote_service.get_most_voted_candidate(session)
    with pytest.raises(NoDataError):
        vote_service.get_least_voted_candidate(session)


def test_empty_listings_are_not_errors(session, vote_service):
    assert vote_service.get_votes(session) == []
    assert vote_service.get_votes_by_candidate(session, "A") == []
    assert vote_service.get_latest_vote_timestamp(session) == 0


def test_update_vote_refreshes_timestamp(session, vote_service):
    vote = vote_service.add_vote(session, "A", "v1")

    updated = vote_service.update_vote(session, vote.id, "B", "v1")

    assert updated.id == vote.id
    assert updated.candidate == "B"
    assert updated.created_at == vote.created_at
    assert updated.timestamp > vote.timestamp
    assert vote_service.get_latest_vote_timestamp(session) == updated.timestamp


def test_update_vote_to_existing_pair_conflicts(session, vote_service):
    vote_service.add_vote(session, "A", "v1")
    second = vote_service.add_vote(session, "B", "v1")

    with pytest.raises(ConflictError):
        vote_service.update_vote(session, second.id, "A", "v1")
    assert vote_service.get_vote(session, second.id).candidate == "B"


def test_update_vote_to_its_own_pair_is_allowed(session, vote_service):
    vote = vote_service.add_vote(session, "A", "v1")

    assert vote_service.update_vote(session, vote.id, "A", "v1").candidate == "A"


def test_update_missing_vote(session, vote_service):
    with pytest.raises(NotFoundError):
        vote_service.update_vote(session, 99, "A", "v1")


def test_delete_then_get_fails(session, vote_service):
    vote = vote_service.add_vote(session, "A", "v1")

    assert vote_service.delete_vote(session, vote.id) == vote
    with pytest.raises(NotFoundError):
        vote_service.get_vote(session, vote.id)
    with pytest.raises(NotFoundError):
        vote_service.delete_vote(session, vote.id)


def test_clear_then_add_continues_ids(session, vote_service):
    vote_service.add_vote(session, "A", "v1")
    vote_service.add_vote(session, "A", "v2")

    assert vote_service.clear_votes(session) == 2
    assert vote_service.total_votes(session) == 0
    assert vote_service.add_vote(session, "A", "v1").id == 3


def test_time_range_and_sorting(session, vote_service):
    a = vote_service.add_vote(session, "A", "v1")  # t=1000
    b = vote_service.add_vote(session, "B", "v2")  # t=1010
    c = vote_service.add_vote(session, "C", "v3")  # t=1020
    a = vote_service.update_vote(session, a.id, "A", "v9")  # t=1030

    in_range = vote_service.get_votes_in_time_range(session, b.timestamp, c.timestamp)
    assert [v.id for v in in_range] == [b.id, c.id]
    assert vote_service.get_votes_in_time_range(session, c.timestamp, b.timestamp) == []

    ordered = vote_service.get_votes_sorted_by_timestamp(session)
    assert [v.id for v in ordered] == [b.id, c.id, a.id]
    newest_first = vote_service.get_votes_sorted_by_timestamp(session, ascending=False)
    assert [v.id for v in newest_first] == [a.id, c.id, b.id]
