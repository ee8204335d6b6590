from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tally.errors import NotFoundError, ValidationError
from tally.models import IdCounter, Vote
from tally.repositories.vote_repository import VoteRecord, VoteRepository


def test_ids_are_sequential_and_never_reused(session, vote_repo):
    first = [vote_repo.insert(session, candidate="A", voter=f"v{i}").id for i in range(3)]
    assert first == [1, 2, 3]

    vote_repo.delete(session, 2)
    vote_repo.delete(session, 3)

    assert vote_repo.insert(session, candidate="A", voter="v9").id == 4
    assert vote_repo.last_id(session) == 4


def test_insert_then_get_returns_equal_record(session, vote_repo):
    created = vote_repo.insert(session, candidate="A", voter="v1")

    assert vote_repo.get(session, created.id) == created
    assert created == VoteRecord(id=1, candidate="A", voter="v1", timestamp=1_000, created_at=1_000)


def test_records_are_copies(session, vote_repo):
    created = vote_repo.insert(session, candidate="A", voter="v1")

    with pytest.raises(AttributeError):
        created.candidate = "B"  # type: ignore[misc]
    assert vote_repo.get(session, 1).candidate == "A"


def test_get_missing_raises_not_found(session, vote_repo):
    with pytest.raises(NotFoundError) as exc_info:
        vote_repo.get(session, 42)
    assert "id=42" in exc_info.value.message
    assert vote_repo.find(session, 42) is None


def test_ids_outside_the_issued_range_are_absent(session, vote_repo):
    vote_repo.insert(session, candidate="A", voter="v1")

    for record_id in [0, -1, 2**63, 10**23]:
        assert vote_repo.find(session, record_id) is None
        with pytest.raises(NotFoundError):
            vote_repo.get(session, record_id)
        with pytest.raises(NotFoundError):
            vote_repo.delete(session, record_id)
    assert vote_repo.count(session) == 1


def test_delete_returns_record_and_removes_it(session, vote_repo):
    created = vote_repo.insert(session, candidate="A", voter="v1")

    assert vote_repo.delete(session, created.id) == created
    with pytest.raises(NotFoundError):
        vote_repo.get(session, created.id)


def test_delete_missing_leaves_store_unchanged(session, vote_repo):
    vote_repo.insert(session, candidate="A", voter="v1")

    with pytest.raises(NotFoundError):
        vote_repo.delete(session, 7)
    assert vote_repo.count(session) == 1


def test_update_preserves_id_and_creation_time(session, vote_repo):
    created = vote_repo.insert(session, candidate="A", voter="v1")

    updated = vote_repo.update(session, created.id, candidate="B")

    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.candidate == "B"
    assert updated.voter == "v1"
    assert updated.timestamp > created.timestamp


def test_update_never_moves_modification_time_backwards(session):
    readings = iter([5_000, 100])
    repo = VoteRepository(clock=lambda: next(readings))
    created = repo.insert(session, candidate="A", voter="v1")

    updated = repo.update(session, created.id, voter="v2")

    assert updated.timestamp == 5_000


def test_update_missing_raises_not_found(session, vote_repo):
    with pytest.raises(NotFoundError):
        vote_repo.update(session, 3, candidate="B")


def test_update_rejects_read_only_fields(session, vote_repo):
    vote_repo.insert(session, candidate="A", voter="v1")

    with pytest.raises(TypeError):
        vote_repo.update(session, 1, created_at=0)


def test_clear_keeps_counter(session, vote_repo):
    vote_repo.insert(session, candidate="A", voter="v1")
    vote_repo.insert(session, candidate="B", voter="v2")

    assert vote_repo.clear(session) == 2
    assert vote_repo.snapshot(session) == []
    assert vote_repo.insert(session, candidate="C", voter="v3").id == 3


def test_snapshot_is_in_id_order(session, vote_repo):
    for name in ["C", "A", "B"]:
        vote_repo.insert(session, candidate=name, voter="v")

    assert [v.candidate for v in vote_repo.snapshot(session)] == ["C", "A", "B"]


def test_oversized_record_is_rejected_without_bumping_counter(session, clock):
    repo = VoteRepository(clock=clock, max_record_bytes=128)

    with pytest.raises(ValidationError):
        repo.insert(session, candidate="x" * 200, voter="v1")

    assert repo.count(session) == 0
    assert repo.last_id(session) == 0


def test_failed_insert_rolls_back_counter(engine, vote_repo):
    # Plant a row at id=1 behind the counter's back so the next insert collides.
    with Session(engine) as setup:
        setup.add(Vote(id=1, candidate="A", voter="v1", timestamp=1, created_at=1))
        setup.commit()

    with Session(engine) as session:
        with pytest.raises(IntegrityError):
            vote_repo.insert(session, candidate="B", voter="v2")

        assert vote_repo.last_id(session) == 0
        assert session.get(IdCounter, "votes").value == 0


def test_counter_survives_new_sessions(engine, vote_repo):
    with Session(engine) as session:
        vote_repo.insert(session, candidate="A", voter="v1")
        session.commit()

    with Session(engine) as session:
        assert vote_repo.insert(session, candidate="A", voter="v2").id == 2
