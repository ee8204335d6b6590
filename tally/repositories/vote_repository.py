"""Repository layer for Vote persistence."""

from __future__ import annotations

from dataclasses import dataclass

from tally.models.vote import Vote
from tally.repositories.record_store import RecordStore


@dataclass(frozen=True)
class VoteRecord:
    id: int
    candidate: str
    voter: str
    timestamp: int
    created_at: int


class VoteRepository(RecordStore[Vote, VoteRecord]):
    """Keyed store of votes; `timestamp` tracks the last write."""

    model = Vote
    label = "Vote"
    created_fields = ("created_at", "timestamp")
    modified_field = "timestamp"

    def to_record(self, row: Vote) -> VoteRecord:
        return VoteRecord(
            id=int(row.id),
            candidate=str(row.candidate),
            voter=str(row.voter),
            timestamp=int(row.timestamp),
            created_at=int(row.created_at),
        )
