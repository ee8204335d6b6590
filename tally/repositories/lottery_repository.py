"""Repository layer for lottery tickets and draws."""

from __future__ import annotations

from dataclasses import dataclass

from tally.models.lottery_draw import LotteryDraw
from tally.models.lottery_ticket import LotteryTicket
from tally.repositories.record_store import RecordStore


@dataclass(frozen=True)
class LotteryTicketRecord:
    id: int
    owner: str
    numbers: tuple[int, ...]
    created_at: int
    updated_at: int | None = None


@dataclass(frozen=True)
class LotteryDrawRecord:
    id: int
    winning_numbers: tuple[int, ...]
    draw_time: int
    participants: tuple[str, ...] = ()


class LotteryTicketRepository(RecordStore[LotteryTicket, LotteryTicketRecord]):
    model = LotteryTicket
    label = "Lottery ticket"
    created_fields = ("created_at",)
    modified_field = "updated_at"

    def to_record(self, row: LotteryTicket) -> LotteryTicketRecord:
        return LotteryTicketRecord(
            id=int(row.id),
            owner=str(row.owner),
            numbers=tuple(int(n) for n in row.numbers or ()),
            created_at=int(row.created_at),
            updated_at=int(row.updated_at) if row.updated_at is not None else None,
        )


class LotteryDrawRepository(RecordStore[LotteryDraw, LotteryDrawRecord]):
    """Draws keep their draw_time across participant updates."""

    model = LotteryDraw
    label = "Lottery draw"
    created_fields = ("draw_time",)
    modified_field = None

    def to_record(self, row: LotteryDraw) -> LotteryDrawRecord:
        return LotteryDrawRecord(
            id=int(row.id),
            winning_numbers=tuple(int(n) for n in row.winning_numbers or ()),
            draw_time=int(row.draw_time),
            participants=tuple(str(p) for p in row.participants or ()),
        )
