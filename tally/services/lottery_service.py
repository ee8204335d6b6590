"""Business logic for lottery tickets and draws."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from tally.errors import ValidationError
from tally.repositories.lottery_repository import (
    LotteryDrawRecord,
    LotteryDrawRepository,
    LotteryTicketRecord,
    LotteryTicketRepository,
)
from tally.services import queries

logger = logging.getLogger(__name__)

NUMBERS_PER_TICKET = 6
MIN_NUMBER = 1
MAX_NUMBER = 49


def validate_numbers(numbers: Iterable[object] | None, field: str = "numbers") -> list[int]:
    """Return the numbers as ints if they are 6 distinct values in 1..49."""

    values = list(numbers or [])
    # No coercion: 1.9 or True must not be stored as 1.
    if any(isinstance(n, bool) or not isinstance(n, int) for n in values):
        raise ValidationError(
            message=f"Invalid {field}",
            details={field: ["All numbers must be integers"]},
        )

    if len(values) != NUMBERS_PER_TICKET:
        raise ValidationError(
            message=f"Invalid {field}",
            details={field: [f"Exactly {NUMBERS_PER_TICKET} numbers required (got {len(values)})"]},
        )
    if any(n < MIN_NUMBER or n > MAX_NUMBER for n in values):
        raise ValidationError(
            message=f"Invalid {field}",
            details={field: [f"All numbers must be within {MIN_NUMBER}..{MAX_NUMBER}"]},
        )
    if len(set(values)) != len(values):
        raise ValidationError(
            message=f"Invalid {field}",
            details={field: ["Numbers must be unique"]},
        )
    return values


def _require_owner(owner: object) -> str:
    name = str(owner or "").strip()
    if not name:
        raise ValidationError(message="Invalid owner", details={"owner": ["Must be a non-empty string"]})
    return name


class LotteryService:
    """Ticket purchase, draws and draw participation."""

    def __init__(
        self,
        tickets: LotteryTicketRepository | None = None,
        draws: LotteryDrawRepository | None = None,
    ) -> None:
        self._tickets = tickets or LotteryTicketRepository()
        self._draws = draws or LotteryDrawRepository()

    # --- tickets ----------------------------------------------------------

    def buy_ticket(self, session: Session, owner: str, numbers: Iterable[int]) -> LotteryTicketRecord:
        owner = _require_owner(owner)
        values = validate_numbers(numbers)
        return self._tickets.insert(session, owner=owner, numbers=values)

    def check_ticket(self, session: Session, ticket_id: int) -> LotteryTicketRecord:
        return self._tickets.get(session, ticket_id)

    def update_ticket(
        self,
        session: Session,
        ticket_id: int,
        owner: str | None = None,
        numbers: Iterable[int] | None = None,
    ) -> LotteryTicketRecord:
        """Replace the owner and/or numbers; omitted fields stay as they are."""

        self._tickets.get(session, ticket_id)

        fields: dict[str, object] = {}
        if owner is not None:
            fields["owner"] = _require_owner(owner)
        if numbers is not None:
            fields["numbers"] = validate_numbers(numbers)
        return self._tickets.update(session, ticket_id, **fields)

    def delete_ticket(self, session: Session, ticket_id: int) -> LotteryTicketRecord:
        return self._tickets.delete(session, ticket_id)

    def clear_tickets(self, session: Session) -> int:
        return self._tickets.clear(session)

    def get_all_tickets(self, session: Session) -> list[LotteryTicketRecord]:
        return queries.require_any(self._tickets.snapshot(session), "No lottery tickets found")

    def get_tickets_by_owner(self, session: Session, owner: str) -> list[LotteryTicketRecord]:
        return queries.filter_by(self._tickets.snapshot(session), lambda t: t.owner == owner)

    # --- draws ------------------------------------------------------------

    def conduct_draw(self, session: Session, winning_numbers: Iterable[int]) -> LotteryDrawRecord:
        values = validate_numbers(winning_numbers, field="winning_numbers")
        return self._draws.insert(session, winning_numbers=values, participants=[])

    def get_draw(self, session: Session, draw_id: int) -> LotteryDrawRecord:
        return self._draws.get(session, draw_id)

    def participate_in_draw(self, session: Session, ticket_id: int, draw_id: int) -> LotteryDrawRecord:
        """Add the ticket's owner to the draw's participants."""

        ticket = self._tickets.get(session, ticket_id)
        draw = self._draws.get(session, draw_id)

        participants = [*draw.participants, ticket.owner]
        logger.info("Ticket %s (%s) joined draw %s", ticket.id, ticket.owner, draw.id)
        return self._draws.update(session, draw_id, participants=participants)

    def delete_draw(self, session: Session, draw_id: int) -> LotteryDrawRecord:
        return self._draws.delete(session, draw_id)

    def clear_draws(self, session: Session) -> int:
        return self._draws.clear(session)

    def get_all_draws(self, session: Session) -> list[LotteryDrawRecord]:
        return queries.require_any(self._draws.snapshot(session), "No lottery draws found")
