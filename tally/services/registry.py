"""Process-wide service wiring, built once by the app factory."""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from tally.repositories.lottery_repository import LotteryDrawRepository, LotteryTicketRepository
from tally.repositories.record_store import Clock
from tally.repositories.vote_repository import VoteRepository
from tally.services.lottery_service import LotteryService
from tally.services.vote_service import VoteService


@dataclass(frozen=True)
class Services:
    votes: VoteService
    lottery: LotteryService


def build_services(clock: Clock | None = None, max_record_bytes: int = 1024) -> Services:
    """Bind one store per record family and the services on top of them."""

    opts = {"clock": clock, "max_record_bytes": max_record_bytes}
    return Services(
        votes=VoteService(VoteRepository(**opts)),
        lottery=LotteryService(
            tickets=LotteryTicketRepository(**opts),
            draws=LotteryDrawRepository(**opts),
        ),
    )


def get_services() -> Services:
    services: Services | None = current_app.extensions.get("services")
    if services is None:
        raise RuntimeError("Services not initialized")
    return services
