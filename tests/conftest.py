from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from tally import create_app
from tally.db import create_app_engine, init_schema
from tally.repositories.lottery_repository import LotteryDrawRepository, LotteryTicketRepository
from tally.repositories.vote_repository import VoteRepository
from tally.services.lottery_service import LotteryService
from tally.services.vote_service import VoteService


class FakeClock:
    """Deterministic nanosecond clock: every read advances by `step`."""

    def __init__(self, start: int = 1_000, step: int = 10) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'tally.db'}"


@pytest.fixture
def engine(database_url):
    engine = create_app_engine(database_url)
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine, autoflush=False, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def vote_repo(clock) -> VoteRepository:
    return VoteRepository(clock=clock)


@pytest.fixture
def ticket_repo(clock) -> LotteryTicketRepository:
    return LotteryTicketRepository(clock=clock)


@pytest.fixture
def vote_service(vote_repo) -> VoteService:
    return VoteService(vote_repo)


@pytest.fixture
def lottery_service(ticket_repo, clock) -> LotteryService:
    return LotteryService(tickets=ticket_repo, draws=LotteryDrawRepository(clock=clock))


@pytest.fixture
def app(database_url, clock):
    return create_app({"DATABASE_URL": database_url, "CLOCK": clock, "TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()
