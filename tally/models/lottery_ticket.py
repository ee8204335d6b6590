"""Lottery ticket ORM model."""

from __future__ import annotations

from sqlalchemy import JSON, BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from tally.models.base import Base


class LotteryTicket(Base):
    """A ticket bought by an owner: 6 distinct numbers in 1..49."""

    __tablename__ = "lottery_tickets"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    owner: Mapped[str] = mapped_column(String(200), nullable=False)
    numbers: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
