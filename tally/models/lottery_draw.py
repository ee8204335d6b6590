"""Lottery draw model.

Participants are stored inline as a JSON list of ticket owners, in the
order they joined.
"""

from __future__ import annotations

from sqlalchemy import JSON, BigInteger
from sqlalchemy.orm import Mapped, mapped_column

from tally.models.base import Base


class LotteryDraw(Base):
    """A conducted draw with its winning numbers."""

    __tablename__ = "lottery_draws"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    winning_numbers: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    draw_time: Mapped[int] = mapped_column(BigInteger, nullable=False)
    participants: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
