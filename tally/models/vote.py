"""Vote ORM model."""

from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from tally.models.base import Base


class Vote(Base):
    """One vote cast by a voter for a candidate.

    `timestamp` is refreshed on every update; `created_at` never changes.
    The id comes from the `votes` counter, so autoincrement is off.
    """

    __tablename__ = "votes"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    candidate: Mapped[str] = mapped_column(String(200), nullable=False)
    voter: Mapped[str] = mapped_column(String(200), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
