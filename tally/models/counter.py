"""Durable id counter, one row per record family."""

from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from tally.models.base import Base


class IdCounter(Base):
    """Last id handed out for a record family. Never decremented."""

    __tablename__ = "id_counters"

    family: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
