"""Monotonic-id keyed record store.

Each record family owns one table (id -> row) and one row in `id_counters`
supplying fresh ids. Callers get frozen record copies, never ORM rows.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from tally.errors import NotFoundError, ValidationError
from tally.models.counter import IdCounter

logger = logging.getLogger(__name__)

Clock = Callable[[], int]

MAX_RECORD_ID = 2**63 - 1

M = TypeVar("M")
R = TypeVar("R")


def system_clock() -> int:
    """Host clock in nanoseconds since the epoch."""

    return time.time_ns()


def bootstrap_counters(session: Session, families: Iterable[str]) -> None:
    """Create a zeroed counter row for every family that lacks one."""

    for family in families:
        if session.get(IdCounter, family) is None:
            session.add(IdCounter(family=family, value=0))
    session.flush()


class IdCounterCell:
    """Durable integer cell holding the last id issued for one family."""

    def __init__(self, family: str) -> None:
        self.family = family

    def current(self, session: Session) -> int:
        row = session.get(IdCounter, self.family)
        return int(row.value) if row is not None else 0

    def next(self, session: Session) -> int:
        row = session.get(IdCounter, self.family)
        if row is None:
            row = IdCounter(family=self.family, value=0)
            session.add(row)
        row.value = int(row.value) + 1
        session.flush()
        return int(row.value)


class RecordStore(Generic[M, R]):
    """Insert/get/update/delete/clear over one record family.

    Subclasses set `model`, `label` and the timestamp fields, and implement
    `to_record`. `created_fields` are stamped once on insert;
    `modified_field` (if any) is re-stamped on every update and is never
    moved backwards.
    """

    model: type[M]
    label: str = "Record"
    created_fields: tuple[str, ...] = ("created_at",)
    modified_field: str | None = None

    def __init__(self, *, clock: Clock | None = None, max_record_bytes: int = 1024) -> None:
        self._clock = clock or system_clock
        self._max_record_bytes = int(max_record_bytes)
        self._counter = IdCounterCell(self.family)

    @property
    def family(self) -> str:
        return str(self.model.__tablename__)  # type: ignore[attr-defined]

    def to_record(self, row: M) -> R:
        raise NotImplementedError

    # --- writes -----------------------------------------------------------

    def insert(self, session: Session, **fields: Any) -> R:
        self._check_writable(fields)

        now = int(self._clock())
        values = dict(fields)
        for name in self.created_fields:
            values[name] = now
        self._check_size(values)

        # Counter bump and row insert commit or roll back together.
        with session.begin_nested():
            record_id = self._counter.next(session)
            row = self.model(id=record_id, **values)
            session.add(row)
            session.flush()

        logger.info("Inserted %s id=%s", self.family, record_id)
        return self.to_record(row)

    def update(self, session: Session, record_id: int, **fields: Any) -> R:
        row = self._get_row(session, record_id)
        self._check_writable(fields)

        values = dict(fields)
        if self.modified_field is not None:
            previous = getattr(row, self.modified_field)
            if previous is None:
                previous = max(int(getattr(row, name)) for name in self.created_fields)
            values[self.modified_field] = max(int(self._clock()), int(previous))

        merged = self._row_values(row)
        merged.update(values)
        merged.pop("id", None)
        self._check_size(merged)

        with session.begin_nested():
            for name, value in values.items():
                setattr(row, name, value)
            session.flush()

        logger.info("Updated %s id=%s fields=%s", self.family, record_id, sorted(fields))
        return self.to_record(row)

    def delete(self, session: Session, record_id: int) -> R:
        row = self._get_row(session, record_id)
        record = self.to_record(row)

        with session.begin_nested():
            session.delete(row)
            session.flush()

        logger.info("Deleted %s id=%s", self.family, record_id)
        return record

    def clear(self, session: Session) -> int:
        """Remove every record. The counter keeps its value."""

        with session.begin_nested():
            result = session.execute(delete(self.model))
        removed = int(result.rowcount or 0)
        logger.info("Cleared %s (%d removed)", self.family, removed)
        return removed

    # --- reads ------------------------------------------------------------

    def find(self, session: Session, record_id: int) -> R | None:
        row = self._lookup(session, record_id)
        return self.to_record(row) if row is not None else None

    def get(self, session: Session, record_id: int) -> R:
        return self.to_record(self._get_row(session, record_id))

    def snapshot(self, session: Session) -> list[R]:
        """All records in id (insertion) order."""

        stmt = select(self.model).order_by(self.model.id.asc())  # type: ignore[attr-defined]
        return [self.to_record(row) for row in session.scalars(stmt).all()]

    def count(self, session: Session) -> int:
        return int(session.scalar(select(func.count()).select_from(self.model)) or 0)

    def last_id(self, session: Session) -> int:
        return self._counter.current(session)

    # --- helpers ----------------------------------------------------------

    def _lookup(self, session: Session, record_id: int) -> M | None:
        record_id = int(record_id)
        # Ids past the BIGINT range were never issued.
        if record_id < 1 or record_id > MAX_RECORD_ID:
            return None
        return session.get(self.model, record_id)

    def _get_row(self, session: Session, record_id: int) -> M:
        row = self._lookup(session, record_id)
        if row is None:
            raise NotFoundError(message=f"{self.label} with id={record_id} not found")
        return row

    def _row_values(self, row: M) -> dict[str, Any]:
        table = self.model.__table__  # type: ignore[attr-defined]
        return {col.key: getattr(row, col.key) for col in table.columns}

    def _check_writable(self, fields: dict[str, Any]) -> None:
        table = self.model.__table__  # type: ignore[attr-defined]
        read_only = {"id", *self.created_fields}
        if self.modified_field:
            read_only.add(self.modified_field)
        bad = [name for name in fields if name not in table.columns or name in read_only]
        if bad:
            raise TypeError(f"{self.label}: unknown or read-only fields {sorted(bad)}")

    def _check_size(self, values: dict[str, Any]) -> None:
        size = len(json.dumps(values, default=str, separators=(",", ":")).encode("utf-8"))
        if size > self._max_record_bytes:
            raise ValidationError(
                message=f"{self.label} too large",
                details={"record": [f"Encoded size {size} exceeds {self._max_record_bytes} bytes"]},
            )
