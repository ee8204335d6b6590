"""Read-only derivations over a snapshot of records.

Every function takes the full record sequence returned by a store's
`snapshot()` and builds a fresh result; nothing is cached or indexed.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import Any, TypeVar

from tally.errors import NoDataError, NotFoundError

R = TypeVar("R")
K = TypeVar("K", bound=Hashable)


def require_any(records: Sequence[R], message: str = "No records found") -> list[R]:
    """Full listing that treats an empty store as NotFound."""

    if not records:
        raise NotFoundError(message=message)
    return list(records)


def filter_by(records: Iterable[R], predicate: Callable[[R], bool]) -> list[R]:
    return [r for r in records if predicate(r)]


def sort_by(records: Iterable[R], key: Callable[[R], Any], ascending: bool = True) -> list[R]:
    # sorted() stays stable with reverse=True, so ties keep snapshot order.
    return sorted(records, key=key, reverse=not ascending)


def range_by(records: Iterable[R], key: Callable[[R], Any], lo: Any, hi: Any) -> list[R]:
    """Records whose key lies in [lo, hi]. Empty when lo > hi."""

    if lo > hi:
        return []
    return [r for r in records if lo <= key(r) <= hi]


def aggregate_by(records: Iterable[R], key: Callable[[R], K]) -> dict[K, int]:
    """Count records per group key, in first-seen order."""

    counts: dict[K, int] = {}
    for r in records:
        k = key(r)
        counts[k] = counts.get(k, 0) + 1
    return counts


def max_by_count(counts: dict[K, int]) -> K:
    """Key with the highest count; ties go to the smallest key."""

    if not counts:
        raise NoDataError(message="No data to aggregate")
    return min(counts.items(), key=lambda kv: (-kv[1], kv[0]))[0]


def min_by_count(counts: dict[K, int]) -> K:
    """Key with the lowest count; ties go to the smallest key."""

    if not counts:
        raise NoDataError(message="No data to aggregate")
    return min(counts.items(), key=lambda kv: (kv[1], kv[0]))[0]


def distinct_by(records: Iterable[R], key: Callable[[R], K]) -> list[K]:
    return sorted({key(r) for r in records})


def latest_by(records: Iterable[R], key: Callable[[R], Any], default: Any = 0) -> Any:
    return max((key(r) for r in records), default=default)
