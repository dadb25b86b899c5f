"""Grouping reducers shared by every metric."""
from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, List, Sequence, Tuple, TypeVar

from .periods import Period, RangeWindow

R = TypeVar("R")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
A = TypeVar("A")


def aggregate(
    records: Iterable[R],
    key_fn: Callable[[R], K],
    value_fn: Callable[[R], V],
    reducer: Callable[[A, V], A],
    initial: Callable[[], A],
) -> Dict[K, A]:
    out: Dict[K, A] = {}
    for record in records:
        key = key_fn(record)
        acc = out[key] if key in out else initial()
        out[key] = reducer(acc, value_fn(record))
    return out


def count_by(records: Iterable[R], key_fn: Callable[[R], K]) -> Dict[K, int]:
    return aggregate(records, key_fn, lambda _: 1, lambda acc, v: acc + v, int)


def sum_by(
    records: Iterable[R],
    key_fn: Callable[[R], K],
    value_fn: Callable[[R], Tuple[int, ...]],
    width: int = 1,
) -> Dict[K, Tuple[int, ...]]:
    """Sum one or more integer fields per key (element-wise over tuples of `width`)."""
    return aggregate(
        records,
        key_fn,
        value_fn,
        lambda acc, v: tuple(a + b for a, b in zip(acc, v)),
        lambda: (0,) * width,
    )


def split_by_period(records: Iterable[R], window: RangeWindow, ts_fn: Callable[[R], object]) -> Dict[Period, List[R]]:
    """Partition into current/previous; excluded records are dropped."""
    out: Dict[Period, List[R]] = {Period.current: [], Period.previous: []}
    for record in records:
        period = window.classify(ts_fn(record))
        if period != Period.excluded:
            out[period].append(record)
    return out


def with_percentages(counts: Dict[K, int]) -> List[Tuple[K, int, float]]:
    """(key, count, share of total in %) rows; empty when nothing was counted."""
    total = sum(counts.values())
    if total == 0:
        return []
    return [(key, n, round(n * 100 / total, 2)) for key, n in counts.items()]


def rank(rows: Sequence[R], count_fn: Callable[[R], int], id_fn: Callable[[R], str]) -> List[R]:
    """Descending by count, ties broken by ascending id."""
    return sorted(rows, key=lambda r: (-count_fn(r), id_fn(r)))
