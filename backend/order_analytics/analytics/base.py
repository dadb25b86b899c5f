"""
Shared orchestration for every metric.

Each metric runs the same three-branch plan:

- comparison: from, to, compareFrom and compareTo are all given. Records from
  compareFrom onward are fetched and split into current/previous.
- single: a start is known (compareFrom when the comparison is incomplete,
  else `from`, else the earliest matching record for "all time"). Everything
  fetched is current.
- empty: no statuses to filter on, an inverted range, or no record in the
  store matches the filters at all. The zero-value envelope is returned
  without fetching any records.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from .aggregate import split_by_period
from .currency import CurrencyMetadataProvider, StaticCurrencyProvider
from .dates import Resolution, as_utc, calculate_resolution, day_after, to_epoch_ms, utc_now
from .errors import AnalyticsError, StoreFailure
from .periods import Period, RangeWindow
from .records import OrderRecord
from .store import RecordQuery, RecordStore

logger = logging.getLogger(__name__)

E = TypeVar("E")
R = TypeVar("R")


@dataclass(frozen=True)
class AnalyticsRequest:
    order_statuses: Tuple[str, ...] = ()
    currency_code: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    compare_from: Optional[datetime] = None
    compare_to: Optional[datetime] = None

    @property
    def has_full_comparison(self) -> bool:
        return None not in (self.date_from, self.date_to, self.compare_from, self.compare_to)


class Branch(str, enum.Enum):
    comparison = "comparison"
    single = "single"
    empty = "empty"


@dataclass(frozen=True)
class QueryPlan:
    branch: Branch
    window: Optional[RangeWindow] = None
    resolution: Optional[Resolution] = None
    ranges: Dict[str, Optional[int]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.branch == Branch.empty

    def record_query(self, statuses: Optional[Tuple[str, ...]], currency_code: Optional[str]) -> RecordQuery:
        return RecordQuery(
            created_from=self.window.fetch_from,
            created_before=self.window.fetch_before,
            statuses=statuses,
            currency_code=currency_code,
        )

    def envelope(self, model: Callable[..., E], current: Any, previous: Any, **extra: Any) -> E:
        return model(**self.ranges, current=current, previous=previous, **extra)


EMPTY_PLAN = QueryPlan(Branch.empty)


class AnalyticsService:
    """Base class wiring a RecordStore, currency metadata and a clock."""

    def __init__(
        self,
        store: RecordStore,
        currencies: Optional[CurrencyMetadataProvider] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._currencies = currencies or StaticCurrencyProvider()
        self._clock = clock

    # ---- store access ----

    def _fetch(self, metric: str, stage: str, fn: Callable[..., R], *args: Any) -> R:
        try:
            return fn(*args)
        except AnalyticsError:
            raise
        except Exception as exc:
            logger.error("[%s] record store failed during %s: %s", metric, stage, exc)
            raise StoreFailure(metric, stage) from exc

    def _resolve_start(
        self,
        metric: str,
        earliest: Callable[[RecordQuery], Optional[datetime]],
        query: RecordQuery,
    ) -> Optional[datetime]:
        first = self._fetch(metric, "resolve_start", earliest, query)
        return as_utc(first) if first is not None else None

    # ---- planning ----

    def _plan(
        self,
        metric: str,
        request: AnalyticsRequest,
        earliest: Callable[[RecordQuery], Optional[datetime]],
        statuses: Optional[Tuple[str, ...]],
        currency_code: Optional[str] = None,
    ) -> QueryPlan:
        if statuses is not None and not statuses:
            logger.debug("[%s] no order statuses given, empty result", metric)
            return EMPTY_PLAN

        lookup = RecordQuery(statuses=statuses, currency_code=currency_code)

        if request.has_full_comparison:
            window = RangeWindow(
                start=as_utc(request.date_from),
                end=as_utc(request.date_to),
                compare_start=as_utc(request.compare_from),
                compare_end=as_utc(request.compare_to),
            )
            if window.fetch_before <= window.start:
                logger.debug("[%s] inverted range, empty result", metric)
                return EMPTY_PLAN
            if self._resolve_start(metric, earliest, lookup) is None:
                logger.debug("[%s] no matching records, empty result", metric)
                return EMPTY_PLAN
            return QueryPlan(
                Branch.comparison,
                window,
                calculate_resolution(window.start, window.end),
                {
                    "dateRangeFrom": to_epoch_ms(request.date_from),
                    "dateRangeTo": to_epoch_ms(request.date_to),
                    "dateRangeFromCompareTo": to_epoch_ms(request.compare_from),
                    "dateRangeToCompareTo": to_epoch_ms(request.compare_to),
                },
            )

        # an incomplete comparison still widens the start to compareFrom
        start = request.compare_from if request.compare_from is not None else request.date_from
        end = as_utc(request.date_to) if request.date_to is not None else None
        if start is not None and end is not None and day_after(end) <= as_utc(start):
            logger.debug("[%s] inverted range, empty result", metric)
            return EMPTY_PLAN

        first = self._resolve_start(metric, earliest, lookup)
        if first is None:
            logger.debug("[%s] no matching records, empty result", metric)
            return EMPTY_PLAN
        if start is None:
            start = first

        window = RangeWindow(start=as_utc(start), end=end)
        if end is not None and window.fetch_before <= window.start:
            logger.debug("[%s] inverted range, empty result", metric)
            return EMPTY_PLAN
        now = self._clock()
        return QueryPlan(
            Branch.single,
            window,
            calculate_resolution(window.start, end, now),
            {"dateRangeFrom": to_epoch_ms(start), "dateRangeTo": to_epoch_ms(end or now)},
        )

    # ---- shared order plumbing ----

    def _orders_by_period(
        self,
        metric: str,
        plan: QueryPlan,
        statuses: Optional[Tuple[str, ...]],
        currency_code: Optional[str] = None,
    ) -> Tuple[List[OrderRecord], List[OrderRecord]]:
        orders = self._fetch(
            metric, "fetch_orders", self._store.list_orders, plan.record_query(statuses, currency_code)
        )
        parts = split_by_period(orders, plan.window, lambda o: o.created_at)
        return parts[Period.current], parts[Period.previous]


def sorted_buckets(rows: Sequence[R], *keys: Callable[[R], Any]) -> List[R]:
    """Ascending by bucket date, then by any secondary keys."""
    return sorted(rows, key=lambda r: tuple(k(r) for k in keys))


def statuses_of(request: AnalyticsRequest) -> Tuple[str, ...]:
    return tuple(str(getattr(s, "value", s)) for s in request.order_statuses)

