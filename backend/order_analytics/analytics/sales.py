from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from order_analytics.schemas.analytics import (
    RefundsEnvelope,
    RegionBucket,
    RegionsEnvelope,
    SalesChannelBucket,
    SalesChannelsEnvelope,
    SalesHistoryBucket,
    SalesHistoryEnvelope,
    TotalsBreakdown,
    TotalsEnvelope,
    TotalsHistoryBucket,
    TotalsHistoryEnvelope,
)

from .aggregate import count_by, split_by_period, sum_by
from .base import EMPTY_PLAN, AnalyticsRequest, AnalyticsService, QueryPlan, sorted_buckets, statuses_of
from .dates import Resolution, truncate
from .periods import Period
from .records import OrderRecord
from .store import RecordQuery

logger = logging.getLogger(__name__)


def _money(order: OrderRecord):
    return (order.revenue_pre_shipping, order.shipping_total, order.tax_total)


def _sales_history(orders: List[OrderRecord], resolution: Resolution) -> List[SalesHistoryBucket]:
    sums = sum_by(orders, lambda o: truncate(o.created_at, resolution), lambda o: (o.total,))
    return sorted_buckets(
        [SalesHistoryBucket(date=d, total=s[0]) for d, s in sums.items()],
        lambda b: b.date,
    )


def _totals(orders: List[OrderRecord]) -> TotalsBreakdown:
    sums = sum_by(orders, lambda _: "all", _money, width=3).get("all", (0, 0, 0))
    return TotalsBreakdown(revenuePreShipping=sums[0], shipping=sums[1], taxes=sums[2])


def _totals_history(orders: List[OrderRecord], resolution: Resolution) -> List[TotalsHistoryBucket]:
    sums = sum_by(orders, lambda o: truncate(o.created_at, resolution), _money, width=3)
    return sorted_buckets(
        [
            TotalsHistoryBucket(date=d, revenuePreShipping=s[0], shipping=s[1], taxes=s[2])
            for d, s in sums.items()
        ],
        lambda b: b.date,
    )


def _regions(orders: List[OrderRecord], resolution: Resolution) -> List[RegionBucket]:
    counts = count_by(
        [o for o in orders if o.region is not None],
        lambda o: (truncate(o.created_at, resolution), o.region),
    )
    return sorted_buckets(
        [
            RegionBucket(date=d, regionId=region.id, regionName=region.name, orderCount=n)
            for (d, region), n in counts.items()
        ],
        lambda b: b.date,
        lambda b: b.regionId,
    )


def _sales_channels(orders: List[OrderRecord], resolution: Resolution) -> List[SalesChannelBucket]:
    counts = count_by(
        [o for o in orders if o.sales_channel is not None],
        lambda o: (truncate(o.created_at, resolution), o.sales_channel),
    )
    return sorted_buckets(
        [
            SalesChannelBucket(date=d, salesChannelId=ch.id, salesChannelName=ch.name, orderCount=n)
            for (d, ch), n in counts.items()
        ],
        lambda b: b.date,
        lambda b: b.salesChannelId,
    )


class SalesAnalytics(AnalyticsService):
    """Revenue, totals, refunds and where orders come from."""

    def _currency_fields(self, request: AnalyticsRequest) -> dict:
        return {
            "currencyCode": request.currency_code,
            "currencyDecimalDigits": self._currencies.decimal_digits(request.currency_code),
        }

    def _money_plan(
        self,
        metric: str,
        request: AnalyticsRequest,
        earliest: Callable[[RecordQuery], Optional[datetime]],
        statuses: Optional[Tuple[str, ...]],
    ) -> QueryPlan:
        # minor units of different currencies never add up
        if not request.currency_code:
            logger.debug("[%s] no currency given, empty result", metric)
            return EMPTY_PLAN
        return self._plan(metric, request, earliest, statuses, request.currency_code)

    def sales_history(self, request: AnalyticsRequest) -> SalesHistoryEnvelope:
        metric = "sales_history"
        statuses = statuses_of(request)
        currency = self._currency_fields(request)
        plan = self._money_plan(metric, request, self._store.earliest_order, statuses)
        if plan.is_empty:
            return SalesHistoryEnvelope(current=[], previous=[], **currency)
        current, previous = self._orders_by_period(metric, plan, statuses, request.currency_code)
        return plan.envelope(
            SalesHistoryEnvelope,
            _sales_history(current, plan.resolution),
            _sales_history(previous, plan.resolution),
            **currency,
        )

    def totals(self, request: AnalyticsRequest) -> TotalsEnvelope:
        metric = "totals"
        statuses = statuses_of(request)
        currency = self._currency_fields(request)
        plan = self._money_plan(metric, request, self._store.earliest_order, statuses)
        if plan.is_empty:
            return TotalsEnvelope(current=TotalsBreakdown(), previous=TotalsBreakdown(), **currency)
        current, previous = self._orders_by_period(metric, plan, statuses, request.currency_code)
        return plan.envelope(TotalsEnvelope, _totals(current), _totals(previous), **currency)

    def totals_history(self, request: AnalyticsRequest) -> TotalsHistoryEnvelope:
        metric = "totals_history"
        statuses = statuses_of(request)
        currency = self._currency_fields(request)
        plan = self._money_plan(metric, request, self._store.earliest_order, statuses)
        if plan.is_empty:
            return TotalsHistoryEnvelope(current=[], previous=[], **currency)
        current, previous = self._orders_by_period(metric, plan, statuses, request.currency_code)
        return plan.envelope(
            TotalsHistoryEnvelope,
            _totals_history(current, plan.resolution),
            _totals_history(previous, plan.resolution),
            **currency,
        )

    def refunds(self, request: AnalyticsRequest) -> RefundsEnvelope:
        """Refunded amount; refunds are filtered by the order's currency only."""
        metric = "refunds"
        currency = self._currency_fields(request)
        plan = self._money_plan(metric, request, self._store.earliest_refund, None)
        if plan.is_empty:
            return RefundsEnvelope(current=0, previous=0, **currency)
        refunds = self._fetch(
            metric, "fetch_refunds", self._store.list_refunds, plan.record_query(None, request.currency_code)
        )
        parts = split_by_period(refunds, plan.window, lambda r: r.created_at)
        return plan.envelope(
            RefundsEnvelope,
            sum(r.amount for r in parts[Period.current]),
            sum(r.amount for r in parts[Period.previous]),
            **currency,
        )

    def regions_popularity(self, request: AnalyticsRequest) -> RegionsEnvelope:
        metric = "regions_popularity"
        statuses = statuses_of(request)
        plan = self._plan(metric, request, self._store.earliest_order, statuses)
        if plan.is_empty:
            return RegionsEnvelope(current=[], previous=[])
        current, previous = self._orders_by_period(metric, plan, statuses)
        return plan.envelope(
            RegionsEnvelope,
            _regions(current, plan.resolution),
            _regions(previous, plan.resolution),
        )

    def sales_channels_popularity(self, request: AnalyticsRequest) -> SalesChannelsEnvelope:
        metric = "sales_channels_popularity"
        statuses = statuses_of(request)
        plan = self._plan(metric, request, self._store.earliest_order, statuses)
        if plan.is_empty:
            return SalesChannelsEnvelope(current=[], previous=[])
        current, previous = self._orders_by_period(metric, plan, statuses)
        return plan.envelope(
            SalesChannelsEnvelope,
            _sales_channels(current, plan.resolution),
            _sales_channels(previous, plan.resolution),
        )
