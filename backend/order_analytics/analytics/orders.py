from __future__ import annotations

from typing import List

from order_analytics.schemas.analytics import (
    OrdersCountEnvelope,
    OrdersHistoryBucket,
    OrdersHistoryEnvelope,
    PaymentProviderEnvelope,
    PaymentProviderShare,
)

from .aggregate import count_by, rank, with_percentages
from .base import AnalyticsRequest, AnalyticsService, sorted_buckets, statuses_of
from .dates import Resolution, truncate
from .records import OrderRecord


def _history(orders: List[OrderRecord], resolution: Resolution) -> List[OrdersHistoryBucket]:
    counts = count_by(orders, lambda o: truncate(o.created_at, resolution))
    return sorted_buckets(
        [OrdersHistoryBucket(date=d, orderCount=n) for d, n in counts.items()],
        lambda b: b.date,
    )


def _provider_shares(orders: List[OrderRecord]) -> List[PaymentProviderShare]:
    pairs = [(o, p.id) for o in orders for p in o.payment_providers]
    rows = [
        PaymentProviderShare(paymentProviderId=provider, orderCount=n, percentage=pct)
        for provider, n, pct in with_percentages(count_by(pairs, lambda pair: pair[1]))
    ]
    return rank(rows, lambda r: r.orderCount, lambda r: r.paymentProviderId)


class OrdersAnalytics(AnalyticsService):
    """Order counts over time and payment provider usage."""

    def orders_history(self, request: AnalyticsRequest) -> OrdersHistoryEnvelope:
        metric = "orders_history"
        statuses = statuses_of(request)
        plan = self._plan(metric, request, self._store.earliest_order, statuses)
        if plan.is_empty:
            return OrdersHistoryEnvelope(current=[], previous=[])
        current, previous = self._orders_by_period(metric, plan, statuses)
        return plan.envelope(
            OrdersHistoryEnvelope,
            _history(current, plan.resolution),
            _history(previous, plan.resolution),
        )

    def orders_count(self, request: AnalyticsRequest) -> OrdersCountEnvelope:
        metric = "orders_count"
        statuses = statuses_of(request)
        plan = self._plan(metric, request, self._store.earliest_order, statuses)
        if plan.is_empty:
            return OrdersCountEnvelope(current=0, previous=0)
        current, previous = self._orders_by_period(metric, plan, statuses)
        return plan.envelope(OrdersCountEnvelope, len(current), len(previous))

    def payment_provider_popularity(self, request: AnalyticsRequest) -> PaymentProviderEnvelope:
        """
        Share of orders per payment provider.

        An order paid through two providers counts once for each; orders
        without a payment are left out. Order statuses are not filtered on.
        """
        metric = "payment_provider_popularity"
        plan = self._plan(metric, request, self._store.earliest_order, None)
        if plan.is_empty:
            return PaymentProviderEnvelope(current=[], previous=[])
        current, previous = self._orders_by_period(metric, plan, None)
        return plan.envelope(PaymentProviderEnvelope, _provider_shares(current), _provider_shares(previous))
