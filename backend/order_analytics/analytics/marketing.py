from __future__ import annotations

from typing import List, Optional

from order_analytics.schemas.analytics import DiscountUsage, DiscountsEnvelope

from .aggregate import count_by, rank
from .base import AnalyticsRequest, AnalyticsService, statuses_of
from .records import OrderRecord


def _discount_usage(orders: List[OrderRecord], limit: Optional[int]) -> List[DiscountUsage]:
    counts = count_by([d for o in orders for d in o.discounts], lambda d: d)
    rows = rank(
        [DiscountUsage(discountId=d.id, discountCode=d.name, sum=n) for d, n in counts.items()],
        lambda r: r.sum,
        lambda r: r.discountId,
    )
    return rows[:limit] if limit is not None else rows


class MarketingAnalytics(AnalyticsService):
    def discounts_by_count(self, request: AnalyticsRequest, limit: Optional[int] = None) -> DiscountsEnvelope:
        """How many orders used each discount, most used first."""
        metric = "discounts_by_count"
        statuses = statuses_of(request)
        plan = self._plan(metric, request, self._store.earliest_order, statuses)
        if plan.is_empty:
            return DiscountsEnvelope(current=[], previous=[])
        current, previous = self._orders_by_period(metric, plan, statuses)
        return plan.envelope(
            DiscountsEnvelope,
            _discount_usage(current, limit),
            _discount_usage(previous, limit),
        )
