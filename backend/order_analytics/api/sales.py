# backend/order_analytics/api/sales.py
from fastapi import APIRouter, Depends
from order_analytics.analytics import AnalyticsRequest, SalesAnalytics
from order_analytics.analytics.store import RecordStore
from order_analytics.api.common import analytics_request, get_store, run_metric
from order_analytics.schemas.analytics import (
    AnalyticsResponse,
    RefundsEnvelope,
    RegionsEnvelope,
    SalesChannelsEnvelope,
    SalesHistoryEnvelope,
    TotalsEnvelope,
    TotalsHistoryEnvelope,
)

router = APIRouter(prefix="/api/sales-analytics", tags=["sales-analytics"])

# =========================================================
# 1) Revenue
# =========================================================
@router.get(
    "/history",
    response_model=AnalyticsResponse[SalesHistoryEnvelope],
    response_model_exclude_none=True,
)
def sales_history(
    req: AnalyticsRequest = Depends(analytics_request),
    store: RecordStore = Depends(get_store),
):
    """Sum of order totals per bucket, in minor units of `currencyCode`."""
    return run_metric(lambda: SalesAnalytics(store).sales_history(req))

@router.get(
    "/totals",
    response_model=AnalyticsResponse[TotalsEnvelope],
    response_model_exclude_none=True,
)
def sales_totals(
    req: AnalyticsRequest = Depends(analytics_request),
    store: RecordStore = Depends(get_store),
):
    return run_metric(lambda: SalesAnalytics(store).totals(req))

@router.get(
    "/totals-history",
    response_model=AnalyticsResponse[TotalsHistoryEnvelope],
    response_model_exclude_none=True,
)
def sales_totals_history(
    req: AnalyticsRequest = Depends(analytics_request),
    store: RecordStore = Depends(get_store),
):
    return run_metric(lambda: SalesAnalytics(store).totals_history(req))

@router.get(
    "/refunds",
    response_model=AnalyticsResponse[RefundsEnvelope],
    response_model_exclude_none=True,
)
def sales_refunds(
    req: AnalyticsRequest = Depends(analytics_request),
    store: RecordStore = Depends(get_store),
):
    """Refunded amount; `orderStatuses` is ignored here."""
    return run_metric(lambda: SalesAnalytics(store).refunds(req))

# =========================================================
# 2) Where orders come from
# =========================================================
@router.get(
    "/regions-popularity",
    response_model=AnalyticsResponse[RegionsEnvelope],
    response_model_exclude_none=True,
)
def regions_popularity(
    req: AnalyticsRequest = Depends(analytics_request),
    store: RecordStore = Depends(get_store),
):
    return run_metric(lambda: SalesAnalytics(store).regions_popularity(req))

@router.get(
    "/channels-popularity",
    response_model=AnalyticsResponse[SalesChannelsEnvelope],
    response_model_exclude_none=True,
)
def sales_channels_popularity(
    req: AnalyticsRequest = Depends(analytics_request),
    store: RecordStore = Depends(get_store),
):
    return run_metric(lambda: SalesAnalytics(store).sales_channels_popularity(req))
