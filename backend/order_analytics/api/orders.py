# backend/order_analytics/api/orders.py
from fastapi import APIRouter, Depends
from order_analytics.analytics import AnalyticsRequest, OrdersAnalytics
from order_analytics.analytics.store import RecordStore
from order_analytics.api.common import analytics_request, get_store, run_metric
from order_analytics.schemas.analytics import (
    AnalyticsResponse,
    OrdersCountEnvelope,
    OrdersHistoryEnvelope,
    PaymentProviderEnvelope,
)

router = APIRouter(prefix="/api/orders-analytics", tags=["orders-analytics"])

@router.get(
    "/history",
    response_model=AnalyticsResponse[OrdersHistoryEnvelope],
    response_model_exclude_none=True,
)
def orders_history(
    req: AnalyticsRequest = Depends(analytics_request),
    store: RecordStore = Depends(get_store),
):
    """Order counts per day/month bucket."""
    return run_metric(lambda: OrdersAnalytics(store).orders_history(req))

@router.get(
    "/count",
    response_model=AnalyticsResponse[OrdersCountEnvelope],
    response_model_exclude_none=True,
)
def orders_count(
    req: AnalyticsRequest = Depends(analytics_request),
    store: RecordStore = Depends(get_store),
):
    return run_metric(lambda: OrdersAnalytics(store).orders_count(req))

@router.get(
    "/payment-provider",
    response_model=AnalyticsResponse[PaymentProviderEnvelope],
    response_model_exclude_none=True,
)
def payment_provider_popularity(
    req: AnalyticsRequest = Depends(analytics_request),
    store: RecordStore = Depends(get_store),
):
    """Share of orders per payment provider, most used first."""
    return run_metric(lambda: OrdersAnalytics(store).payment_provider_popularity(req))
