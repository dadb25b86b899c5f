# backend/order_analytics/api/marketing.py
from fastapi import APIRouter, Depends, Query
from typing import Optional
from order_analytics.analytics import AnalyticsRequest, MarketingAnalytics
from order_analytics.analytics.store import RecordStore
from order_analytics.api.common import analytics_request, get_store, run_metric
from order_analytics.schemas.analytics import AnalyticsResponse, DiscountsEnvelope

router = APIRouter(prefix="/api/marketing-analytics", tags=["marketing-analytics"])

@router.get(
    "/discounts-by-count",
    response_model=AnalyticsResponse[DiscountsEnvelope],
    response_model_exclude_none=True,
)
def discounts_by_count(
    req: AnalyticsRequest = Depends(analytics_request),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Keep only the top N discounts"),
    store: RecordStore = Depends(get_store),
):
    return run_metric(lambda: MarketingAnalytics(store).discounts_by_count(req, limit=limit))
