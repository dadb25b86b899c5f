# backend/order_analytics/api/common.py
from fastapi import Depends, HTTPException, Query
from typing import Callable, List, Optional, TypeVar
from sqlalchemy.orm import Session
from order_analytics.analytics import AnalyticsRequest, StoreFailure
from order_analytics.analytics.dates import from_epoch_ms
from order_analytics.analytics.sql_store import SqlRecordStore
from order_analytics.analytics.store import RecordStore
from order_analytics.db.session import get_db
from order_analytics.models import OrderStatus

T = TypeVar("T")

# ---------- dependencies ----------
def get_store(db: Session = Depends(get_db)) -> RecordStore:
    """Request-scoped record store; tests override this dependency."""
    return SqlRecordStore(db)

def _ms(description: str):
    return Query(None, ge=0, description=f"{description} (epoch milliseconds)")

def analytics_request(
    orderStatuses: List[OrderStatus] = Query([], description="Order statuses to include (repeatable)"),
    currencyCode: Optional[str] = Query(None, min_length=3, max_length=3),
    dateRangeFrom: Optional[int] = _ms("Start of the current period"),
    dateRangeTo: Optional[int] = _ms("End of the current period, whole day included"),
    dateRangeFromCompareTo: Optional[int] = _ms("Start of the comparison period"),
    dateRangeToCompareTo: Optional[int] = _ms("End of the comparison period, exclusive"),
) -> AnalyticsRequest:
    return AnalyticsRequest(
        order_statuses=tuple(s.value for s in orderStatuses),
        currency_code=currencyCode.lower() if currencyCode else None,
        date_from=from_epoch_ms(dateRangeFrom),
        date_to=from_epoch_ms(dateRangeTo),
        compare_from=from_epoch_ms(dateRangeFromCompareTo),
        compare_to=from_epoch_ms(dateRangeToCompareTo),
    )

def run_metric(compute: Callable[[], T]) -> dict:
    """Wrap the envelope as {"analytics": ...}; store failures become a clean 500."""
    try:
        return {"analytics": compute()}
    except StoreFailure as e:
        raise HTTPException(
            status_code=500,
            detail={"message": "failed to compute analytics", "metric": e.metric, "stage": e.stage},
        ) from e
