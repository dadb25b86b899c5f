# backend/order_analytics/api/date_ranges.py
from fastapi import APIRouter
from order_analytics.analytics.dates import to_epoch_ms
from order_analytics.analytics.presets import DatePreset, compare_range_for, date_range_for
from order_analytics.schemas.analytics import DatePresetResponse, DateRangeOut

router = APIRouter(prefix="/api", tags=["date-ranges"])

def _out(rng):
    if rng is None:
        return None
    start, end = rng
    return DateRangeOut(dateRangeFrom=to_epoch_ms(start), dateRangeTo=to_epoch_ms(end))

@router.get("/date-ranges/{preset}", response_model=DatePresetResponse, response_model_exclude_none=True)
def date_range_preset(preset: DatePreset):
    """
    Resolve a date picker preset into epoch-ms bounds for the analytics endpoints.
    `all` has no bounds: call the endpoints without dateRangeFrom for all-time data.
    """
    return DatePresetResponse(
        preset=preset.value,
        dateRange=_out(date_range_for(preset)),
        dateRangeCompareTo=_out(compare_range_for(preset)),
    )
