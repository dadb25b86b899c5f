from .base import AnalyticsRequest, AnalyticsService
from .dates import DAY_RESOLUTION_MAX_DAYS, Resolution, calculate_resolution, truncate
from .errors import AnalyticsError, StoreFailure
from .marketing import MarketingAnalytics
from .orders import OrdersAnalytics
from .periods import Period, RangeWindow
from .sales import SalesAnalytics
from .store import RecordQuery, RecordStore

__all__ = [
    "AnalyticsRequest","AnalyticsService","DAY_RESOLUTION_MAX_DAYS","Resolution",
    "calculate_resolution","truncate","AnalyticsError","StoreFailure","MarketingAnalytics",
    "OrdersAnalytics","Period","RangeWindow","SalesAnalytics","RecordQuery","RecordStore",
]
