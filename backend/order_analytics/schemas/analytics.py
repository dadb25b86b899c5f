from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class AnalyticsEnvelope(BaseModel, Generic[T]):
    # Range bounds are epoch milliseconds; unset bounds are left out of the JSON body.
    dateRangeFrom: Optional[int] = None
    dateRangeTo: Optional[int] = None
    dateRangeFromCompareTo: Optional[int] = None
    dateRangeToCompareTo: Optional[int] = None
    current: T
    previous: T


class CurrencyEnvelope(AnalyticsEnvelope[T], Generic[T]):
    currencyCode: Optional[str] = None
    currencyDecimalDigits: int = 2


class AnalyticsResponse(BaseModel, Generic[T]):
    analytics: T


# ---- bucket / row payloads (money in minor units) ----

class OrdersHistoryBucket(BaseModel):
    date: datetime
    orderCount: int


class SalesHistoryBucket(BaseModel):
    date: datetime
    total: int


class TotalsBreakdown(BaseModel):
    revenuePreShipping: int = 0
    shipping: int = 0
    taxes: int = 0


class TotalsHistoryBucket(TotalsBreakdown):
    date: datetime


class PaymentProviderShare(BaseModel):
    paymentProviderId: str
    orderCount: int
    percentage: float


class RegionBucket(BaseModel):
    date: datetime
    regionId: str
    regionName: str
    orderCount: int


class SalesChannelBucket(BaseModel):
    date: datetime
    salesChannelId: str
    salesChannelName: str
    orderCount: int


class DiscountUsage(BaseModel):
    discountId: str
    discountCode: str
    sum: int


class DateRangeOut(BaseModel):
    dateRangeFrom: int
    dateRangeTo: int


class DatePresetResponse(BaseModel):
    preset: str
    dateRange: Optional[DateRangeOut] = None
    dateRangeCompareTo: Optional[DateRangeOut] = None


# Envelope aliases used by the services and routers
OrdersHistoryEnvelope = AnalyticsEnvelope[List[OrdersHistoryBucket]]
OrdersCountEnvelope = AnalyticsEnvelope[int]
PaymentProviderEnvelope = AnalyticsEnvelope[List[PaymentProviderShare]]
SalesHistoryEnvelope = CurrencyEnvelope[List[SalesHistoryBucket]]
TotalsEnvelope = CurrencyEnvelope[TotalsBreakdown]
TotalsHistoryEnvelope = CurrencyEnvelope[List[TotalsHistoryBucket]]
RefundsEnvelope = CurrencyEnvelope[int]
RegionsEnvelope = AnalyticsEnvelope[List[RegionBucket]]
SalesChannelsEnvelope = AnalyticsEnvelope[List[SalesChannelBucket]]
DiscountsEnvelope = AnalyticsEnvelope[List[DiscountUsage]]
