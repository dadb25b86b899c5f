from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, Sequence, Tuple

from .records import OrderRecord, RefundRecord


@dataclass(frozen=True)
class RecordQuery:
    """
    Storage-agnostic filter passed to a RecordStore.

    created_from is inclusive, created_before exclusive. statuses=None means
    "any status"; currency_code=None means "any currency".
    """

    created_from: Optional[datetime] = None
    created_before: Optional[datetime] = None
    statuses: Optional[Tuple[str, ...]] = None
    currency_code: Optional[str] = None


class RecordStore(Protocol):
    """Read-only access to orders and refunds."""

    def list_orders(self, query: RecordQuery) -> Sequence[OrderRecord]:
        ...

    def earliest_order(self, query: RecordQuery) -> Optional[datetime]:
        ...

    def list_refunds(self, query: RecordQuery) -> Sequence[RefundRecord]:
        ...

    def earliest_refund(self, query: RecordQuery) -> Optional[datetime]:
        ...
