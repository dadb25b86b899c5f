"""Typed rows produced by record store adapters."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class EntityRef:
    id: str
    name: str


@dataclass(frozen=True)
class OrderRecord:
    """
    One order as seen by the analytics engine.

    Money fields are integers in minor currency units; `created_at` is UTC.
    """

    id: str
    created_at: datetime
    status: str
    currency_code: str
    total: int = 0
    shipping_total: int = 0
    tax_total: int = 0
    region: Optional[EntityRef] = None
    sales_channel: Optional[EntityRef] = None
    payment_providers: Tuple[EntityRef, ...] = field(default_factory=tuple)
    discounts: Tuple[EntityRef, ...] = field(default_factory=tuple)

    @property
    def revenue_pre_shipping(self) -> int:
        return self.total - self.shipping_total


@dataclass(frozen=True)
class RefundRecord:
    id: str
    created_at: datetime
    amount: int
    currency_code: str
