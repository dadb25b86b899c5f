"""SQLAlchemy implementation of the RecordStore protocol."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from order_analytics.models import Order, Refund

from .dates import as_utc
from .records import EntityRef, OrderRecord, RefundRecord
from .store import RecordQuery


def _db_ts(ts: datetime) -> datetime:
    # columns hold naive UTC values
    return as_utc(ts).replace(tzinfo=None)


def _order_filters(query: RecordQuery) -> list:
    clauses = []
    if query.created_from is not None:
        clauses.append(Order.created_at >= _db_ts(query.created_from))
    if query.created_before is not None:
        clauses.append(Order.created_at < _db_ts(query.created_before))
    if query.statuses is not None:
        clauses.append(Order.status.in_(query.statuses))
    if query.currency_code is not None:
        clauses.append(Order.currency_code == query.currency_code)
    return clauses


def _refund_filters(query: RecordQuery) -> list:
    clauses = []
    if query.created_from is not None:
        clauses.append(Refund.created_at >= _db_ts(query.created_from))
    if query.created_before is not None:
        clauses.append(Refund.created_at < _db_ts(query.created_before))
    if query.currency_code is not None:
        clauses.append(Order.currency_code == query.currency_code)
    return clauses


def _to_record(order: Order) -> OrderRecord:
    providers = []
    for payment in order.payments:
        ref = EntityRef(id=payment.provider_id, name=payment.provider_id)
        if ref not in providers:
            providers.append(ref)
    return OrderRecord(
        id=order.id,
        created_at=as_utc(order.created_at),
        status=order.status,
        currency_code=order.currency_code,
        total=order.total or 0,
        shipping_total=order.shipping_total or 0,
        tax_total=order.tax_total or 0,
        region=EntityRef(order.region.id, order.region.name) if order.region else None,
        sales_channel=(
            EntityRef(order.sales_channel.id, order.sales_channel.name) if order.sales_channel else None
        ),
        payment_providers=tuple(providers),
        discounts=tuple(EntityRef(d.id, d.code) for d in order.discounts),
    )


class SqlRecordStore:
    """Reads orders/refunds through one request-scoped Session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def list_orders(self, query: RecordQuery) -> List[OrderRecord]:
        stmt = (
            select(Order)
            .where(*_order_filters(query))
            .options(
                selectinload(Order.region),
                selectinload(Order.sales_channel),
                selectinload(Order.payments),
                selectinload(Order.discounts),
            )
            .order_by(Order.created_at.desc())
        )
        return [_to_record(o) for o in self._db.scalars(stmt).all()]

    def earliest_order(self, query: RecordQuery) -> Optional[datetime]:
        first = self._db.scalar(select(func.min(Order.created_at)).where(*_order_filters(query)))
        return first.replace(tzinfo=timezone.utc) if first is not None else None

    def list_refunds(self, query: RecordQuery) -> List[RefundRecord]:
        stmt = (
            select(Refund.id, Refund.created_at, Refund.amount, Order.currency_code)
            .select_from(Refund)
            .join(Order, Refund.order_id == Order.id)
            .where(*_refund_filters(query))
            .order_by(Refund.created_at.desc())
        )
        return [
            RefundRecord(id=r.id, created_at=as_utc(r.created_at), amount=r.amount or 0, currency_code=r.currency_code)
            for r in self._db.execute(stmt)
        ]

    def earliest_refund(self, query: RecordQuery) -> Optional[datetime]:
        first = self._db.scalar(
            select(func.min(Refund.created_at))
            .select_from(Refund)
            .join(Order, Refund.order_id == Order.id)
            .where(*_refund_filters(query))
        )
        return first.replace(tzinfo=timezone.utc) if first is not None else None
