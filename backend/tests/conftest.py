# backend/tests/conftest.py
import os, sys, pathlib, tempfile, pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient

BACKEND_DIR = pathlib.Path(__file__).resolve().parents[1]   # .../backend
DB_PATH = pathlib.Path(tempfile.mkdtemp(prefix="order-analytics-")) / "test.db"

# Make `from order_analytics.*` importable without an install
sys.path.insert(0, str(BACKEND_DIR))

# Set the database path early (session.py reads it at import time)
os.environ["DATABASE_URL"] = f"sqlite:///{DB_PATH.as_posix()}"
os.environ["AUTO_BOOTSTRAP_DB"] = "1"
os.environ.pop("RESET_DB", None)

from order_analytics.analytics.records import EntityRef, OrderRecord, RefundRecord  # noqa: E402


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def ms(*args) -> int:
    return int(utc(*args).timestamp() * 1000)


# ---------- in-memory record store ----------
class MemoryRecordStore:
    """RecordStore over plain lists; counts calls so tests can check what was fetched."""

    def __init__(self, orders=(), refunds=(), fail_on=None):
        self.orders = list(orders)
        self.refunds = list(refunds)
        self.fail_on = fail_on
        self.calls = []

    def _check(self, name):
        self.calls.append(name)
        if self.fail_on == name:
            raise ConnectionError("record store unavailable")

    @staticmethod
    def _match(ts, query):
        if query.created_from is not None and ts < query.created_from:
            return False
        if query.created_before is not None and ts >= query.created_before:
            return False
        return True

    def _orders(self, query):
        return [
            o for o in self.orders
            if self._match(o.created_at, query)
            and (query.statuses is None or o.status in query.statuses)
            and (query.currency_code is None or o.currency_code == query.currency_code)
        ]

    def _refunds(self, query):
        return [
            r for r in self.refunds
            if self._match(r.created_at, query)
            and (query.currency_code is None or r.currency_code == query.currency_code)
        ]

    def list_orders(self, query):
        self._check("list_orders")
        return self._orders(query)

    def earliest_order(self, query):
        self._check("earliest_order")
        return min((o.created_at for o in self._orders(query)), default=None)

    def list_refunds(self, query):
        self._check("list_refunds")
        return self._refunds(query)

    def earliest_refund(self, query):
        self._check("earliest_refund")
        return min((r.created_at for r in self._refunds(query)), default=None)


EU = EntityRef("reg_eu", "Europe")
NA = EntityRef("reg_na", "North America")
WEB = EntityRef("sc_web", "Webshop")
POS = EntityRef("sc_pos", "Point of Sale")
MANUAL = EntityRef("manual", "manual")
STRIPE = EntityRef("stripe", "stripe")
WELCOME = EntityRef("disc_welcome", "WELCOME")
SUMMER = EntityRef("disc_summer", "SUMMER")


def sample_orders():
    return [
        OrderRecord("o1", utc(2024, 1, 1, 10), "completed", "usd", 1000, 100, 50,
                    EU, WEB, (MANUAL,), (WELCOME,)),
        OrderRecord("o2", utc(2024, 1, 2, 15, 30), "completed", "usd", 2000, 200, 100,
                    NA, WEB, (STRIPE,), (WELCOME, SUMMER)),
        OrderRecord("o3", utc(2024, 2, 15, 9), "pending", "usd", 3000, 0, 300,
                    EU, POS, (STRIPE,), ()),
        OrderRecord("o4", utc(2024, 2, 20, 12), "canceled", "eur", 500, 50, 20,
                    EU, WEB, (MANUAL,), ()),
    ]


def sample_refunds():
    return [
        RefundRecord("r1", utc(2024, 1, 5), 300, "usd"),
        RefundRecord("r2", utc(2024, 2, 16), 500, "usd"),
        RefundRecord("r3", utc(2024, 2, 21), 50, "eur"),
    ]


@pytest.fixture()
def memory_store():
    return MemoryRecordStore(sample_orders(), sample_refunds())


@pytest.fixture()
def fixed_now():
    now = utc(2024, 3, 1, 12)
    return lambda: now


# ---------- sqlite database seeded through the ORM ----------
def _seed(session):
    from order_analytics.models import Discount, Order, Payment, Refund, Region, SalesChannel

    eu = Region(id="reg_eu", name="Europe", currency_code="eur")
    na = Region(id="reg_na", name="North America", currency_code="usd")
    web = SalesChannel(id="sc_web", name="Webshop")
    pos = SalesChannel(id="sc_pos", name="Point of Sale")
    welcome = Discount(id="disc_welcome", code="WELCOME")
    summer = Discount(id="disc_summer", code="SUMMER")
    session.add_all([eu, na, web, pos, welcome, summer])

    for o in sample_orders():
        order = Order(
            id=o.id,
            created_at=o.created_at.replace(tzinfo=None),
            status=o.status,
            currency_code=o.currency_code,
            total=o.total,
            shipping_total=o.shipping_total,
            tax_total=o.tax_total,
            region_id=o.region.id,
            sales_channel_id=o.sales_channel.id,
        )
        order.discounts = [d for d in (welcome, summer) if d.id in {x.id for x in o.discounts}]
        session.add(order)
        for i, provider in enumerate(o.payment_providers):
            session.add(Payment(id=f"pay_{o.id}_{i}", order_id=o.id, provider_id=provider.id, amount=o.total))

    order_of = {"r1": "o1", "r2": "o3", "r3": "o4"}
    for r in sample_refunds():
        session.add(Refund(id=r.id, order_id=order_of[r.id], amount=r.amount,
                           created_at=r.created_at.replace(tzinfo=None)))
    session.commit()


@pytest.fixture(scope="session", autouse=True)
def _prepare_db():
    from order_analytics.db.session import Base, SessionLocal, engine
    import order_analytics.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        _seed(session)
    yield
    engine.dispose()


@pytest.fixture()
def db_session():
    from order_analytics.db.session import SessionLocal

    with SessionLocal() as session:
        yield session


@pytest.fixture()
def client():
    from order_analytics.main import app
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
