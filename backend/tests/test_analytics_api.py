# backend/tests/test_analytics_api.py
from fastapi.testclient import TestClient

from conftest import MemoryRecordStore, ms, sample_orders
from order_analytics.analytics.presets import LAST_MONTH_APPROX_DAYS
from order_analytics.api.common import get_store
from order_analytics.main import app

OPEN = ["completed", "pending"]
FEB_VS_JAN = {
    "dateRangeFrom": ms(2024, 2, 1),
    "dateRangeTo": ms(2024, 2, 29),
    "dateRangeFromCompareTo": ms(2024, 1, 1),
    "dateRangeToCompareTo": ms(2024, 2, 1),
}

def test_health(client: TestClient):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

def test_orders_history_single_range(client: TestClient):
    r = client.get("/api/orders-analytics/history", params={
        "orderStatuses": OPEN, "dateRangeFrom": ms(2024, 1, 1), "dateRangeTo": ms(2024, 1, 31),
    })
    assert r.status_code == 200
    data = r.json()["analytics"]
    assert data["dateRangeFrom"] == ms(2024, 1, 1)
    assert data["dateRangeTo"] == ms(2024, 1, 31)
    assert "dateRangeFromCompareTo" not in data
    assert [b["orderCount"] for b in data["current"]] == [1, 1]
    assert data["current"][0]["date"].startswith("2024-01-01")
    assert data["current"][1]["date"].startswith("2024-01-02")
    assert data["previous"] == []

def test_orders_history_comparison(client: TestClient):
    r = client.get("/api/orders-analytics/history", params={"orderStatuses": OPEN, **FEB_VS_JAN})
    assert r.status_code == 200
    data = r.json()["analytics"]
    assert data["dateRangeToCompareTo"] == ms(2024, 2, 1)
    assert len(data["current"]) == 1 and data["current"][0]["date"].startswith("2024-02-15")
    assert sum(b["orderCount"] for b in data["previous"]) == 2

def test_orders_count_all_time(client: TestClient):
    r = client.get("/api/orders-analytics/count", params={"orderStatuses": OPEN})
    assert r.status_code == 200
    data = r.json()["analytics"]
    assert data["current"] == 3 and data["previous"] == 0
    assert data["dateRangeFrom"] == ms(2024, 1, 1, 10)
    assert "dateRangeTo" in data

def test_no_statuses_gives_bare_envelope(client: TestClient):
    r = client.get("/api/orders-analytics/count")
    assert r.status_code == 200
    assert r.json() == {"analytics": {"current": 0, "previous": 0}}

def test_payment_provider_shares(client: TestClient):
    r = client.get("/api/orders-analytics/payment-provider", params={
        "dateRangeFrom": ms(2024, 1, 1), "dateRangeTo": ms(2024, 2, 19),
    })
    assert r.status_code == 200
    data = r.json()["analytics"]
    assert data["dateRangeFrom"] == ms(2024, 1, 1)
    rows = data["current"]
    assert [(x["paymentProviderId"], x["percentage"]) for x in rows] == [("stripe", 66.67), ("manual", 33.33)]

def test_payment_provider_all_time_without_statuses(client: TestClient):
    r = client.get("/api/orders-analytics/payment-provider")
    assert r.status_code == 200
    rows = r.json()["analytics"]["current"]
    assert [(x["paymentProviderId"], x["orderCount"]) for x in rows] == [("manual", 2), ("stripe", 2)]

def test_sales_totals_comparison(client: TestClient):
    r = client.get("/api/sales-analytics/totals", params={
        "orderStatuses": OPEN, "currencyCode": "USD", **FEB_VS_JAN,
    })
    assert r.status_code == 200
    data = r.json()["analytics"]
    assert data["currencyCode"] == "usd"
    assert data["currencyDecimalDigits"] == 2
    assert data["current"] == {"revenuePreShipping": 3000, "shipping": 0, "taxes": 300}
    assert data["previous"] == {"revenuePreShipping": 2700, "shipping": 300, "taxes": 150}

def test_money_metrics_without_currency_are_bare(client: TestClient):
    r = client.get("/api/sales-analytics/totals", params={"orderStatuses": OPEN, **FEB_VS_JAN})
    assert r.status_code == 200
    data = r.json()["analytics"]
    assert "dateRangeFrom" not in data and "currencyCode" not in data
    assert data["current"] == {"revenuePreShipping": 0, "shipping": 0, "taxes": 0}

def test_unmatched_filters_drop_the_echoed_bounds(client: TestClient):
    r = client.get("/api/orders-analytics/history", params={"orderStatuses": ["archived"], **FEB_VS_JAN})
    assert r.status_code == 200
    assert r.json() == {"analytics": {"current": [], "previous": []}}

def test_sales_history_and_totals_history(client: TestClient):
    params = {"orderStatuses": OPEN, "currencyCode": "usd", **FEB_VS_JAN}
    history = client.get("/api/sales-analytics/history", params=params).json()["analytics"]
    assert [b["total"] for b in history["previous"]] == [1000, 2000]
    totals = client.get("/api/sales-analytics/totals-history", params=params).json()["analytics"]
    assert [b["taxes"] for b in totals["current"]] == [300]

def test_refunds_comparison(client: TestClient):
    r = client.get("/api/sales-analytics/refunds", params={"currencyCode": "usd", **FEB_VS_JAN})
    assert r.status_code == 200
    data = r.json()["analytics"]
    assert (data["current"], data["previous"]) == (500, 300)

def test_regions_and_channels(client: TestClient):
    regions = client.get("/api/sales-analytics/regions-popularity", params={"orderStatuses": OPEN, **FEB_VS_JAN})
    assert regions.status_code == 200
    assert [x["regionName"] for x in regions.json()["analytics"]["previous"]] == ["Europe", "North America"]
    channels = client.get("/api/sales-analytics/channels-popularity", params={"orderStatuses": OPEN, **FEB_VS_JAN})
    assert [x["salesChannelId"] for x in channels.json()["analytics"]["current"]] == ["sc_pos"]

def test_discounts_by_count(client: TestClient):
    r = client.get("/api/marketing-analytics/discounts-by-count", params={"orderStatuses": ["completed"], "limit": 1})
    assert r.status_code == 200
    assert r.json()["analytics"]["current"] == [{"discountId": "disc_welcome", "discountCode": "WELCOME", "sum": 2}]

def test_invalid_params_rejected(client: TestClient):
    assert client.get("/api/orders-analytics/count", params={"orderStatuses": ["shipped"]}).status_code == 422
    assert client.get("/api/sales-analytics/totals", params={"currencyCode": "dollars"}).status_code == 422
    assert client.get("/api/marketing-analytics/discounts-by-count", params={"limit": 0}).status_code == 422

def test_store_failure_is_a_500(client: TestClient):
    app.dependency_overrides[get_store] = lambda: MemoryRecordStore(sample_orders(), fail_on="list_orders")
    r = client.get("/api/orders-analytics/history", params={"orderStatuses": OPEN, **FEB_VS_JAN})
    assert r.status_code == 500
    detail = r.json()["detail"]
    assert detail["metric"] == "orders_history"
    assert detail["stage"] == "fetch_orders"

def test_date_range_presets(client: TestClient):
    r = client.get("/api/date-ranges/last_month")
    assert r.status_code == 200
    data = r.json()
    cur, cmp_ = data["dateRange"], data["dateRangeCompareTo"]
    assert cmp_["dateRangeTo"] == cur["dateRangeFrom"]
    assert cur["dateRangeFrom"] - cmp_["dateRangeFrom"] == LAST_MONTH_APPROX_DAYS * 86_400_000

    r = client.get("/api/date-ranges/all")
    assert r.status_code == 200
    assert r.json() == {"preset": "all"}

    assert client.get("/api/date-ranges/next_week").status_code == 422
