from datetime import datetime, timezone

import pytest

from conftest import make_oil, record_sale
from oilshop.v1_0.models import OilStatus
from oilshop.v1_0.repositories import SaleItemRepository, SaleRepository

pytestmark = pytest.mark.anyio


async def test_mix_quote_prices_by_ticals(client, db):
    palm = await make_oil(db, "Palm Oil", 3500)
    groundnut = await make_oil(db, "Groundnut Oil", 5200)

    res = await client.post(
        "/api/mix/quote",
        json={"items": [{"oilId": palm.id, "ticals": 50}, {"oilId": groundnut.id, "ticals": 25}]},
    )

    assert res.status_code == 200
    quote = res.json()["data"]
    assert [ln["quantity"] for ln in quote["lines"]] == [0.5, 0.25]
    assert [ln["lineAmount"] for ln in quote["lines"]] == [1750.0, 1300.0]
    assert quote["totalTicals"] == 75
    assert quote["totalQuantity"] == 0.75
    assert quote["totalAmount"] == 3050.0
    assert quote["saleType"] == "MIX"
    assert quote["salePayload"]["items"][0] == {"oilId": palm.id, "quantity": 0.5, "lineAmount": 1750.0}


async def test_single_oil_quote(client, db):
    palm = await make_oil(db, "Palm Oil", 3500)

    res = await client.post("/api/mix/quote", json={"items": [{"oil_id": palm.id, "ticals": 100}]})

    quote = res.json()["data"]
    assert quote["saleType"] == "SINGLE_OIL"
    assert quote["totalAmount"] == 3500.0


async def test_quote_rejects_inactive_oil(client, db):
    old = await make_oil(db, "Old Oil", status=OilStatus.INACTIVE)

    res = await client.post("/api/mix/quote", json={"items": [{"oilId": old.id, "ticals": 10}]})

    assert res.status_code == 404
    assert res.json()["error"] == f"Oil not found for id {old.id}"


@pytest.mark.parametrize("items", [[], [{"oilId": 1, "ticals": 0}]])
async def test_quote_validates_items(client, items):
    res = await client.post("/api/mix/quote", json={"items": items})
    assert res.status_code == 400


async def test_quoted_payload_can_be_confirmed(client, db, admin_headers):
    palm = await make_oil(db, "Palm Oil", 3500)
    sesame = await make_oil(db, "Sesame Oil", 6800)
    quote = (
        await client.post(
            "/api/mix/quote",
            json={"items": [{"oilId": palm.id, "ticals": 40}, {"oilId": sesame.id, "ticals": 10}], "note": "blend"},
        )
    ).json()["data"]

    res = await client.post("/api/sales/confirm", json=quote["salePayload"], headers=admin_headers)

    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Sale recorded successfully"
    assert body["data"]["sale_type"] == "MIX"
    assert body["data"]["total_amount"] == quote["totalAmount"]
    assert body["data"]["note"] == "blend"
    assert body["data"]["item_count"] == 2


async def test_confirm_with_unknown_oil_leaves_no_rows(client, db, admin_headers):
    palm = await make_oil(db, "Palm Oil", 3500)
    payload = {
        "totalAmount": 4000,
        "totalQuantity": 2,
        "saleType": "MIX",
        "items": [
            {"oilId": palm.id, "quantity": 1, "lineAmount": 3500},
            {"oilId": 777, "quantity": 1, "lineAmount": 500},
        ],
    }

    res = await client.post("/api/sales/confirm", json=payload, headers=admin_headers)

    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Oil not found for id 777"}
    assert await SaleRepository().count(db) == 0
    assert await SaleItemRepository().count(db) == 0


@pytest.mark.parametrize(
    "patch",
    [
        {"totalAmount": 0},
        {"totalQuantity": -1},
        {"saleType": "BULK"},
        {"items": []},
        {"items": [{"oilId": 1, "quantity": 0, "lineAmount": 10}]},
        {"items": [{"oilId": 1, "quantity": 1, "lineAmount": -1}]},
    ],
)
async def test_confirm_validation(client, admin_headers, patch):
    payload = {
        "totalAmount": 3500,
        "totalQuantity": 1,
        "saleType": "SINGLE_OIL",
        "items": [{"oilId": 1, "quantity": 1, "lineAmount": 3500}],
        **patch,
    }

    res = await client.post("/api/sales/confirm", json=payload, headers=admin_headers)

    assert res.status_code == 400
    assert res.json()["success"] is False


async def test_confirm_requires_admin(client):
    payload = {
        "totalAmount": 3500,
        "totalQuantity": 1,
        "saleType": "SINGLE_OIL",
        "items": [{"oilId": 1, "quantity": 1, "lineAmount": 3500}],
    }

    res = await client.post("/api/sales/confirm", json=payload)

    assert res.status_code == 401


async def test_reports_over_http(client, db, sale_service, admin_headers):
    palm = await make_oil(db, "Palm Oil", 3500)
    await record_sale(
        sale_service, db, [(palm.id, 0.3, 1000.0)],
        created_at=datetime(2026, 1, 10, 5, tzinfo=timezone.utc),
    )
    await record_sale(
        sale_service, db, [(palm.id, 0.7, 2500.0)],
        created_at=datetime(2026, 1, 20, 5, tzinfo=timezone.utc),
    )

    res = await client.get("/api/reports/monthly/details?year=2026&month=1", headers=admin_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["totals"] == {"totalSalesAmount": 3500.0, "transactions": 2}
    assert data["period"]["timezone"] == "Asia/Yangon"
    assert data["period"]["startLocal"] == "2026-01-01T00:00:00+06:30"
    assert data["currency"] == {"code": "MMK", "minorUnit": 0}
    assert data["byOil"][0]["oilNameSnapshot"] == "Palm Oil"
    assert "generatedAt" in data

    res = await client.get("/api/reports/daily?date=2026-01-10", headers=admin_headers)
    assert res.status_code == 200
    daily = res.json()["data"]
    assert daily["totals"] == {"totalSalesAmount": 1000.0, "transactionsCount": 1}
    assert daily["topOilsByRevenue"][0]["revenue"] == 1000.0

    res = await client.get("/api/sales/summary?year=2026&month=1", headers=admin_headers)
    assert res.json()["data"] == {"year": 2026, "month": 1, "totalSalesValue": 3500.0}


@pytest.mark.parametrize(
    "url",
    [
        "/api/reports/daily?date=2026-02-30",
        "/api/reports/daily?date=yesterday",
        "/api/reports/monthly/details?year=2026&month=13",
        "/api/reports/monthly/details?year=2026",
        "/api/reports/daily?date=0001-01-01",
        "/api/reports/daily?date=9999-12-31",
        "/api/reports/monthly/details?year=1&month=1",
        "/api/reports/monthly/details?year=9999&month=12",
        "/api/sales/summary?year=abc&month=1",
        "/api/sales/summary?year=9999&month=12",
    ],
)
async def test_report_parameter_errors_are_400(client, admin_headers, url):
    res = await client.get(url, headers=admin_headers)

    assert res.status_code == 400
    assert res.json()["success"] is False


async def test_health_endpoints(client):
    assert (await client.get("/health")).json()["status"] == "OK"
    assert (await client.get("/api/ready")).json()["message"] == "ready"
