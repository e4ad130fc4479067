import pytest

from conftest import make_oil
from oilshop.v1_0.models import OilStatus

pytestmark = pytest.mark.anyio

NEW_OIL = {
    "name_en": "Groundnut Oil",
    "name_my": "မြေပဲဆီ",
    "description_en": "Premium groundnut oil with natural aroma.",
    "description_my": "အရည်အသွေးမြင့် မြေပဲဆီ",
    "price_per_unit": 5200,
}


async def test_oil_lifecycle(client, admin_headers):
    res = await client.post("/api/oils", json=NEW_OIL, headers=admin_headers)
    assert res.status_code == 201
    created = res.json()["data"]
    assert created["unit"] == "viss"
    assert created["status"] == "ACTIVE"
    assert created["is_active"] is True
    oil_id = created["id"]

    res = await client.get(f"/api/oils/{oil_id}")
    assert res.status_code == 200
    assert res.json()["data"]["name_en"] == "Groundnut Oil"

    res = await client.put(f"/api/oils/{oil_id}", json={"price_per_unit": 5500}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["data"]["price_per_unit"] == 5500
    assert res.json()["data"]["name_en"] == "Groundnut Oil"

    res = await client.delete(f"/api/oils/{oil_id}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "INACTIVE"
    assert res.json()["message"] == "Oil deleted successfully (soft delete)"

    assert (await client.get(f"/api/oils/{oil_id}")).status_code == 404
    assert (await client.get("/api/oils")).json()["count"] == 0

    res = await client.get("/api/oils/admin/all", headers=admin_headers)
    assert res.json()["count"] == 1
    assert res.json()["data"][0]["is_active"] is False


async def test_deactivate_twice_is_harmless(client, db, admin_headers):
    oil = await make_oil(db)

    first = await client.delete(f"/api/oils/{oil.id}", headers=admin_headers)
    second = await client.delete(f"/api/oils/{oil.id}", headers=admin_headers)

    assert first.status_code == second.status_code == 200
    assert second.json()["data"]["status"] == "INACTIVE"


async def test_is_active_flag_reactivates(client, db, admin_headers):
    oil = await make_oil(db, status=OilStatus.INACTIVE)

    res = await client.put(f"/api/oils/{oil.id}", json={"is_active": True}, headers=admin_headers)

    assert res.json()["data"]["status"] == "ACTIVE"
    assert (await client.get(f"/api/oils/{oil.id}")).status_code == 200


async def test_public_list_hides_inactive(client, db):
    await make_oil(db, "Palm Oil")
    await make_oil(db, "Old Oil", status=OilStatus.INACTIVE)

    body = (await client.get("/api/oils")).json()

    assert body["success"] is True
    assert body["count"] == 1
    assert [o["name_en"] for o in body["data"]] == ["Palm Oil"]


@pytest.mark.parametrize("price", [0, -10])
async def test_price_must_be_positive(client, admin_headers, price):
    res = await client.post("/api/oils", json={**NEW_OIL, "price_per_unit": price}, headers=admin_headers)

    assert res.status_code == 400
    assert res.json()["success"] is False
    assert "price_per_unit" in res.json()["error"]


async def test_missing_name_is_rejected(client, admin_headers):
    body = {k: v for k, v in NEW_OIL.items() if k != "name_my"}

    res = await client.post("/api/oils", json=body, headers=admin_headers)

    assert res.status_code == 400


async def test_unknown_oil_is_404(client, admin_headers):
    assert (await client.get("/api/oils/999")).status_code == 404
    assert (await client.put("/api/oils/999", json={"price_per_unit": 1}, headers=admin_headers)).status_code == 404
    assert (await client.delete("/api/oils/999", headers=admin_headers)).status_code == 404


async def test_writes_need_a_token(client, db):
    oil = await make_oil(db)

    assert (await client.post("/api/oils", json=NEW_OIL)).status_code == 401
    assert (await client.put(f"/api/oils/{oil.id}", json={"price_per_unit": 1})).status_code == 401
    assert (await client.delete(f"/api/oils/{oil.id}")).status_code == 401
