from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from conftest import make_oil, record_sale
from oilshop.utils.tx import atomic
from oilshop.v1_0.models import OilStatus, SaleType
from oilshop.v1_0.repositories import OilRepository, SaleItemRepository, SaleRepository

pytestmark = pytest.mark.anyio


async def test_sale_with_items_is_stored_as_one_unit(db, sale_service):
    palm = await make_oil(db, "Palm Oil", 3500)
    sesame = await make_oil(db, "Sesame Oil", 6800)

    dto = await record_sale(sale_service, db, [(palm.id, 0.5, 1750.0), (sesame.id, 0.25, 1700.0)])

    assert dto.sale_type == SaleType.MIX.value
    assert dto.total_amount == 3450.0
    assert dto.total_quantity == 0.75
    assert dto.item_count == 2
    assert dto.created_at.tzinfo is not None

    items = await SaleItemRepository().get_by_sale_id(dto.id, db)
    assert [(i.oil_id, i.oil_name_snapshot, i.line_amount) for i in items] == [
        (palm.id, "Palm Oil", 1750.0),
        (sesame.id, "Sesame Oil", 1700.0),
    ]


async def test_client_amounts_are_stored_unchanged(db, sale_service):
    palm = await make_oil(db, "Palm Oil", 3500)

    dto = await record_sale(sale_service, db, [(palm.id, 1.0, 999.0)])

    items = await SaleItemRepository().get_by_sale_id(dto.id, db)
    assert dto.total_amount == 999.0
    assert items[0].line_amount == 999.0


async def test_unknown_oil_rolls_back_everything(db, sale_service):
    palm = await make_oil(db, "Palm Oil", 3500)

    with pytest.raises(HTTPException) as exc:
        await record_sale(sale_service, db, [(palm.id, 1.0, 3500.0), (9999, 1.0, 100.0)])

    assert exc.value.status_code == 404
    assert exc.value.detail == "Oil not found for id 9999"
    assert await SaleRepository().count(db) == 0
    assert await SaleItemRepository().count(db) == 0


async def test_inactive_oil_can_still_be_sold(db, sale_service):
    old = await make_oil(db, "Old Oil", 1000, status=OilStatus.INACTIVE)

    dto = await record_sale(sale_service, db, [(old.id, 1.0, 1000.0)])

    assert dto.item_count == 1


async def test_snapshot_keeps_name_at_time_of_sale(db, sale_service):
    palm = await make_oil(db, "Palm Oil", 3500)
    first = await record_sale(sale_service, db, [(palm.id, 1.0, 3500.0)])


    async with atomic(db):
        await OilRepository().update_oil(palm, {"name_en": "Red Palm Oil"}, db)

    second = await record_sale(sale_service, db, [(palm.id, 1.0, 3500.0)])

    repo = SaleItemRepository()
    assert (await repo.get_by_sale_id(first.id, db))[0].oil_name_snapshot == "Palm Oil"
    assert (await repo.get_by_sale_id(second.id, db))[0].oil_name_snapshot == "Red Palm Oil"


async def test_legacy_summary_uses_utc_month(db, sale_service):
    palm = await make_oil(db, "Palm Oil", 3500)
    # February 1st in Myanmar, still January in UTC
    await record_sale(
        sale_service, db, [(palm.id, 1.0, 1200.0)],
        created_at=datetime(2026, 1, 31, 18, 0, tzinfo=timezone.utc),
    )
    await record_sale(
        sale_service, db, [(palm.id, 1.0, 800.0)],
        created_at=datetime(2026, 2, 1, 0, 30, tzinfo=timezone.utc),
    )

    jan = await sale_service.monthly_summary(2026, 1, db)
    feb = await sale_service.monthly_summary(2026, 2, db)

    assert jan.total_sales_value == 1200.0
    assert feb.total_sales_value == 800.0


async def test_legacy_summary_rejects_bad_month(db, sale_service):
    with pytest.raises(HTTPException) as exc:
        await sale_service.monthly_summary(2026, 13, db)
    assert exc.value.status_code == 400
