from datetime import datetime, timedelta, timezone
from typing import List, Dict, Optional, Sequence
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.core.logger import logger
from oilshop.utils.local_time import month_bounds, to_utc
from oilshop.utils.tx import atomic, maybe_begin
from oilshop.v1_0.entities import SaleDTO, MonthlySummaryDTO
from oilshop.v1_0.models import Oil, Sale
from oilshop.v1_0.repositories import (
    OilRepository,
    SaleRepository,
    SaleItemRepository,
)
from oilshop.v1_0.schemas import (
    SaleConfirm,
    SaleItemInput,
    SaleItemCreate,
    SaleInsert,
)

class SaleService:
    def __init__(
        self,
        sale_repository: SaleRepository,
        sale_item_repository: SaleItemRepository,
        oil_repository: OilRepository,
    ) -> None:
        self.sale_repository = sale_repository
        self.sale_item_repository = sale_item_repository
        self.oil_repository = oil_repository

    async def _load_oils(
        self, items: Sequence[SaleItemInput], db: AsyncSession
    ) -> Dict[int, Oil]:
        """
        Fetch every referenced oil in one query.

        Raises:
            HTTPException: 404 naming the first oil id that does not exist.
        """
        oils = await self.oil_repository.get_many_by_ids((it.oil_id for it in items), db)
        for it in items:
            if it.oil_id not in oils:
                raise HTTPException(status_code=404, detail=f"Oil not found for id {it.oil_id}")
        return oils

    def _build_item_rows(
        self, sale_id: int, items: Sequence[SaleItemInput], oils: Dict[int, Oil]
    ) -> List[SaleItemCreate]:
        # amounts are stored exactly as computed by the client
        return [
            SaleItemCreate(
                sale_id=sale_id,
                oil_id=it.oil_id,
                oil_name_snapshot=oils[it.oil_id].name_en,
                quantity=it.quantity,
                line_amount=it.line_amount,
            )
            for it in items
        ]

    async def confirm_sale(
        self,
        payload: SaleConfirm,
        db: AsyncSession,
        created_at: Optional[datetime] = None,
    ) -> SaleDTO:
        """
        Record a completed sale and its line items as one unit.

        Executes all operations in a database transaction:
        - Loads all referenced oils in a single query and aborts if any is missing.
        - Creates the sale header.
        - Bulk inserts the items, each stamped with the oil's current English name.

        Either the header and every item are committed, or nothing is.

        Args:
            payload: Validated sale body (totals, sale type, note, items).
            db: Active async database session.
            created_at: Optional explicit sale instant; now (UTC) if omitted.

        Returns:
            SaleDTO with the stored header.

        Raises:
            HTTPException: 404 if an oil id does not exist (after rollback).
            Exception: Propagated if database operations fail (after rollback).
        """
        stamp = to_utc(created_at) if created_at else datetime.now(timezone.utc)

        async with atomic(db):
            oils = await self._load_oils(payload.items, db)

            sale = await self.sale_repository.create_sale(
                SaleInsert(
                    total_amount=payload.total_amount,
                    total_quantity=payload.total_quantity,
                    sale_type=payload.sale_type,
                    note=payload.note or None,
                    created_at=stamp,
                ),
                session=db,
            )

            rows = self._build_item_rows(sale.id, payload.items, oils)
            await self.sale_item_repository.bulk_insert_items(rows, session=db)

            dto = self._to_dto(sale, item_count=len(rows))

        logger.info(
            "[SaleService] Sale recorded id=%s type=%s total=%s items=%s",
            dto.id,
            dto.sale_type,
            dto.total_amount,
            dto.item_count,
        )
        return dto

    async def monthly_summary(self, year: int, month: int, db: AsyncSession) -> MonthlySummaryDTO:
        """
        Legacy total-only summary over the UTC calendar month.

        Raises:
            HTTPException: 400 for an invalid year/month.
        """
        try:
            rng = month_bounds(year, month, offset=timedelta(0))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        async with maybe_begin(db):
            total, _ = await self.sale_repository.totals_between(
                db, rng.start_utc, rng.end_utc_exclusive
            )
        return MonthlySummaryDTO(year=year, month=month, total_sales_value=total)

    def _to_dto(self, sale: Sale, item_count: int = 0) -> SaleDTO:
        return SaleDTO(
            id=sale.id,
            total_amount=float(sale.total_amount),
            total_quantity=float(sale.total_quantity),
            sale_type=sale.sale_type.value,
            note=sale.note,
            created_at=to_utc(sale.created_at),
            item_count=item_count,
        )
