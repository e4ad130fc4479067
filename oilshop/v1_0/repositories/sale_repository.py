from typing import Tuple
from datetime import datetime
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.v1_0.models import Sale
from oilshop.v1_0.schemas import SaleInsert
from .base_repository import BaseRepository

class SaleRepository(BaseRepository[Sale]):
    def __init__(self) -> None:
        super().__init__(Sale)

    async def create_sale(
        self,
        dto: SaleInsert,
        session: AsyncSession
    ) -> Sale:
        """
        Creates a new Sale from the DTO, adds it to the session,
        and flushes to assign its primary key without committing.
        """
        sale = Sale(**dto.model_dump())
        await self.add(sale, session)
        return sale

    async def totals_between(
        self,
        session: AsyncSession,
        start_utc: datetime,
        end_utc_exclusive: datetime,
    ) -> Tuple[float, int]:
        """
        Sum of total_amount and number of sales with created_at in
        [start_utc, end_utc_exclusive).
        """
        stmt = (
            select(
                func.coalesce(func.sum(Sale.total_amount), 0).label("total"),
                func.count(Sale.id).label("transactions"),
            )
            .where(Sale.created_at >= start_utc)
            .where(Sale.created_at < end_utc_exclusive)
        )
        row = (await session.execute(stmt)).one()
        return float(row.total or 0.0), int(row.transactions or 0)

    async def count(self, session: AsyncSession) -> int:
        return int(await session.scalar(select(func.count(Sale.id))) or 0)
