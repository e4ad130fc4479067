from typing import Optional, List, Dict, Any, Iterable, Sequence
from datetime import datetime

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.v1_0.models import SaleItem, Sale
from oilshop.v1_0.schemas import SaleItemCreate
from .base_repository import BaseRepository

class SaleItemRepository(BaseRepository[SaleItem]):
    def __init__(self) -> None:
        super().__init__(SaleItem)

    async def get_by_sale_id(
        self,
        sale_id: int,
        session: AsyncSession
    ) -> Sequence[SaleItem]:
        """
        Return all SaleItem rows linked to a sale_id.
        """
        stmt = select(SaleItem).where(SaleItem.sale_id == sale_id).order_by(SaleItem.id.asc())
        result = await session.scalars(stmt)
        return result.all()

    async def bulk_insert_items(
        self,
        payloads: list[SaleItemCreate],
        session: AsyncSession,
    ) -> list[SaleItem]:
        """
        Bulk insert SaleItem rows.
        """
        objects = [
            SaleItem(
                sale_id=p.sale_id,
                oil_id=p.oil_id,
                oil_name_snapshot=p.oil_name_snapshot,
                quantity=p.quantity,
                line_amount=p.line_amount,
            )
            for p in payloads
        ]
        return await self.add_many(objects, session)

    async def breakdown_between(
        self,
        session: AsyncSession,
        start_utc: datetime,
        end_utc_exclusive: datetime,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Per-oil groups of the items whose parent sale falls in the range,
        highest revenue first (ties by oil_id).
        Returns: [{ "oil_id", "quantity", "revenue", "line_count" }, ...]
        """
        revenue = func.coalesce(func.sum(SaleItem.line_amount), 0).label("revenue")
        stmt = (
            select(
                SaleItem.oil_id,
                func.coalesce(func.sum(SaleItem.quantity), 0).label("quantity"),
                revenue,
                func.count(SaleItem.id).label("line_count"),
            )
            .join(Sale, Sale.id == SaleItem.sale_id)
            .where(Sale.created_at >= start_utc)
            .where(Sale.created_at < end_utc_exclusive)
            .group_by(SaleItem.oil_id)
            .order_by(revenue.desc(), SaleItem.oil_id.asc())
        )
        if limit:
            stmt = stmt.limit(limit)

        rows = await session.execute(stmt)
        return [
            {
                "oil_id": r.oil_id,
                "quantity": float(r.quantity or 0.0),
                "revenue": float(r.revenue or 0.0),
                "line_count": int(r.line_count or 0),
            }
            for r in rows
        ]

    async def latest_snapshots_between(
        self,
        session: AsyncSession,
        start_utc: datetime,
        end_utc_exclusive: datetime,
        oil_ids: Iterable[int],
    ) -> Dict[int, str]:
        """
        Name snapshot of the most recent item per oil inside the range.
        """
        ids = set(oil_ids)
        if not ids:
            return {}
        stmt = (
            select(SaleItem.oil_id, SaleItem.oil_name_snapshot)
            .join(Sale, Sale.id == SaleItem.sale_id)
            .where(Sale.created_at >= start_utc)
            .where(Sale.created_at < end_utc_exclusive)
            .where(SaleItem.oil_id.in_(ids))
            .order_by(Sale.created_at.desc(), SaleItem.id.desc())
        )
        out: Dict[int, str] = {}
        for r in await session.execute(stmt):
            out.setdefault(r.oil_id, r.oil_name_snapshot)
        return out

    async def count(self, session: AsyncSession) -> int:
        return int(await session.scalar(select(func.count(SaleItem.id))) or 0)
