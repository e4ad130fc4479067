from typing import Optional, List, Iterable, Dict

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.v1_0.models import Oil, OilStatus, OilUnit
from oilshop.v1_0.schemas import OilCreate
from .base_repository import BaseRepository

class OilRepository(BaseRepository[Oil]):
    """
    Catalog access. There is deliberately no delete here: oils are only
    ever moved to INACTIVE so sale items keep a valid foreign key.
    """

    UPDATABLE = {
        "name_en", "name_my", "description_en", "description_my",
        "price_per_unit", "unit", "image_url", "status",
    }

    def __init__(self) -> None:
        super().__init__(Oil)

    async def create_oil(
        self,
        payload: OilCreate,
        session: AsyncSession
    ) -> Oil:
        entity = Oil(
            name_en=payload.name_en,
            name_my=payload.name_my,
            description_en=payload.description_en,
            description_my=payload.description_my,
            price_per_unit=payload.price_per_unit,
            unit=payload.unit,
            image_url=payload.image_url,
            status=OilStatus.ACTIVE,
        )
        await self.add(entity, session)
        await session.refresh(entity)
        return entity

    async def list_active(self, session: AsyncSession) -> List[Oil]:
        return await self.list_all(
            session,
            where=(Oil.status == OilStatus.ACTIVE,),
            order_by=Oil.created_at.desc(),
        )

    async def list_every(self, session: AsyncSession) -> List[Oil]:
        return await self.list_all(session, order_by=Oil.created_at.desc())

    async def update_oil(
        self,
        oil: Oil,
        data: dict,
        session: AsyncSession
    ) -> Oil:
        return await self.update_fields(oil, data, session, allow=self.UPDATABLE)

    async def set_status(
        self,
        oil: Oil,
        status: OilStatus,
        session: AsyncSession
    ) -> Oil:
        oil.status = status
        await session.flush()
        return oil

    async def units_by_ids(
        self,
        oil_ids: Iterable[int],
        session: AsyncSession
    ) -> Dict[int, Optional[str]]:
        ids = set(oil_ids)
        if not ids:
            return {}
        rows = await session.execute(select(Oil.id, Oil.unit).where(Oil.id.in_(ids)))
        return {
            r.id: (r.unit.value if isinstance(r.unit, OilUnit) else r.unit)
            for r in rows
        }

    async def count(self, session: AsyncSession) -> int:
        return int(await session.scalar(select(func.count(Oil.id))) or 0)
