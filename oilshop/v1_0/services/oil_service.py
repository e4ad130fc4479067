from typing import List

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.core.logger import logger
from oilshop.utils.local_time import to_utc
from oilshop.utils.tx import atomic, maybe_begin
from oilshop.v1_0.entities import OilDTO
from oilshop.v1_0.models import Oil, OilStatus
from oilshop.v1_0.repositories import OilRepository
from oilshop.v1_0.schemas import OilCreate, OilUpdate


def to_oil_dto(o: Oil) -> OilDTO:
    return OilDTO(
        id=o.id,
        name_en=o.name_en,
        name_my=o.name_my,
        description_en=o.description_en,
        description_my=o.description_my,
        price_per_unit=float(o.price_per_unit),
        unit=o.unit.value,
        status=o.status.value,
        is_active=o.is_active,
        created_at=to_utc(o.created_at) if o.created_at else None,
        image_url=o.image_url,
    )


class OilService:
    """Oil catalog: public listing plus owner-side create, edit and deactivate."""

    def __init__(self, oil_repository: OilRepository) -> None:
        self.oil_repository = oil_repository

    async def _require(self, oil_id: int, db: AsyncSession) -> Oil:
        """
        Ensure that an oil exists or raise an HTTP 404 error.
        """
        o = await self.oil_repository.get_by_id(oil_id, db)
        if not o:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Oil not found")
        return o

    async def list_active(self, db: AsyncSession) -> List[OilDTO]:
        async with maybe_begin(db):
            rows = await self.oil_repository.list_active(db)
        return [to_oil_dto(o) for o in rows]

    async def list_all(self, db: AsyncSession) -> List[OilDTO]:
        async with maybe_begin(db):
            rows = await self.oil_repository.list_every(db)
        return [to_oil_dto(o) for o in rows]

    async def get_active(self, oil_id: int, db: AsyncSession) -> OilDTO:
        """Inactive oils are hidden from the public catalog, so they 404 here too."""
        async with maybe_begin(db):
            o = await self._require(oil_id, db)
        if not o.is_active:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Oil not found")
        return to_oil_dto(o)

    async def create(self, payload: OilCreate, db: AsyncSession) -> OilDTO:
        logger.info("[OilService] Creating oil name_en=%s", payload.name_en)
        async with atomic(db):
            o = await self.oil_repository.create_oil(payload, db)
            dto = to_oil_dto(o)
        logger.info("[OilService] Oil created ID=%s", dto.id)
        return dto

    async def update(self, oil_id: int, payload: OilUpdate, db: AsyncSession) -> OilDTO:
        """
        Apply the fields present in the body. ``is_active`` is accepted as a
        shortcut for ``status`` and loses to an explicit ``status``.

        Raises:
            HTTPException: 404 when the oil does not exist.
        """
        data = payload.model_dump(exclude_unset=True)
        is_active = data.pop("is_active", None)
        if is_active is not None and "status" not in data:
            data["status"] = OilStatus.ACTIVE if is_active else OilStatus.INACTIVE
        # explicit nulls on required columns are ignored
        data = {k: v for k, v in data.items() if v is not None or k == "image_url"}

        async with atomic(db):
            o = await self._require(oil_id, db)
            o = await self.oil_repository.update_oil(o, data, db)
            dto = to_oil_dto(o)
        logger.info("[OilService] Oil updated ID=%s fields=%s", oil_id, sorted(data))
        return dto

    async def deactivate(self, oil_id: int, db: AsyncSession) -> OilDTO:
        """Soft delete: the row stays so historical sale items keep resolving."""
        async with atomic(db):
            o = await self._require(oil_id, db)
            if o.status != OilStatus.INACTIVE:
                o = await self.oil_repository.set_status(o, OilStatus.INACTIVE, db)
            dto = to_oil_dto(o)
        logger.warning("[OilService] Oil deactivated ID=%s", oil_id)
        return dto
