from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.utils.tx import maybe_begin
from oilshop.utils.units import TICALS_PER_VISS, line_amount, mix_total, ticals_to_viss
from oilshop.v1_0.entities import MixLineDTO, MixQuoteDTO, SaleItemPayloadDTO, SalePayloadDTO
from oilshop.v1_0.models import SaleType
from oilshop.v1_0.repositories import OilRepository
from oilshop.v1_0.schemas import MixQuoteRequest


class MixService:
    """Prices a blend of oils entered by weight in ticals."""

    def __init__(self, oil_repository: OilRepository) -> None:
        self.oil_repository = oil_repository

    async def quote(self, payload: MixQuoteRequest, db: AsyncSession) -> MixQuoteDTO:
        """
        Raises:
            HTTPException: 404 if an oil is missing or no longer sold.
        """
        async with maybe_begin(db):
            oils = await self.oil_repository.get_many_by_ids((it.oil_id for it in payload.items), db)

        lines: list[MixLineDTO] = []
        for it in payload.items:
            oil = oils.get(it.oil_id)
            if not oil or not oil.is_active:
                raise HTTPException(status_code=404, detail=f"Oil not found for id {it.oil_id}")
            quantity = ticals_to_viss(it.ticals)
            lines.append(
                MixLineDTO(
                    oil_id=oil.id,
                    name_en=oil.name_en,
                    name_my=oil.name_my,
                    price_per_unit=float(oil.price_per_unit),
                    ticals=float(it.ticals),
                    quantity=quantity,
                    line_amount=line_amount(oil.price_per_unit, float(it.ticals) / TICALS_PER_VISS),
                )
            )

        total_quantity, total_amount = mix_total([(ln.price_per_unit, ln.ticals) for ln in lines])
        sale_type = SaleType.SINGLE_OIL if len(lines) == 1 else SaleType.MIX

        return MixQuoteDTO(
            lines=lines,
            total_ticals=float(sum(ln.ticals for ln in lines)),
            total_quantity=total_quantity,
            total_amount=total_amount,
            sale_type=sale_type.value,
            sale_payload=SalePayloadDTO(
                total_amount=total_amount,
                total_quantity=total_quantity,
                sale_type=sale_type.value,
                note=payload.note,
                items=[
                    SaleItemPayloadDTO(
                        oil_id=ln.oil_id,
                        quantity=ln.quantity,
                        line_amount=ln.line_amount,
                    )
                    for ln in lines
                ],
            ),
        )
