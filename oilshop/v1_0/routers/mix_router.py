from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from oilshop.storage.database.db_connector import get_db
from oilshop.app_containers import ApplicationContainer
from oilshop.core.logger import logger

from oilshop.v1_0.schemas import MixQuoteRequest
from oilshop.v1_0.entities import MixQuoteDTO, ResponseDTO
from oilshop.v1_0.services import MixService

router = APIRouter(prefix="/mix", tags=["Mix"])


@router.post(
    "/quote",
    response_model=ResponseDTO[MixQuoteDTO],
    summary="Price a mix of oils entered in ticals",
)
@inject
async def quote_mix(
    request: MixQuoteRequest,
    db: AsyncSession = Depends(get_db),
    service: MixService = Depends(
        Provide[ApplicationContainer.api_container.mix_service]
    ),
):
    logger.debug("[MixRouter] quote lines=%s", len(request.items))
    try:
        return ResponseDTO(data=await service.quote(request, db))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[MixRouter] quote error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to price mix")
