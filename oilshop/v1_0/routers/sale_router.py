from fastapi import APIRouter, HTTPException, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from oilshop.core.security.deps import AuthContext, require_admin
from oilshop.storage.database.db_connector import get_db
from oilshop.app_containers import ApplicationContainer
from oilshop.core.logger import logger

from oilshop.v1_0.schemas import SaleConfirm
from oilshop.v1_0.entities import SaleDTO, MonthlySummaryDTO, ResponseDTO
from oilshop.v1_0.services import SaleService

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.post(
    "/confirm",
    response_model=ResponseDTO[SaleDTO],
    status_code=status.HTTP_201_CREATED,
    summary="Record a completed sale",
)
@inject
async def confirm_sale(
    request: SaleConfirm,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(require_admin),
    service: SaleService = Depends(
        Provide[ApplicationContainer.api_container.sale_service]
    ),
):
    logger.info(
        "[SaleRouter] confirm_sale user_id=%s type=%s total=%s items=%s",
        auth_ctx.user_id,
        request.sale_type.value,
        request.total_amount,
        len(request.items),
    )
    try:
        dto = await service.confirm_sale(request, db)
        return ResponseDTO(data=dto, message="Sale recorded successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[SaleRouter] confirm_sale error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to record sale")


@router.get(
    "/summary",
    response_model=ResponseDTO[MonthlySummaryDTO],
    summary="Total sales value for a UTC calendar month",
)
@inject
async def monthly_summary(
    year: int = Query(...),
    month: int = Query(...),
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(require_admin),
    service: SaleService = Depends(
        Provide[ApplicationContainer.api_container.sale_service]
    ),
):
    logger.debug(f"[SaleRouter] monthly_summary year={year} month={month}")
    try:
        return ResponseDTO(data=await service.monthly_summary(year, month, db))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[SaleRouter] monthly_summary error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch summary")
