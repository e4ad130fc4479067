from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from oilshop.core.security.deps import AuthContext, require_admin
from oilshop.storage.database.db_connector import get_db
from oilshop.app_containers import ApplicationContainer
from oilshop.core.logger import logger

from oilshop.v1_0.entities import DailyReportDTO, MonthlyReportDTO, ResponseDTO
from oilshop.v1_0.services import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get(
    "/monthly/details",
    response_model=ResponseDTO[MonthlyReportDTO],
    summary="Monthly totals and per-oil breakdown (Myanmar time)",
)
@inject
async def monthly_details(
    year: int = Query(...),
    month: int = Query(...),
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(require_admin),
    service: ReportService = Depends(
        Provide[ApplicationContainer.api_container.report_service]
    ),
):
    logger.debug(f"[ReportRouter] monthly_details year={year} month={month}")
    try:
        return ResponseDTO(data=await service.monthly_details(db, year, month))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[ReportRouter] monthly_details error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to build monthly report")


@router.get(
    "/daily",
    response_model=ResponseDTO[DailyReportDTO],
    summary="Daily totals and top oils (Myanmar time)",
)
@inject
async def daily_summary(
    date: Optional[str] = Query(None, description="Local day, YYYY-MM-DD; today if omitted"),
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(require_admin),
    service: ReportService = Depends(
        Provide[ApplicationContainer.api_container.report_service]
    ),
):
    logger.debug(f"[ReportRouter] daily_summary date={date}")
    try:
        return ResponseDTO(data=await service.daily_summary(db, date_text=date))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[ReportRouter] daily_summary error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to build daily report")
