from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from oilshop.core.security.deps import AuthContext, require_admin
from oilshop.storage.database.db_connector import get_db
from oilshop.app_containers import ApplicationContainer
from oilshop.core.logger import logger

from oilshop.v1_0.schemas import OilCreate, OilUpdate
from oilshop.v1_0.entities import OilDTO, ResponseDTO, ListResponseDTO
from oilshop.v1_0.services import OilService

router = APIRouter(prefix="/oils", tags=["Oils"])


@router.get(
    "",
    response_model=ListResponseDTO[OilDTO],
    summary="List oils on sale",
)
@inject
async def list_oils(
    db: AsyncSession = Depends(get_db),
    service: OilService = Depends(
        Provide[ApplicationContainer.api_container.oil_service]
    ),
):
    logger.debug("[OilRouter] list_oils")
    try:
        rows = await service.list_active(db)
        return ListResponseDTO(count=len(rows), data=rows)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[OilRouter] list_oils error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch oils")


# must stay above /{oil_id}
@router.get(
    "/admin/all",
    response_model=ListResponseDTO[OilDTO],
    summary="List every oil, including deactivated ones",
)
@inject
async def list_all_oils(
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(require_admin),
    service: OilService = Depends(
        Provide[ApplicationContainer.api_container.oil_service]
    ),
):
    logger.debug("[OilRouter] list_all_oils")
    try:
        rows = await service.list_all(db)
        return ListResponseDTO(count=len(rows), data=rows)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[OilRouter] list_all_oils error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch oils")


@router.get(
    "/{oil_id}",
    response_model=ResponseDTO[OilDTO],
    summary="Get an active oil by ID",
)
@inject
async def get_oil(
    oil_id: int,
    db: AsyncSession = Depends(get_db),
    service: OilService = Depends(
        Provide[ApplicationContainer.api_container.oil_service]
    ),
):
    logger.debug(f"[OilRouter] get_oil id={oil_id}")
    try:
        return ResponseDTO(data=await service.get_active(oil_id, db))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[OilRouter] get_oil error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch oil")


@router.post(
    "",
    response_model=ResponseDTO[OilDTO],
    status_code=status.HTTP_201_CREATED,
    summary="Create oil",
)
@inject
async def create_oil(
    request: OilCreate,
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(require_admin),
    service: OilService = Depends(
        Provide[ApplicationContainer.api_container.oil_service]
    ),
):
    logger.info("[OilRouter] create payload=%s", request.model_dump())
    try:
        dto = await service.create(request, db)
        return ResponseDTO(data=dto, message="Oil created successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[OilRouter] create error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create oil")


@router.put(
    "/{oil_id}",
    response_model=ResponseDTO[OilDTO],
    summary="Update oil (partial)",
)
@inject
async def update_oil(
    oil_id: int,
    request: OilUpdate,
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(require_admin),
    service: OilService = Depends(
        Provide[ApplicationContainer.api_container.oil_service]
    ),
):
    logger.info(
        "[OilRouter] update id=%s payload=%s",
        oil_id,
        request.model_dump(exclude_unset=True),
    )
    try:
        dto = await service.update(oil_id, request, db)
        return ResponseDTO(data=dto, message="Oil updated successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[OilRouter] update error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update oil")


@router.delete(
    "/{oil_id}",
    response_model=ResponseDTO[OilDTO],
    summary="Deactivate oil (soft delete)",
)
@inject
async def delete_oil(
    oil_id: int,
    db: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(require_admin),
    service: OilService = Depends(
        Provide[ApplicationContainer.api_container.oil_service]
    ),
):
    logger.info(f"[OilRouter] delete id={oil_id}")
    try:
        dto = await service.deactivate(oil_id, db)
        return ResponseDTO(data=dto, message="Oil deleted successfully (soft delete)")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[OilRouter] delete error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete oil")
