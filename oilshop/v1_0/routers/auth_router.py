from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from oilshop.core.security.deps import AuthContext, require_admin
from oilshop.storage.database.db_connector import get_db
from oilshop.app_containers import ApplicationContainer
from oilshop.core.logger import logger

from oilshop.v1_0.schemas import LoginRequest, ChangePasswordRequest
from oilshop.v1_0.entities import LoginDTO, ResponseDTO, MessageDTO
from oilshop.v1_0.services import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=ResponseDTO[LoginDTO],
    status_code=status.HTTP_200_OK,
    summary="Exchange owner credentials for a bearer token",
)
@inject
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
    service: AuthService = Depends(
        Provide[ApplicationContainer.api_container.auth_service]
    ),
):
    logger.info("[AuthRouter] login username=%s", request.username)
    try:
        dto = await service.login(request.username, request.password, db)
        return ResponseDTO(data=dto, message="Login successful")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[AuthRouter] login error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Login failed")


@router.post(
    "/change-password",
    response_model=MessageDTO,
    summary="Change the password of the logged-in owner",
)
@inject
async def change_password(
    request: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(require_admin),
    service: AuthService = Depends(
        Provide[ApplicationContainer.api_container.auth_service]
    ),
):
    logger.info("[AuthRouter] change_password user_id=%s", auth_ctx.user_id)
    try:
        await service.change_password(
            user_id=auth_ctx.user_id,
            current_password=request.current_password,
            new_password=request.new_password,
            confirm_password=request.confirm_password,
            db=db,
        )
        return MessageDTO(message="Password changed successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[AuthRouter] change_password error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to change password")


@router.post(
    "/logout",
    response_model=MessageDTO,
    summary="Acknowledge logout; the client discards its token",
)
async def logout(auth_ctx: AuthContext = Depends(require_admin)):
    logger.info("[AuthRouter] logout user_id=%s", auth_ctx.user_id)
    return MessageDTO(message="Logged out")
