from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.core.logger import logger
from oilshop.core.security.jwt import create_access_token
from oilshop.core.security.passwords import fits_bcrypt, hash_password, verify_password
from oilshop.utils.local_time import to_utc
from oilshop.utils.tx import atomic, maybe_begin
from oilshop.v1_0.entities import LoginDTO, UserDTO
from oilshop.v1_0.repositories import UserRepository

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 64


class AuthService:
    """
    Owner authentication with stateless JWTs.

    Tokens are never stored server side, so neither logout nor a password
    change invalidates tokens that were already issued.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def login(self, username: str, password: str, db: AsyncSession) -> LoginDTO:
        """
        Verify credentials and issue a token.

        Args:
            username: Login name.
            password: Plain password.
            db: Active async database session.

        Returns:
            LoginDTO with the signed token, its expiry, and the user.

        Raises:
            HTTPException:
                400 if username or password is blank.
                401 on unknown user or wrong password (same message for both).
        """
        username = (username or "").strip()
        if not username or not password:
            raise HTTPException(status_code=400, detail="Username and password are required")

        async with maybe_begin(db):
            user = await self.user_repository.get_by_username(username, db)

        if not user or not verify_password(password, user.password_hash):
            logger.warning("[AuthService] failed login username=%s", username)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

        token, expires_at = create_access_token(user_id=user.id, username=user.username, role=user.role)
        logger.info("[AuthService] login ok user_id=%s", user.id)
        return LoginDTO(
            token=token,
            token_type="Bearer",
            expires_at=expires_at,
            user=UserDTO(
                id=user.id,
                username=user.username,
                role=user.role,
                created_at=to_utc(user.created_at) if user.created_at else None,
            ),
        )

    async def change_password(
        self,
        *,
        user_id: int,
        current_password: Optional[str],
        new_password: Optional[str],
        confirm_password: Optional[str],
        db: AsyncSession,
    ) -> None:
        """
        Rotate the password of the authenticated user.

        Raises:
            HTTPException:
                400 on missing fields, bad length, mismatch, or unchanged password.
                401 if the user no longer exists or the current password is wrong.
        """
        if not current_password or not new_password:
            raise HTTPException(status_code=400, detail="Current password and new password are required")

        if not MIN_PASSWORD_LENGTH <= len(new_password) <= MAX_PASSWORD_LENGTH or not fits_bcrypt(new_password):
            raise HTTPException(
                status_code=400,
                detail=f"New password must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH} characters",
            )

        if confirm_password is not None and confirm_password != new_password:
            raise HTTPException(status_code=400, detail="Passwords do not match")

        if current_password == new_password:
            raise HTTPException(status_code=400, detail="New password must be different from current password")

        async with atomic(db):
            user = await self.user_repository.get_by_id(user_id, db)
            if not user:
                raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
            if not verify_password(current_password, user.password_hash):
                raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

            await self.user_repository.set_password_hash(user, hash_password(new_password), db)

        logger.info("[AuthService] password changed user_id=%s", user_id)
