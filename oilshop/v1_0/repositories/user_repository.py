from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.v1_0.models import User
from .base_repository import BaseRepository

class UserRepository(BaseRepository[User]):
    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_username(self, username: str, session: AsyncSession) -> Optional[User]:
        return await session.scalar(select(User).where(User.username == username))

    async def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: str,
        session: AsyncSession,
    ) -> User:
        user = User(username=username, password_hash=password_hash, role=role)
        await self.add(user, session)
        return user

    async def set_password_hash(self, user: User, password_hash: str, session: AsyncSession) -> User:
        user.password_hash = password_hash
        await session.flush()
        return user

    async def count(self, session: AsyncSession) -> int:
        return int(await session.scalar(select(func.count(User.id))) or 0)
