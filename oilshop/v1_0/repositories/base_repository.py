from typing import Any, Iterable, Optional, Sequence, Type, TypeVar, Generic, Protocol, runtime_checkable
from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

# --- models must expose .id ---
@runtime_checkable
class HasId(Protocol):
    id: Any  # PK column

ModelT = TypeVar("ModelT", bound=HasId)


class BaseRepository(Generic[ModelT]):
    """Flush-only data access; committing is the caller's unit of work."""

    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def add(self, entity: ModelT, session: AsyncSession) -> ModelT:
        session.add(entity)
        try:
            await session.flush()
        except IntegrityError:
            await session.rollback()
            raise
        return entity

    async def add_many(self, entities: Iterable[ModelT], session: AsyncSession) -> list[ModelT]:
        items = list(entities)
        session.add_all(items)
        await session.flush()
        return items

    async def get_by_id(
        self,
        id_: Any,
        session: AsyncSession,
        *,
        options: Sequence[Any] | None = None,
        for_update: bool = False,
    ) -> Optional[ModelT]:
        stmt: Select = select(self.model).where(self.model.id == id_)
        if for_update:
            stmt = stmt.with_for_update()
        if options:
            stmt = stmt.options(*options)
        res = await session.execute(stmt)
        return res.scalars().first()

    async def get_many_by_ids(self, ids: Iterable[Any], session: AsyncSession) -> dict[Any, ModelT]:
        """Single IN query; returns {id: entity} for the ids that exist."""
        wanted = set(ids)
        if not wanted:
            return {}
        res = await session.execute(select(self.model).where(self.model.id.in_(wanted)))
        return {e.id: e for e in res.scalars().all()}

    async def list_all(
        self,
        session: AsyncSession,
        *,
        order_by: Any | None = None,
        where: Sequence[Any] = (),
    ) -> list[ModelT]:
        if order_by is None:
            order_by = self.model.id.desc()
        stmt: Select = select(self.model).where(*where).order_by(order_by)
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def update_fields(
        self,
        entity: ModelT,
        data: dict[str, Any],
        session: AsyncSession,
        *,
        allow: set[str] | None = None,
        deny: set[str] | None = None,
    ) -> ModelT:
        for k, v in data.items():
            if allow and k not in allow:
                continue
            if deny and k in deny:
                continue
            setattr(entity, k, v)
        await session.flush()
        return entity
