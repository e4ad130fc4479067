from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession


@asynccontextmanager
async def maybe_begin(session: AsyncSession):
    """
    Reuse the session's transaction when one is already open,
    otherwise open a context transaction around the block.
    """
    if session.in_transaction():
        yield
    else:
        async with session.begin():
            yield


@asynccontextmanager
async def atomic(session: AsyncSession):
    """
    Unit of work for writes: commit when the block finishes, roll back
    and re-raise on any exception so no partial rows are kept.
    """
    if not session.in_transaction():
        await session.begin()
    try:
        yield
        await session.commit()
    except Exception:
        await session.rollback()
        raise
