from collections.abc import AsyncGenerator
from typing import Any, Dict

from fastapi import Request
from sqlalchemy.engine.url import make_url, URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from oilshop.core.settings import settings


def build_url(raw: str) -> URL:
    """
    Plain postgres URLs are rebuilt for asyncpg without their query string
    (sslmode/channel_binding are not asyncpg arguments). Anything else
    (sqlite+aiosqlite, postgresql+asyncpg) passes through.
    """
    u = make_url(raw)
    if u.drivername in ("postgres", "postgresql", "postgresql+psycopg2"):
        return URL.create(
            drivername="postgresql+asyncpg",
            username=u.username,
            password=u.password,
            host=u.host,
            port=u.port,
            database=u.database,
        )
    return u


def build_engine(raw: str | None = None) -> AsyncEngine:
    url = build_url(raw or settings.DATABASE_URL.get_secret_value())

    kwargs: Dict[str, Any] = {
        "echo": bool(getattr(settings, "DEBUG", False)),
        "poolclass": NullPool,
    }
    if url.drivername == "postgresql+asyncpg":
        kwargs["pool_pre_ping"] = True
        kwargs["execution_options"] = {"isolation_level": "READ COMMITTED"}
        kwargs["connect_args"] = {
            "ssl": settings.DB_SSL,
            "statement_cache_size": 0,
        }
    return create_async_engine(url.render_as_string(hide_password=False), **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False, class_=AsyncSession)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    session_factory = request.app.state.container.session_factory()
    session: AsyncSession = session_factory()
    try:
        yield session
    finally:
        await session.close()


async def create_schema(engine: AsyncEngine) -> None:
    from oilshop.v1_0.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
