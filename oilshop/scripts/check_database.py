"""
Verify that the configured database is reachable and report row counts.

Usage:
    python -m oilshop.scripts.check_database
"""

import asyncio
import sys
from typing import Dict

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.core.logger import logger
from oilshop.storage.database import build_engine, build_session_factory
from oilshop.utils.tx import maybe_begin
from oilshop.v1_0.models import Oil, User
from oilshop.v1_0.repositories import OilRepository, SaleRepository, UserRepository


async def collect_counts(session: AsyncSession) -> Dict[str, int]:
    async with maybe_begin(session):
        await session.execute(text("SELECT 1"))
        return {
            "oils": await OilRepository().count(session),
            "users": await UserRepository().count(session),
            "sales": await SaleRepository().count(session),
        }


async def main() -> int:
    engine = build_engine()
    session_factory = build_session_factory(engine)
    try:
        async with session_factory() as session:
            counts = await collect_counts(session)
            logger.info("[CheckDB] connection ok")
            for table, n in counts.items():
                logger.info("[CheckDB] %s: %s records", table, n)

            async with maybe_begin(session):
                oil = await session.scalar(select(Oil).limit(1))
                user = await session.scalar(select(User).limit(1))
            if oil:
                logger.info("[CheckDB] sample oil: %s (%s) %s MMK", oil.name_en, oil.name_my, oil.price_per_unit)
            if user:
                logger.info("[CheckDB] sample user: %s role=%s", user.username, user.role)
        return 0
    except Exception as e:
        logger.error("[CheckDB] database check failed: %s", e, exc_info=True)
        logger.info("[CheckDB] verify DATABASE_URL and that the schema exists (DB_CREATE_ALL=true or run the seed)")
        return 1
    finally:
        await engine.dispose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
