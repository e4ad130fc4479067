"""
Populate the database with the owner account and a starter catalog.

Usage:
    python -m oilshop.scripts.seed
"""

import asyncio
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.core.logger import logger
from oilshop.core.security.deps import ADMIN_ROLE
from oilshop.core.security.passwords import hash_password
from oilshop.core.settings import settings
from oilshop.storage.database import build_engine, build_session_factory, create_schema
from oilshop.utils.tx import atomic
from oilshop.v1_0.models import OilUnit
from oilshop.v1_0.repositories import OilRepository, UserRepository
from oilshop.v1_0.schemas import OilCreate

SAMPLE_OILS: List[Dict] = [
    {
        "name_en": "Palm Oil",
        "name_my": "ထန်းဆီ",
        "description_en": "Pure refined palm oil, ideal for cooking and frying. High heat stability.",
        "description_my": "သန့်စင်ထားသော ထန်းဆီ၊ ချက်ပြုတ်ရန်နှင့် ကြော်ရန်အတွက် သင့်လျော်သည်။",
        "price_per_unit": 3500.00,
        "unit": OilUnit.VISS,
        "image_url": "https://images.unsplash.com/photo-1474979266404-7eaacbcd87c5?w=400",
    },
    {
        "name_en": "Groundnut Oil",
        "name_my": "မြေပဲဆီ",
        "description_en": "Premium groundnut oil with natural aroma. Perfect for traditional dishes.",
        "description_my": "သဘာဝအနံ့ပါရှိသော အရည်အသွေးမြင့် မြေပဲဆီ။ ရိုးရာအစားအစာများအတွက် အကောင်းဆုံး။",
        "price_per_unit": 5200.00,
        "unit": OilUnit.VISS,
        "image_url": "https://images.unsplash.com/photo-1615485500834-bc10199bc7c4?w=400",
    },
    {
        "name_en": "Sesame Oil",
        "name_my": "နှမ်းဆီ",
        "description_en": "Cold-pressed sesame oil with rich flavor. Excellent for salads and marinades.",
        "description_my": "အအေးညှစ်ထားသော အရသာရှိသော နှမ်းဆီ။ သုပ်နှင့် အခြာများအတွက် အသုံးပြုနိုင်သည်။",
        "price_per_unit": 6800.00,
        "unit": OilUnit.VISS,
        "image_url": "https://images.unsplash.com/photo-1608181961051-e7db8e86e0fc?w=400",
    },
    {
        "name_en": "Sunflower Oil",
        "name_my": "နေကြာဆီ",
        "description_en": "Light and healthy sunflower oil. Low in saturated fats.",
        "description_my": "ပေါ့ပါးပြီး ကျန်းမာသော နေကြာဆီ။ သန္ဓေအဆီနည်းသည်။",
        "price_per_unit": 4500.00,
        "unit": OilUnit.LITER,
        "image_url": "https://images.unsplash.com/photo-1593288942460-c2a81d5cc902?w=400",
    },
    {
        "name_en": "Coconut Oil",
        "name_my": "အုန်းဆီ",
        "description_en": "Extra virgin coconut oil. Great for cooking and skincare.",
        "description_my": "အရည်အသွေးမြင့် အုန်းဆီ။ ချက်ပြုတ်ရန်နှင့် အသားအရေစောင့်ရှောက်ရန် ကောင်းသည်။",
        "price_per_unit": 7500.00,
        "unit": OilUnit.VISS,
        "image_url": "https://images.unsplash.com/photo-1520065949650-29a4191fc49b?w=400",
    },
]


async def seed(
    session: AsyncSession,
    *,
    username: str | None = None,
    password: str | None = None,
) -> Dict[str, int]:
    """
    Create the admin user if missing and the sample oils if the catalog is
    empty. Safe to run more than once.

    Returns:
        Counts of rows created: ``{"users": n, "oils": n}``.
    """
    users = UserRepository()
    oils = OilRepository()
    username = username or settings.SEED_ADMIN_USERNAME
    password = password or settings.SEED_ADMIN_PASSWORD.get_secret_value()
    created = {"users": 0, "oils": 0}

    async with atomic(session):
        if await users.get_by_username(username, session) is None:
            await users.create_user(
                username=username,
                password_hash=hash_password(password),
                role=ADMIN_ROLE,
                session=session,
            )
            created["users"] = 1
            logger.info("[Seed] admin user created: %s", username)
        else:
            logger.info("[Seed] admin user already present: %s", username)

        if await oils.count(session) == 0:
            for row in SAMPLE_OILS:
                oil = await oils.create_oil(OilCreate(**row), session)
                created["oils"] += 1
                logger.info("[Seed] oil created: %s (%s)", oil.name_en, oil.name_my)
        else:
            logger.info("[Seed] catalog not empty, sample oils skipped")

    return created


async def main() -> None:
    engine = build_engine()
    try:
        await create_schema(engine)
        session_factory = build_session_factory(engine)
        async with session_factory() as session:
            created = await seed(session)
        logger.info("[Seed] done users=%s oils=%s", created["users"], created["oils"])
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
