import os

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./oilshop-test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DB_CREATE_ALL"] = "false"

from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from oilshop.core.security.jwt import create_access_token
from oilshop.core.security.passwords import hash_password
from oilshop.main import create_app
from oilshop.storage.database import build_engine, build_session_factory, create_schema
from oilshop.utils.tx import atomic
from oilshop.v1_0.models import Oil, OilStatus, OilUnit, SaleType, User
from oilshop.v1_0.repositories import OilRepository, SaleItemRepository, SaleRepository, UserRepository
from oilshop.v1_0.schemas import OilCreate, SaleConfirm, SaleItemInput
from oilshop.v1_0.services import SaleService

ADMIN_PASSWORD = "admin123"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def engine(tmp_path: Path):
    eng = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'oilshop.db'}")
    await create_schema(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory):
    return create_app(session_factory=session_factory)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def admin(db) -> User:
    async with atomic(db):
        user = await UserRepository().create_user(
            username="admin",
            password_hash=hash_password(ADMIN_PASSWORD),
            role="admin",
            session=db,
        )
    return user


@pytest.fixture
def admin_headers(admin) -> dict:
    token, _ = create_access_token(user_id=admin.id, username=admin.username, role=admin.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sale_service() -> SaleService:
    return SaleService(
        sale_repository=SaleRepository(),
        sale_item_repository=SaleItemRepository(),
        oil_repository=OilRepository(),
    )


async def make_oil(
    db,
    name_en: str = "Palm Oil",
    price: float = 3500.0,
    *,
    name_my: str = "ထန်းဆီ",
    unit: OilUnit = OilUnit.VISS,
    status: OilStatus = OilStatus.ACTIVE,
) -> Oil:
    repo = OilRepository()
    async with atomic(db):
        oil = await repo.create_oil(
            OilCreate(
                name_en=name_en,
                name_my=name_my,
                description_en=f"{name_en} description",
                description_my="ဖော်ပြချက်",
                price_per_unit=price,
                unit=unit,
            ),
            db,
        )
        if status != OilStatus.ACTIVE:
            await repo.set_status(oil, status, db)
    return oil


async def record_sale(
    service: SaleService,
    db,
    lines: Iterable[tuple[int, float, float]],
    created_at: Optional[datetime] = None,
    sale_type: Optional[SaleType] = None,
):
    """``lines`` are ``(oil_id, quantity, line_amount)`` triples."""
    lines = list(lines)
    payload = SaleConfirm(
        total_amount=sum(a for _, _, a in lines),
        total_quantity=sum(q for _, q, _ in lines),
        sale_type=sale_type or (SaleType.SINGLE_OIL if len(lines) == 1 else SaleType.MIX),
        items=[SaleItemInput(oil_id=o, quantity=q, line_amount=a) for o, q, a in lines],
    )
    return await service.confirm_sale(payload, db, created_at=created_at)
