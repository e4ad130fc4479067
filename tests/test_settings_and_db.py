import pytest
from pydantic import ValidationError

from oilshop.core.settings import Settings
from oilshop.storage.database.db_connector import build_url

REQUIRED = {"DATABASE_URL": "sqlite+aiosqlite:///x.db", "JWT_SECRET": "s"}


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **{**REQUIRED, **overrides})


def test_defaults():
    s = make_settings()

    assert s.API_PREFIX == "/api"
    assert s.JWT_EXPIRES_HOURS == 24
    assert s.JWT_ALGORITHM == "HS256"


@pytest.mark.parametrize("field", ["DATABASE_URL", "JWT_SECRET"])
def test_blank_secrets_are_rejected(field):
    with pytest.raises(ValidationError, match=field):
        make_settings(**{field: ""})


@pytest.mark.parametrize("rounds", [3, 32])
def test_bcrypt_rounds_are_bounded(rounds):
    with pytest.raises(ValidationError):
        make_settings(BCRYPT_ROUNDS=rounds)


def test_expiry_must_be_positive():
    with pytest.raises(ValidationError):
        make_settings(JWT_EXPIRES_HOURS=0)


def test_api_prefix_is_normalized():
    assert make_settings(API_PREFIX="api/").API_PREFIX == "/api"


def test_cors_origins_list():
    assert make_settings(CORS_ORIGINS="*").CORS_ORIGINS_LIST == ["*"]
    assert make_settings(CORS_ORIGINS="http://a, http://b,").CORS_ORIGINS_LIST == ["http://a", "http://b"]


def test_postgres_url_is_rewritten_for_asyncpg():
    url = build_url("postgresql://shop:pw@db.example.com:5432/sso_oil_shop?sslmode=require")

    assert url.drivername == "postgresql+asyncpg"
    assert url.host == "db.example.com"
    assert url.database == "sso_oil_shop"
    assert url.password == "pw"
    assert not url.query


def test_async_urls_pass_through():
    assert build_url("sqlite+aiosqlite:///tmp/x.db").drivername == "sqlite+aiosqlite"
    assert build_url("postgresql+asyncpg://u@h/db").drivername == "postgresql+asyncpg"
