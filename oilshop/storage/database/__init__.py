from .db_connector import (
    build_engine,
    build_session_factory,
    create_schema,
    get_db,
)

__all__ = [
    "build_engine",
    "build_session_factory",
    "create_schema",
    "get_db",
]
