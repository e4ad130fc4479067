import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, APIRouter, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from oilshop.core.settings import settings
from oilshop.core.logger import get_logger, logger, request_id_var
from oilshop.v1_0.v1_router import v1_router
from oilshop.app_containers import ApplicationContainer
from oilshop.storage.database import build_engine, build_session_factory, create_schema

API_PREFIX = getattr(settings, "API_PREFIX", "/api")
REQUEST_ID_HEADER = "X-Request-ID"

http_logger = get_logger("http")


def _error(status_code: int, message) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "Invalid value")
    return f"{loc}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error("[App] %s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.detail)
        return _error(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.info("[App] validation failed %s %s: %s", request.method, request.url.path, message)
        return _error(400, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("[App] unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
        return _error(500, "Internal server error")


def create_app(session_factory: Optional[async_sessionmaker[AsyncSession]] = None) -> FastAPI:
    """
    Build the application.

    Without ``session_factory`` an engine is created from ``DATABASE_URL`` and
    disposed on shutdown; a caller-supplied factory is left to its owner.
    """
    engine: Optional[AsyncEngine] = None
    if session_factory is None:
        engine = build_engine()
        session_factory = build_session_factory(engine)

    container = ApplicationContainer()
    container.session_factory.override(session_factory)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None and settings.DB_CREATE_ALL:
            await create_schema(engine)
            logger.info("Database schema ensured")
        logger.info(f"{settings.APP_NAME} starting in {settings.APP_ENV}")
        try:
            yield
        finally:
            logger.info(f"{settings.APP_NAME} shutdown")
            if engine is not None:
                await engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        openapi_url=f"{API_PREFIX}/openapi.json",
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
        lifespan=lifespan,
    )

    app.state.container = container

    origins = settings.CORS_ORIGINS_LIST
    allow_credentials = True

    if "*" in origins:
        # wildcard and credentials cannot be combined
        allow_credentials = False

    logger.info("CORS origins=%s allow_credentials=%s", origins, allow_credentials)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = (request.headers.get(REQUEST_ID_HEADER) or "").strip()[:64] or uuid.uuid4().hex[:12]
        token = request_id_var.set(request_id)
        try:
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            http_logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)

    register_exception_handlers(app)

    base_router = APIRouter(prefix=API_PREFIX)
    base_router.include_router(v1_router)

    @base_router.get("/ready", tags=["health"])
    async def ready():
        return {
            "message": "ready",
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "env": settings.APP_ENV,
            "prefix": API_PREFIX,
        }

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "OK", "message": "Server is running"}

    app.include_router(base_router)

    return app


app = create_app()
