import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from Data.collections import routed_collections
from Data.store import RecordStore, build_store
from services import seed_service
from services.brainstorm_service import BrainstormAssistant, build_assistant
from services.calendar_service import CalendarProvider, StubCalendarProvider
from services.config import Settings, settings as default_settings
from services.errors import RecordValidationError
from services.logging_config import configure_logging
from services.search_service import WebSearch, build_web_search

from .brainstorm_api import router as brainstorm_router
from .calendar_api import router as calendar_router
from .dashboard_api import router as dashboard_router
from .external_api import router as external_router
from .notification_api import router as notification_router
from .record_api import build_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("Starting service", service=settings.SERVICE_NAME,
                store=settings.STORE_BACKEND)
    yield
    logger.info("Shutting down service", service=settings.SERVICE_NAME)


def _error_details(errors) -> list[dict]:
    return [
        {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
        for e in errors
    ]


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RecordValidationError)
    async def record_validation_handler(request: Request, exc: RecordValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": exc.message, "details": exc.details},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request data",
                     "details": _error_details(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", method=request.method,
                         path=request.url.path)
        return JSONResponse(status_code=500,
                            content={"error": "Internal server error"})


def create_app(
    settings: Settings | None = None,
    store: RecordStore | None = None,
    brainstorm_assistant: BrainstormAssistant | None = None,
    calendar_provider: CalendarProvider | None = None,
    web_search: WebSearch | None = None,
) -> FastAPI:
    """
    Build the application.

    The store and collaborators are created here (or injected, for tests)
    and shared through app.state; nothing is a module-level singleton.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    if store is None:
        store = build_store(settings.STORE_BACKEND, settings.DATABASE_URL)
    seed_service.seed(store, settings.DEFAULT_USER_ID,
                      with_samples=settings.SEED_SAMPLE_DATA)

    app = FastAPI(title="Widgetboard", version="0.1.0", lifespan=lifespan,
                  debug=settings.DEBUG)
    app.state.settings = settings
    app.state.store = store
    app.state.brainstorm_assistant = brainstorm_assistant or build_assistant(
        settings.BRAINSTORM_BACKEND, settings.OLLAMA_MODEL
    )
    app.state.calendar_provider = calendar_provider or StubCalendarProvider()
    app.state.web_search = web_search or build_web_search(settings.SEARCH_BACKEND)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                status_code=500,
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response

    _install_error_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "healthy", "service": settings.SERVICE_NAME}

    # Fixed paths first so they win over the generic /{record_id} routes
    app.include_router(notification_router, prefix="/api/notifications",
                       tags=["Notifications"])
    app.include_router(brainstorm_router, prefix="/api/brainstorm-sessions",
                       tags=["Brainstorm"])
    app.include_router(calendar_router, prefix="/api/calendar-connections",
                       tags=["Calendar"])
    app.include_router(dashboard_router, prefix="/api", tags=["Dashboard"])
    app.include_router(external_router, prefix="/api", tags=["External"])
    for collection in routed_collections():
        app.include_router(build_router(collection),
                           prefix=f"/api/{collection.path}",
                           tags=[collection.label])

    return app
