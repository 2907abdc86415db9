"""ArtHub Engagement API - Main Application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from arthub.accounts.router import router as accounts_router
from arthub.accounts.service import AccountService
from arthub.chats.router import router as chats_router
from arthub.chats.service import ChatService
from arthub.comments.router import router as comments_router
from arthub.comments.service import CommentService
from arthub.config import Settings, get_settings
from arthub.core.context import get_request_id
from arthub.core.firebase import (
    FirebaseNotConfiguredError,
    init_firebase,
    shutdown_firebase,
)
from arthub.core.logging import configure_structlog, get_logger
from arthub.core.middleware import RequestContextMiddleware
from arthub.core.redis import init_redis, shutdown_redis
from arthub.counters.router import router as counters_router
from arthub.counters.service import CounterService
from arthub.favourites.router import router as favourites_router
from arthub.favourites.service import FavouriteService
from arthub.health.router import router as health_router
from arthub.invitations.router import router as invitations_router
from arthub.invitations.service import InvitationService
from arthub.notifications import (
    InvitationStatusWatcher,
    MemoryNotificationSink,
    MemoryStatusCache,
    NotificationDispatcher,
    NotificationSink,
    RedisNotificationSink,
    RedisStatusCache,
    StatusCache,
    StatusChangeCoordinator,
)
from arthub.reports.router import router as reports_router
from arthub.reports.service import ReportService
from arthub.store import InMemoryRealtimeStore, RealtimeStore


if TYPE_CHECKING:
    from redis.asyncio import Redis


# Configure logging early (before creating logger)
settings = get_settings()
configure_structlog(settings, log_dir=Path(settings.log_dir))

logger = get_logger(__name__)


def build_store(settings: Settings) -> RealtimeStore:
    """Firebase Realtime Database when configured, in-memory otherwise."""
    if settings.firebase_enabled:
        # Lazy import to avoid loading the SDK unless needed
        from arthub.store.firebase import FirebaseRealtimeStore  # noqa: PLC0415

        app = init_firebase(settings)
        return FirebaseRealtimeStore(app)

    logger.warning(
        "in_memory_store_selected",
        message="Firebase disabled - data is kept in process memory",
    )
    return InMemoryRealtimeStore(max_retries=settings.counter_transaction_retries)


def init_services(
    app: FastAPI,
    store: RealtimeStore,
    settings: Settings,
    redis_client: "Redis | None" = None,
) -> None:
    """Create every service on ``app.state`` for dependency injection."""
    app.state.store = store

    account_service = AccountService(store)
    app.state.account_service = account_service
    app.state.comment_service = CommentService(store)
    app.state.counter_service = CounterService(store)
    app.state.favourite_service = FavouriteService(store)
    app.state.invitation_service = InvitationService(store)
    app.state.chat_service = ChatService(store, account_service)
    app.state.report_service = ReportService(store)

    # One coordinator owns the last-observed cache for every watcher
    status_cache: StatusCache
    sink: NotificationSink
    if redis_client is not None:
        status_cache = RedisStatusCache(redis_client, settings.status_cache_key_prefix)
        sink = RedisNotificationSink(redis_client, settings.notification_channel_prefix)
    else:
        status_cache = MemoryStatusCache()
        sink = MemoryNotificationSink()

    coordinator = StatusChangeCoordinator(status_cache, NotificationDispatcher(sink))
    app.state.status_watcher = InvitationStatusWatcher(
        store, coordinator, max_watchers=settings.max_status_watchers
    )

    logger.info(
        "services_initialized",
        store=type(store).__name__,
        redis_enabled=redis_client is not None,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(
        "starting_application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    # Initialize Redis (non-critical - app works without it)
    redis_client = None
    if settings.redis_enabled:
        try:
            redis_client = await init_redis()
            logger.info("redis_initialized")
        except Exception as e:
            logger.warning(
                "redis_init_skipped",
                error=str(e),
                message="Running without Redis - status cache is process-local",
            )

    try:
        store = build_store(settings)
    except FirebaseNotConfiguredError as e:
        logger.error("store_init_failed", error=e.message)
        raise

    init_services(app, store, settings, redis_client)

    yield

    # Shutdown
    logger.info("shutting_down_application")
    app.state.status_watcher.stop()
    await shutdown_redis()
    shutdown_firebase()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    # Starlette debug mode would expose stack traces in responses
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="ArtHub engagement API: comments, counters, invitations, chats",
        debug=False,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    # Request context middleware (must be added first - outermost)
    app.add_middleware(
        RequestContextMiddleware,
        log_requests=settings.log_requests,
        exclude_paths=settings.log_exclude_paths,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        max_age=settings.cors_max_age,
    )

    def _get_request_id_safe(request: Request) -> str | None:
        """Get request_id from request state or context."""
        if hasattr(request.state, "request_id"):
            return request.state.request_id
        return get_request_id()

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> ORJSONResponse:
        """Handle HTTP exceptions with safe error messages."""
        request_id = _get_request_id_safe(request)

        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path,
            method=request.method,
        )

        return ORJSONResponse(
            status_code=exc.status_code,
            content={
                "error": True,
                "message": str(exc.detail)
                if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR
                or exc.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
                else "Internal server error",
                "status_code": exc.status_code,
                "request_id": request_id,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """Handle validation errors with safe error messages."""
        request_id = _get_request_id_safe(request)

        logger.warning(
            "validation_error",
            errors=exc.errors(),
            path=request.url.path,
            method=request.method,
        )

        return ORJSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": True,
                "message": "Validation error",
                "status_code": 422,
                "request_id": request_id,
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in err.get("loc", [])),
                        "message": err.get("msg", "Invalid value"),
                    }
                    for err in exc.errors()
                ],
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> ORJSONResponse:
        """Catch-all handler for unhandled exceptions.

        Details are logged; the response only carries the request id.
        """
        request_id = _get_request_id_safe(request)

        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            path=request.url.path,
            method=request.method,
        )

        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": True,
                "message": "An unexpected error occurred. Please try again later.",
                "status_code": 500,
                "request_id": request_id,
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(accounts_router)
    app.include_router(comments_router)
    app.include_router(counters_router)
    app.include_router(favourites_router)
    app.include_router(invitations_router)
    app.include_router(chats_router)
    app.include_router(reports_router)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": "ArtHub Engagement API",
            "version": settings.app_version,
            "docs": f"{request.url}docs",
        }

    return app


app = create_app()
