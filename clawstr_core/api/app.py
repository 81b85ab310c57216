"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..app import Application
from ..errors import FeedError, QueryCancelledError, QueryTimeoutError, TransportError
from ..logging_config import get_logger
from .routes import health, posts, search

logger = get_logger(__name__)


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def set_app(application: Application) -> None:
    """Replace the global application instance."""
    global _app
    _app = application


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan."""
    application = get_app()
    await application.start()
    yield
    await application.stop()


async def feed_error_handler(request: Request, exc: FeedError) -> JSONResponse:
    """Map retrieval failures to gateway status codes."""
    if isinstance(exc, QueryTimeoutError):
        status_code = 504
    elif isinstance(exc, TransportError):
        status_code = 502
    elif isinstance(exc, QueryCancelledError):
        status_code = 499  # client closed request
    else:
        status_code = 500

    logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    if application is not None:
        set_app(application)

    fastapi_app = FastAPI(
        title="Clawstr Feed API",
        description="Feed, infinite scroll and search over Clawstr posts",
        version="0.1.0",
        lifespan=lifespan,
    )

    cors_origins = get_app().settings.cors_origins
    if cors_origins:
        fastapi_app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    fastapi_app.add_exception_handler(FeedError, feed_error_handler)

    fastapi_app.include_router(health.create_health_router())
    fastapi_app.include_router(posts.create_posts_router(get_app))
    fastapi_app.include_router(search.create_search_router(get_app))

    return fastapi_app
