import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from dotenv import load_dotenv


# Load .env FIRST before any other imports that might need env vars
PROJECT_DIR = Path(__file__).parent.parent
load_dotenv(PROJECT_DIR / ".env")

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import DatabaseError, IntegrityError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from thinkscope.auth.router import router as auth_router
from thinkscope.config.logging import setup_logging
from thinkscope.config.settings import get_settings
from thinkscope.database.base import create_all_tables
from thinkscope.database.engine import engine
from thinkscope.exceptions import ConflictError, ResourceNotFoundError, ValidationError
from thinkscope.middleware.error_handlers import (
    handle_conflict_errors,
    handle_database_errors,
    handle_http_exceptions,
    handle_not_found_errors,
    handle_rate_limit_errors,
    handle_unexpected_errors,
    handle_validation_errors,
)
from thinkscope.middleware.security import SimpleSecurityMiddleware, limiter
from thinkscope.problems.router import router as problems_router
from thinkscope.progress.router import router as progress_router
from thinkscope.topics.router import router as topics_router
from thinkscope.users.router import router as users_router


setup_logging()
logger = logging.getLogger(__name__)


def _register_routers(app: FastAPI) -> None:
    """Register all application routers."""
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(topics_router)
    app.include_router(problems_router)
    app.include_router(progress_router)


async def _startup_database() -> None:
    """Create tables with retry logic."""
    max_retries = 5
    retry_delay = 1  # seconds

    for attempt in range(max_retries):
        try:
            await create_all_tables()
            logger.info("Database initialization completed successfully")
            break

        except OperationalError:
            if attempt == max_retries - 1:
                logger.exception("Startup failed after %d attempts", max_retries)
                raise

            logger.warning(
                "Database connection attempt %d failed, retrying in %ds...",
                attempt + 1,
                retry_delay,
            )
            await asyncio.sleep(retry_delay)
            retry_delay *= 2


async def _shutdown_cleanup() -> None:
    """Close database connections on shutdown."""
    logger.info("Starting graceful shutdown...")
    await engine.dispose()
    logger.info("Shutdown complete")


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    await _startup_database()

    yield

    await _shutdown_cleanup()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    try:
        settings = get_settings()
    except Exception:
        logger.exception("Failed to load settings")
        raise

    app = FastAPI(
        title="Thinkscope API",
        description="API for tracking progress through coding practice problems",
        version="0.1.0",
        debug=settings.DEBUG,
        lifespan=lifespan if settings.ENVIRONMENT != "test" else None,
    )

    # Add security middleware (headers only)
    app.add_middleware(SimpleSecurityMiddleware)

    # Add rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, handle_rate_limit_errors)

    # Validation errors (400)
    app.add_exception_handler(RequestValidationError, handle_validation_errors)
    app.add_exception_handler(ValidationError, handle_validation_errors)

    # Missing resources (404) and write collisions (409)
    app.add_exception_handler(ResourceNotFoundError, handle_not_found_errors)
    app.add_exception_handler(ConflictError, handle_conflict_errors)

    # Auth failures and unknown routes
    app.add_exception_handler(StarletteHTTPException, handle_http_exceptions)

    # Database errors
    app.add_exception_handler(IntegrityError, handle_database_errors)
    app.add_exception_handler(OperationalError, handle_database_errors)
    app.add_exception_handler(DatabaseError, handle_database_errors)

    app.add_exception_handler(Exception, handle_unexpected_errors)

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Check application health status."""
        return JSONResponse(
            {
                "success": True,
                "message": "Thinkscope API is running",
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )

    _register_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
