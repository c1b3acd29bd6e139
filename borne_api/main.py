from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from borne_api.core.config import settings
from borne_api.core.errors import InvalidArgumentError
from borne_api.core.init_db import init_db
from borne_api.core.logging import setup_logging
from borne_api.routers.health import router as health_router
from borne_api.routers.places import router as places_router
from borne_api.routers.reservations import router as reservations_router
from borne_api.routers.stations import router as stations_router
from borne_api.routers.tariffs import router as tariffs_router
from borne_api.routers.users import router as users_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    On startup the database schema is created (development/MVP setup).
    Nothing needs cleaning up on shutdown.
    """
    await init_db()
    yield


async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    """Report missing or out-of-range search arguments as 400 Bad Request."""
    logger.warning("invalid_argument", path=request.url.path, detail=str(exc))
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    This factory function:
    - Configures logging.
    - Initializes the FastAPI app with metadata and documentation endpoints.
    - Registers the exception handlers and all API routers.

    Returns:
        Configured FastAPI application instance.
    """
    setup_logging()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="Charging station API: stations, places, users, reservations, tariffs and station search",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)

    # Register API routers
    app.include_router(health_router)
    app.include_router(stations_router)
    app.include_router(tariffs_router)
    app.include_router(reservations_router)
    app.include_router(places_router)
    app.include_router(users_router)

    return app


# Application entry point
app = create_app()
