"""
Main server entrypoint.
Initializes the FastAPI application and includes the API routers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import PlainTextResponse

from minion_tracker import __version__
from minion_tracker.api import minions
from minion_tracker.core.config import settings
from minion_tracker.core.database import get_engine, init_schema, reset_engine
from minion_tracker.core.logging_config import setup_logging, get_logger
from minion_tracker.core.metrics import init_metrics, get_metrics, get_metrics_content_type, metrics
from minion_tracker.services.errors import MinionNotFoundError, MinionPersistenceError

# Initialize logging and metrics as early as possible
setup_logging()
init_metrics()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(
        "Minion tracker starting up",
        extra={"version": __version__, "environment": settings.ENVIRONMENT},
    )
    await init_schema(get_engine())

    yield
    # Shutdown
    await reset_engine()
    logger.info("Minion tracker shutting down")


app_description = """
Tracks minion combat stat blocks during tabletop sessions.

Pages are built from HTML fragments swapped in by htmx:
- **Minions**: create, edit, view and soft-delete stat blocks.
- **Hit points**: heal and damage, always clamped between 0 and max HP.
"""

app = FastAPI(
    title="Minion Tracker", description=app_description, version=__version__, lifespan=lifespan
)


@app.exception_handler(MinionNotFoundError)
async def handle_not_found(request: Request, exc: MinionNotFoundError) -> PlainTextResponse:
    logger.warning(
        "Minion not found",
        extra={"minion_id": exc.minion_id, "path": request.url.path},
    )
    metrics.track_http_error(status.HTTP_404_NOT_FOUND, "not_found")
    return PlainTextResponse("not found", status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(MinionPersistenceError)
async def handle_persistence_error(request: Request, exc: MinionPersistenceError) -> PlainTextResponse:
    logger.error(
        "Database operation failed",
        extra={"operation": exc.operation, "path": request.url.path},
        exc_info=exc,
    )
    metrics.track_http_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "persistence")
    return PlainTextResponse(
        str(exc.original), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


@app.get("/metrics", summary="Prometheus metrics endpoint", tags=["Monitoring"])
def get_metrics_endpoint():
    """
    Prometheus metrics endpoint.
    Returns tracker metrics in Prometheus format.
    """
    logger.debug("Metrics endpoint accessed")
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


@app.get("/health", summary="Health check endpoint", tags=["Status"])
def read_health():
    """Liveness check."""
    logger.debug("Health check endpoint accessed")
    return {"status": "ok"}


@app.get("/version", summary="Get server version", tags=["Status"])
def read_version():
    """Returns the current version of the server application."""
    logger.debug("Version endpoint accessed")
    return {"version": __version__}


# Include API routers
app.include_router(minions.router, tags=["Minions"])
