"""
tableplan - FastAPI application for the reservation timeline
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from tableplan import __version__
from tableplan.config import settings
from tableplan.api import analytics, batch, floor, reservations, suggestions
from tableplan.store import get_store


def configure_logging() -> None:
    """Configure structured logging"""
    logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    store = get_store()
    logger.info(
        "Starting tableplan API",
        version=__version__,
        restaurant=store.restaurant.name,
        timezone=store.restaurant.timezone,
        tables=len(store.tables),
    )
    yield
    logger.info("Shutting down tableplan API")


# Create FastAPI application
app = FastAPI(
    title="tableplan",
    description="Table reservation timeline with conflict-free scheduling",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": __version__}


# Include API routers
app.include_router(floor.router, prefix="/floor", tags=["Floor"])
app.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
app.include_router(suggestions.router, prefix="/suggestions", tags=["Suggestions"])
app.include_router(batch.router, prefix="/batch", tags=["Batch"])
app.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "tableplan.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
