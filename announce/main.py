"""
Discovery Announce Service - FastAPI Application

Keeps this node announced at the discovery registry for as long as the
process runs, and withdraws the announcement on shutdown.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging

from announce import __version__
from announce.config import settings, initialize_settings
from announce.services.announcer import start_announcing, stop_announcing
from announce.api.routes import health, announce as announce_routes

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
    1. Fetch config from Config Server
    2. Start announcing to the discovery registry

    Shutdown:
    - Stop announcing and withdraw the announcement
    """
    logger.info("=" * 60)
    logger.info(f"Starting {settings.SERVICE_NAME}")
    logger.info("=" * 60)

    # 1. Initialize settings from Config Server
    await initialize_settings()

    # 2. Announce to discovery
    service = await start_announcing(settings)
    announce_routes.set_announce_service(service)

    logger.info(f"Service ready on port {settings.SERVICE_PORT}")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await stop_announcing(service)
    announce_routes.set_announce_service(None)
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Discovery Announce Service",
    description="Announces this node to a discovery registry with ordered failover.",
    version=__version__,
    lifespan=lifespan,
)

API_PREFIX = "/api/announce"

app.include_router(health.router, tags=["Health"])
app.include_router(announce_routes.router, prefix=API_PREFIX, tags=["Announce"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": __version__,
        "endpoints": {
            "health": "/health",
            "info": "/info",
            "status": f"{API_PREFIX}/status",
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "announce.main:app",
        host="0.0.0.0",
        port=settings.SERVICE_PORT,
    )
