"""Health check endpoints for the registry and load balancers"""
from fastapi import APIRouter
from announce.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "UP", "service": settings.SERVICE_NAME}


@router.get("/info")
async def info():
    """Service info endpoint"""
    from announce import __version__
    return {
        "service": settings.SERVICE_NAME,
        "version": __version__,
        "description": "Discovery announce service",
        "discovery": {
            "enabled": settings.ANNOUNCE_ENABLED,
            "hosts": settings.DISCOVERY_HOSTS,
            "port": settings.DISCOVERY_PORT,
            "environment": settings.ENVIRONMENT,
            "pool": settings.POOL,
        }
    }
