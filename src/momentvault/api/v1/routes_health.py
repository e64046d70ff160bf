"""Health check endpoint for Moment Vault."""

from fastapi import APIRouter

from momentvault.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Does not contact the storage networks so it stays fast during startup.
    """
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
    }
