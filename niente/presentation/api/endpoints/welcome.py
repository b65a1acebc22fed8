"""Welcome and health endpoints — no dependencies, always available."""

from fastapi import APIRouter

from niente.config import get_settings

router = APIRouter(tags=["Welcome"])


@router.get("/")
async def welcome() -> str:
    settings = get_settings()
    return f"Welcome to {settings.app_title}"


@router.get("/health")
async def health_check() -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
    }
