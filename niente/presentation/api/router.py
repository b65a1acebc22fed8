"""Top-level API router — aggregates all endpoint routers under /api."""

from fastapi import APIRouter

from niente.presentation.api.endpoints.articles import router as articles_router
from niente.presentation.api.endpoints.previews import router as previews_router
from niente.presentation.api.endpoints.welcome import router as welcome_router

router = APIRouter(prefix="/api")
router.include_router(welcome_router)
router.include_router(articles_router)
router.include_router(previews_router)
