"""Public article preview listing."""

from fastapi import APIRouter, Depends, Query

from niente.application.schemas import ArticlePreview
from niente.application.services import ArticleService
from niente.config import get_settings
from niente.domain.entities import Caller
from niente.infrastructure.dependencies import get_article_service, get_caller

router = APIRouter(tags=["Articles"])


@router.get("/articlepreviews", response_model=list[ArticlePreview])
async def list_previews(
    limit: int | None = Query(None, description="Maximum number of previews; below 1 returns all"),
    caller: Caller = Depends(get_caller),
    service: ArticleService = Depends(get_article_service),
) -> list[ArticlePreview]:
    """Visible, default-level articles in ascending ID order."""
    if limit is None:
        limit = get_settings().preview_default_limit
    articles = await service.list_previews(caller, limit=limit)
    return [ArticlePreview.model_validate(a) for a in articles]
