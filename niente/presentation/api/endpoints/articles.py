"""Article CRUD endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from niente.application.schemas import ArticleCreate, ArticleResponse, ArticleUpdate, ArticleView
from niente.application.services import ArticleService
from niente.application.services.article_service import DUPLICATE_TITLE_MESSAGE
from niente.domain.entities import Caller
from niente.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from niente.infrastructure.dependencies import (
    get_article_service,
    get_authenticated_caller,
    get_caller,
)

router = APIRouter(prefix="/Articles", tags=["Articles"])


@router.get("", response_model=list[ArticleResponse])
async def list_articles(
    caller: Caller = Depends(get_authenticated_caller),
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleResponse]:
    """Retrieve every stored article, hidden ones included."""
    articles = await service.list_articles(caller)
    return [ArticleResponse.model_validate(a) for a in articles]


@router.get("/{article_id}", response_model=ArticleView)
async def get_article(
    article_id: int,
    caller: Caller = Depends(get_caller),
    service: ArticleService = Depends(get_article_service),
) -> ArticleView:
    """Retrieve a single article by ID."""
    try:
        article = await service.get_article(article_id, caller)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleView.model_validate(article)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    request: Request,
    response: Response,
    caller: Caller = Depends(get_authenticated_caller),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create a new article."""
    try:
        article = await service.create_article(data, caller)
    except DuplicateEntityError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_TITLE_MESSAGE)
    response.headers["Location"] = str(request.url_for("get_article", article_id=article.id))
    return ArticleResponse.model_validate(article)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int,
    data: ArticleUpdate,
    caller: Caller = Depends(get_authenticated_caller),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Edit an article; blank fields keep their stored values."""
    try:
        article = await service.update_article(article_id, data, caller)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEntityError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_TITLE_MESSAGE)
    return ArticleResponse.model_validate(article)


@router.delete("/{article_id}", response_model=ArticleResponse)
async def delete_article(
    article_id: int,
    caller: Caller = Depends(get_authenticated_caller),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Hide an article. The row is kept."""
    try:
        article = await service.delete_article(article_id, caller)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article)
