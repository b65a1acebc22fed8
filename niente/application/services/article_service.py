"""Application service (use case) for Article operations."""

import logging
from dataclasses import replace
from datetime import datetime, timezone

from niente.application.interfaces import ArticleRepository
from niente.application.schemas import ArticleCreate, ArticleUpdate
from niente.domain.entities import Article, ArticleStatus, Caller
from niente.domain.exceptions import (
    ConcurrencyConflictError,
    DuplicateEntityError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)

DUPLICATE_TITLE_MESSAGE = "An article with the exact same title already exists"


def _pick(incoming: str | None, stored: str) -> str:
    """Keep the stored value unless the incoming one has content."""
    if incoming is None or not incoming.strip():
        return stored.strip()
    return incoming.strip()


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI).

    Every operation takes the ``Caller`` explicitly so that request context
    is never read from ambient state.
    """

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    async def list_articles(self, caller: Caller) -> list[Article]:
        articles = await self._repository.get_all()
        logger.info(
            "GET all articles from %s (%s): %d article(s) sent",
            caller.address, caller.principal, len(articles),
        )
        return articles

    async def get_article(self, article_id: int, caller: Caller) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None:
            logger.info("GET article id=%s from %s: not found", article_id, caller.address)
            raise EntityNotFoundError("Article", article_id)
        logger.info("GET article id=%s from %s: found", article_id, caller.address)
        return article

    async def list_previews(self, caller: Caller, limit: int = 5) -> list[Article]:
        """Visible, default-level articles by ascending id; ``limit < 1`` returns all."""
        previews = await self._repository.get_previews(limit if limit >= 1 else None)
        logger.info(
            "GET %d article preview(s) from %s: %d sent",
            limit, caller.address, len(previews),
        )
        return previews

    async def create_article(self, data: ArticleCreate, caller: Caller) -> Article:
        title = data.title.strip()
        if await self._repository.title_exists(title):
            logger.warning(
                "POST article title=%r from %s (%s): %s",
                title, caller.address, caller.principal, DUPLICATE_TITLE_MESSAGE,
            )
            raise DuplicateEntityError("Article", "title", title)

        now = datetime.now(timezone.utc)
        article = Article(
            title=title,
            body=data.body.strip(),
            preview_text=data.preview_text.strip(),
            preview_image_uri=data.preview_image_uri.strip(),
            image_uris=list(data.image_uris),
            create_at=now,
            last_edit_at=now,
        )
        try:
            created = await self._repository.create(article)
        except DuplicateEntityError:
            # Lost the race against a concurrent create with the same title.
            logger.warning(
                "POST article title=%r from %s (%s): %s",
                title, caller.address, caller.principal, DUPLICATE_TITLE_MESSAGE,
            )
            raise

        logger.info(
            "POST article title=%r from %s (%s): saved with id=%s",
            title, caller.address, caller.principal, created.id,
        )
        return created

    async def update_article(self, article_id: int, data: ArticleUpdate, caller: Caller) -> Article:
        target = await self._repository.get_by_id(article_id)
        if target is None:
            logger.info(
                "PUT article id=%s from %s (%s): not found",
                article_id, caller.address, caller.principal,
            )
            raise EntityNotFoundError("Article", article_id)

        entry = replace(
            target,
            title=_pick(data.title, target.title),
            body=_pick(data.body, target.body),
            preview_text=_pick(data.preview_text, target.preview_text),
            preview_image_uri=_pick(data.preview_image_uri, target.preview_image_uri),
            image_uris=list(target.image_uris),
            last_edit_at=datetime.now(timezone.utc),
        )
        updated = await self._save(entry, "PUT", caller)
        logger.info(
            "PUT article id=%s from %s (%s): updated",
            article_id, caller.address, caller.principal,
        )
        return updated

    async def delete_article(self, article_id: int, caller: Caller) -> Article:
        """Soft delete: the row is kept with status Hidden."""
        article = await self._repository.get_by_id(article_id)
        if article is None:
            logger.info(
                "DELETE article id=%s from %s (%s): not found",
                article_id, caller.address, caller.principal,
            )
            raise EntityNotFoundError("Article", article_id)

        hidden = await self._save(replace(article, status=ArticleStatus.HIDDEN), "DELETE", caller)
        logger.info(
            "DELETE article id=%s from %s (%s): hidden",
            article_id, caller.address, caller.principal,
        )
        return hidden

    async def _save(self, article: Article, operation: str, caller: Caller) -> Article:
        """Full-row replace with conflict resolution.

        A conflict on a row that no longer exists is reported as not found;
        any other conflict propagates unchanged.
        """
        try:
            return await self._repository.replace(article)
        except ConcurrencyConflictError:
            if not await self._repository.exists(article.id):
                logger.warning(
                    "%s article id=%s from %s: the article does not exist",
                    operation, article.id, caller.address,
                )
                raise EntityNotFoundError("Article", article.id)
            logger.warning(
                "%s article id=%s from %s: concurrent modification, giving up",
                operation, article.id, caller.address,
            )
            raise
        except DuplicateEntityError:
            logger.warning(
                "%s article id=%s from %s: %s",
                operation, article.id, caller.address, DUPLICATE_TITLE_MESSAGE,
            )
            raise
