"""Concrete repository implementation backed by SQLAlchemy."""

import dataclasses
import logging

from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from niente.application.interfaces import ArticleRepository
from niente.domain.entities import Article, ArticleStatus, DisplayLevel
from niente.domain.exceptions import ConcurrencyConflictError, DuplicateEntityError
from niente.infrastructure.database.models import ArticleModel

logger = logging.getLogger(__name__)

# How a violation of the unique title index is reported: PostgreSQL names the
# index, SQLite names the column.
_DUPLICATE_TITLE_MARKERS = (
    "ix_articles_title",
    "UNIQUE constraint failed: articles.title",
)


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            body=model.body,
            preview_text=model.preview_text,
            preview_image_uri=model.preview_image_uri,
            image_uris=list(model.image_uris or []),
            create_at=model.create_at,
            last_edit_at=model.last_edit_at,
            display_level=DisplayLevel(model.display_level),
            status=ArticleStatus(model.status),
            language=model.language,
            version=model.version,
        )

    def _to_model(self, entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation)."""
        return ArticleModel(
            title=entity.title,
            body=entity.body,
            preview_text=entity.preview_text,
            preview_image_uri=entity.preview_image_uri,
            image_uris=list(entity.image_uris),
            create_at=entity.create_at,
            last_edit_at=entity.last_edit_at,
            display_level=entity.display_level.value,
            status=entity.status.value,
            language=entity.language,
            version=entity.version,
        )

    async def _raise_if_duplicate_title(self, exc: IntegrityError, title: str) -> None:
        """Translate a violation of the unique title index, re-raise anything else."""
        await self._session.rollback()
        if any(marker in str(exc.orig) for marker in _DUPLICATE_TITLE_MARKERS):
            raise DuplicateEntityError("Article", "title", title) from exc
        raise exc

    async def get_by_id(self, article_id: int) -> Article | None:
        result = await self._session.get(ArticleModel, article_id)
        return self._to_entity(result) if result else None

    async def exists(self, article_id: int) -> bool:
        stmt = select(exists().where(ArticleModel.id == article_id))
        return bool(await self._session.scalar(stmt))

    async def title_exists(self, title: str) -> bool:
        stmt = select(exists().where(ArticleModel.title == title))
        return bool(await self._session.scalar(stmt))

    async def get_all(self) -> list[Article]:
        stmt = select(ArticleModel).order_by(ArticleModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_previews(self, limit: int | None = None) -> list[Article]:
        stmt = (
            select(ArticleModel)
            .where(
                ArticleModel.display_level == DisplayLevel.DEFAULT.value,
                ArticleModel.status == ArticleStatus.VISIBLE.value,
            )
            .order_by(ArticleModel.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, article: Article) -> Article:
        model = self._to_model(article)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._raise_if_duplicate_title(exc, article.title)
        return self._to_entity(model)

    async def replace(self, article: Article) -> Article:
        # Guarded by the version column: a row edited or removed since it was
        # loaded matches nothing. Objects already in the session are kept in
        # sync by the statement itself.
        next_version = article.version + 1
        stmt = (
            update(ArticleModel)
            .where(ArticleModel.id == article.id, ArticleModel.version == article.version)
            .values(
                title=article.title,
                body=article.body,
                preview_text=article.preview_text,
                preview_image_uri=article.preview_image_uri,
                image_uris=list(article.image_uris),
                create_at=article.create_at,
                last_edit_at=article.last_edit_at,
                display_level=article.display_level.value,
                status=article.status.value,
                language=article.language,
                version=next_version,
            )
            .execution_options(synchronize_session="evaluate")
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as exc:
            await self._raise_if_duplicate_title(exc, article.title)

        if result.rowcount != 1:
            logger.debug(
                "Replace of article %s at version %s matched %s row(s)",
                article.id, article.version, result.rowcount,
            )
            raise ConcurrencyConflictError("Article", article.id)

        return dataclasses.replace(article, version=next_version)
