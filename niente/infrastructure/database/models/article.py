"""SQLAlchemy ORM model for the Article entity."""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from niente.domain.entities import ArticleStatus, DisplayLevel
from niente.infrastructure.database.base import Base
from niente.infrastructure.database.models.types import UriList, UtcDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ArticleModel(Base):
    """ORM model — maps to the 'articles' table."""

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    preview_text: Mapped[str] = mapped_column(Text, nullable=False)
    preview_image_uri: Mapped[str] = mapped_column(Text, nullable=False)
    image_uris: Mapped[list[str]] = mapped_column(UriList, nullable=False, server_default="")
    create_at: Mapped[datetime] = mapped_column(
        UtcDateTime,
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
    )
    last_edit_at: Mapped[datetime] = mapped_column(
        UtcDateTime,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
        nullable=False,
    )
    display_level: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=DisplayLevel.DEFAULT.value,
        server_default=DisplayLevel.DEFAULT.value,
    )
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=ArticleStatus.VISIBLE.value,
        server_default=ArticleStatus.VISIBLE.value,
    )
    language: Mapped[str | None] = mapped_column(String(16), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")

    def __repr__(self) -> str:
        return f"<ArticleModel(id={self.id}, title='{self.title}', status='{self.status}')>"
