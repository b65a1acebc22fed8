"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

# Image URIs are stored joined by this character, so a URI may not contain it.
URI_SEPARATOR = ";"


class DisplayLevel(str, Enum):
    """Controls whether an article is eligible for the preview listing."""

    DEFAULT = "Default"
    FEATURED = "Featured"


class ArticleStatus(str, Enum):
    """Visibility state. Deleting an article moves it to HIDDEN."""

    VISIBLE = "Visible"
    HIDDEN = "Hidden"


@dataclass
class Article:
    """Core domain entity representing a published article."""

    title: str
    body: str
    preview_text: str
    preview_image_uri: str
    id: int | None = None
    image_uris: list[str] = field(default_factory=list)
    create_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_edit_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    display_level: DisplayLevel = DisplayLevel.DEFAULT
    status: ArticleStatus = ArticleStatus.VISIBLE
    language: str | None = None
    version: int = 1

    @property
    def is_previewable(self) -> bool:
        return self.display_level == DisplayLevel.DEFAULT and self.status == ArticleStatus.VISIBLE
