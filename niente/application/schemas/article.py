"""Pydantic DTOs (Data Transfer Objects) for the Article feature.

All schemas speak camelCase on the wire (``previewText``, ``lastEditAt``, ...)
and also accept snake_case field names on input.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from niente.domain.entities import URI_SEPARATOR, ArticleStatus, DisplayLevel

TITLE_MAX_LENGTH = 50

_WIRE_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


def _check_title_length(title: str) -> str:
    """Titles are stored trimmed, so surrounding whitespace does not count."""
    if len(title.strip()) > TITLE_MAX_LENGTH:
        raise ValueError(f"title must be at most {TITLE_MAX_LENGTH} characters")
    return title


class ArticleCreate(BaseModel):
    """Schema for creating a new article."""

    title: str = Field(..., min_length=1, examples=["Hello"])
    body: str = Field(..., min_length=1, examples=["World"])
    preview_text: str = Field(..., min_length=1, examples=["Hi"])
    preview_image_uri: str = Field(..., min_length=1, examples=["http://x/y.png"])
    image_uris: list[str] = Field(default_factory=list)

    model_config = _WIRE_CONFIG

    @field_validator("title", "body", "preview_text", "preview_image_uri")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("title")
    @classmethod
    def _title_fits(cls, value: str) -> str:
        return _check_title_length(value)

    @field_validator("image_uris")
    @classmethod
    def _valid_uris(cls, value: list[str]) -> list[str]:
        cleaned = []
        for uri in value:
            uri = uri.strip()
            if not uri:
                raise ValueError("image URIs must not be blank")
            if URI_SEPARATOR in uri:
                raise ValueError(f"image URIs must not contain '{URI_SEPARATOR}'")
            cleaned.append(uri)
        return cleaned


class ArticleUpdate(BaseModel):
    """Schema for editing an article — every field optional.

    A missing or blank field keeps the stored value.
    """

    title: str | None = None
    body: str | None = None
    preview_text: str | None = None
    preview_image_uri: str | None = None

    model_config = _WIRE_CONFIG

    @field_validator("title")
    @classmethod
    def _title_fits(cls, value: str | None) -> str | None:
        return None if value is None else _check_title_length(value)


class ArticleResponse(BaseModel):
    """Full article as stored, returned by the authenticated endpoints."""

    id: int
    title: str
    body: str
    preview_text: str
    preview_image_uri: str
    image_uris: list[str]
    create_at: datetime
    last_edit_at: datetime
    display_level: DisplayLevel
    status: ArticleStatus
    language: str | None = None

    model_config = _WIRE_CONFIG


class ArticleView(BaseModel):
    """Public single-article view."""

    id: int
    title: str
    body: str
    preview_text: str
    preview_image_uri: str
    create_at: datetime
    last_edit_at: datetime
    image_uris: list[str] = Field(default_factory=list)

    model_config = _WIRE_CONFIG


class ArticlePreview(BaseModel):
    """Reduced article shape for the preview listing."""

    id: int
    title: str
    create_at: datetime
    preview_image_uri: str
    preview_text: str

    model_config = _WIRE_CONFIG
