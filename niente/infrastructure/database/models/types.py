"""Custom column types."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Text
from sqlalchemy.types import TypeDecorator

from niente.domain.entities import URI_SEPARATOR


class UriList(TypeDecorator):
    """Ordered list of URI strings stored as one ``;``-joined text column.

    An empty or missing list is stored as ``""``; empty segments are dropped
    when reading back.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect) -> str:
        if not value:
            return ""
        return URI_SEPARATOR.join(str(uri) for uri in value)

    def process_result_value(self, value: str | None, dialect) -> list[str]:
        if not value:
            return []
        return [segment for segment in value.split(URI_SEPARATOR) if segment]


class UtcDateTime(TypeDecorator):
    """Timestamp that is always written and read back as aware UTC.

    SQLite keeps no offset, so naive values coming out of it are UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
