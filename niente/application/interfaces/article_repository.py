"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from niente.domain.entities import Article


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, article_id: int) -> Article | None:
        """Retrieve a single article by its ID."""
        ...

    @abstractmethod
    async def exists(self, article_id: int) -> bool:
        """Return True if a row with this ID is stored."""
        ...

    @abstractmethod
    async def title_exists(self, title: str) -> bool:
        """Return True if any stored article has exactly this title."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Article]:
        """Retrieve every stored article, ordered by ID."""
        ...

    @abstractmethod
    async def get_previews(self, limit: int | None = None) -> list[Article]:
        """Retrieve visible, default-level articles ordered by ID.

        ``limit`` of None means no limit.
        """
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and return it with the generated ID.

        Raises DuplicateEntityError if the title is already taken.
        """
        ...

    @abstractmethod
    async def replace(self, article: Article) -> Article:
        """Overwrite the stored row with every field of ``article``.

        Raises ConcurrencyConflictError if the row is missing or its version
        no longer matches, DuplicateEntityError on a title collision.
        """
        ...
