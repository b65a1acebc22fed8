"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from niente.application.services import ArticleService
from niente.domain.entities import Caller
from niente.domain.exceptions import AuthenticationError
from niente.infrastructure.auth import decode_access_token
from niente.infrastructure.database.session import get_db_session
from niente.infrastructure.database.repositories import SQLAlchemyArticleRepository


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repository wired up."""
    repository = SQLAlchemyArticleRepository(session)
    yield ArticleService(repository)


def _client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    scheme, _, token = raw.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token.strip()


async def get_caller(request: Request) -> Caller:
    """Anonymous caller context for the public endpoints."""
    return Caller(address=_client_address(request))


async def get_authenticated_caller(
    request: Request,
    authorization: str | None = Header(default=None),
) -> Caller:
    """Caller context for guarded endpoints; rejects with 401 before the handler runs."""
    token = _extract_bearer_token(authorization)
    try:
        payload = decode_access_token(token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Caller(address=_client_address(request), principal=str(payload["sub"]))
