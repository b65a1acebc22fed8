"""End-to-end tests for the article endpoints over an in-memory database."""

from collections.abc import AsyncGenerator
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from niente.application.services import ArticleService
from niente.domain.entities import Article
from niente.domain.exceptions import ConcurrencyConflictError
from niente.infrastructure.database.repositories import SQLAlchemyArticleRepository
from niente.infrastructure.dependencies import get_article_service
from niente.main import create_app


def _payload(title: str = "Hello", **extra) -> dict:
    payload = {
        "title": title,
        "body": "World",
        "previewText": "Hi",
        "previewImageUri": "http://x/y.png",
    }
    payload.update(extra)
    return payload


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def _create(client: AsyncClient, headers: dict, title: str = "Hello", **extra) -> dict:
    response = await client.post("/api/Articles", json=_payload(title, **extra), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_post_creates_article(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/Articles",
        json=_payload(" Hello ", body=" World", previewText="Hi ", previewImageUri=" http://x/y.png "),
        headers=auth_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Hello"
    assert data["body"] == "World"
    assert data["previewText"] == "Hi"
    assert data["previewImageUri"] == "http://x/y.png"
    assert isinstance(data["id"], int)
    assert data["createAt"] == data["lastEditAt"]
    assert data["status"] == "Visible"
    assert data["displayLevel"] == "Default"
    assert response.headers["location"].endswith(f"/api/Articles/{data['id']}")


@pytest.mark.asyncio
async def test_post_duplicate_title_is_bad_request(client: AsyncClient, auth_headers: dict):
    await _create(client, auth_headers, "Hello")
    response = await client.post("/api/Articles", json=_payload("  Hello  "), headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "An article with the exact same title already exists"


@pytest.mark.asyncio
async def test_post_invalid_body_is_bad_request(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/Articles", json={"title": "Only a title"}, headers=auth_headers)

    assert response.status_code == 400
    fields = {err["loc"][-1] for err in response.json()["detail"]}
    assert "body" in fields


@pytest.mark.asyncio
async def test_guarded_routes_require_a_token(client: AsyncClient):
    assert (await client.get("/api/Articles")).status_code == 401
    assert (await client.post("/api/Articles", json=_payload())).status_code == 401
    assert (await client.put("/api/Articles/1", json={})).status_code == 401
    assert (await client.delete("/api/Articles/1")).status_code == 401

    bad = {"Authorization": "Bearer not-a-jwt"}
    assert (await client.get("/api/Articles", headers=bad)).status_code == 401


@pytest.mark.asyncio
async def test_get_returns_view_without_auth(client: AsyncClient, auth_headers: dict):
    created = await _create(client, auth_headers, imageUris=["http://a/1", "http://a/2"])

    response = await client.get(f"/api/Articles/{created['id']}")

    assert response.status_code == 200
    view = response.json()
    assert view["id"] == created["id"]
    assert view["title"] == "Hello"
    assert view["imageUris"] == ["http://a/1", "http://a/2"]
    assert "status" not in view


@pytest.mark.asyncio
async def test_get_unknown_id_is_not_found(client: AsyncClient):
    assert (await client.get("/api/Articles/404")).status_code == 404


@pytest.mark.asyncio
async def test_get_malformed_id_is_bad_request(client: AsyncClient):
    assert (await client.get("/api/Articles/abc")).status_code == 400


@pytest.mark.asyncio
async def test_list_returns_every_article(client: AsyncClient, auth_headers: dict):
    first = await _create(client, auth_headers, "One")
    await _create(client, auth_headers, "Two")
    await client.delete(f"/api/Articles/{first['id']}", headers=auth_headers)

    response = await client.get("/api/Articles", headers=auth_headers)

    assert response.status_code == 200
    assert [(a["title"], a["status"]) for a in response.json()] == [("One", "Hidden"), ("Two", "Visible")]


@pytest.mark.asyncio
async def test_put_overwrites_only_non_blank_fields(client: AsyncClient, auth_headers: dict):
    created = await _create(client, auth_headers)

    response = await client.put(
        f"/api/Articles/{created['id']}",
        json={"title": " Renamed ", "body": "   ", "previewText": ""},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Renamed"
    assert data["body"] == "World"
    assert data["previewText"] == "Hi"
    assert data["previewImageUri"] == "http://x/y.png"


@pytest.mark.asyncio
async def test_put_with_blank_body_only_bumps_last_edit_at(client: AsyncClient, auth_headers: dict):
    created = await _create(client, auth_headers, imageUris=["http://a/1"])

    response = await client.put(f"/api/Articles/{created['id']}", json={}, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    for key in ("title", "body", "previewText", "previewImageUri", "imageUris", "status", "displayLevel"):
        assert data[key] == created[key]
    assert data["createAt"] == created["createAt"]
    assert _ts(data["lastEditAt"]).tzinfo is not None
    assert _ts(data["lastEditAt"]) > _ts(created["lastEditAt"])


@pytest.mark.asyncio
async def test_put_unknown_id_is_not_found(client: AsyncClient, auth_headers: dict):
    response = await client.put("/api/Articles/999", json={"title": "x"}, headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_put_title_over_fifty_characters_is_bad_request(client: AsyncClient, auth_headers: dict):
    created = await _create(client, auth_headers)
    response = await client.put(
        f"/api/Articles/{created['id']}", json={"title": "x" * 51}, headers=auth_headers
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_put_onto_existing_title_is_bad_request(client: AsyncClient, auth_headers: dict):
    await _create(client, auth_headers, "Taken")
    other = await _create(client, auth_headers, "Free")

    response = await client.put(f"/api/Articles/{other['id']}", json={"title": "Taken"}, headers=auth_headers)

    assert response.status_code == 400
    assert (await client.get(f"/api/Articles/{other['id']}")).json()["title"] == "Free"


@pytest.mark.asyncio
async def test_delete_hides_but_keeps_the_row(client: AsyncClient, auth_headers: dict):
    created = await _create(client, auth_headers)

    response = await client.delete(f"/api/Articles/{created['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "Hidden"
    assert (await client.get(f"/api/Articles/{created['id']}")).status_code == 200
    assert (await client.get("/api/articlepreviews")).json() == []


@pytest.mark.asyncio
async def test_delete_unknown_id_is_not_found(client: AsyncClient, auth_headers: dict):
    assert (await client.delete("/api/Articles/31", headers=auth_headers)).status_code == 404


@pytest.mark.asyncio
async def test_previews_default_to_five_in_id_order(client: AsyncClient, auth_headers: dict):
    for i in range(7):
        await _create(client, auth_headers, f"Article {i}")

    response = await client.get("/api/articlepreviews")

    assert response.status_code == 200
    previews = response.json()
    assert [p["title"] for p in previews] == [f"Article {i}" for i in range(5)]
    assert set(previews[0]) == {"id", "title", "createAt", "previewImageUri", "previewText"}


@pytest.mark.asyncio
async def test_previews_limit_zero_returns_all(client: AsyncClient, auth_headers: dict):
    for i in range(7):
        await _create(client, auth_headers, f"Article {i}")

    response = await client.get("/api/articlepreviews", params={"limit": 0})

    assert response.status_code == 200
    assert len(response.json()) == 7


@pytest.mark.asyncio
async def test_previews_skip_hidden_articles(client: AsyncClient, auth_headers: dict):
    ids = [(await _create(client, auth_headers, f"Article {i}"))["id"] for i in range(3)]
    await client.delete(f"/api/Articles/{ids[1]}", headers=auth_headers)

    response = await client.get("/api/articlepreviews", params={"limit": 2})

    assert [p["id"] for p in response.json()] == [ids[0], ids[2]]


@pytest.mark.asyncio
async def test_previews_negative_limit_returns_all(client: AsyncClient, auth_headers: dict):
    for i in range(6):
        await _create(client, auth_headers, f"Article {i}")

    response = await client.get("/api/articlepreviews", params={"limit": -1})

    assert response.status_code == 200
    assert len(response.json()) == 6


@pytest.mark.asyncio
async def test_timestamps_are_identical_across_endpoints(client: AsyncClient, auth_headers: dict):
    created = await _create(client, auth_headers)

    fetched = (await client.get(f"/api/Articles/{created['id']}")).json()
    listed = (await client.get("/api/Articles", headers=auth_headers)).json()[0]
    preview = (await client.get("/api/articlepreviews")).json()[0]

    assert fetched["createAt"] == created["createAt"]
    assert fetched["lastEditAt"] == created["lastEditAt"]
    assert listed["createAt"] == created["createAt"]
    assert preview["createAt"] == created["createAt"]
    assert _ts(created["createAt"]).tzinfo is not None


class _AlwaysContendedRepository(SQLAlchemyArticleRepository):
    """Reports every save as a concurrent modification of a row that still exists."""

    async def replace(self, article: Article) -> Article:
        raise ConcurrencyConflictError("Article", article.id)


@pytest_asyncio.fixture
async def contended_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    app = create_app()

    async def _service() -> AsyncGenerator[ArticleService, None]:
        async with session_factory() as session:
            yield ArticleService(_AlwaysContendedRepository(session))
            await session.commit()

    app.dependency_overrides[get_article_service] = _service
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest.mark.asyncio
async def test_unresolved_conflict_is_a_server_error(contended_client: AsyncClient, auth_headers: dict):
    created = await _create(contended_client, auth_headers)

    put = await contended_client.put(f"/api/Articles/{created['id']}", json={"title": "x"}, headers=auth_headers)
    delete = await contended_client.delete(f"/api/Articles/{created['id']}", headers=auth_headers)

    assert put.status_code == 500
    assert delete.status_code == 500
    assert (await contended_client.get(f"/api/Articles/{created['id']}")).json()["title"] == "Hello"


@pytest.mark.asyncio
async def test_post_padded_fifty_character_title_is_stored_trimmed(client: AsyncClient, auth_headers: dict):
    created = await _create(client, auth_headers, "  " + "t" * 50 + "  ")
    assert created["title"] == "t" * 50
