"""End-to-end tests for the articles/chapters HTTP API (SQLite + real Pillow)."""

import pytest
from httpx import AsyncClient

from tests.fakes import image_bytes

ARTICLES = "/api/v1/articles"


async def _create(client: AsyncClient, admin: dict[str, str], title: str, base: str = ARTICLES) -> str:
    response = await client.post(base, json={"title": title}, headers=admin)
    assert response.status_code == 201
    return response.json()["title_path"]


@pytest.mark.asyncio
async def test_create_requires_admin_token(client: AsyncClient):
    response = await client.post(ARTICLES, json={"title": "Nope"})
    assert response.status_code == 401

    response = await client.post(ARTICLES, json={"title": "Nope"}, headers={"X-Admin-Token": "wrong"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unpublished_entry_visible_to_admin_only(client: AsyncClient, admin: dict[str, str]):
    title_path = await _create(client, admin, "Hello World")
    assert title_path.endswith("/Hello-World/")

    assert (await client.get(f"{ARTICLES}/{title_path}")).status_code == 404

    response = await client.get(f"{ARTICLES}/{title_path}", headers=admin)
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Hello World"
    assert body["is_published"] is False
    assert body["images"] == []


@pytest.mark.asyncio
async def test_actions_edit_and_publish(client: AsyncClient, admin: dict[str, str]):
    title_path = await _create(client, admin, "Editable")
    actions = f"{ARTICLES}/{title_path}actions"

    assert (await client.put(actions, json={"action": "setSynopsis", "data": "Short"}, headers=admin)).status_code == 200
    assert (await client.put(actions, json={"action": "setContent", "data": "Body"}, headers=admin)).status_code == 200
    response = await client.put(actions, json={"action": "publish", "data": True}, headers=admin)
    assert response.status_code == 200

    public = await client.get(f"{ARTICLES}/{title_path}")
    assert public.status_code == 200
    assert public.json()["synopsis"] == "Short"
    assert public.json()["content"] == "Body"


@pytest.mark.asyncio
async def test_unknown_action_is_bad_request(client: AsyncClient, admin: dict[str, str]):
    title_path = await _create(client, admin, "Editable")

    response = await client.put(f"{ARTICLES}/{title_path}actions", json={"action": "explode"}, headers=admin)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid Action"}


@pytest.mark.asyncio
async def test_action_on_missing_entry_is_not_found(client: AsyncClient, admin: dict[str, str]):
    response = await client.put(
        f"{ARTICLES}/2020/01/01/Missing/actions", json={"action": "setContent", "data": "x"}, headers=admin
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_malformed_title_path_is_not_found(client: AsyncClient, admin: dict[str, str]):
    assert (await client.get(f"{ARTICLES}/not-a-title-path", headers=admin)).status_code == 404


@pytest.mark.asyncio
async def test_listing_pages_and_hides_drafts(client: AsyncClient, admin: dict[str, str]):
    for title in ("One", "Two", "Three"):
        await _create(client, admin, title)

    assert (await client.get(ARTICLES)).json() == []
    assert len((await client.get(ARTICLES, headers=admin)).json()) == 2
    assert len((await client.get(ARTICLES, params={"page": 1}, headers=admin)).json()) == 1
    assert (await client.get(ARTICLES, params={"page": -1})).status_code == 422


@pytest.mark.asyncio
async def test_kinds_are_independent(client: AsyncClient, admin: dict[str, str]):
    title_path = await _create(client, admin, "Chapter One", base="/api/v1/chapters")

    assert (await client.get(f"/api/v1/chapters/{title_path}", headers=admin)).status_code == 200
    assert (await client.get(f"{ARTICLES}/{title_path}", headers=admin)).status_code == 404


@pytest.mark.asyncio
async def test_thumbnail_upload_is_resized_and_served(client: AsyncClient, admin: dict[str, str]):
    title_path = await _create(client, admin, "Pictures")

    response = await client.put(
        f"{ARTICLES}/{title_path}images",
        files={"image": ("cover.png", image_bytes("PNG", (400, 300)), "image/png")},
        data={"type": "thumb"},
        headers=admin,
    )

    assert response.status_code == 200
    assert response.json() == {"kind": "thumb", "src": "thumb.cover.jpg", "w": 200, "h": 150}

    entry = (await client.get(f"{ARTICLES}/{title_path}", headers=admin)).json()
    assert entry["image"] == {"src": "thumb.cover.jpg", "alt": "thumb.cover.jpg", "w": 200, "h": 150}

    served = await client.get(f"/media/{title_path}thumb.cover.jpg")
    assert served.status_code == 200
    assert served.content[:2] == b"\xff\xd8"


@pytest.mark.asyncio
async def test_gallery_upload_then_delete_image(client: AsyncClient, admin: dict[str, str]):
    title_path = await _create(client, admin, "Gallery")

    response = await client.put(
        f"{ARTICLES}/{title_path}images",
        files={"image": ("shot.gif", image_bytes("GIF", (30, 20), mode="P"), "image/gif")},
        data={"name": "holiday snap"},
        headers=admin,
    )
    assert response.status_code == 200
    assert response.json()["src"] == "holiday-snap.jpg"

    response = await client.put(
        f"{ARTICLES}/{title_path}actions", json={"action": "deleteImage", "data": "holiday-snap.jpg"}, headers=admin
    )
    assert response.status_code == 200
    assert response.json()["images"] == []
    assert (await client.get(f"/media/{title_path}holiday-snap.jpg")).status_code == 404


@pytest.mark.asyncio
async def test_upload_rejects_unsupported_type(client: AsyncClient, admin: dict[str, str]):
    title_path = await _create(client, admin, "Docs")

    response = await client.put(
        f"{ARTICLES}/{title_path}images",
        files={"image": ("notes.txt", b"hello", "text/plain")},
        headers=admin,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_entry(client: AsyncClient, admin: dict[str, str]):
    title_path = await _create(client, admin, "Doomed")

    assert (await client.delete(f"{ARTICLES}/{title_path}")).status_code == 401
    assert (await client.delete(f"{ARTICLES}/{title_path}", headers=admin)).status_code == 204
    assert (await client.get(f"{ARTICLES}/{title_path}", headers=admin)).status_code == 404


@pytest.mark.asyncio
async def test_create_rejects_title_spanning_path_segments(client: AsyncClient, admin: dict[str, str]):
    for title in ("AC/DC", ".."):
        response = await client.post(ARTICLES, json={"title": title}, headers=admin)
        assert response.status_code == 400
        assert "error" in response.json()

    assert (await client.get(ARTICLES, headers=admin)).json() == []
