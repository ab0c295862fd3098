"""Shared fixtures for API tests: a fresh app on a temporary SQLite DB and image root."""

import pytest
from httpx import ASGITransport, AsyncClient

from folio.config import Settings
from folio.main import create_app

ADMIN_TOKEN = "secret"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'folio.db'}",
        image_root=str(tmp_path / "images"),
        admin_token=ADMIN_TOKEN,
        page_count=2,
    )


@pytest.fixture
async def client(settings: Settings):
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as http:
            yield http


@pytest.fixture
def admin() -> dict[str, str]:
    return {"X-Admin-Token": ADMIN_TOKEN}
