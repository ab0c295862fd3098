"""Unit tests for application settings configuration."""

from pathlib import Path

from folio.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_defaults_match_listing_and_image_rules():
    settings = Settings(_env_file=None)

    assert settings.backend_namespace == "folio:apps"
    assert settings.page_count == 30
    assert settings.thumb_width == 200
    assert settings.admin_token == ""
