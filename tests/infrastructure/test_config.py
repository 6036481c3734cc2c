"""Tests for SanityConfig."""

import pytest

from pexpress.domain.exceptions import ConfigurationError
from pexpress.infrastructure import bootstrap
from pexpress.infrastructure.config import SanityConfig

_ENV_VARS = [
    "SANITY_PROJECT_ID",
    "SANITY_STUDIO_PROJECT_ID",
    "SANITY_DATASET",
    "SANITY_STUDIO_DATASET",
    "SANITY_API_VERSION",
    "SANITY_WRITE_TOKEN",
    "SANITY_TIMEOUT",
    "CORS_ALLOWED_ORIGIN",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        # setenv first so the variable is removed again on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestFromEnv:

    def test_defaults(self, clean_env):
        config = SanityConfig.from_env()

        assert config.dataset == "production"
        assert config.api_version == "2024-03-01"
        assert config.timeout is None
        assert config.allowed_origin == "*"
        assert config.missing_fields() == ["SANITY_PROJECT_ID", "SANITY_WRITE_TOKEN"]

    def test_studio_fallbacks(self, clean_env):
        clean_env.setenv("SANITY_STUDIO_PROJECT_ID", "studio-id")
        clean_env.setenv("SANITY_STUDIO_DATASET", "staging")

        config = SanityConfig.from_env()

        assert config.project_id == "studio-id"
        assert config.dataset == "staging"

    def test_explicit_values(self, clean_env):
        clean_env.setenv("SANITY_PROJECT_ID", "abc")
        clean_env.setenv("SANITY_STUDIO_PROJECT_ID", "ignored")
        clean_env.setenv("SANITY_WRITE_TOKEN", "tok")
        clean_env.setenv("SANITY_TIMEOUT", "2.5")
        clean_env.setenv("CORS_ALLOWED_ORIGIN", "https://shop.example")

        config = SanityConfig.from_env()

        assert config.project_id == "abc"
        assert config.timeout == 2.5
        assert config.allowed_origin == "https://shop.example"
        assert config.missing_fields() == []

    def test_non_numeric_timeout_rejected(self, clean_env):
        clean_env.setenv("SANITY_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError, match="SANITY_TIMEOUT"):
            SanityConfig.from_env()

    def test_dotenv_file_is_read(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("SANITY_PROJECT_ID=from-dotenv\n", encoding="utf-8")
        assert SanityConfig.from_env().project_id == "from-dotenv"


class TestBaseUrl:

    def test_version_prefix_not_doubled(self):
        config = SanityConfig(project_id="abc", api_version="v2025-07-01")
        assert config.base_url == "https://abc.api.sanity.io/v2025-07-01/data"


class TestBootstrap:

    def test_incomplete_config_rejected(self):
        with pytest.raises(ConfigurationError, match="Missing Sanity configuration"):
            bootstrap.product_repository(SanityConfig(project_id="abc"))

    def test_complete_config_builds_repository(self):
        repo = bootstrap.product_repository(SanityConfig(project_id="abc", token="tok"))
        repo.close()
