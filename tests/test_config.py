"""Tests for environment-driven client configuration."""

import pytest

from assistantkit.core.errors import ClientConfigError
from assistantkit.networking import config
from assistantkit.networking.config import ClientSettings, load_key


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in (
        config.API_KEY_ENV,
        config.ORGANIZATION_ENV,
        config.BASE_URL_ENV,
        config.TIMEOUT_ENV,
        config.KEY_FILE_ENV,
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestLoadKey:
    def test_environment_wins(self, monkeypatch, tmp_path):
        key_file = tmp_path / "key"
        key_file.write_text("from-file")
        monkeypatch.setenv(config.API_KEY_ENV, " sk-env \n")
        assert load_key(key_file) == "sk-env"

    def test_key_file(self, tmp_path):
        key_file = tmp_path / "key"
        key_file.write_text("sk-file\n")
        assert load_key(key_file) == "sk-file"

    def test_key_file_from_environment(self, monkeypatch, tmp_path):
        key_file = tmp_path / "other.key"
        key_file.write_text("sk-other")
        monkeypatch.setenv(config.KEY_FILE_ENV, str(key_file))
        assert load_key() == "sk-other"

    def test_missing_and_blank(self, tmp_path):
        assert load_key(tmp_path / "missing") is None
        blank = tmp_path / "blank"
        blank.write_text("   \n")
        assert load_key(blank) is None


class TestClientSettings:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv(config.API_KEY_ENV, "sk-env")
        monkeypatch.setenv(config.ORGANIZATION_ENV, "org-env")
        monkeypatch.setenv(config.BASE_URL_ENV, "http://proxy.local/v1")
        monkeypatch.setenv(config.TIMEOUT_ENV, "30")

        settings = ClientSettings.from_env()
        assert settings.api_key == "sk-env"
        assert settings.organization_id == "org-env"
        assert settings.base_url == "http://proxy.local/v1/"
        assert settings.timeout == 30.0
        assert settings.beta == "assistants=v1"

    def test_explicit_organization_overrides_env(self, monkeypatch):
        monkeypatch.setenv(config.API_KEY_ENV, "sk-env")
        monkeypatch.setenv(config.ORGANIZATION_ENV, "org-env")
        assert ClientSettings.from_env(organization_id="org-arg").organization_id == "org-arg"

    def test_missing_key(self):
        with pytest.raises(ClientConfigError):
            ClientSettings.from_env()

    def test_bad_timeout(self, monkeypatch):
        monkeypatch.setenv(config.API_KEY_ENV, "sk-env")
        monkeypatch.setenv(config.TIMEOUT_ENV, "soon")
        with pytest.raises(ClientConfigError):
            ClientSettings.from_env()

    def test_empty_key_rejected(self):
        with pytest.raises(ClientConfigError):
            ClientSettings(api_key="")

    def test_repr_masks_key(self):
        assert "sk-secret" not in repr(ClientSettings(api_key="sk-secret"))
