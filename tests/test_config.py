"""Tests for settings loading."""

import pytest

from habisync.config import HabiticaConfig, Settings, WebhookConfig, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in (
        "HABISYNC_CONFIG",
        "HABISYNC_HABITICA__USER_ID",
        "HABISYNC_HABITICA__API_TOKEN",
        "HABISYNC_WEBHOOK__SECRET",
        "HABISYNC_WEBHOOK__PORT",
        "HABISYNC_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a real user config file out of the tests
    monkeypatch.setenv("HABISYNC_CONFIG_DIR", str(tmp_path / "config"))


class TestDefaults:
    def test_habitica_defaults(self):
        cfg = HabiticaConfig()
        assert cfg.user_id == ""
        assert cfg.api_token == ""
        assert cfg.base_url == "https://habitica.com/api/v3/"
        assert cfg.client_name == "github-to-habitica"

    def test_webhook_defaults(self):
        cfg = WebhookConfig()
        assert cfg.secret == ""
        assert cfg.path == "/webhooks/github"
        assert cfg.bind == "0.0.0.0"
        assert cfg.port == 8420

    def test_missing_credentials_do_not_fail_startup(self):
        settings = load_settings()
        assert settings.habitica.api_token == ""
        assert settings.webhook.secret == ""


class TestEnvironment:
    def test_nested_env_vars(self, monkeypatch):
        monkeypatch.setenv("HABISYNC_HABITICA__USER_ID", "user-1")
        monkeypatch.setenv("HABISYNC_HABITICA__API_TOKEN", "token-1")
        monkeypatch.setenv("HABISYNC_WEBHOOK__SECRET", "s3cret")
        settings = Settings()
        assert settings.habitica.user_id == "user-1"
        assert settings.habitica.api_token == "token-1"
        assert settings.webhook.secret == "s3cret"


class TestYaml:
    def test_yaml_values_loaded(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "habitica:\n"
            "  user_id: yaml-user\n"
            "webhook:\n"
            "  port: 9000\n"
            "log_level: DEBUG\n"
        )
        settings = load_settings(path)
        assert settings.habitica.user_id == "yaml-user"
        assert settings.webhook.port == 9000
        assert settings.log_level == "DEBUG"

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text(
            "habitica:\n"
            "  user_id: yaml-user\n"
            "  api_token: yaml-token\n"
        )
        monkeypatch.setenv("HABISYNC_HABITICA__API_TOKEN", "env-token")
        settings = load_settings(path)
        assert settings.habitica.user_id == "yaml-user"
        assert settings.habitica.api_token == "env-token"

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("log_json: true\n")
        monkeypatch.setenv("HABISYNC_CONFIG", str(path))
        assert load_settings().log_json is True

    def test_default_config_dir(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("webhook:\n  path: /hooks\n")
        assert load_settings().webhook.path == "/hooks"

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "nope.yaml")
        assert settings.webhook.port == 8420
