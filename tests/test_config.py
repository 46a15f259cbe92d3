import pytest

from cufinder_mcp.core import config


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    # keep a developer's .env out of these tests
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("CUFINDER_API_KEY", "abc123")
    monkeypatch.setenv("CUFINDER_BASE_URL", "https://staging.cufinder.test/v2/")
    monkeypatch.setenv("CUFINDER_LOG_LEVEL", "debug")

    settings = config.get_settings()

    assert settings.api_key == "abc123"
    assert settings.base_url == "https://staging.cufinder.test/v2"
    assert settings.log_level == "DEBUG"
    assert settings.timeout_seconds == 60.0


def test_get_settings_defaults_and_warns_without_key(monkeypatch, caplog):
    monkeypatch.delenv("CUFINDER_API_KEY", raising=False)
    monkeypatch.delenv("CUFINDER_BASE_URL", raising=False)
    monkeypatch.delenv("CUFINDER_LOG_LEVEL", raising=False)

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "CUFINDER_API_KEY is not configured" in " ".join(caplog.messages)
    assert settings.api_key == ""
    assert settings.base_url == "https://api.cufinder.io/v2"
    assert settings.log_level == "INFO"


def test_settings_are_immutable():
    settings = config.Settings(api_key="k")
    with pytest.raises(AttributeError):
        settings.api_key = "other"


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("CUFINDER_API_KEY", "first")
    first = config.get_settings()
    monkeypatch.setenv("CUFINDER_API_KEY", "second")
    assert config.get_settings() is first


def test_unknown_log_level_falls_back_to_info(monkeypatch, caplog):
    monkeypatch.setenv("CUFINDER_API_KEY", "abc123")
    monkeypatch.setenv("CUFINDER_LOG_LEVEL", "verbose")

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert settings.log_level == "INFO"
    assert "CUFINDER_LOG_LEVEL=VERBOSE is not a logging level" in " ".join(caplog.messages)


def test_known_log_level_is_kept(monkeypatch):
    monkeypatch.setenv("CUFINDER_API_KEY", "abc123")
    monkeypatch.setenv("CUFINDER_LOG_LEVEL", "warning")

    assert config.get_settings().log_level == "WARNING"
