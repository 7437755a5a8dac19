import logging

from relay_hub.config import get_settings
from relay_hub.logging_utils import setup_logger


def test_defaults(monkeypatch):
    for name in ("CORS_ORIGINS", "LOG_LEVEL", "HTTP_TIMEOUT", "PROXY_BASE_URL", "WEB_HOST", "WEB_PORT", "WEB_RELOAD"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WORKFLOW_RUN_DELAY", "2.0")

    settings = get_settings()

    assert settings.cors_origins == ["*"]
    assert settings.http_timeout == 60.0
    assert settings.proxy_base_url == "http://127.0.0.1:8000"
    assert settings.workflow_run_delay == 2.0
    assert settings.web_reload is False
    assert settings.github_webhook_secret is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, https://canvas.example.com")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("HTTP_TIMEOUT", "5")
    monkeypatch.setenv("PROXY_BASE_URL", "http://relay:9000/")
    monkeypatch.setenv("WEB_RELOAD", "true")

    settings = get_settings()

    assert settings.cors_origins == ["http://localhost:5173", "https://canvas.example.com"]
    assert settings.log_level == "DEBUG"
    assert settings.http_timeout == 5.0
    assert settings.proxy_base_url == "http://relay:9000"
    assert settings.web_reload is True


def test_proxy_url_follows_web_port(monkeypatch):
    monkeypatch.delenv("PROXY_BASE_URL", raising=False)
    monkeypatch.delenv("WEB_HOST", raising=False)
    monkeypatch.setenv("WEB_PORT", "9001")

    assert get_settings().proxy_base_url == "http://127.0.0.1:9001"


def test_proxy_url_from_wildcard_bind_uses_loopback(monkeypatch):
    monkeypatch.delenv("PROXY_BASE_URL", raising=False)
    monkeypatch.setenv("WEB_HOST", "0.0.0.0")
    monkeypatch.setenv("WEB_PORT", "8080")

    assert get_settings().proxy_base_url == "http://127.0.0.1:8080"


def test_explicit_proxy_url_wins(monkeypatch):
    monkeypatch.setenv("PROXY_BASE_URL", "http://relay.internal:7000")
    monkeypatch.setenv("WEB_PORT", "9001")

    assert get_settings().proxy_base_url == "http://relay.internal:7000"


def test_setup_logger_writes_to_file(tmp_path):
    log_file = tmp_path / "relay.log"

    logger = setup_logger("DEBUG", str(log_file), name="relay.test")
    logger.debug("hello from the test")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert "hello from the test" in log_file.read_text()


def test_setup_logger_does_not_stack_handlers(tmp_path):
    first = setup_logger("INFO", name="relay.once")
    count = len(first.handlers)

    second = setup_logger("INFO", name="relay.once")

    assert second is first
    assert len(second.handlers) == count
