"""Tests for settings and logging setup."""
import pytest
from loguru import logger

from caption_validator.config import Settings, get_httpx_client_kwargs, settings
from caption_validator.logging_setup import configure_logging


def test_defaults() -> None:
    defaults = Settings(_env_file=None)

    assert defaults.LANGUAGE_TIMEOUT == 30.0
    assert defaults.DEFAULT_COVERAGE == 80.0
    assert defaults.SNIFF_BYTES == 100
    assert defaults.LOG_LEVEL == "WARNING"
    assert defaults.MOCK_LANGUAGE == "en-US"
    assert defaults.MOCK_SERVER_PORT == 8081


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAPTION_VALIDATOR_LANGUAGE_ENDPOINT", "http://detector:8081/detect")
    monkeypatch.setenv("CAPTION_VALIDATOR_LANGUAGE_TIMEOUT", "5")
    monkeypatch.setenv("CAPTION_VALIDATOR_SNIFF_BYTES", "512")

    configured = Settings(_env_file=None)

    assert configured.LANGUAGE_ENDPOINT == "http://detector:8081/detect"
    assert configured.LANGUAGE_TIMEOUT == 5.0
    assert configured.SNIFF_BYTES == 512


def test_env_file_is_read(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("CAPTION_VALIDATOR_DEFAULT_COVERAGE=95\n", encoding="utf-8")
    monkeypatch.delenv("CAPTION_VALIDATOR_DEFAULT_COVERAGE", raising=False)

    assert Settings(_env_file=env_file).DEFAULT_COVERAGE == 95.0


def test_httpx_kwargs_without_proxy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "PROXY_URL", None)
    monkeypatch.setattr(settings, "LANGUAGE_TIMEOUT", 12.0)

    assert get_httpx_client_kwargs() == {"timeout": 12.0}
    assert get_httpx_client_kwargs(3.0) == {"timeout": 3.0}


def test_httpx_kwargs_with_proxy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "PROXY_URL", "http://proxy:3128")

    assert get_httpx_client_kwargs(1.0) == {"timeout": 1.0, "proxy": "http://proxy:3128"}


def test_configure_logging_levels(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "LOG_LEVEL", "info")

    assert configure_logging("debug") == "DEBUG"
    assert configure_logging() == "INFO"


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        configure_logging("LOUD")


def test_configure_logging_writes_to_stderr(capsys: pytest.CaptureFixture) -> None:
    configure_logging("INFO")

    logger.info("hello from the validator")
    logger.debug("not shown")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "hello from the validator" in captured.err
    assert "not shown" not in captured.err
