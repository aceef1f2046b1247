"""Tests for extractor configuration."""

from cv_tailor.extractor.config import (
    DEFAULT_USER_AGENT,
    ExtractorConfig,
    get_extractor_config,
    reset_extractor_config,
)


def test_defaults() -> None:
    config = ExtractorConfig(_env_file=None)

    assert config.headless is True
    assert (config.window_width, config.window_height) == (1920, 1080)
    assert config.timeout_ms == 60_000
    assert config.user_agent == DEFAULT_USER_AGENT


def test_env_override(monkeypatch) -> None:
    monkeypatch.setenv("EXTRACTOR_HEADLESS", "false")
    monkeypatch.setenv("EXTRACTOR_TIMEOUT_MS", "5000")

    config = ExtractorConfig(_env_file=None)

    assert config.headless is False
    assert config.timeout_ms == 5000


def test_singleton() -> None:
    reset_extractor_config()
    assert get_extractor_config() is get_extractor_config()
