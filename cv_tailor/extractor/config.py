"""Configuration settings for the Job Extractor."""

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
)


class ExtractorConfig(BaseSettings):
    """Extractor configuration settings.

    All settings have sensible defaults and can be overridden via
    environment variables with EXTRACTOR_ prefix or a .env file.

    Attributes:
        headless: Run the scraping browser in headless mode.
        window_width: Browser viewport width.
        window_height: Browser viewport height.
        timeout_ms: Navigation timeout in milliseconds.
        user_agent: User agent sent with the page request.
        chromium_path: Optional Chromium executable override.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXTRACTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    headless: bool = Field(default=True, description="Run browser in headless mode")
    window_width: int = Field(default=1920, description="Browser viewport width")
    window_height: int = Field(default=1080, description="Browser viewport height")
    timeout_ms: Annotated[int, Field(gt=0)] = Field(
        default=60_000, description="Navigation timeout in milliseconds"
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="Request user agent")
    chromium_path: str | None = Field(
        default=None, description="Chromium executable path (defaults to Playwright's)"
    )


_extractor_config: ExtractorConfig | None = None


def get_extractor_config() -> ExtractorConfig:
    """Get the extractor configuration singleton."""
    global _extractor_config
    if _extractor_config is None:
        _extractor_config = ExtractorConfig()
    return _extractor_config


def reset_extractor_config() -> None:
    """Reset the configuration singleton (useful for testing)."""
    global _extractor_config
    _extractor_config = None
