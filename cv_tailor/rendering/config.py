"""Configuration settings for the Rendering module.

Provides template locations, the physical page geometry used for
page-fit measurement and PDF export, and the shrink budget.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# CSS pixels per millimetre at 96 dpi
PX_PER_MM = 96 / 25.4

# Package templates, used when template_dir does not exist
PACKAGE_TEMPLATE_DIR = Path(__file__).parent / "templates"


class RenderingConfig(BaseSettings):
    """Configuration for CV rendering.

    Settings can be overridden via environment variables prefixed with RENDERING_.

    Example: RENDERING_MAX_SHRINK_ATTEMPTS=8
    """

    model_config = SettingsConfigDict(
        env_prefix="RENDERING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Template settings
    template_dir: Path = Field(
        default=PACKAGE_TEMPLATE_DIR,
        description="Directory containing HTML/CSS templates",
    )
    resume_template: str = Field(
        default="resume.html",
        description="Resume template filename",
    )

    # Page geometry (A4 at 96 dpi)
    page_width_px: Annotated[int, Field(gt=0)] = Field(default=794)
    page_height_px: Annotated[int, Field(gt=0)] = Field(default=1123)
    margin_top_mm: Annotated[float, Field(ge=0)] = Field(default=12)
    margin_right_mm: Annotated[float, Field(ge=0)] = Field(default=12)
    margin_bottom_mm: Annotated[float, Field(ge=0)] = Field(default=14)
    margin_left_mm: Annotated[float, Field(ge=0)] = Field(default=12)

    # Page-fit settings
    max_shrink_attempts: Annotated[int, Field(gt=0)] = Field(
        default=16,
        description="Render/measure attempts before giving up on one page",
    )
    min_achievements: Annotated[int, Field(ge=0)] = Field(
        default=2,
        description="Achievements kept per work entry when shrinking",
    )

    # Browser settings
    headless: bool = Field(default=True, description="Run Chromium headless")
    chromium_path: str | None = Field(
        default=None, description="Chromium executable (defaults to Playwright's)"
    )

    @field_validator("template_dir", mode="before")
    @classmethod
    def convert_to_path(cls, v: str | Path) -> Path:
        """Convert string paths to Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v

    @property
    def usable_height_px(self) -> float:
        """Page height left for content once vertical margins are removed."""
        return self.page_height_px - (self.margin_top_mm + self.margin_bottom_mm) * PX_PER_MM

    @property
    def content_width_px(self) -> int:
        """Page width left for content once horizontal margins are removed."""
        return round(
            self.page_width_px - (self.margin_left_mm + self.margin_right_mm) * PX_PER_MM
        )

    def pdf_margins(self) -> dict[str, str]:
        """Margins in the form Chromium's PDF export expects."""
        return {
            "top": f"{self.margin_top_mm:g}mm",
            "right": f"{self.margin_right_mm:g}mm",
            "bottom": f"{self.margin_bottom_mm:g}mm",
            "left": f"{self.margin_left_mm:g}mm",
        }

    def get_resume_template_dir(self) -> Path:
        """Template directory, falling back to the packaged templates."""
        if self.template_dir.exists():
            return self.template_dir
        return PACKAGE_TEMPLATE_DIR


# Singleton instance
_rendering_config: RenderingConfig | None = None


def get_rendering_config() -> RenderingConfig:
    """Get the rendering configuration singleton."""
    global _rendering_config
    if _rendering_config is None:
        _rendering_config = RenderingConfig()
    return _rendering_config


def reset_rendering_config() -> None:
    """Reset the configuration singleton (useful for testing)."""
    global _rendering_config
    _rendering_config = None
