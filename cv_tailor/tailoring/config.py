"""Configuration settings for the Tailoring module.

Provides settings for the LLM provider and the length budgets each
tailoring stage asks the model to respect.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TailoringConfig(BaseSettings):
    """Configuration for the tailoring system.

    Settings can be overridden via environment variables prefixed with TAILORING_.

    Example: TAILORING_LLM_MODEL=gpt-5
    """

    model_config = SettingsConfigDict(
        env_prefix="TAILORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM settings
    llm_provider: str = Field(
        default="openai",
        description="LLM provider (must support the Responses API with stored conversations)",
    )
    llm_model: str = Field(
        default="gpt-5-mini",
        description="Model used for seeding and tailoring stages",
    )
    llm_extraction_model: str = Field(
        default="gpt-5",
        description="Model used for job description extraction and tinkering",
    )
    llm_api_key: str | None = Field(
        default=None,
        description="API key for LLM provider",
    )
    llm_base_url: str | None = Field(
        default=None,
        description="Base URL for OpenAI-compatible endpoints",
    )
    llm_max_retries: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Maximum retry attempts for failed LLM transport calls",
    )
    llm_timeout: Annotated[float, Field(gt=0)] = Field(
        default=240.0,
        description="Timeout in seconds for LLM calls",
    )
    llm_reasoning_effort: str | None = Field(
        default="medium",
        description="Reasoning effort for reasoning models (minimal, low, medium, high)",
    )

    # Writing style
    language: str = Field(default="EN_UK", description="Output language code")
    tone: str = Field(default="Professional", description="Output tone")

    # Length budgets
    max_titles: Annotated[int, Field(gt=0)] = Field(
        default=3, description="Maximum number of headline titles"
    )
    max_title_chars: Annotated[int, Field(gt=0)] = Field(
        default=30, description="Maximum characters per title"
    )
    profile_min_chars: Annotated[int, Field(gt=0)] = Field(
        default=300, description="Lower bound of the profile character budget"
    )
    profile_max_chars: Annotated[int, Field(gt=0)] = Field(
        default=400, description="Upper bound of the profile character budget"
    )
    tinker_profile_max_chars: Annotated[int, Field(gt=0)] = Field(
        default=700, description="Profile character budget for free-form tinkering"
    )
    max_achievement_chars: Annotated[int, Field(gt=0)] = Field(
        default=150, description="Maximum characters per achievement"
    )
    max_stack_item_chars: Annotated[int, Field(gt=0)] = Field(
        default=18, description="Maximum characters per stack tag"
    )

    @model_validator(mode="after")
    def check_profile_budget(self) -> TailoringConfig:
        """Ensure the profile budget is a valid range."""
        if self.profile_min_chars > self.profile_max_chars:
            raise ValueError(
                "profile_min_chars must not exceed profile_max_chars "
                f"({self.profile_min_chars} > {self.profile_max_chars})"
            )
        return self


# Singleton instance
_tailoring_config: TailoringConfig | None = None


def get_tailoring_config() -> TailoringConfig:
    """Get the tailoring configuration singleton."""
    global _tailoring_config
    if _tailoring_config is None:
        _tailoring_config = TailoringConfig()
    return _tailoring_config


def reset_tailoring_config() -> None:
    """Reset the configuration singleton (useful for testing)."""
    global _tailoring_config
    _tailoring_config = None
