"""Tests for tailoring configuration."""

import pytest
from pydantic import ValidationError

from cv_tailor.tailoring.config import (
    TailoringConfig,
    get_tailoring_config,
    reset_tailoring_config,
)


class TestTailoringConfig:
    """Tests for TailoringConfig."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TAILORING_LLM_MODEL", raising=False)
        config = TailoringConfig(_env_file=None)

        assert config.llm_model == "gpt-5-mini"
        assert config.llm_extraction_model == "gpt-5"
        assert config.max_titles == 3
        assert config.max_title_chars == 30
        assert config.profile_min_chars == 300
        assert config.profile_max_chars == 400
        assert config.tinker_profile_max_chars == 700
        assert config.max_achievement_chars == 150
        assert config.max_stack_item_chars == 18

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TAILORING_LLM_MODEL", "gpt-5-nano")
        monkeypatch.setenv("TAILORING_MAX_TITLES", "2")

        config = TailoringConfig(_env_file=None)

        assert config.llm_model == "gpt-5-nano"
        assert config.max_titles == 2

    def test_profile_budget_must_be_a_range(self):
        with pytest.raises(ValidationError):
            TailoringConfig(profile_min_chars=500, profile_max_chars=400)

    def test_rejects_negative_retries(self):
        with pytest.raises(ValidationError):
            TailoringConfig(llm_max_retries=-1)

    def test_singleton(self):
        reset_tailoring_config()
        assert get_tailoring_config() is get_tailoring_config()
        first = get_tailoring_config()
        reset_tailoring_config()
        assert get_tailoring_config() is not first
