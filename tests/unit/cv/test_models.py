"""Tests for CV models."""

import pytest
from pydantic import ValidationError

from cv_tailor.cv.models import CV, WorkExperience


def test_cv_round_trips_through_dict(sample_cv) -> None:
    assert CV.model_validate(sample_cv.to_dict()) == sample_cv


def test_numeric_years_become_strings() -> None:
    work = WorkExperience(company="A", position="B", start=2020, end=2021.5)
    assert work.start == "2020"
    assert work.end == "2021.5"


def test_models_are_frozen(sample_cv) -> None:
    with pytest.raises(ValidationError):
        sample_cv.profile = "changed"


def test_titles_limited_to_three(sample_cv_data) -> None:
    sample_cv_data["titles"].append("Fourth")
    with pytest.raises(ValidationError):
        CV.model_validate(sample_cv_data)


def test_achievement_count(sample_cv) -> None:
    assert sample_cv.achievement_count() == 12


def test_stack_is_optional(sample_cv) -> None:
    assert sample_cv.work[2].stack is None
