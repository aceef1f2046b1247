"""Data models for the Tailoring module.

Contains Pydantic models for:
- Scored items: achievements and stack tags paired with a 0-100 match score
- Stage responses: what the model returns for titles, profile and work entries
- TailoredFragment: a stage response plus its conversation continuation token
- TailoredCV: the accepted responses of a whole tailoring run
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

MatchScore = Annotated[float, Field(ge=0, le=100)]

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ScoredAchievement(_Frozen):
    """A rewritten achievement with its relevance to the target."""

    match_score_pct: MatchScore = Field(
        ...,
        description="The match score of the achievement to the job description in percentage from 0 to 100.",
    )
    optimised_achievement: str = Field(
        ..., description="Optimised achievement for the job description."
    )


class ScoredStackItem(_Frozen):
    """A single technology tag with its relevance to the target."""

    match_score_pct: MatchScore = Field(
        ...,
        description="The match score of the stack item to the job description in percentage from 0 to 100.",
    )
    optimised_stack: str = Field(
        ..., description="Optimised stack item for the job description."
    )


class TailoredTitles(_Frozen):
    """Model output for the titles stage."""

    original_match_score_pct: MatchScore = Field(
        ...,
        description="The match score of the original titles to the job description in percentage from 0 to 100.",
    )
    optimised_match_score_pct: MatchScore = Field(
        ...,
        description="The match score of the optimised titles to the job description in percentage from 0 to 100.",
    )
    optimised_titles: list[str] = Field(
        ..., max_length=3, description="Optimised titles for the job description."
    )
    gaps: list[str] = Field(
        default_factory=list,
        description="What is missing from the titles to make them more relevant to the job description.",
    )
    suggestions: list[str] = Field(
        default_factory=list,
        description="Any unconfirmed suggestions that would work 100% for ATS parsing but not aligned with original titles.",
    )


class TailoredProfile(_Frozen):
    """Model output for the profile stage."""

    original_match_score_pct: MatchScore = Field(
        ...,
        description="The match score of the original profile to the job description in percentage from 0 to 100.",
    )
    optimised_match_score_pct: MatchScore = Field(
        ...,
        description="The match score of the optimised profile to the job description in percentage from 0 to 100.",
    )
    optimised_profile: str = Field(
        ..., description="Optimised profile for the job description."
    )
    gaps: list[str] = Field(
        default_factory=list,
        description="What is missing from the profile to make it more relevant to the job description.",
    )
    suggestions: list[str] = Field(
        default_factory=list,
        description="Any unconfirmed suggestions that would work 100% for ATS parsing but not aligned with original profile.",
    )
    ats_perfect_match: str = Field(
        default="",
        description="The profile that would be ATS perfect match for the job description but might not be aligned with original profile.",
    )


class TailoredWorkExperience(_Frozen):
    """Model output for one work entry."""

    original_match_score_pct: MatchScore = Field(
        ...,
        description="The match score of the original work experience to the job description in percentage from 0 to 100.",
    )
    optimised_match_score_pct: MatchScore = Field(
        ...,
        description="The match score of the optimised work experience to the job description in percentage from 0 to 100.",
    )
    optimised_achievements: list[ScoredAchievement] = Field(default_factory=list)
    optimised_stack: list[ScoredStackItem] = Field(default_factory=list)


class TinkeredTitles(_Frozen):
    """Model output for free-form titles tinkering."""

    optimised_quality_score: MatchScore = Field(
        ..., description="The quality of the optimised titles in points from 0 to 100."
    )
    optimised_titles: list[str] = Field(
        ..., max_length=3, description="Optimised titles for the prompt."
    )


class TinkeredProfile(_Frozen):
    """Model output for free-form profile tinkering."""

    optimised_quality_score: MatchScore = Field(
        ..., description="The quality of the optimised profile in points from 0 to 100."
    )
    optimised_profile: str = Field(..., description="Optimised profile for the prompt.")


class TinkeredWorkExperience(_Frozen):
    """Model output for free-form tinkering of one work entry."""

    optimised_quality_score: MatchScore = Field(
        ...,
        description="The quality of the optimised work experience in points from 0 to 100.",
    )
    optimised_achievements: list[ScoredAchievement] = Field(default_factory=list)
    optimised_stack: list[ScoredStackItem] = Field(default_factory=list)


class TailoredFragment(_Frozen, Generic[ResponseT]):
    """One accepted-or-pending stage output.

    ``response_id`` is the opaque continuation token of the conversation
    that produced ``response``; passing it back lets the next request
    resume that conversation. Fragments are never mutated: every revision
    is a new fragment.
    """

    response_id: str = Field(..., description="Conversation continuation token")
    response: ResponseT


class TailoredCV(BaseModel):
    """All accepted tailoring responses for one job description.

    ``work_experience[i]`` corresponds to ``cv.work[i]`` of the CV that
    was tailored.
    """

    titles: TailoredTitles
    profile: TailoredProfile
    work_experience: list[TailoredWorkExperience] = Field(default_factory=list)
    created_at: str = Field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(mode="json")


class TinkeredCV(BaseModel):
    """All accepted tinkering responses for one free-form prompt."""

    titles: TinkeredTitles
    profile: TinkeredProfile
    work_experience: list[TinkeredWorkExperience] = Field(default_factory=list)
    created_at: str = Field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(mode="json")
