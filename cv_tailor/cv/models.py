"""Data models for the CV document.

The CV is the canonical résumé that tailoring overlays and the renderer
turns into a page. Models are frozen: every transformation (merge, shrink)
produces a new value via ``model_copy``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _coerce_to_str(value: object) -> object:
    """Accept years written as numbers (``2021``) as well as strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


StringOrNumber = Annotated[str, BeforeValidator(_coerce_to_str)]

ContactType = Literal["phone", "email", "github", "linkedin", "website"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Contact(_Frozen):
    """A single contact line (phone, email, profile handle, website)."""

    type: ContactType = Field(..., description="Contact kind")
    value: str = Field(..., description="Contact value or handle")


class WorkExperience(_Frozen):
    """One position in the work history."""

    company: str = Field(..., description="Employer name")
    description: str | None = Field(
        default=None, description="Short company descriptor shown after the name"
    )
    link: str | None = Field(default=None, description="Company URL")
    position: str = Field(..., description="Job title held")
    location: str | None = Field(default=None, description="Work location")
    start: StringOrNumber = Field(..., description="Start date or year")
    end: StringOrNumber = Field(..., description="End date, year or 'Present'")
    achievements: list[str] = Field(
        default_factory=list, description="Ordered achievement bullets"
    )
    stack: list[str] | None = Field(
        default=None, description="Ordered technology tags"
    )


class Education(_Frozen):
    """An education entry."""

    title: str
    school: str
    location: str | None = None
    end: StringOrNumber | None = None
    description: str | None = None


class Extra(_Frozen):
    """Extras and charity entries (volunteering, memberships, awards)."""

    title: str
    organization: str | None = None
    location: str | None = None
    start: StringOrNumber | None = None
    end: StringOrNumber | None = None
    description: str | None = None


class CV(_Frozen):
    """The complete résumé document.

    Section order is fixed: name, titles, contacts, location, profile,
    work, education, extras. Tailoring replaces titles and profile and
    rewrites work achievements/stack; everything else passes through.
    """

    name: str = Field(..., description="Candidate name")
    titles: list[str] = Field(
        default_factory=list, max_length=3, description="Up to 3 headline titles"
    )
    contacts: list[Contact] = Field(default_factory=list)
    location: str = Field(..., description="Candidate location")
    profile: str = Field(..., description="Profile paragraph")
    work: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    extras: list[Extra] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(mode="json")

    def achievement_count(self) -> int:
        """Total number of achievements across all work entries."""
        return sum(len(work.achievements) for work in self.work)
