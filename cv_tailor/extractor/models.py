"""Data models for the Job Extractor."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from cv_tailor.tailoring.models import utc_timestamp

AtsType = Literal[
    "greenhouse",
    "lever",
    "workable",
    "indeed",
    "ziprecruiter",
    "bamboohr",
    "icims",
    "taleo",
    "adp",
    "smartrecruiters",
    "bullhorn",
    "jazzhr",
    "breezyhr",
    "recruitee",
    "ashby",
    "jobvite",
    "successfactors",
    "hibob",
    "rippling",
    "gusto",
    "other",
]


class JobPosting(BaseModel):
    """Structured job posting as extracted by the LLM.

    This model doubles as the structured-output schema sent to the model,
    so field descriptions are written as instructions.
    """

    job_title: str = Field(..., description="The title of the job")
    job_description: str = Field(..., description="The description of the job")
    tech_stack: list[str] = Field(
        default_factory=list, description="The tech stack of the job"
    )
    key_requirements: list[str] = Field(
        default_factory=list, description="The key requirements of the job"
    )
    key_skills: list[str] = Field(
        default_factory=list, description="The key skills of the job"
    )
    industry_context: str = Field(
        default="", description="The industry context of the job and the company"
    )
    company_name: str = Field(..., description="The name of the company")
    company_country: str = Field(default="", description="The country of the company")
    office_country: str = Field(default="", description="The office country of the job")
    location: str = Field(default="", description="The location of the job")
    language: Literal["EN_UK", "EN_US", "OTHER"] = Field(
        default="OTHER", description="The language of the job description"
    )
    ats_keywords: list[str] = Field(
        default_factory=list,
        description="The ATS keywords of the job that should be used to optimise the CV.",
    )
    ats_type: AtsType = Field(default="other", description="The ATS the job is posted on")
    custom_ats_type: str | None = Field(
        default=None,
        description="If the ATS type is other, please specify the name of the ATS.",
    )
    tone_notes: str | None = Field(
        default=None, description="Any tone notes that should be used to optimise the CV."
    )


class JobDescription(BaseModel):
    """A job posting together with the raw text it was extracted from.

    Attributes:
        structured: The extracted posting.
        raw: The raw (scraped or pasted) text.
        created_at: ISO-8601 extraction timestamp, used in artifact names.
    """

    structured: JobPosting
    raw: str = ""
    created_at: str = Field(default_factory=utc_timestamp)

    @property
    def label(self) -> str:
        """``<title>-at-<company>-<created_at>``, the stem of every artifact name."""
        return (
            f"{self.structured.job_title}-at-{self.structured.company_name}-{self.created_at}"
        )

    def to_dict(self) -> dict:
        """Serialize the job description to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> JobDescription:
        """Deserialize a job description from a dictionary."""
        return cls.model_validate(data)

    @classmethod
    def load_json(cls, path: Path | str) -> JobDescription:
        """Load a job description JSON artifact written by an earlier run."""
        with open(path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
