"""Prompt templates for job description extraction, tailoring and tinkering."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cv_tailor.cv.models import CV, WorkExperience
    from cv_tailor.extractor.models import JobDescription
    from cv_tailor.tailoring.config import TailoringConfig


EXTRACTION_SYSTEM_PROMPT = """You are an expert at structured data extraction of job descriptions.
You will be given semi-structured html text from a website representing a job description.
You will need to extract and convert into given structure. Do not modify the original text.
"""

SEED_SYSTEM_PROMPT = """You are a CV optimiser. Keep facts honest; do not invent.
Prefer metrics, action verbs, and ATS-friendly phrasing.

Guidelines:
- Language: {language}
- Tone: {tone}
- Preserve the original structure and formatting intent
- Use action verbs and quantifiable achievements
- Incorporate relevant keywords naturally
- Maintain truthfulness - enhance but don't fabricate

The optimisation should:
1. Align content with job requirements
2. Improve keyword relevance
3. Enhance readability and impact
4. Maintain professional authenticity
5. Respect character limits
"""

TITLES_SYSTEM_PROMPT = """You'll be given multiple possible titles for the CV.
Choose the best {max_titles} titles that match the job description.
Optimise the chosen titles to make them more relevant to the job description.
You can modify the titles but only based on profile and work achievements, maintain truthfulness.
Give recommendations for the gaps and unconfirmed suggestions only for the titles, not for the CV as a whole.
Keep language of the titles aligned with the job description language.

Formatting:
- Maximum {max_titles} titles
- Every title length can be maximum {max_title_chars} characters
- Every title is unique to further joining to a '|' separated string.
- Do not use '—', prefer comma if needed.
- Do not repeat terms across titles.
"""

PROFILE_SYSTEM_PROMPT = """You'll be given a profile for the CV, the CV itself and the Job Description.
Optimise the profile of the CV based on the job description.
You can modify the profile but only based on profile and work achievements, maintain truthfulness.
Use the analysed job description to make the profile more relevant to the job description.
Use ATS keywords, tech stack, and key requirements, and key skills to make the profile more relevant to the job description.
Keep language of the profile aligned with the job description language.

Formatting:
- Between {profile_min_chars} and {profile_max_chars} characters
"""

WORK_SYSTEM_PROMPT = """You'll be given a work experience for the CV, the CV itself and the Job Description.
Optimise the work experience of the original CV based on the job description analysis.
You can modify the work experience but only based on work experience and work achievements, maintain truthfulness.
Use the analysed job description to make the work experience more relevant to the job description.
Use ATS keywords, tech stack, and key requirements, and key skills to make the work experience more relevant to the job description.
Keep language of the work experience aligned with the job description language.

Optimise:
1. Achievements: {max_achievement_chars} characters max each
2. Stack: {max_stack_item_chars} characters max each, one term per item. Example: Wrong: "AWS (CDK, Lambda)", Correct: "AWS", "CDK", "Lambda"
"""

TINKER_TITLES_SYSTEM_PROMPT = """Guidelines:
- Language: {language}
- Tone: {tone}
- Preserve the original structure and formatting intent
- You'll be given multiple possible titles for the CV
- Choose the best {max_titles} titles that represent the CV best and align with the prompt
- Optimise the chosen titles to make them more relevant to the CV and will work well for ATS parsing
- You can modify the titles but only based on profile and work achievements, maintain truthfulness

Formatting:
- Maximum {max_titles} titles
- Every title length can be maximum {max_title_chars} characters
- Every title is unique to further joining to a '|' separated string
- Do not use '—', prefer comma if needed
- Do not repeat terms across titles
"""

TINKER_PROFILE_SYSTEM_PROMPT = """Guidelines:
- Language: {language}
- Tone: {tone}
- Preserve the original structure and formatting intent
- You'll be given a profile for the CV
- Optimise the profile to make it more relevant to the CV and will work well for ATS parsing
- You can modify the profile but only based on profile and work achievements, maintain truthfulness
- Use action verbs and quantifiable achievements
- Incorporate relevant keywords naturally

Formatting:
- Maximum {tinker_profile_max_chars} characters
"""

TINKER_WORK_SYSTEM_PROMPT = """You'll be given a work experience for the CV, the CV itself and the prompt.
Optimise the work experience of the original CV based on the prompt.
You can modify the work experience but only based on work experience and work achievements, maintain truthfulness.
Use the prompt to make the work experience more relevant to the CV.
Use ATS keywords, tech stack, and key requirements, and key skills to make the work experience more relevant to the CV.
Keep language of the work experience aligned with the CV language.
- Use action verbs and quantifiable achievements
- Incorporate relevant keywords naturally

Optimise:
1. Achievements: {max_achievement_chars} characters max each
2. Stack: {max_stack_item_chars} characters max each, one term per item. Example: Wrong: "AWS (CDK, Lambda)", Correct: "AWS", "CDK", "Lambda"
"""


def render_system_prompt(template: str, config: TailoringConfig) -> str:
    """Fill a system prompt template from the tailoring config."""
    return template.format(**config.model_dump())


def _dump(value: object) -> str:
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        value = model_dump(mode="json")
    return json.dumps(value, ensure_ascii=False)


def _feedback_parts(feedback: list[str] | None) -> list[str]:
    if not feedback:
        return []
    return ["The feedback received for the previous response:", _dump(feedback)]


def seed_user_prompt(job: JobDescription) -> str:
    """Opening message that puts the job description into the conversation."""
    return (
        "Here is the job description that you need to optimise the CV for.\n\n"
        f"Structured job description:\n{_dump(job.structured)}\n"
    )


def titles_user_prompt(
    cv: CV, job: JobDescription, feedback: list[str] | None = None
) -> list[str]:
    """Prompt parts for the titles stage."""
    return [
        "The job description analysed:",
        _dump(job.structured),
        "Original CV:",
        _dump(cv),
        "Titles from the original CV:",
        _dump(cv.titles),
        *_feedback_parts(feedback),
    ]


def profile_user_prompt(
    cv: CV, job: JobDescription, feedback: list[str] | None = None
) -> list[str]:
    """Prompt parts for the profile stage."""
    return [
        "The job description analysed:",
        _dump(job.structured),
        "Original CV:",
        _dump(cv),
        "Profile from the original CV:",
        _dump(cv.profile),
        *_feedback_parts(feedback),
    ]


def work_user_prompt(
    cv: CV,
    job: JobDescription,
    work: WorkExperience,
    feedback: list[str] | None = None,
) -> list[str]:
    """Prompt parts for one work entry."""
    return [
        "The job description analysed:",
        _dump(job.structured),
        "Original complete CV:",
        _dump(cv),
        "Work experience you should optimise from the original CV:",
        _dump(work),
        *_feedback_parts(feedback),
    ]


def tinker_user_prompt(
    cv: CV,
    prompt: str,
    section_label: str,
    section: object,
    feedback: list[str] | None = None,
) -> list[str]:
    """Prompt parts for a free-form tinkering request on one CV section."""
    return [
        "Original CV:",
        _dump(cv),
        f"The prompt with the instructions to optimise the {section_label}:",
        prompt,
        f"{section_label.capitalize()} from the original CV:",
        _dump(section),
        *_feedback_parts(feedback),
    ]
