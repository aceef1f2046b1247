"""Pytest configuration and shared fixtures."""

import pytest

from cv_tailor.cv.models import CV
from cv_tailor.extractor.models import JobDescription, JobPosting


@pytest.fixture
def sample_cv_data() -> dict:
    """Raw CV mapping as it would appear in cv.yaml."""
    return {
        "name": "Jane Doe",
        "titles": ["Software Engineer", "Backend Developer", "Tech Lead"],
        "contacts": [
            {"type": "email", "value": "jane@example.com"},
            {"type": "github", "value": "janedoe"},
            {"type": "phone", "value": "+44 7700 900123"},
        ],
        "location": "London, UK",
        "profile": "Backend engineer with ten years of experience building APIs.",
        "work": [
            {
                "company": "Acme",
                "position": "Senior Engineer",
                "start": 2021,
                "end": "Present",
                "achievements": ["Led A", "Built B", "Shipped C", "Scaled D", "Cut E"],
                "stack": ["Python", "AWS"],
            },
            {
                "company": "Globex",
                "position": "Engineer",
                "location": "Remote",
                "start": 2018,
                "end": 2021,
                "achievements": ["Did F", "Did G", "Did H", "Did I"],
                "stack": ["Go"],
            },
            {
                "company": "Initech",
                "position": "Junior Engineer",
                "start": 2016,
                "end": 2018,
                "achievements": ["Did J", "Did K", "Did L"],
            },
        ],
        "education": [
            {"title": "BSc Computer Science", "school": "UCL", "end": 2016},
        ],
        "extras": [
            {"title": "Mentor", "organization": "Code Club", "start": 2019},
        ],
    }


@pytest.fixture
def sample_cv(sample_cv_data) -> CV:
    """Validated sample CV."""
    return CV.model_validate(sample_cv_data)


@pytest.fixture
def sample_job() -> JobDescription:
    """Sample extracted job description."""
    return JobDescription(
        structured=JobPosting(
            job_title="Staff Engineer",
            job_description="Build distributed systems.",
            tech_stack=["Python", "Kafka"],
            company_name="Initrode",
            location="London",
            language="EN_UK",
        ),
        raw="<h1>Staff Engineer</h1>",
        created_at="2025-01-02T03:04:05.678Z",
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset config singletons and logging between tests."""
    from cv_tailor.extractor.config import reset_extractor_config
    from cv_tailor.rendering.config import reset_rendering_config
    from cv_tailor.tailoring.config import reset_tailoring_config
    from cv_tailor.utils.logging import reset_logging

    yield
    reset_tailoring_config()
    reset_rendering_config()
    reset_extractor_config()
    reset_logging()
