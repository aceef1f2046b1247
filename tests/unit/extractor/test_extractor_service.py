"""Tests for the job description extraction service."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from cv_tailor.extractor.models import JobDescription, JobPosting
from cv_tailor.extractor.service import JobExtractor
from cv_tailor.tailoring.config import TailoringConfig
from cv_tailor.tailoring.llm import LLMRefusalError
from cv_tailor.tailoring.models import TailoredFragment
from cv_tailor.utils.io import write_artifact


def make_llm(posting: JobPosting) -> MagicMock:
    llm = MagicMock()
    llm.config = TailoringConfig(_env_file=None, llm_extraction_model="gpt-5")
    llm.ask_structured = AsyncMock(
        return_value=TailoredFragment(response_id="resp", response=posting)
    )
    return llm


class TestJobExtractor:
    """Tests for JobExtractor.extract()."""

    @pytest.mark.asyncio
    async def test_extracts_structured_posting(self):
        posting = JobPosting(
            job_title="Data Engineer", job_description="Pipelines", company_name="Hooli"
        )
        llm = make_llm(posting)

        job = await JobExtractor(llm=llm).extract("<h1>Data Engineer</h1>")

        assert isinstance(job, JobDescription)
        assert job.structured == posting
        assert job.raw == "<h1>Data Engineer</h1>"
        assert job.created_at.endswith("Z")
        kwargs = llm.ask_structured.call_args.kwargs
        assert kwargs["output_model"] is JobPosting
        assert kwargs["model"] == "gpt-5"
        assert kwargs["user_prompt"] == "<h1>Data Engineer</h1>"

    @pytest.mark.asyncio
    async def test_empty_input_rejected(self):
        llm = make_llm(JobPosting(job_title="x", job_description="y", company_name="z"))

        with pytest.raises(ValueError):
            await JobExtractor(llm=llm).extract("   ")
        llm.ask_structured.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_llm_errors_propagate(self):
        llm = make_llm(JobPosting(job_title="x", job_description="y", company_name="z"))
        llm.ask_structured.side_effect = LLMRefusalError("refused")

        with pytest.raises(LLMRefusalError):
            await JobExtractor(llm=llm).extract("text")


class TestJobDescription:
    """Tests for JobDescription serialization."""

    def test_label(self, sample_job):
        assert sample_job.label == "Staff Engineer-at-Initrode-2025-01-02T03:04:05.678Z"

    def test_load_json_reads_written_artifact(self, tmp_path, sample_job):
        path = write_artifact(tmp_path / "jd", f"jd-{sample_job.label}", sample_job)

        assert JobDescription.load_json(path) == sample_job

    def test_posting_defaults(self):
        posting = JobPosting(job_title="x", job_description="y", company_name="z")

        assert posting.ats_type == "other"
        assert posting.language == "OTHER"
        assert posting.tech_stack == []
