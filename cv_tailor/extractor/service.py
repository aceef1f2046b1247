"""Job description extraction service."""

from __future__ import annotations

import logging

from cv_tailor.extractor.models import JobDescription, JobPosting
from cv_tailor.tailoring.llm import TailoringLLM
from cv_tailor.tailoring.prompts import EXTRACTION_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class JobExtractor:
    """Turns raw posting text into a structured :class:`JobDescription`.

    Attributes:
        llm: Client used for the structured extraction call.
    """

    def __init__(self, llm: TailoringLLM | None = None) -> None:
        self.llm = llm or TailoringLLM()

    async def extract(self, raw: str) -> JobDescription:
        """Extract a job description from scraped or pasted text.

        Args:
            raw: Posting text (HTML or plain).

        Returns:
            The structured job description with the raw text attached.

        Raises:
            ValueError: If ``raw`` is empty.
            LLMError: If the extraction call fails.
        """
        if not raw or not raw.strip():
            raise ValueError("No job description provided")

        logger.info(f"Extracting job description from {len(raw)} characters")
        fragment = await self.llm.ask_structured(
            system_prompt=EXTRACTION_SYSTEM_PROMPT,
            user_prompt=raw,
            output_model=JobPosting,
            model=self.llm.config.llm_extraction_model,
        )
        job = JobDescription(structured=fragment.response, raw=raw)
        logger.info(
            f"Extracted: {job.structured.job_title} at {job.structured.company_name}"
        )
        return job
