"""Job description scraping and extraction."""

from cv_tailor.extractor.config import ExtractorConfig, get_extractor_config
from cv_tailor.extractor.models import JobDescription, JobPosting
from cv_tailor.extractor.scraper import ScrapeError, extract_text_from_html, scrape_url
from cv_tailor.extractor.service import JobExtractor

__all__ = [
    "ExtractorConfig",
    "get_extractor_config",
    "JobDescription",
    "JobPosting",
    "JobExtractor",
    "ScrapeError",
    "extract_text_from_html",
    "scrape_url",
]
