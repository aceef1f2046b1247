"""Job posting scraper.

Loads a posting in headless Chromium (so JS-rendered boards work) and
reduces the page to lightly-cleaned body HTML for the extraction model.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

from cv_tailor.extractor.config import ExtractorConfig, get_extractor_config
from cv_tailor.utils.browser import launch_browser

logger = logging.getLogger(__name__)

_PAGE_NOISE = (
    "script, style, nav, header, footer, aside, "
    ".advertisement, .ads, .cookie, .social-share"
)
_BODY_NOISE = ("script", "style", "nav", "header", "footer", "noscript", "svg")
_STRIPPED_ATTRIBUTES = ("style", "id", "class")


class ScrapeError(Exception):
    """Raised when a job posting cannot be scraped."""


def extract_text_from_html(html: str) -> str:
    """Strip page chrome and presentation attributes from a posting.

    The result is still HTML: headings and lists carry structure the
    extraction model uses.

    Raises:
        ScrapeError: If the document has no body.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.select(_PAGE_NOISE):
        tag.decompose()

    body = soup.body
    if body is None:
        raise ScrapeError("No body found in HTML")

    for tag in body.find_all(_BODY_NOISE):
        tag.decompose()
    for tag in body.find_all(True):
        for attribute in _STRIPPED_ATTRIBUTES:
            tag.attrs.pop(attribute, None)

    text = body.decode_contents()
    text = re.sub(r"\s+", " ", text)
    text = re.sub(r"\.{3,}", "...", text)
    return text.strip()


async def scrape_url(
    url: str,
    *,
    visualise: bool = False,
    config: ExtractorConfig | None = None,
) -> str:
    """Fetch a job posting and return its cleaned body.

    Args:
        url: Posting URL.
        visualise: Show the browser window while scraping.
        config: Optional ExtractorConfig. Uses global config if not provided.

    Raises:
        ScrapeError: If navigation fails or the page has no body.
    """
    config = config or get_extractor_config()
    logger.info(f"Scraping job description from: {url}")

    async with launch_browser(
        headless=config.headless and not visualise,
        executable_path=config.chromium_path,
    ) as browser:
        page = await browser.new_page(
            user_agent=config.user_agent,
            viewport={"width": config.window_width, "height": config.window_height},
        )
        try:
            await page.goto(url, wait_until="load", timeout=config.timeout_ms)
            html = await page.content()
        except Exception as e:
            raise ScrapeError(f"Failed to load {url}: {e}") from e
        finally:
            await page.close()

    text = extract_text_from_html(html)
    logger.info(f"Scraped {len(text)} characters from {url}")
    return text
