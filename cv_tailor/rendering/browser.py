"""Page measurement and PDF export in headless Chromium.

The same engine measures the layout and prints the PDF, so a CV that
measures as one page also prints as one page.
"""

from __future__ import annotations

import logging
import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from playwright.async_api import Browser, Page

from cv_tailor.rendering.config import RenderingConfig, get_rendering_config
from cv_tailor.utils.browser import launch_browser

logger = logging.getLogger(__name__)

_CONTENT_HEIGHT_JS = (
    "() => Math.max(document.body.scrollHeight, document.documentElement.scrollHeight)"
)


@dataclass(frozen=True)
class PageMeasurement:
    """Rendered size of a CV against one printable page."""

    content_height: float
    usable_height: float
    page_count: int
    exceeds_one_page: bool

    @classmethod
    def from_heights(cls, content_height: float, usable_height: float) -> PageMeasurement:
        return cls(
            content_height=content_height,
            usable_height=usable_height,
            page_count=max(1, math.ceil(content_height / usable_height)),
            exceeds_one_page=content_height > usable_height,
        )

    def describe(self) -> str:
        return (
            f"{self.page_count} page(s), height: {self.content_height:.0f}px, "
            f"max: {self.usable_height:.0f}px"
        )


class ChromiumPageEngine:
    """Measures and prints rendered CV markup.

    Each call opens its own page and closes it before returning, on
    success and on error alike.
    """

    def __init__(self, browser: Browser, config: RenderingConfig | None = None):
        self.browser = browser
        self.config = config or get_rendering_config()

    @asynccontextmanager
    async def _page(self, markup: str) -> AsyncIterator[Page]:
        page = await self.browser.new_page(
            viewport={
                "width": self.config.content_width_px,
                "height": math.floor(self.config.usable_height_px),
            }
        )
        try:
            await page.set_content(markup, wait_until="load")
            yield page
        finally:
            await page.close()

    async def measure(self, markup: str) -> PageMeasurement:
        """Lay out the markup and compare its height with the usable page height."""
        async with self._page(markup) as page:
            content_height = await page.evaluate(_CONTENT_HEIGHT_JS)
        measurement = PageMeasurement.from_heights(
            float(content_height), self.config.usable_height_px
        )
        logger.debug(f"Measured CV: {measurement.describe()}")
        return measurement

    async def export_pdf(self, markup: str, path: Path) -> Path:
        """Print the markup to an A4 PDF at ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        async with self._page(markup) as page:
            await page.pdf(
                path=str(path),
                format="A4",
                print_background=True,
                margin=self.config.pdf_margins(),
            )
        logger.info(f"Exported PDF: {path}")
        return path


@asynccontextmanager
async def open_page_engine(
    config: RenderingConfig | None = None,
) -> AsyncIterator[ChromiumPageEngine]:
    """Launch Chromium for the duration of a page-fit run and export."""
    config = config or get_rendering_config()
    async with launch_browser(
        headless=config.headless, executable_path=config.chromium_path
    ) as browser:
        yield ChromiumPageEngine(browser, config)
