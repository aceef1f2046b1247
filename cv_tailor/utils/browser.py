"""Headless Chromium helpers shared by scraping and page rendering."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from playwright.async_api import Browser, async_playwright

# Environment override used when Playwright's bundled Chromium is unavailable.
CHROMIUM_PATH_ENV = "CHROMIUM_PATH"


@asynccontextmanager
async def launch_browser(
    *, headless: bool = True, executable_path: str | None = None
) -> AsyncIterator[Browser]:
    """Launch Chromium and close it on every exit path.

    Args:
        headless: Run without a visible window.
        executable_path: Chromium binary; falls back to ``$CHROMIUM_PATH``,
            then to Playwright's bundled browser.
    """
    executable = executable_path or os.getenv(CHROMIUM_PATH_ENV) or None
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=headless, executable_path=executable
        )
        try:
            yield browser
        finally:
            await browser.close()
