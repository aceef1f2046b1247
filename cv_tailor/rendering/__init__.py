"""CV rendering: HTML templating, page fitting and PDF export."""

from cv_tailor.rendering.browser import (
    ChromiumPageEngine,
    PageMeasurement,
    open_page_engine,
)
from cv_tailor.rendering.config import RenderingConfig, get_rendering_config
from cv_tailor.rendering.fit import (
    MAX_SHRINK_ATTEMPTS,
    PageFitError,
    PageFitResult,
    PageFitStatus,
    ShrinkBudgetExceededError,
    fit_to_page,
    shrink,
)
from cv_tailor.rendering.renderer import HTMLRenderer

__all__ = [
    "ChromiumPageEngine",
    "HTMLRenderer",
    "MAX_SHRINK_ATTEMPTS",
    "PageFitError",
    "PageFitResult",
    "PageFitStatus",
    "PageMeasurement",
    "RenderingConfig",
    "ShrinkBudgetExceededError",
    "fit_to_page",
    "get_rendering_config",
    "open_page_engine",
    "shrink",
]
