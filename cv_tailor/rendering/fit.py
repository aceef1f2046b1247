"""Fitting a CV onto one page.

The loop renders and measures the CV, and while it overflows, removes
trailing achievements and tries again. Content is removed from later
work entries first; the first (most recent) entry is trimmed last. No
entry is shrunk below a floor of achievements.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cv_tailor.cv.models import CV
    from cv_tailor.rendering.browser import PageMeasurement

logger = logging.getLogger(__name__)

MAX_SHRINK_ATTEMPTS = 16
MIN_ACHIEVEMENTS = 2


class PageFitError(Exception):
    """Raised when a CV cannot be fitted onto one page."""

    def __init__(self, message: str, result: PageFitResult | None = None):
        super().__init__(message)
        self.result = result


class ShrinkBudgetExceededError(PageFitError):
    """Raised when shrinking is requested past the attempt budget."""


def shrink(
    cv: CV,
    attempt: int,
    *,
    max_attempts: int = MAX_SHRINK_ATTEMPTS,
    min_achievements: int = MIN_ACHIEVEMENTS,
) -> CV:
    """Return ``cv`` with at most one more line removed per work entry.

    Attempt 0 returns the CV unchanged. Later attempts drop the last
    achievement of every non-first entry above the floor; once none is
    left above it, they drop the last achievement of the first entry.
    When nothing can be removed the CV comes back unchanged.

    Raises:
        ShrinkBudgetExceededError: If ``attempt`` reaches ``max_attempts``.
    """
    if attempt >= max_attempts:
        raise ShrinkBudgetExceededError(
            f"Attempt to shrink CV exceeded {max_attempts} attempts"
        )
    if attempt == 0:
        return cv

    def above_floor(index: int) -> bool:
        return len(cv.work[index].achievements) > min_achievements

    secondary = [i for i in range(1, len(cv.work)) if above_floor(i)]
    if secondary:
        targets = set(secondary)
    elif cv.work and above_floor(0):
        targets = {0}
    else:
        return cv

    work = [
        entry.model_copy(update={"achievements": entry.achievements[:-1]})
        if index in targets
        else entry
        for index, entry in enumerate(cv.work)
    ]
    return cv.model_copy(update={"work": work})


class PageFitStatus(str, Enum):
    """Terminal states of the page-fit loop."""

    FITS = "fits"
    ACCEPTED_OVERFLOW = "accepted_overflow"
    FAILED = "failed"


@dataclass(frozen=True)
class PageFitResult:
    """Outcome of :func:`fit_to_page`.

    ``cv`` and ``markup`` are those of the last attempt, ``attempts``
    the number of render/measure rounds made.
    """

    status: PageFitStatus
    cv: CV
    markup: str
    measurement: PageMeasurement
    attempts: int

    @property
    def succeeded(self) -> bool:
        return self.status is not PageFitStatus.FAILED

    def raise_for_status(self) -> None:
        """Raise PageFitError if the loop failed."""
        if self.status is PageFitStatus.FAILED:
            raise PageFitError(
                f"CV does not fit on one page after {self.attempts} attempts "
                f"({self.measurement.describe()})",
                self,
            )


async def fit_to_page(
    cv: CV,
    render: Callable[[CV], str | Awaitable[str]],
    measure: Callable[[str], Awaitable[PageMeasurement]],
    *,
    allow_multipage: bool = False,
    max_attempts: int = MAX_SHRINK_ATTEMPTS,
    min_achievements: int = MIN_ACHIEVEMENTS,
    shrinker: Callable[..., CV] = shrink,
) -> PageFitResult:
    """Shrink and re-measure ``cv`` until it fits one page.

    Each attempt shrinks the previous attempt's CV, renders it and
    measures it. With ``allow_multipage`` the first overflowing render is
    accepted as is.

    Args:
        cv: CV to fit.
        render: Turns a CV into markup.
        measure: Measures markup against the page.
        allow_multipage: Accept overflow instead of shrinking.
        max_attempts: Render/measure rounds before giving up.
        min_achievements: Achievement floor per work entry.
        shrinker: Shrink transform, called as ``shrinker(cv, attempt, ...)``.

    Returns:
        PageFitResult in state FITS, ACCEPTED_OVERFLOW or FAILED.
    """
    current = cv
    result: PageFitResult | None = None

    for attempt in range(max_attempts):
        current = shrinker(
            current,
            attempt,
            max_attempts=max_attempts,
            min_achievements=min_achievements,
        )
        markup = render(current)
        if inspect.isawaitable(markup):
            markup = await markup
        measurement = await measure(markup)

        if not measurement.exceeds_one_page:
            logger.info(f"CV fits on one page (attempt {attempt + 1})")
            return PageFitResult(
                PageFitStatus.FITS, current, markup, measurement, attempt + 1
            )

        if allow_multipage:
            logger.warning(f"CV spans {measurement.describe()}; multi-page allowed")
            return PageFitResult(
                PageFitStatus.ACCEPTED_OVERFLOW, current, markup, measurement, attempt + 1
            )

        logger.info(
            f"CV spans {measurement.describe()}. Shrinking CV (attempt {attempt + 1})"
        )
        result = PageFitResult(
            PageFitStatus.FAILED, current, markup, measurement, attempt + 1
        )

    if result is None:
        raise ValueError("max_attempts must be positive")

    logger.error(f"CV does not fit on one page after {max_attempts} attempts")
    return result
