"""Unit tests for shrinking and the page-fit loop."""

import pytest

from cv_tailor.cv.models import CV
from cv_tailor.rendering.browser import PageMeasurement
from cv_tailor.rendering.fit import (
    MAX_SHRINK_ATTEMPTS,
    PageFitError,
    PageFitStatus,
    ShrinkBudgetExceededError,
    fit_to_page,
    shrink,
)


def counts(cv: CV) -> list[int]:
    return [len(work.achievements) for work in cv.work]


def make_cv(*achievement_counts: int) -> CV:
    return CV(
        name="Jane Doe",
        location="London",
        profile="Profile",
        work=[
            {
                "company": f"Company {i}",
                "position": "Engineer",
                "start": "2020",
                "end": "2021",
                "achievements": [f"achievement {i}.{j}" for j in range(n)],
            }
            for i, n in enumerate(achievement_counts)
        ],
    )


def measurement(overflow: bool) -> PageMeasurement:
    return PageMeasurement.from_heights(1200.0 if overflow else 900.0, 1000.0)


class TestShrink:
    """Tests for the shrink transform."""

    def test_attempt_zero_is_noop(self):
        cv = make_cv(5, 4)
        assert shrink(cv, 0) is cv

    def test_trims_every_secondary_entry_first(self):
        cv = make_cv(5, 4, 3, 2)

        assert counts(shrink(cv, 1)) == [5, 3, 2, 2]

    def test_trims_first_entry_when_secondaries_at_floor(self):
        cv = make_cv(5, 2, 2)

        assert counts(shrink(cv, 1)) == [4, 2, 2]

    def test_removes_trailing_achievement(self):
        cv = make_cv(3)

        shrunk = shrink(cv, 1)

        assert shrunk.work[0].achievements == cv.work[0].achievements[:-1]

    def test_returns_unchanged_at_floor(self):
        cv = make_cv(2, 2, 1)

        assert counts(shrink(cv, 1)) == [2, 2, 1]

    def test_monotonic_and_first_entry_preserved(self):
        cv = make_cv(6, 5, 4, 3)
        previous_total = sum(counts(cv))

        for attempt in range(MAX_SHRINK_ATTEMPTS):
            cv = shrink(cv, attempt)
            current = counts(cv)
            assert sum(current) <= previous_total
            assert all(current[0] >= other for other in current[1:])
            assert all(n >= 2 for n in current)
            previous_total = sum(current)

        assert counts(cv) == [2, 2, 2, 2]

    def test_respects_custom_floor(self):
        cv = make_cv(4, 4)

        for attempt in range(6):
            cv = shrink(cv, attempt, min_achievements=3)

        assert counts(cv) == [3, 3]

    def test_raises_past_budget(self):
        with pytest.raises(ShrinkBudgetExceededError):
            shrink(make_cv(5), MAX_SHRINK_ATTEMPTS)

    def test_does_not_modify_input(self):
        cv = make_cv(5, 4)
        shrink(cv, 1)
        assert counts(cv) == [5, 4]


class TestFitToPage:
    """Tests for the render / measure / shrink loop."""

    @pytest.mark.asyncio
    async def test_fits_after_three_overflows(self):
        """Overflow on attempts 0-2, fit on attempt 3: four renders, FITS."""
        rendered: list[CV] = []
        outcomes = iter([True, True, True, False])

        def render(cv):
            rendered.append(cv)
            return f"<html>{len(rendered)}</html>"

        async def measure(markup):
            return measurement(next(outcomes))

        cv = make_cv(6, 6, 6)
        result = await fit_to_page(cv, render, measure)

        assert result.status is PageFitStatus.FITS
        assert len(rendered) == 4
        assert result.attempts == 4
        assert result.cv is rendered[3]
        assert result.markup == "<html>4</html>"
        assert counts(result.cv) == [6, 3, 3]

    @pytest.mark.asyncio
    async def test_single_entry_shrinks_to_two(self):
        """One entry with five achievements shrinks 5-4-3-2 and fits."""
        measured_counts: list[int] = []

        def render(cv):
            return str(len(cv.work[0].achievements))

        async def measure(markup):
            count = int(markup)
            measured_counts.append(count)
            return measurement(count > 2)

        result = await fit_to_page(make_cv(5), render, measure)

        assert result.status is PageFitStatus.FITS
        assert measured_counts == [5, 4, 3, 2]
        assert result.attempts == 4
        assert len(result.cv.work[0].achievements) == 2

    @pytest.mark.asyncio
    async def test_first_fit_stops_immediately(self):
        calls = 0

        async def measure(markup):
            nonlocal calls
            calls += 1
            return measurement(False)

        cv = make_cv(5, 5)
        result = await fit_to_page(cv, lambda c: "html", measure)

        assert calls == 1
        assert result.cv is cv

    @pytest.mark.asyncio
    async def test_multipage_accepts_first_overflow(self):
        calls = 0

        async def measure(markup):
            nonlocal calls
            calls += 1
            return measurement(True)

        result = await fit_to_page(
            make_cv(5, 5), lambda c: "html", measure, allow_multipage=True
        )

        assert result.status is PageFitStatus.ACCEPTED_OVERFLOW
        assert result.succeeded
        assert calls == 1

    @pytest.mark.asyncio
    async def test_fails_when_budget_exhausted(self):
        calls = 0

        async def measure(markup):
            nonlocal calls
            calls += 1
            return measurement(True)

        result = await fit_to_page(make_cv(5, 5), lambda c: "html", measure)

        assert result.status is PageFitStatus.FAILED
        assert not result.succeeded
        assert calls == MAX_SHRINK_ATTEMPTS
        with pytest.raises(PageFitError):
            result.raise_for_status()

    @pytest.mark.asyncio
    async def test_async_renderer_is_awaited(self):
        async def render(cv):
            return "async html"

        async def measure(markup):
            assert markup == "async html"
            return measurement(False)

        result = await fit_to_page(make_cv(3), render, measure)

        assert result.markup == "async html"

    @pytest.mark.asyncio
    async def test_custom_budget_and_shrinker(self):
        attempts: list[int] = []

        def shrinker(cv, attempt, **kwargs):
            attempts.append(attempt)
            assert kwargs == {"max_attempts": 3, "min_achievements": 2}
            return cv

        async def measure(markup):
            return measurement(True)

        result = await fit_to_page(
            make_cv(5), lambda c: "html", measure, max_attempts=3, shrinker=shrinker
        )

        assert attempts == [0, 1, 2]
        assert result.status is PageFitStatus.FAILED


class TestPageMeasurement:
    """Tests for PageMeasurement."""

    def test_from_heights_within_page(self):
        m = PageMeasurement.from_heights(1000.0, 1000.0)
        assert not m.exceeds_one_page
        assert m.page_count == 1

    def test_from_heights_overflow(self):
        m = PageMeasurement.from_heights(2100.0, 1000.0)
        assert m.exceeds_one_page
        assert m.page_count == 3
