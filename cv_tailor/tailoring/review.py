"""Console presentation of tailored sections for human review.

Each presenter prints the original section next to the proposed one,
with scores and the model's notes, so the reviewer can accept, reject
or ask for changes. Tailored (job-matched) and tinkered (prompt-driven)
responses are both supported.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cv_tailor.cv.models import CV
    from cv_tailor.tailoring.models import TailoredFragment


def format_diff(title: str, before: str, after: str) -> str:
    """Format a before/after block."""
    return f"\n* {title}\n\n--- before\n{before}\n+++ after\n{after}\n"


def format_bullets(items: list[str], marker: str = "-") -> str:
    return "\n".join(f"{marker} {item}" for item in items)


def _score(value: float) -> str:
    return f"{value:g}"


def score_label(response: Any) -> str:
    """Describe a response's scores: match before/after, or quality."""
    quality = getattr(response, "optimised_quality_score", None)
    if quality is not None:
        return f"quality: {_score(quality)}"
    return (
        f"match: {_score(response.original_match_score_pct)} -> "
        f"{_score(response.optimised_match_score_pct)}"
    )


class ReviewPresenter:
    """Prints proposed sections against the original CV.

    Attributes:
        cv: The CV being tailored.
        echo: Output function (``print`` by default).
    """

    def __init__(self, cv: CV, echo: Callable[[str], None] = print):
        self.cv = cv
        self.echo = echo

    def _notes(self, response: Any) -> None:
        for heading, attribute in (
            ("Gaps", "gaps"),
            ("Unconfirmed suggestions", "suggestions"),
        ):
            if not hasattr(response, attribute):
                continue
            notes = getattr(response, attribute)
            self.echo(f"{heading}:")
            self.echo(format_bullets(notes) if notes else "  (none)")
            self.echo("")

    def titles(self, fragment: TailoredFragment) -> None:
        """Show a titles proposal."""
        response = fragment.response
        self.echo(
            format_diff(
                f"Titles ({score_label(response)})",
                " | ".join(self.cv.titles),
                " | ".join(response.optimised_titles),
            )
        )
        self._notes(response)

    def profile(self, fragment: TailoredFragment) -> None:
        """Show a profile proposal."""
        response = fragment.response
        self.echo(
            format_diff(
                f"Profile ({score_label(response)})",
                self.cv.profile,
                response.optimised_profile,
            )
        )
        self._notes(response)
        ats_perfect_match = getattr(response, "ats_perfect_match", "")
        if ats_perfect_match:
            self.echo("ATS perfect match:")
            self.echo(ats_perfect_match)
            self.echo("")

    def work_experience(self, fragments: list[TailoredFragment]) -> None:
        """Show proposals for every work entry, scored items included."""
        for i, (work, fragment) in enumerate(zip(self.cv.work, fragments), start=1):
            response = fragment.response
            self.echo(f"[{i}] {work.company} - {work.position}")
            self.echo(
                format_diff(
                    f"Achievements ({score_label(response)})",
                    format_bullets(work.achievements),
                    format_bullets(
                        [
                            f"{item.optimised_achievement} [{_score(item.match_score_pct)}]"
                            for item in response.optimised_achievements
                        ]
                    ),
                )
            )
            self.echo(
                format_diff(
                    "Stack",
                    format_bullets(work.stack or []),
                    format_bullets(
                        [
                            f"{item.optimised_stack} [{_score(item.match_score_pct)}]"
                            for item in response.optimised_stack
                        ]
                    ),
                )
            )
