"""Folding tailored sections back into the original CV."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cv_tailor.cv.models import CV
    from cv_tailor.tailoring.models import (
        ScoredAchievement,
        ScoredStackItem,
        TailoredCV,
        TinkeredCV,
    )

logger = logging.getLogger(__name__)


def rank_achievements(items: list[ScoredAchievement]) -> list[str]:
    """Achievement texts by descending score; ties keep their order."""
    ranked = sorted(items, key=lambda item: item.match_score_pct, reverse=True)
    return [item.optimised_achievement for item in ranked]


def rank_stack(items: list[ScoredStackItem]) -> list[str]:
    """Stack tags by descending score; ties keep their order."""
    ranked = sorted(items, key=lambda item: item.match_score_pct, reverse=True)
    return [item.optimised_stack for item in ranked]


def merge(original: CV, tailored: TailoredCV | TinkeredCV) -> CV:
    """Overlay tailored sections onto the original CV.

    Titles and profile are replaced. Work entry ``i`` takes its
    achievements and stack from ``tailored.work_experience[i]``, ranked by
    score with scores dropped. An entry with no tailored counterpart ends
    up with empty achievements and stack. Every other section and every
    other work field is kept as is.

    The inputs are not modified.
    """
    tailored_work = tailored.work_experience
    if len(tailored_work) != len(original.work):
        logger.warning(
            f"Tailored work experience has {len(tailored_work)} entries but the "
            f"CV has {len(original.work)}; unmatched entries will be emptied"
        )

    work = []
    for index, entry in enumerate(original.work):
        if index < len(tailored_work):
            achievements = rank_achievements(tailored_work[index].optimised_achievements)
            stack = rank_stack(tailored_work[index].optimised_stack)
        else:
            achievements, stack = [], []
        work.append(entry.model_copy(update={"achievements": achievements, "stack": stack}))

    return original.model_copy(
        update={
            "titles": list(tailored.titles.optimised_titles),
            "profile": tailored.profile.optimised_profile,
            "work": work,
        }
    )
