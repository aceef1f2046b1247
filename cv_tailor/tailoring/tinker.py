"""Free-form CV tinkering.

Rewrites the titles, profile and work experience according to a
user prompt instead of a job description. Sections go through the same
reviewed stages as tailoring, without a seeded conversation.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from cv_tailor.hitl.converge import Reviewer
from cv_tailor.tailoring.config import TailoringConfig, get_tailoring_config
from cv_tailor.tailoring.llm import TailoringLLM
from cv_tailor.tailoring.models import (
    TailoredFragment,
    TinkeredCV,
    TinkeredProfile,
    TinkeredTitles,
    TinkeredWorkExperience,
)
from cv_tailor.tailoring.prompts import (
    TINKER_PROFILE_SYSTEM_PROMPT,
    TINKER_TITLES_SYSTEM_PROMPT,
    TINKER_WORK_SYSTEM_PROMPT,
    render_system_prompt,
    tinker_user_prompt,
)
from cv_tailor.tailoring.review import ReviewPresenter
from cv_tailor.tailoring.service import (
    Stage,
    TailoringResult,
    previous_id,
    previous_ids,
    run_stages,
)

if TYPE_CHECKING:
    from cv_tailor.cv.models import CV

logger = logging.getLogger(__name__)


class TinkerService:
    """Applies a free-form prompt to a CV through reviewed stages."""

    def __init__(
        self,
        config: TailoringConfig | None = None,
        llm: TailoringLLM | None = None,
    ):
        self.config = config or get_tailoring_config()
        self.llm = llm or TailoringLLM(config=self.config)

    @property
    def model(self) -> str:
        return self.config.llm_extraction_model

    async def tinker_titles(
        self,
        cv: CV,
        prompt: str,
        previous_response_id: str | None = None,
        feedback: list[str] | None = None,
    ) -> TailoredFragment[TinkeredTitles]:
        return await self.llm.ask_structured(
            system_prompt=render_system_prompt(TINKER_TITLES_SYSTEM_PROMPT, self.config),
            user_prompt=tinker_user_prompt(cv, prompt, "titles", cv.titles, feedback),
            output_model=TinkeredTitles,
            previous_response_id=previous_response_id,
            model=self.model,
        )

    async def tinker_profile(
        self,
        cv: CV,
        prompt: str,
        previous_response_id: str | None = None,
        feedback: list[str] | None = None,
    ) -> TailoredFragment[TinkeredProfile]:
        return await self.llm.ask_structured(
            system_prompt=render_system_prompt(TINKER_PROFILE_SYSTEM_PROMPT, self.config),
            user_prompt=tinker_user_prompt(cv, prompt, "profile", cv.profile, feedback),
            output_model=TinkeredProfile,
            previous_response_id=previous_response_id,
            model=self.model,
        )

    async def tinker_work_experience(
        self,
        cv: CV,
        prompt: str,
        previous_response_ids: str | list[str] | None = None,
        feedback: list[str] | None = None,
    ) -> list[TailoredFragment[TinkeredWorkExperience]]:
        """Rewrite every work entry concurrently, one fragment per entry."""
        if isinstance(previous_response_ids, list):
            tokens = previous_response_ids
        else:
            tokens = [previous_response_ids] * len(cv.work)

        system_prompt = render_system_prompt(TINKER_WORK_SYSTEM_PROMPT, self.config)
        return list(
            await asyncio.gather(
                *(
                    self.llm.ask_structured(
                        system_prompt=system_prompt,
                        user_prompt=tinker_user_prompt(
                            cv, prompt, "work experience", work, feedback
                        ),
                        output_model=TinkeredWorkExperience,
                        previous_response_id=token,
                        model=self.model,
                    )
                    for work, token in zip(cv.work, tokens, strict=True)
                )
            )
        )

    async def run(
        self,
        cv: CV,
        prompt: str,
        *,
        reviewer: Reviewer | None = None,
        accept_all: bool = False,
        presenter: ReviewPresenter | None = None,
    ) -> TailoringResult:
        """Tinker every section; ``tailored`` holds a TinkeredCV on success."""
        if not prompt or not prompt.strip():
            raise ValueError("Tinkering prompt must not be empty")

        presenter = presenter or ReviewPresenter(cv)
        stages = [
            Stage(
                "titles",
                lambda ctx: self.tinker_titles(
                    cv, prompt, previous_id(ctx, None), list(ctx.feedback)
                ),
                presenter.titles,
            ),
            Stage(
                "profile",
                lambda ctx: self.tinker_profile(
                    cv, prompt, previous_id(ctx, None), list(ctx.feedback)
                ),
                presenter.profile,
            ),
            Stage(
                "work experience",
                lambda ctx: self.tinker_work_experience(
                    cv, prompt, previous_ids(ctx, None), list(ctx.feedback)
                ),
                presenter.work_experience,
            ),
        ]
        outcome = await run_stages(stages, reviewer=reviewer, accept_all=accept_all)
        if isinstance(outcome, str):
            return TailoringResult(success=False, rejected_stage=outcome)

        tinkered = TinkeredCV(
            titles=outcome["titles"].response,
            profile=outcome["profile"].response,
            work_experience=[
                fragment.response for fragment in outcome["work experience"]
            ],
        )
        logger.info("Tinkering complete")
        return TailoringResult(success=True, tailored=tinkered)
