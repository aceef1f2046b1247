"""Main Tailoring Service.

Runs the tailoring pipeline for one CV and one job description:

0. seed a conversation with the job description
1. titles
2. profile
3. work experience (every entry concurrently)

Each of steps 1-3 is driven to an accepted result by its own
convergence loop, so the reviewer can accept or reject every section
independently. Rejecting any section stops the pipeline.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from cv_tailor.hitl.converge import ProducerContext, Reviewer, converge
from cv_tailor.tailoring.config import TailoringConfig, get_tailoring_config
from cv_tailor.tailoring.llm import TailoringLLM
from cv_tailor.tailoring.models import (
    TailoredCV,
    TailoredFragment,
    TailoredProfile,
    TailoredTitles,
    TailoredWorkExperience,
)
from cv_tailor.tailoring.prompts import (
    PROFILE_SYSTEM_PROMPT,
    SEED_SYSTEM_PROMPT,
    TITLES_SYSTEM_PROMPT,
    WORK_SYSTEM_PROMPT,
    profile_user_prompt,
    render_system_prompt,
    seed_user_prompt,
    titles_user_prompt,
    work_user_prompt,
)
from cv_tailor.tailoring.review import ReviewPresenter

if TYPE_CHECKING:
    from cv_tailor.cv.models import CV
    from cv_tailor.extractor.models import JobDescription

logger = logging.getLogger(__name__)


@dataclass
class TailoringResult:
    """Result of a complete tailoring run.

    ``success`` is False only when the reviewer rejected a section; in
    that case ``rejected_stage`` names it and ``tailored`` is None.
    """

    success: bool
    tailored: Any = None
    rejected_stage: str | None = None

    # Metadata
    completed_at: datetime = field(default_factory=datetime.now)


@dataclass
class Stage:
    """One reviewable section of a pipeline run."""

    name: str
    produce: Callable[[ProducerContext], Awaitable[Any]]
    present: Callable[[Any], None]


def previous_id(context: ProducerContext, default: str | None) -> str | None:
    """Continuation token for a single-fragment stage."""
    if context.prev_result is not None:
        return context.prev_result.response_id
    return default


def previous_ids(
    context: ProducerContext, default: str | None
) -> str | list[str] | None:
    """Continuation tokens for a per-entry stage."""
    if context.prev_result is not None:
        return [fragment.response_id for fragment in context.prev_result]
    return default


async def run_stages(
    stages: list[Stage],
    *,
    reviewer: Reviewer | None,
    accept_all: bool,
) -> dict[str, Any] | str:
    """Converge every stage in order.

    Returns:
        The accepted fragments keyed by stage name, or the name of the
        first rejected stage.
    """
    accepted: dict[str, Any] = {}
    for stage in stages:
        logger.info(f"Optimising {stage.name}")
        result = await converge(
            stage.produce,
            stage.present,
            reviewer,
            auto_accept=accept_all,
            name=stage.name,
        )
        if result is None:
            logger.warning(f"{stage.name.capitalize()} rejected, stopping")
            return stage.name
        accepted[stage.name] = result
    return accepted


class TailoringService:
    """Tailors a CV to a job description through reviewed stages.

    Every stage call takes the continuation token to resume from and
    returns a new fragment carrying its own token; no conversation state
    is kept on the service.
    """

    def __init__(
        self,
        config: TailoringConfig | None = None,
        llm: TailoringLLM | None = None,
    ):
        """Initialize the tailoring service.

        Args:
            config: Optional TailoringConfig. Uses global config if not provided.
            llm: Optional LLM client (built from config if not provided).
        """
        self.config = config or get_tailoring_config()
        self.llm = llm or TailoringLLM(config=self.config)

    async def seed(self, job: JobDescription) -> str:
        """Open the shared conversation and return its continuation token."""
        logger.info("Seeding conversation with job description")
        return await self.llm.create_chat(
            render_system_prompt(SEED_SYSTEM_PROMPT, self.config),
            seed_user_prompt(job),
        )

    async def tailor_titles(
        self,
        previous_response_id: str | None,
        cv: CV,
        job: JobDescription,
        feedback: list[str] | None = None,
    ) -> TailoredFragment[TailoredTitles]:
        """Select and rewrite up to ``max_titles`` headline titles."""
        return await self.llm.ask_structured(
            system_prompt=render_system_prompt(TITLES_SYSTEM_PROMPT, self.config),
            user_prompt=titles_user_prompt(cv, job, feedback),
            output_model=TailoredTitles,
            previous_response_id=previous_response_id,
        )

    async def tailor_profile(
        self,
        previous_response_id: str | None,
        cv: CV,
        job: JobDescription,
        feedback: list[str] | None = None,
    ) -> TailoredFragment[TailoredProfile]:
        """Rewrite the profile paragraph within the configured budget."""
        return await self.llm.ask_structured(
            system_prompt=render_system_prompt(PROFILE_SYSTEM_PROMPT, self.config),
            user_prompt=profile_user_prompt(cv, job, feedback),
            output_model=TailoredProfile,
            previous_response_id=previous_response_id,
        )

    async def tailor_work_experience(
        self,
        previous_response_ids: str | list[str] | None,
        cv: CV,
        job: JobDescription,
        feedback: list[str] | None = None,
    ) -> list[TailoredFragment[TailoredWorkExperience]]:
        """Rewrite every work entry concurrently.

        Args:
            previous_response_ids: One token shared by all entries, or one
                token per entry.

        Returns:
            One fragment per entry, in ``cv.work`` order.

        Raises:
            ValueError: If a token list does not match the entry count.
            LLMError: If any entry fails; no partial result is returned.
        """
        if isinstance(previous_response_ids, list):
            if len(previous_response_ids) != len(cv.work):
                raise ValueError(
                    f"Expected {len(cv.work)} continuation tokens, "
                    f"got {len(previous_response_ids)}"
                )
            tokens = previous_response_ids
        else:
            tokens = [previous_response_ids] * len(cv.work)

        system_prompt = render_system_prompt(WORK_SYSTEM_PROMPT, self.config)
        logger.info(f"Tailoring {len(cv.work)} work entries")
        return list(
            await asyncio.gather(
                *(
                    self.llm.ask_structured(
                        system_prompt=system_prompt,
                        user_prompt=work_user_prompt(cv, job, work, feedback),
                        output_model=TailoredWorkExperience,
                        previous_response_id=token,
                    )
                    for work, token in zip(cv.work, tokens)
                )
            )
        )

    async def run(
        self,
        cv: CV,
        job: JobDescription,
        *,
        reviewer: Reviewer | None = None,
        accept_all: bool = False,
        presenter: ReviewPresenter | None = None,
    ) -> TailoringResult:
        """Run the full pipeline.

        Args:
            cv: CV to tailor.
            job: Target job description.
            reviewer: Decides on each proposal; required unless accept_all.
            accept_all: Accept the first proposal of every stage.
            presenter: Shows proposals (console by default).

        Returns:
            TailoringResult with the TailoredCV, or the rejected stage.

        Raises:
            LLMError: If any model call fails.
        """
        presenter = presenter or ReviewPresenter(cv)
        seed_id = await self.seed(job)

        stages = [
            Stage(
                "titles",
                lambda ctx: self.tailor_titles(
                    previous_id(ctx, seed_id), cv, job, list(ctx.feedback)
                ),
                presenter.titles,
            ),
            Stage(
                "profile",
                lambda ctx: self.tailor_profile(
                    previous_id(ctx, seed_id), cv, job, list(ctx.feedback)
                ),
                presenter.profile,
            ),
            Stage(
                "work experience",
                lambda ctx: self.tailor_work_experience(
                    previous_ids(ctx, seed_id), cv, job, list(ctx.feedback)
                ),
                presenter.work_experience,
            ),
        ]
        outcome = await run_stages(stages, reviewer=reviewer, accept_all=accept_all)
        if isinstance(outcome, str):
            return TailoringResult(success=False, rejected_stage=outcome)

        tailored = TailoredCV(
            titles=outcome["titles"].response,
            profile=outcome["profile"].response,
            work_experience=[
                fragment.response for fragment in outcome["work experience"]
            ],
        )
        logger.info("Tailoring complete")
        return TailoringResult(success=True, tailored=tailored)
