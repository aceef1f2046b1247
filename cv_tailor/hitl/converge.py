"""Accept / reject / feedback loop for human-reviewed generation.

A producer proposes a fragment, a presenter shows it, and a reviewer
decides what happens next. The loop runs until the reviewer accepts or
rejects; there is no iteration cap. Producer errors propagate unchanged.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

FragmentT = TypeVar("FragmentT")


class LoopState(str, Enum):
    """States of a convergence loop."""

    PRODUCER_PENDING = "producer_pending"
    AWAITING_REVIEW = "awaiting_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ReviewAction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    FEEDBACK = "feedback"


@dataclass(frozen=True)
class ReviewDecision:
    """What the reviewer wants done with the presented fragment."""

    action: ReviewAction
    feedback: list[str] = field(default_factory=list)

    @classmethod
    def accept(cls) -> ReviewDecision:
        return cls(ReviewAction.ACCEPT)

    @classmethod
    def reject(cls) -> ReviewDecision:
        return cls(ReviewAction.REJECT)

    @classmethod
    def with_feedback(cls, *feedback: str) -> ReviewDecision:
        notes = [note.strip() for note in feedback if note and note.strip()]
        if not notes:
            raise ValueError("Feedback must contain at least one non-empty note")
        return cls(ReviewAction.FEEDBACK, notes)


@dataclass(frozen=True)
class ProducerContext(Generic[FragmentT]):
    """Input to a producer call.

    ``prev_result`` and ``feedback`` are both empty on the first call. On
    later calls ``feedback`` holds every note given so far, oldest first.
    """

    prev_result: FragmentT | None = None
    feedback: tuple[str, ...] = ()

    @property
    def is_revision(self) -> bool:
        return self.prev_result is not None


Producer = Callable[[ProducerContext[FragmentT]], Awaitable[FragmentT]]
Presenter = Callable[[FragmentT], None]
Reviewer = Callable[[FragmentT], "ReviewDecision | Awaitable[ReviewDecision]"]


class ConvergenceLoop(Generic[FragmentT]):
    """Drives one section to an accepted fragment or a rejection.

    Attributes:
        state: Current loop state.
        iterations: Number of producer calls made so far.
        feedback: Notes accumulated across revisions.
    """

    def __init__(
        self,
        produce: Producer[FragmentT],
        present: Presenter[FragmentT],
        reviewer: Reviewer[FragmentT] | None = None,
        *,
        auto_accept: bool = False,
        name: str = "section",
    ) -> None:
        if reviewer is None and not auto_accept:
            raise ValueError("A reviewer is required unless auto_accept is set")
        self.produce = produce
        self.present = present
        self.reviewer = reviewer
        self.auto_accept = auto_accept
        self.name = name

        self.state = LoopState.PRODUCER_PENDING
        self.iterations = 0
        self.feedback: list[str] = []
        self._fragment: FragmentT | None = None

    async def run(self) -> FragmentT | None:
        """Run the loop to a terminal state.

        Returns:
            The accepted fragment, or None if the reviewer rejected.
        """
        while True:
            if self.state is LoopState.PRODUCER_PENDING:
                await self._produce()
            elif self.state is LoopState.AWAITING_REVIEW:
                await self._review()
            elif self.state is LoopState.ACCEPTED:
                logger.info(f"Accepted {self.name} after {self.iterations} iteration(s)")
                return self._fragment
            else:
                logger.info(f"Rejected {self.name} after {self.iterations} iteration(s)")
                return None

    async def _produce(self) -> None:
        context = ProducerContext(
            prev_result=self._fragment, feedback=tuple(self.feedback)
        )
        self._fragment = await self.produce(context)
        self.iterations += 1
        self.present(self._fragment)

        if self.auto_accept:
            self.state = LoopState.ACCEPTED
        else:
            self.state = LoopState.AWAITING_REVIEW

    async def _review(self) -> None:
        decision = self.reviewer(self._fragment)
        if inspect.isawaitable(decision):
            decision = await decision

        if decision.action is ReviewAction.ACCEPT:
            self.state = LoopState.ACCEPTED
        elif decision.action is ReviewAction.REJECT:
            self.state = LoopState.REJECTED
        else:
            logger.debug(f"Revising {self.name} with feedback: {decision.feedback}")
            self.feedback.extend(decision.feedback)
            self.state = LoopState.PRODUCER_PENDING


async def converge(
    produce: Producer[FragmentT],
    present: Presenter[FragmentT],
    reviewer: Reviewer[FragmentT] | None = None,
    *,
    auto_accept: bool = False,
    name: str = "section",
) -> FragmentT | None:
    """Run a :class:`ConvergenceLoop` and return its outcome."""
    loop = ConvergenceLoop(
        produce, present, reviewer, auto_accept=auto_accept, name=name
    )
    return await loop.run()
