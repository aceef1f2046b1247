"""Human review of generated CV sections."""

from cv_tailor.hitl.converge import (
    ConvergenceLoop,
    LoopState,
    ProducerContext,
    ReviewAction,
    ReviewDecision,
    converge,
)

__all__ = [
    "ConvergenceLoop",
    "LoopState",
    "ProducerContext",
    "ReviewAction",
    "ReviewDecision",
    "converge",
]
