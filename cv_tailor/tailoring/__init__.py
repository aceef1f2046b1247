"""CV tailoring: LLM-driven rewriting of titles, profile and work experience."""

from cv_tailor.tailoring.config import TailoringConfig, get_tailoring_config
from cv_tailor.tailoring.llm import LLMError, LLMParseError, LLMRefusalError, TailoringLLM
from cv_tailor.tailoring.merge import merge
from cv_tailor.tailoring.models import (
    ScoredAchievement,
    ScoredStackItem,
    TailoredCV,
    TailoredFragment,
    TailoredProfile,
    TailoredTitles,
    TailoredWorkExperience,
    TinkeredCV,
)
from cv_tailor.tailoring.review import ReviewPresenter
from cv_tailor.tailoring.service import TailoringResult, TailoringService
from cv_tailor.tailoring.tinker import TinkerService

__all__ = [
    # Config
    "TailoringConfig",
    "get_tailoring_config",
    # LLM
    "TailoringLLM",
    "LLMError",
    "LLMParseError",
    "LLMRefusalError",
    # Models
    "ScoredAchievement",
    "ScoredStackItem",
    "TailoredCV",
    "TailoredFragment",
    "TailoredProfile",
    "TailoredTitles",
    "TailoredWorkExperience",
    "TinkeredCV",
    # Services
    "ReviewPresenter",
    "TailoringResult",
    "TailoringService",
    "TinkerService",
    "merge",
]
