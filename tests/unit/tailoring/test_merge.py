"""Unit tests for merging tailored sections into a CV."""

import logging

from cv_tailor.tailoring.merge import merge
from cv_tailor.tailoring.models import (
    ScoredAchievement,
    ScoredStackItem,
    TailoredCV,
    TailoredProfile,
    TailoredTitles,
    TailoredWorkExperience,
    TinkeredCV,
    TinkeredProfile,
    TinkeredTitles,
    TinkeredWorkExperience,
)


def make_work(achievements, stack=()) -> TailoredWorkExperience:
    return TailoredWorkExperience(
        original_match_score_pct=40,
        optimised_match_score_pct=80,
        optimised_achievements=[
            ScoredAchievement(optimised_achievement=text, match_score_pct=score)
            for text, score in achievements
        ],
        optimised_stack=[
            ScoredStackItem(optimised_stack=text, match_score_pct=score)
            for text, score in stack
        ],
    )


def make_tailored(work) -> TailoredCV:
    return TailoredCV(
        titles=TailoredTitles(
            original_match_score_pct=30,
            optimised_match_score_pct=90,
            optimised_titles=["Staff Engineer", "Platform Lead"],
        ),
        profile=TailoredProfile(
            original_match_score_pct=30,
            optimised_match_score_pct=90,
            optimised_profile="Tailored profile.",
        ),
        work_experience=work,
    )


class TestMerge:
    """Tests for merge()."""

    def test_replaces_titles_and_profile(self, sample_cv):
        tailored = make_tailored([make_work([]) for _ in sample_cv.work])

        merged = merge(sample_cv, tailored)

        assert merged.titles == ["Staff Engineer", "Platform Lead"]
        assert merged.profile == "Tailored profile."

    def test_passes_other_sections_through(self, sample_cv):
        tailored = make_tailored([make_work([("x", 1)]) for _ in sample_cv.work])

        merged = merge(sample_cv, tailored)

        assert merged.name == sample_cv.name
        assert merged.contacts == sample_cv.contacts
        assert merged.location == sample_cv.location
        assert merged.education == sample_cv.education
        assert merged.extras == sample_cv.extras
        assert len(merged.work) == len(sample_cv.work)
        for original, entry in zip(sample_cv.work, merged.work):
            assert entry.company == original.company
            assert entry.position == original.position
            assert entry.start == original.start

    def test_sorts_achievements_and_stack_by_score(self, sample_cv):
        work = [
            make_work(
                [("low", 10), ("high", 90), ("mid", 50)],
                [("Go", 20), ("Python", 95)],
            ),
            make_work([]),
            make_work([]),
        ]

        merged = merge(sample_cv, make_tailored(work))

        assert merged.work[0].achievements == ["high", "mid", "low"]
        assert merged.work[0].stack == ["Python", "Go"]

    def test_equal_scores_keep_producer_order(self, sample_cv):
        work = [
            make_work([("first", 50), ("top", 70), ("second", 50), ("third", 50)]),
            make_work([]),
            make_work([]),
        ]

        merged = merge(sample_cv, make_tailored(work))

        assert merged.work[0].achievements == ["top", "first", "second", "third"]

    def test_missing_fragments_empty_the_entry(self, sample_cv, caplog):
        """Entries beyond the tailored list end up with no content."""
        tailored = make_tailored([make_work([("only", 60)], [("Rust", 60)])])

        with caplog.at_level(logging.WARNING):
            merged = merge(sample_cv, tailored)

        assert merged.work[0].achievements == ["only"]
        assert merged.work[0].stack == ["Rust"]
        for entry in merged.work[1:]:
            assert entry.achievements == []
            assert entry.stack == []
        assert "unmatched entries" in caplog.text

    def test_does_not_modify_inputs(self, sample_cv):
        before = sample_cv.model_dump()
        tailored = make_tailored([make_work([("b", 1), ("a", 2)]) for _ in sample_cv.work])
        tailored_before = tailored.model_dump()

        merge(sample_cv, tailored)

        assert sample_cv.model_dump() == before
        assert tailored.model_dump() == tailored_before

    def test_accepts_tinkered_cv(self, sample_cv):
        tinkered = TinkeredCV(
            titles=TinkeredTitles(optimised_quality_score=80, optimised_titles=["Lead"]),
            profile=TinkeredProfile(optimised_quality_score=80, optimised_profile="P"),
            work_experience=[
                TinkeredWorkExperience(
                    optimised_quality_score=70,
                    optimised_achievements=[
                        ScoredAchievement(optimised_achievement="a", match_score_pct=10),
                        ScoredAchievement(optimised_achievement="b", match_score_pct=20),
                    ],
                )
            ],
        )

        merged = merge(sample_cv, tinkered)

        assert merged.titles == ["Lead"]
        assert merged.work[0].achievements == ["b", "a"]
