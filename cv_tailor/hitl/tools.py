"""Human-in-the-loop (HITL) prompt helpers.

This module provides:
- small, testable parsing helpers
- interactive prompt wrappers for the CLI
- the console reviewer used by the convergence loop
"""

from __future__ import annotations

from typing import Any

from cv_tailor.hitl.converge import ReviewAction, ReviewDecision

_REVIEW_ALIASES = {
    "a": ReviewAction.ACCEPT,
    "accept": ReviewAction.ACCEPT,
    "y": ReviewAction.ACCEPT,
    "yes": ReviewAction.ACCEPT,
    "r": ReviewAction.REJECT,
    "reject": ReviewAction.REJECT,
    "n": ReviewAction.REJECT,
    "no": ReviewAction.REJECT,
    "f": ReviewAction.FEEDBACK,
    "feedback": ReviewAction.FEEDBACK,
}


def parse_review_action(answer: str) -> ReviewAction:
    """Parse a review answer into an action."""
    normalized = answer.strip().lower()
    try:
        return _REVIEW_ALIASES[normalized]
    except KeyError:
        raise ValueError(f"Unknown review action: {answer!r}") from None


def parse_choice(answer: str, options: list[str]) -> str:
    """Resolve an answer to one of ``options`` by 1-based index or name."""
    normalized = answer.strip().lower()
    if normalized.isdigit():
        index = int(normalized) - 1
        if 0 <= index < len(options):
            return options[index]
    for option in options:
        if option.lower() == normalized:
            return option
    raise ValueError(f"Expected one of: {', '.join(options)}")


def prompt_free_text(question: str) -> str:
    """Prompt the user for free text."""
    return input(f"{question} > ").strip()


def prompt_choice(question: str, options: list[str]) -> str:
    """Prompt the user to pick one option until valid."""
    for i, option in enumerate(options, start=1):
        print(f"  {i}. {option}")
    while True:
        answer = input(f"{question} > ")
        try:
            return parse_choice(answer, options)
        except ValueError as e:
            print(e)


def prompt_review(fragment: Any = None) -> ReviewDecision:
    """Ask the reviewer to accept, reject or revise the presented fragment.

    Empty feedback is not accepted; the reviewer is asked again.
    """
    while True:
        answer = input("Accept (a), reject (r) or give feedback (f)? > ")
        try:
            action = parse_review_action(answer)
        except ValueError:
            print("Please answer with 'a', 'r' or 'f'.")
            continue

        if action is ReviewAction.ACCEPT:
            return ReviewDecision.accept()
        if action is ReviewAction.REJECT:
            return ReviewDecision.reject()

        feedback = prompt_free_text("Feedback")
        if feedback:
            return ReviewDecision.with_feedback(feedback)
        print("Feedback cannot be empty.")
