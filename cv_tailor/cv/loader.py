"""CV loading and validation.

Loads the CV from YAML (or JSON) and validates it against the
:class:`~cv_tailor.cv.models.CV` schema before anything else runs.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from cv_tailor.cv.models import CV
from cv_tailor.utils.io import load_structured_file

logger = logging.getLogger(__name__)

# ctx keys pydantic attaches to constraint errors, in display order.
_CONSTRAINT_LABELS = (
    ("expected", "Allowed values"),
    ("min_length", "Minimum"),
    ("max_length", "Maximum"),
    ("ge", "Minimum"),
    ("gt", "Greater than"),
    ("le", "Maximum"),
    ("lt", "Less than"),
    ("pattern", "Pattern"),
)

# Error types where the expected kind is implied by the type name.
_TYPE_ERROR_SUFFIX = "_type"


class CVValidationError(ValueError):
    """Raised when a CV file does not match the schema."""

    def __init__(self, path: Path, error: ValidationError):
        self.path = path
        self.error = error
        super().__init__(f"Invalid CV {path}: {error.error_count()} validation error(s)")

    def report(self) -> str:
        """Human-readable, multi-line description of every issue."""
        return format_validation_error(self.error)


def _format_path(loc: tuple) -> str:
    if not loc:
        return "root"
    return ".".join(str(part) for part in loc)


def _describe_received(value: object) -> str:
    text = repr(value)
    if len(text) > 80:
        text = text[:77] + "..."
    return f"{text} ({type(value).__name__})"


def format_validation_error(error: ValidationError) -> str:
    """Format a pydantic ``ValidationError`` for CLI output.

    Each issue lists the dotted field path, the message, what was received
    and, where pydantic reports it, what was expected.
    """
    issues = error.errors()
    plural = "s" if len(issues) != 1 else ""
    lines = ["Validation Failed", f"{len(issues)} error{plural} found:", ""]

    for index, issue in enumerate(issues, start=1):
        lines.append(f"  [{index}] {_format_path(issue.get('loc', ()))}")
        lines.append(f"      {issue.get('msg', 'Invalid value')}")

        error_type = str(issue.get("type", ""))
        if error_type.endswith(_TYPE_ERROR_SUFFIX):
            lines.append(f"      Expected: {error_type[: -len(_TYPE_ERROR_SUFFIX)]}")
        if error_type != "missing" and "input" in issue:
            lines.append(f"      Received: {_describe_received(issue['input'])}")

        ctx = issue.get("ctx") or {}
        for key, label in _CONSTRAINT_LABELS:
            if key in ctx:
                lines.append(f"      {label}: {ctx[key]}")

        lines.append("")

    return "\n".join(lines)


def load_cv(path: Path | str = "cv.yaml") -> CV:
    """Load and validate a CV document.

    Args:
        path: Path to a YAML or JSON CV file.

    Returns:
        The validated CV.

    Raises:
        FileNotFoundError: If the file is missing.
        ValueError: If the file cannot be parsed.
        CVValidationError: If the content does not match the schema.
    """
    cv_path = Path(path)
    data = load_structured_file(cv_path)

    try:
        cv = CV.model_validate(data)
    except ValidationError as e:
        raise CVValidationError(cv_path, e) from e

    logger.info(f"Loaded CV for {cv.name} with {len(cv.work)} work entries")
    return cv
