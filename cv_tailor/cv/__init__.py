"""CV document schema and loading."""

from cv_tailor.cv.loader import CVValidationError, format_validation_error, load_cv
from cv_tailor.cv.models import CV, Contact, Education, Extra, WorkExperience

__all__ = [
    "CV",
    "Contact",
    "Education",
    "Extra",
    "WorkExperience",
    "CVValidationError",
    "format_validation_error",
    "load_cv",
]
