"""Validation rules for categories and financial decisions.

All checks are pure functions that return a ValidationResult instead of
raising, so callers can surface the message and leave state untouched.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

MAX_TITLE_LENGTH = 200
MAX_NOTE_LENGTH = 2000
MAX_OPTION_LENGTH = 200
MAX_OPTIONS_COUNT = 10
MIN_OPTIONS_COUNT = 2
MAX_CATEGORY_NAME_LENGTH = 50
MAX_FUTURE_YEARS = 1
MAX_PAST_YEARS = 10


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation check.

    Attributes:
        is_valid: True if the value passed.
        error_message: Reason for failure, None on success.
    """

    is_valid: bool
    error_message: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        return cls(False, message)

    def __bool__(self) -> bool:
        return self.is_valid


def validate_title(title: str) -> ValidationResult:
    if not title:
        return ValidationResult.failure("Title cannot be empty")
    if len(title) > MAX_TITLE_LENGTH:
        return ValidationResult.failure(
            f"Title must be {MAX_TITLE_LENGTH} characters or less"
        )
    return ValidationResult.success()


def validate_note(note: str) -> ValidationResult:
    if len(note) > MAX_NOTE_LENGTH:
        return ValidationResult.failure(
            f"Note must be {MAX_NOTE_LENGTH} characters or less"
        )
    return ValidationResult.success()


def clean_options(options: List[str]) -> List[str]:
    """Drop empty entries, keeping order."""
    return [option for option in options if option]


def validate_options(options: List[str]) -> ValidationResult:
    """Validate the list of options considered for a decision.

    Empty entries are ignored; the remaining ones must number between 2 and 10
    and each be at most 200 characters long.
    """
    valid_options = clean_options(options)

    if len(valid_options) < MIN_OPTIONS_COUNT:
        return ValidationResult.failure(
            f"At least {MIN_OPTIONS_COUNT} options are required"
        )

    if len(valid_options) > MAX_OPTIONS_COUNT:
        return ValidationResult.failure(
            f"Maximum {MAX_OPTIONS_COUNT} options allowed"
        )

    for option in valid_options:
        if len(option) > MAX_OPTION_LENGTH:
            return ValidationResult.failure(
                f"Each option must be {MAX_OPTION_LENGTH} characters or less"
            )

    return ValidationResult.success()


def validate_date(value: date, today: Optional[date] = None) -> ValidationResult:
    """Check that a decision date lies within the allowed window.

    The window runs from ten years before today to one year after today, both
    boundary dates included.

    Args:
        value: Date to check.
        today: Reference date, defaults to date.today().
    """
    today = today or date.today()

    # Allow planning up to a year ahead
    if value > today + relativedelta(years=MAX_FUTURE_YEARS):
        return ValidationResult.failure(
            f"Date cannot be more than {MAX_FUTURE_YEARS} year in the future"
        )

    if value < today - relativedelta(years=MAX_PAST_YEARS):
        return ValidationResult.failure(
            f"Date cannot be more than {MAX_PAST_YEARS} years in the past"
        )

    return ValidationResult.success()


def validate_category_name(name: str) -> ValidationResult:
    if not name:
        return ValidationResult.failure("Category name cannot be empty")
    if len(name) > MAX_CATEGORY_NAME_LENGTH:
        return ValidationResult.failure(
            f"Category name must be {MAX_CATEGORY_NAME_LENGTH} characters or less"
        )
    return ValidationResult.success()


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_success_rating(rating, allow_unrated: bool = True) -> ValidationResult:
    """Check a success rating.

    0 is the "not yet rated" sentinel and is only accepted when allow_unrated
    is True. Recording an outcome requires a real rating (1-10).
    """
    low = 0 if allow_unrated else 1
    if not _is_int(rating) or not low <= rating <= 10:
        return ValidationResult.failure(
            f"Success rating must be between {low} and 10"
        )
    return ValidationResult.success()


def validate_emotional_state(level) -> ValidationResult:
    if not _is_int(level) or not 1 <= level <= 10:
        return ValidationResult.failure("Emotional state must be between 1 and 10")
    return ValidationResult.success()


def validate_decision(
    title: str,
    decision_date: date,
    options: List[str],
    note: Optional[str] = None,
    emotional_state: int = 5,
    today: Optional[date] = None,
) -> ValidationResult:
    """Run every decision check in form order and return the first failure."""
    checks = [
        lambda: validate_title(title),
        lambda: validate_date(decision_date, today),
        lambda: validate_options(options),
        lambda: validate_note(note) if note else ValidationResult.success(),
        lambda: validate_emotional_state(emotional_state),
    ]
    for check in checks:
        result = check()
        if not result.is_valid:
            return result
    return ValidationResult.success()
