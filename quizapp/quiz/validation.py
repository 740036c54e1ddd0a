"""
Question-authoring validation rules.

A proposed question is checked before anything is written. Checks run in
a fixed order and the first failing check decides the rejection reason,
so a given payload always yields the same single error message.
"""
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from quizapp.quiz.records import (
    MULTIPLE_CHOICE,
    QUESTION_TEXT_MAX_LENGTH,
    QUESTION_TYPES,
    QUIZ_TITLE_MAX_LENGTH,
    SINGLE_CHOICE,
    TEXT_ANSWER_MAX_LENGTH,
    TEXT_BASED,
)


class RejectionReason(str, Enum):
    """Reasons a question payload can be rejected."""

    EMPTY_QUESTION_TEXT = "EmptyQuestionText"
    QUESTION_TEXT_TOO_LONG = "QuestionTextTooLong"
    INVALID_QUESTION_TYPE = "InvalidQuestionType"
    MISSING_CORRECT_TEXT_ANSWER = "MissingCorrectTextAnswer"
    CORRECT_TEXT_ANSWER_TOO_LONG = "CorrectTextAnswerTooLong"
    MISSING_OPTIONS = "MissingOptions"
    SINGLE_CHOICE_REQUIRES_EXACTLY_ONE_CORRECT = "SingleChoiceRequiresExactlyOneCorrect"
    MULTIPLE_CHOICE_REQUIRES_AT_LEAST_ONE_CORRECT = "MultipleChoiceRequiresAtLeastOneCorrect"
    EMPTY_OPTION_TEXT = "EmptyOptionText"
    INVALID_ORDER = "InvalidOrder"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    RejectionReason.EMPTY_QUESTION_TEXT: "Question text is required",
    RejectionReason.QUESTION_TEXT_TOO_LONG:
        f"Question must be {QUESTION_TEXT_MAX_LENGTH} characters or less",
    RejectionReason.INVALID_QUESTION_TYPE:
        "Invalid question type. Must be: " + ", ".join(QUESTION_TYPES),
    RejectionReason.MISSING_CORRECT_TEXT_ANSWER: "Text-based questions require a correct answer",
    RejectionReason.CORRECT_TEXT_ANSWER_TOO_LONG:
        f"Text-based answers must be {TEXT_ANSWER_MAX_LENGTH} characters or less",
    RejectionReason.MISSING_OPTIONS: "Choice questions require options",
    RejectionReason.SINGLE_CHOICE_REQUIRES_EXACTLY_ONE_CORRECT:
        "Single choice questions must have exactly one correct answer",
    RejectionReason.MULTIPLE_CHOICE_REQUIRES_AT_LEAST_ONE_CORRECT:
        "Multiple choice questions must have at least one correct answer",
    RejectionReason.EMPTY_OPTION_TEXT: "Option text is required",
    RejectionReason.INVALID_ORDER: "Question order must be a non-negative integer",
}


class QuestionValidationError(ValueError):
    """Raised when a question payload is rejected."""

    def __init__(self, reason: RejectionReason, index: Optional[int] = None):
        self.reason = reason
        self.index = index
        message = reason.message
        if index is not None:
            message = f"Question {index + 1}: {message}"
        super().__init__(message)


def _string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _option_field(option: Any, key: str) -> Any:
    return option.get(key) if isinstance(option, Mapping) else None


def _is_correct(option: Any) -> bool:
    return _option_field(option, "isCorrect") is True


def validate_question_payload(data: Mapping[str, Any]) -> Tuple[bool, Optional[RejectionReason]]:
    """
    Decide whether a question creation payload may be persisted.

    The payload is the camelCase wire object
    ``{text, type, order, correctTextAnswer?, options?}``. No other context
    is consulted. A text_based payload that also carries ``options`` is
    accepted; the options are ignored.

    Args:
        data: Proposed question payload

    Returns:
        Tuple of (is_valid, reason). reason is None when the payload is valid.
    """
    if not isinstance(data, Mapping):
        data = {}

    text = _string(data.get("text"))
    if not text:
        return False, RejectionReason.EMPTY_QUESTION_TEXT
    if len(text) > QUESTION_TEXT_MAX_LENGTH:
        return False, RejectionReason.QUESTION_TEXT_TOO_LONG

    question_type = data.get("type")
    if not isinstance(question_type, str) or question_type not in QUESTION_TYPES:
        return False, RejectionReason.INVALID_QUESTION_TYPE

    if question_type == TEXT_BASED:
        answer = _string(data.get("correctTextAnswer"))
        if not answer:
            return False, RejectionReason.MISSING_CORRECT_TEXT_ANSWER
        if len(answer) > TEXT_ANSWER_MAX_LENGTH:
            return False, RejectionReason.CORRECT_TEXT_ANSWER_TOO_LONG
        return True, None

    options = data.get("options")
    if not isinstance(options, list) or not options:
        return False, RejectionReason.MISSING_OPTIONS

    correct_count = sum(1 for option in options if _is_correct(option))
    if question_type == SINGLE_CHOICE and correct_count != 1:
        return False, RejectionReason.SINGLE_CHOICE_REQUIRES_EXACTLY_ONE_CORRECT
    if question_type == MULTIPLE_CHOICE and correct_count < 1:
        return False, RejectionReason.MULTIPLE_CHOICE_REQUIRES_AT_LEAST_ONE_CORRECT

    if any(not _string(_option_field(option, "text")) for option in options):
        return False, RejectionReason.EMPTY_OPTION_TEXT

    return True, None


def validate_order(value: Any) -> bool:
    """Question order must be a non-negative integer (booleans excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_quiz_title(title: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate a quiz title.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(title, str) or not title:
        return False, "Quiz title is required"
    if len(title) > QUIZ_TITLE_MAX_LENGTH:
        return False, f"Title must be less than {QUIZ_TITLE_MAX_LENGTH} characters"
    return True, None

