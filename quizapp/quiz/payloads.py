"""
Typed request payloads.

Question payloads are parsed into one variant per question type, so the
"options XOR correct text answer" rule holds by construction:

- SingleChoicePayload / MultipleChoicePayload carry options only
- TextBasedPayload carries a correct text answer only
"""
from dataclasses import dataclass
from typing import Any, ClassVar, List, Mapping, Tuple, Union

from quizapp.quiz.records import (
    MULTIPLE_CHOICE,
    SINGLE_CHOICE,
    TEXT_ANSWER_MAX_LENGTH,
    TEXT_BASED,
    SubmittedAnswer,
)
from quizapp.quiz.validation import (
    QuestionValidationError,
    RejectionReason,
    validate_order,
    validate_question_payload,
)


@dataclass(frozen=True)
class OptionPayload:
    text: str
    is_correct: bool


@dataclass(frozen=True)
class SingleChoicePayload:
    type: ClassVar[str] = SINGLE_CHOICE

    text: str
    order: int
    options: Tuple[OptionPayload, ...]


@dataclass(frozen=True)
class MultipleChoicePayload:
    type: ClassVar[str] = MULTIPLE_CHOICE

    text: str
    order: int
    options: Tuple[OptionPayload, ...]


@dataclass(frozen=True)
class TextBasedPayload:
    type: ClassVar[str] = TEXT_BASED

    text: str
    order: int
    correct_text_answer: str


QuestionPayload = Union[SingleChoicePayload, MultipleChoicePayload, TextBasedPayload]

_CHOICE_PAYLOADS = {
    SINGLE_CHOICE: SingleChoicePayload,
    MULTIPLE_CHOICE: MultipleChoicePayload,
}


class SubmissionValidationError(ValueError):
    """Raised when a quiz submission body is malformed."""


def parse_question_payload(data: Mapping[str, Any]) -> QuestionPayload:
    """
    Validate a question creation payload and build its typed variant.

    Args:
        data: camelCase wire object ``{text, type, order, correctTextAnswer?, options?}``

    Returns:
        The payload variant matching ``data["type"]``

    Raises:
        QuestionValidationError: if the authoring rules reject the payload
            or ``order`` is not a non-negative integer
    """
    is_valid, reason = validate_question_payload(data)
    if not is_valid:
        raise QuestionValidationError(reason)

    order = data.get("order")
    if not validate_order(order):
        raise QuestionValidationError(RejectionReason.INVALID_ORDER)

    if data["type"] == TEXT_BASED:
        return TextBasedPayload(
            text=data["text"],
            order=order,
            correct_text_answer=data["correctTextAnswer"],
        )

    options = tuple(
        OptionPayload(text=option["text"], is_correct=option.get("isCorrect") is True)
        for option in data["options"]
    )
    return _CHOICE_PAYLOADS[data["type"]](text=data["text"], order=order, options=options)


def parse_submission(data: Any) -> List[SubmittedAnswer]:
    """
    Parse a quiz submission body ``{answers: [{questionId, selectedOptionIds?, textAnswer?}]}``.

    Raises:
        SubmissionValidationError: if the body does not have that shape
    """
    if not isinstance(data, Mapping):
        raise SubmissionValidationError("Request body must be a JSON object")

    entries = data.get("answers")
    if not isinstance(entries, list):
        raise SubmissionValidationError("answers must be a list")

    answers = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise SubmissionValidationError(f"Answer {index + 1}: must be an object")

        if not isinstance(entry.get("questionId"), str):
            raise SubmissionValidationError(f"Answer {index + 1}: questionId is required")

        selected = entry.get("selectedOptionIds")
        if selected is not None and (
            not isinstance(selected, list)
            or not all(isinstance(option_id, str) for option_id in selected)
        ):
            raise SubmissionValidationError(
                f"Answer {index + 1}: selectedOptionIds must be a list of option ids"
            )

        text_answer = entry.get("textAnswer")
        if text_answer is not None:
            if not isinstance(text_answer, str):
                raise SubmissionValidationError(f"Answer {index + 1}: textAnswer must be a string")
            if len(text_answer) > TEXT_ANSWER_MAX_LENGTH:
                raise SubmissionValidationError(
                    f"Answer {index + 1}: textAnswer must be {TEXT_ANSWER_MAX_LENGTH} characters or less"
                )

        answers.append(SubmittedAnswer.from_dict(entry))

    return answers
