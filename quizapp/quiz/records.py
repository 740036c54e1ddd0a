"""
Plain in-memory records exchanged between the data store and the
validation/scoring engine.

The engine never sees ORM instances: the repository converts rows into
these frozen dataclasses, so the engine can be exercised with fake data.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple

SINGLE_CHOICE = "single_choice"
MULTIPLE_CHOICE = "multiple_choice"
TEXT_BASED = "text_based"

QUESTION_TYPES = (MULTIPLE_CHOICE, SINGLE_CHOICE, TEXT_BASED)

QUIZ_TITLE_MAX_LENGTH = 200
QUESTION_TEXT_MAX_LENGTH = 300
TEXT_ANSWER_MAX_LENGTH = 300


@dataclass(frozen=True)
class QuizRecord:
    id: str
    title: str
    created_at: datetime


@dataclass(frozen=True)
class QuizSummary:
    """A quiz together with the number of questions it owns."""
    quiz: QuizRecord
    question_count: int


@dataclass(frozen=True)
class OptionRecord:
    id: str
    question_id: str
    text: str
    is_correct: bool


@dataclass(frozen=True)
class QuestionRecord:
    """
    A stored question with its options and correct answers.

    `options` is empty for text_based questions; `correct_text_answer`
    is None for choice questions.
    """
    id: str
    quiz_id: str
    text: str
    type: str
    order: int
    correct_text_answer: Optional[str] = None
    options: Tuple[OptionRecord, ...] = ()

    @property
    def correct_option_ids(self) -> Tuple[str, ...]:
        return tuple(option.id for option in self.options if option.is_correct)


@dataclass(frozen=True)
class SubmittedAnswer:
    """One entry of a learner's submission."""
    question_id: str
    selected_option_ids: Optional[Tuple[str, ...]] = None
    text_answer: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SubmittedAnswer":
        """
        Build an answer from its camelCase wire representation.

        A selectedOptionIds value that is not a list counts as no selection.
        """
        selected = data.get("selectedOptionIds")
        return cls(
            question_id=data.get("questionId"),
            selected_option_ids=tuple(selected) if isinstance(selected, (list, tuple)) else None,
            text_answer=data.get("textAnswer"),
        )
