"""
Quiz scoring.

Each question is graded correct or incorrect, with no partial credit:

- text_based: case-insensitive, whitespace-trimmed exact match
- single_choice / multiple_choice: the selected option ids must equal the
  correct option ids, compared as sorted sequences

`total` is always the number of questions in the quiz. A question with no
matching submission entry counts as incorrect.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from quizapp.quiz.records import TEXT_BASED, QuestionRecord, SubmittedAnswer


@dataclass(frozen=True)
class ScoreResult:
    score: int
    total: int

    def to_dict(self) -> Dict[str, int]:
        return {"score": self.score, "total": self.total}


def _normalize_text(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def grade_question(question: QuestionRecord, answer: Optional[SubmittedAnswer]) -> bool:
    """
    Grade a single question.

    Args:
        question: Stored question with its correct answers
        answer: The learner's entry for this question, or None if unanswered

    Returns:
        True if the answer is correct, False otherwise
    """
    if answer is None:
        return False

    if question.type == TEXT_BASED:
        return _normalize_text(question.correct_text_answer) == _normalize_text(answer.text_answer)

    # Duplicated ids are kept, so they cause a length mismatch
    correct_ids = sorted(question.correct_option_ids)
    submitted_ids = sorted(answer.selected_option_ids or ())
    return correct_ids == submitted_ids


def score_submission(
    questions: Sequence[QuestionRecord],
    answers: Iterable[Union[SubmittedAnswer, Mapping[str, Any]]],
) -> ScoreResult:
    """
    Compute the score of a submission against a quiz's questions.

    Entries referencing unknown question ids are ignored. When several
    entries reference the same question, the first one is graded.

    Args:
        questions: Every question of the quiz, with correct answers
        answers: Submitted answers, as SubmittedAnswer or camelCase mappings

    Returns:
        ScoreResult with the number of correct questions and the question count
    """
    answers_by_question = {}
    for answer in answers:
        if isinstance(answer, Mapping):
            answer = SubmittedAnswer.from_dict(answer)
        answers_by_question.setdefault(answer.question_id, answer)

    score = sum(
        1 for question in questions
        if grade_question(question, answers_by_question.get(question.id))
    )
    return ScoreResult(score=score, total=len(questions))
