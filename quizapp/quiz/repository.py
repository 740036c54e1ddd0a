"""
Data store access for quizzes, questions and options.

The repository receives its SQLAlchemy session from the caller and returns
plain records (see quizapp.quiz.records), never ORM instances.
"""
from typing import Any, List, Mapping, Optional, Sequence, Union

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from quizapp.quiz.models import Question, QuestionOption, Quiz
from quizapp.quiz.payloads import (
    MultipleChoicePayload,
    QuestionPayload,
    SingleChoicePayload,
    TextBasedPayload,
    parse_question_payload,
)
from quizapp.quiz.records import TEXT_BASED, QuestionRecord, QuizRecord, QuizSummary
from quizapp.quiz.validation import QuestionValidationError


class QuizNotFoundError(LookupError):
    """Raised when a quiz id does not exist."""

    def __init__(self, quiz_id: str):
        self.quiz_id = quiz_id
        super().__init__(f"Quiz not found: {quiz_id}")


class QuizRepository:
    """
    Repository over the quiz tables.

    Every write commits on success and rolls back on any database error,
    which is then re-raised unchanged for the caller to report.
    """

    def __init__(self, session: Session):
        self.session = session

    def create_quiz(self, title: str) -> QuizRecord:
        quiz = Quiz(title=title)
        self.session.add(quiz)
        self._commit()
        return quiz.to_record()

    def create_quiz_with_questions(
        self, title: str, payloads: Sequence[Union[QuestionPayload, Mapping[str, Any]]]
    ) -> QuizRecord:
        """
        Create a quiz and an initial batch of questions in one transaction.

        Each question's order is its index in ``payloads``. Every payload is
        validated before anything is written.

        Raises:
            QuestionValidationError: if any payload is rejected; its ``index``
                identifies the offending question
        """
        parsed = []
        for index, payload in enumerate(payloads):
            if isinstance(payload, Mapping):
                payload = dict(payload, order=index)
            try:
                parsed.append(self._as_payload(payload))
            except QuestionValidationError as e:
                raise QuestionValidationError(e.reason, index=index) from e

        quiz = Quiz(title=title)
        self.session.add(quiz)
        for index, payload in enumerate(parsed):
            quiz.questions.append(self._build_question(payload, order=index))
        self._commit()
        return quiz.to_record()

    def get_quiz(self, quiz_id: str) -> Optional[QuizRecord]:
        quiz = self.session.get(Quiz, quiz_id)
        return quiz.to_record() if quiz else None

    def list_quizzes_with_question_count(self) -> List[QuizSummary]:
        """All quizzes with their question counts, newest first."""
        rows = (
            self.session.query(Quiz, func.count(Question.id))
            .outerjoin(Question, Question.quiz_id == Quiz.id)
            .group_by(Quiz.id)
            .order_by(Quiz.created_at.desc())
            .all()
        )
        return [QuizSummary(quiz=quiz.to_record(), question_count=count) for quiz, count in rows]

    def create_question_with_options(
        self, quiz_id: str, payload: Union[QuestionPayload, Mapping[str, Any]]
    ) -> QuestionRecord:
        """
        Create a question and its options atomically.

        Options of a text_based payload are never persisted.

        Raises:
            QuizNotFoundError: if the quiz does not exist
            QuestionValidationError: if a raw payload is rejected
        """
        payload = self._as_payload(payload)
        if self.session.get(Quiz, quiz_id) is None:
            raise QuizNotFoundError(quiz_id)

        question = self._build_question(payload, order=payload.order)
        question.quiz_id = quiz_id
        self.session.add(question)
        self._commit()
        return question.to_record()

    def get_questions_by_quiz_id(self, quiz_id: str) -> List[QuestionRecord]:
        """Questions of a quiz with their options, ordered by position."""
        questions = (
            self.session.query(Question)
            .options(selectinload(Question.options))
            .filter(Question.quiz_id == quiz_id)
            .order_by(Question.order_index, Question.created_at, Question.id)
            .all()
        )
        return [question.to_record() for question in questions]

    @staticmethod
    def _as_payload(payload: Any) -> QuestionPayload:
        if isinstance(payload, (SingleChoicePayload, MultipleChoicePayload, TextBasedPayload)):
            return payload
        return parse_question_payload(payload)

    @staticmethod
    def _build_question(payload: QuestionPayload, order: int) -> Question:
        question = Question(
            question_type=payload.type,
            question_text=payload.text,
            order_index=order,
        )
        if payload.type == TEXT_BASED:
            question.correct_answer = payload.correct_text_answer
        else:
            for index, option in enumerate(payload.options):
                question.options.append(QuestionOption(
                    option_text=option.text,
                    is_correct=option.is_correct,
                    order_index=index,
                ))
        return question

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
