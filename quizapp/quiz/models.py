"""
Database models for quiz functionality.

Supports three question types:
- single_choice: options, exactly one correct
- multiple_choice: options, at least one correct
- text_based: free-text answer compared case-insensitively
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy.dialects import mysql

from quizapp import db
from quizapp.quiz.records import OptionRecord, QuestionRecord, QuizRecord


def generate_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored in the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Microsecond precision on MySQL keeps created_at usable as an ordering tiebreak
Timestamp = db.DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")


class Quiz(db.Model):
    """
    Model for quizzes.

    A quiz owns its questions; deleting it deletes them and their options.
    """
    __tablename__ = "quizzes"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    title = db.Column(db.String(200), nullable=False)
    created_at = db.Column(Timestamp, default=utcnow, nullable=False, index=True)

    # Relationships
    questions = db.relationship(
        "Question", backref="quiz", cascade="all, delete-orphan",
        order_by="Question.order_index",
    )

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    def to_record(self) -> QuizRecord:
        return QuizRecord(id=self.id, title=self.title, created_at=self.created_at)


class Question(db.Model):
    """
    Model for quiz questions.

    For text_based questions correct_answer stores the expected answer.
    For choice questions correct_answer is not used, use QuestionOption.is_correct.
    """
    __tablename__ = "quiz_questions"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    quiz_id = db.Column(db.String(36), db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    question_type = db.Column(db.String(50), nullable=False)
    question_text = db.Column(db.String(300), nullable=False)
    order_index = db.Column(db.Integer, nullable=False, default=0)  # Position within the quiz
    correct_answer = db.Column(db.String(300), nullable=True)
    created_at = db.Column(Timestamp, default=utcnow, nullable=False)

    # Relationships
    options = db.relationship(
        "QuestionOption", backref="question", cascade="all, delete-orphan",
        order_by="QuestionOption.order_index",
    )

    __table_args__ = (
        db.Index('ix_quiz_questions_quiz_order', 'quiz_id', 'order_index'),
    )

    def __repr__(self) -> str:
        return f"<Question {self.id}: {self.question_type}>"

    def to_record(self) -> QuestionRecord:
        return QuestionRecord(
            id=self.id,
            quiz_id=self.quiz_id,
            text=self.question_text,
            type=self.question_type,
            order=self.order_index,
            correct_text_answer=self.correct_answer,
            options=tuple(option.to_record() for option in self.options),
        )


class QuestionOption(db.Model):
    """
    Model for choice question options.
    Not used for text_based questions.
    """
    __tablename__ = "quiz_question_options"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    question_id = db.Column(db.String(36), db.ForeignKey("quiz_questions.id", ondelete='CASCADE'), nullable=False, index=True)
    option_text = db.Column(db.Text, nullable=False)
    is_correct = db.Column(db.Boolean, default=False, nullable=False)
    order_index = db.Column(db.Integer, nullable=False, default=0)  # Authoring position

    __table_args__ = (
        db.Index('ix_question_options_question_order', 'question_id', 'order_index'),
    )

    def __repr__(self) -> str:
        return f"<QuestionOption {self.id}: {self.option_text[:50]}>"

    def to_record(self) -> OptionRecord:
        return OptionRecord(
            id=self.id,
            question_id=self.question_id,
            text=self.option_text,
            is_correct=self.is_correct,
        )
