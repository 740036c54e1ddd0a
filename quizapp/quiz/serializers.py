"""
JSON representations of quiz records.

Two question views exist:
- the author view carries correctTextAnswer and isCorrect
- the public view, served to quiz-takers, carries neither
"""
from typing import Any, Dict

from quizapp.quiz.records import OptionRecord, QuestionRecord, QuizRecord, QuizSummary


def serialize_quiz(quiz: QuizRecord) -> Dict[str, Any]:
    return {
        'id': quiz.id,
        'title': quiz.title,
        'createdAt': quiz.created_at.isoformat() if quiz.created_at else None,
    }


def serialize_quiz_summary(summary: QuizSummary) -> Dict[str, Any]:
    data = serialize_quiz(summary.quiz)
    data['questionCount'] = summary.question_count
    return data


def _serialize_option(option: OptionRecord) -> Dict[str, Any]:
    return {
        'id': option.id,
        'questionId': option.question_id,
        'text': option.text,
    }


def serialize_question(question: QuestionRecord) -> Dict[str, Any]:
    """Author view of a question, including its correct answers."""
    options = []
    for option in question.options:
        option_data = _serialize_option(option)
        option_data['isCorrect'] = option.is_correct
        options.append(option_data)

    return {
        'id': question.id,
        'quizId': question.quiz_id,
        'text': question.text,
        'type': question.type,
        'order': question.order,
        'correctTextAnswer': question.correct_text_answer,
        'options': options,
    }


def serialize_public_question(question: QuestionRecord) -> Dict[str, Any]:
    """Redacted view of a question for quiz-takers (no correct answers)."""
    return {
        'id': question.id,
        'quizId': question.quiz_id,
        'text': question.text,
        'type': question.type,
        'order': question.order,
        'options': [_serialize_option(option) for option in question.options],
    }
