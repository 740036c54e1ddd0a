"""
Quiz API routes.

Authors can:
- Create quizzes, optionally with an initial batch of questions
- Add questions to a quiz

Quiz-takers can:
- List quizzes and view a quiz
- Fetch a quiz's questions without the correct answers
- Submit answers and get a score
"""
from typing import Optional

from flask import current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from quizapp import db
from quizapp.quiz import quiz_bp
from quizapp.quiz.payloads import SubmissionValidationError, parse_question_payload, parse_submission
from quizapp.quiz.repository import QuizNotFoundError, QuizRepository
from quizapp.quiz.scoring import score_submission
from quizapp.quiz.serializers import (
    serialize_public_question,
    serialize_question,
    serialize_quiz,
    serialize_quiz_summary,
)
from quizapp.quiz.validation import QuestionValidationError, validate_quiz_title


def get_repository() -> QuizRepository:
    return QuizRepository(db.session)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _error(message: str, status: int, reason: Optional[str] = None):
    body = {'success': False, 'error': message}
    if reason:
        body['reason'] = reason
    return jsonify(body), status


def _quiz_not_found():
    return _error('Quiz not found', 404)


@quiz_bp.route('/quizzes', methods=['POST'])
def create_quiz():
    """
    Create a new quiz.

    Request body:
    {
        "title": "Capitals",
        "questions": [  // Optional: order is assigned from the list position
            {"text": "Capital of France?", "type": "text_based", "correctTextAnswer": "Paris"}
        ]
    }
    """
    data = _json_body()

    title = data.get('title')
    is_valid, error = validate_quiz_title(title)
    if not is_valid:
        return _error(error, 400, 'InvalidQuizTitle')

    questions = data.get('questions')
    if questions is not None and not isinstance(questions, list):
        return _error('questions must be a list', 400, 'InvalidQuestions')

    repository = get_repository()
    try:
        if questions:
            quiz = repository.create_quiz_with_questions(title, questions)
        else:
            quiz = repository.create_quiz(title)
    except QuestionValidationError as e:
        current_app.logger.warning(f"Quiz creation rejected: question {e.index}, reason={e.reason.value}")
        return _error(str(e), 400, e.reason.value)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error creating quiz")
        return _error('Failed to create quiz', 500)

    current_app.logger.info(f"Quiz created: ID={quiz.id}, questions={len(questions or [])}")
    return jsonify(serialize_quiz(quiz)), 201


@quiz_bp.route('/quizzes', methods=['GET'])
def list_quizzes():
    """List all quizzes with their question counts, newest first."""
    try:
        summaries = get_repository().list_quizzes_with_question_count()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error fetching quizzes")
        return _error('Failed to fetch quizzes', 500)

    return jsonify([serialize_quiz_summary(summary) for summary in summaries]), 200


@quiz_bp.route('/quizzes/<quiz_id>', methods=['GET'])
def get_quiz(quiz_id):
    try:
        quiz = get_repository().get_quiz(quiz_id)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"Error fetching quiz {quiz_id}")
        return _error('Failed to fetch quiz', 500)

    if quiz is None:
        return _quiz_not_found()
    return jsonify(serialize_quiz(quiz)), 200


@quiz_bp.route('/quizzes/<quiz_id>/questions', methods=['POST'])
def add_question(quiz_id):
    """
    Add a question to a quiz.

    Request body for single_choice / multiple_choice:
    {
        "text": "Which are primes?",
        "type": "multiple_choice",
        "order": 0,
        "options": [
            {"text": "2", "isCorrect": true},
            {"text": "4", "isCorrect": false},
            {"text": "5", "isCorrect": true}
        ]
    }

    Request body for text_based:
    {
        "text": "What is the capital of Germany?",
        "type": "text_based",
        "order": 1,
        "correctTextAnswer": "Berlin"
    }
    """
    repository = get_repository()
    try:
        if repository.get_quiz(quiz_id) is None:
            return _quiz_not_found()

        try:
            payload = parse_question_payload(_json_body())
        except QuestionValidationError as e:
            current_app.logger.warning(f"Question rejected for quiz {quiz_id}: reason={e.reason.value}")
            return _error(str(e), 400, e.reason.value)

        question = repository.create_question_with_options(quiz_id, payload)
    except QuizNotFoundError:
        return _quiz_not_found()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"Error creating question for quiz {quiz_id}")
        return _error('Failed to create question', 500)

    current_app.logger.info(f"Question created: ID={question.id}, quiz={quiz_id}, type={question.type}")
    return jsonify(serialize_question(question)), 201


@quiz_bp.route('/quizzes/<quiz_id>/questions', methods=['GET'])
def get_quiz_questions(quiz_id):
    """
    Get all questions for a quiz.
    Only returns questions and options, not answers (to prevent cheating).
    """
    repository = get_repository()
    try:
        if repository.get_quiz(quiz_id) is None:
            return _quiz_not_found()
        questions = repository.get_questions_by_quiz_id(quiz_id)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"Error fetching questions for quiz {quiz_id}")
        return _error('Failed to fetch questions', 500)

    return jsonify([serialize_public_question(question) for question in questions]), 200


@quiz_bp.route('/quizzes/<quiz_id>/submit', methods=['POST'])
def submit_quiz(quiz_id):
    """
    Grade a submission and return the score.

    Request body:
    {
        "answers": [
            {"questionId": "...", "selectedOptionIds": ["...", "..."]},
            {"questionId": "...", "textAnswer": "Berlin"}
        ]
    }

    Response: {"score": 2, "total": 3}
    """
    repository = get_repository()
    try:
        if repository.get_quiz(quiz_id) is None:
            return _quiz_not_found()

        try:
            answers = parse_submission(request.get_json(silent=True))
        except SubmissionValidationError as e:
            return _error(str(e), 400, 'InvalidSubmission')

        questions = repository.get_questions_by_quiz_id(quiz_id)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"Error submitting quiz {quiz_id}")
        return _error('Failed to submit quiz', 500)

    result = score_submission(questions, answers)
    current_app.logger.info(f"Quiz submitted: quiz={quiz_id}, score={result.score}/{result.total}")
    return jsonify(result.to_dict()), 200
