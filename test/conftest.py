"""
Pytest configuration and fixtures for testing.
Each test gets a fresh application backed by an in-memory SQLite database.
"""
import os

# Set test environment variables BEFORE importing the app package,
# which reads its configuration at import time
os.environ['FLASK_ENV'] = 'testing'
os.environ['SECRET_KEY'] = 'test-secret-key-4d1f0c9a'
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ['API_PREFIX'] = '/api'
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ['SESSION_COOKIE_SECURE'] = 'false'

import pytest

from quizapp import create_app, db
from quizapp.quiz.records import (
    MULTIPLE_CHOICE,
    SINGLE_CHOICE,
    TEXT_BASED,
    OptionRecord,
    QuestionRecord,
)
from quizapp.quiz.repository import QuizRepository


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app({'TESTING': True})
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def repository(app):
    """Repository bound to the test database session."""
    with app.app_context():
        yield QuizRepository(db.session)


@pytest.fixture
def sample_questions():
    """
    Three-question quiz used by the scoring scenarios:
    Q1 single_choice (A correct), Q2 multiple_choice (B and C correct),
    Q3 text_based ("Berlin").
    """
    return [
        QuestionRecord(
            id='q1', quiz_id='quiz', text='Pick A', type=SINGLE_CHOICE, order=0,
            options=(
                OptionRecord(id='A', question_id='q1', text='A', is_correct=True),
                OptionRecord(id='X', question_id='q1', text='X', is_correct=False),
            ),
        ),
        QuestionRecord(
            id='q2', quiz_id='quiz', text='Pick B and C', type=MULTIPLE_CHOICE, order=1,
            options=(
                OptionRecord(id='B', question_id='q2', text='B', is_correct=True),
                OptionRecord(id='C', question_id='q2', text='C', is_correct=True),
                OptionRecord(id='D', question_id='q2', text='D', is_correct=False),
            ),
        ),
        QuestionRecord(
            id='q3', quiz_id='quiz', text='Capital of Germany?', type=TEXT_BASED, order=2,
            correct_text_answer='Berlin',
        ),
    ]
