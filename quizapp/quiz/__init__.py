"""
Quiz module for creating quizzes and taking them.

Authors create quizzes made of single choice, multiple choice and
text-based questions; quiz-takers submit answers and get a score.
"""
from flask import Blueprint

quiz_bp = Blueprint('quiz', __name__)

from quizapp.quiz import routes  # noqa: E402,F401
