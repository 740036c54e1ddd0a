"""
Test cases for request payload parsing.
"""
import pytest

from quizapp.quiz.payloads import (
    MultipleChoicePayload,
    OptionPayload,
    SingleChoicePayload,
    SubmissionValidationError,
    TextBasedPayload,
    parse_question_payload,
    parse_submission,
)
from quizapp.quiz.records import SubmittedAnswer
from quizapp.quiz.validation import QuestionValidationError, RejectionReason


class TestQuestionPayload:
    """Question payloads are parsed into one variant per type."""

    def test_single_choice(self):
        payload = parse_question_payload({
            'text': 'Pick one', 'type': 'single_choice', 'order': 2,
            'options': [{'text': 'A', 'isCorrect': True}, {'text': 'B', 'isCorrect': False}],
        })
        assert isinstance(payload, SingleChoicePayload)
        assert payload.type == 'single_choice'
        assert payload.order == 2
        assert payload.options == (OptionPayload('A', True), OptionPayload('B', False))

    def test_multiple_choice_drops_correct_text_answer(self):
        payload = parse_question_payload({
            'text': 'Pick some', 'type': 'multiple_choice', 'order': 0,
            'correctTextAnswer': 'ignored',
            'options': [{'text': 'A', 'isCorrect': True}],
        })
        assert isinstance(payload, MultipleChoicePayload)
        assert not hasattr(payload, 'correct_text_answer')

    def test_text_based_drops_options(self):
        payload = parse_question_payload({
            'text': 'Capital?', 'type': 'text_based', 'order': 1,
            'correctTextAnswer': 'Paris',
            'options': [{'text': 'A', 'isCorrect': True}],
        })
        assert payload == TextBasedPayload(text='Capital?', order=1, correct_text_answer='Paris')
        assert not hasattr(payload, 'options')

    def test_rejection_raises_with_reason(self):
        with pytest.raises(QuestionValidationError) as exc_info:
            parse_question_payload({'text': 'Pick one', 'type': 'single_choice', 'order': 0, 'options': []})
        assert exc_info.value.reason == RejectionReason.MISSING_OPTIONS
        assert str(exc_info.value) == RejectionReason.MISSING_OPTIONS.message

    @pytest.mark.parametrize('order', [None, -1, 1.5, '0', True])
    def test_invalid_order(self, order):
        data = {'text': 'Capital?', 'type': 'text_based', 'correctTextAnswer': 'Paris', 'order': order}
        with pytest.raises(QuestionValidationError) as exc_info:
            parse_question_payload(data)
        assert exc_info.value.reason == RejectionReason.INVALID_ORDER

    def test_authoring_rules_are_checked_before_order(self):
        with pytest.raises(QuestionValidationError) as exc_info:
            parse_question_payload({'text': '', 'type': 'text_based', 'order': -1})
        assert exc_info.value.reason == RejectionReason.EMPTY_QUESTION_TEXT


class TestSubmission:
    """Submission bodies must match {answers: [...]}."""

    def test_valid_submission(self):
        answers = parse_submission({'answers': [
            {'questionId': 'q1', 'selectedOptionIds': ['b', 'a']},
            {'questionId': 'q2', 'textAnswer': 'Berlin'},
            {'questionId': 'q3'},
        ]})
        assert answers == [
            SubmittedAnswer(question_id='q1', selected_option_ids=('b', 'a')),
            SubmittedAnswer(question_id='q2', text_answer='Berlin'),
            SubmittedAnswer(question_id='q3'),
        ]

    def test_empty_answers(self):
        assert parse_submission({'answers': []}) == []

    @pytest.mark.parametrize('body', [
        None,
        [],
        {},
        {'answers': 'q1'},
        {'answers': ['q1']},
        {'answers': [{'selectedOptionIds': ['a']}]},
        {'answers': [{'questionId': 1}]},
        {'answers': [{'questionId': 'q1', 'selectedOptionIds': 'a'}]},
        {'answers': [{'questionId': 'q1', 'selectedOptionIds': [1, 2]}]},
        {'answers': [{'questionId': 'q1', 'textAnswer': 5}]},
        {'answers': [{'questionId': 'q1', 'textAnswer': 'x' * 301}]},
    ])
    def test_malformed_submission(self, body):
        with pytest.raises(SubmissionValidationError):
            parse_submission(body)

    def test_error_names_the_entry(self):
        with pytest.raises(SubmissionValidationError, match='Answer 2'):
            parse_submission({'answers': [{'questionId': 'q1'}, {'questionId': None}]})
