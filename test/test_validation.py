"""
Test cases for question-authoring validation rules.
"""
import pytest

from quizapp.quiz.validation import RejectionReason, validate_question_payload, validate_quiz_title


def choice_payload(question_type, correct_flags, **overrides):
    payload = {
        'text': 'Pick the right ones',
        'type': question_type,
        'order': 0,
        'options': [
            {'text': f'Option {index}', 'isCorrect': flag}
            for index, flag in enumerate(correct_flags)
        ],
    }
    payload.update(overrides)
    return payload


def text_payload(**overrides):
    payload = {
        'text': 'Capital of France?',
        'type': 'text_based',
        'order': 0,
        'correctTextAnswer': 'Paris',
    }
    payload.update(overrides)
    return payload


class TestSingleChoice:
    """Single choice questions need exactly one correct option."""

    @pytest.mark.parametrize('flags', [[True], [True, False], [False, True, False]])
    def test_exactly_one_correct_is_accepted(self, flags):
        assert validate_question_payload(choice_payload('single_choice', flags)) == (True, None)

    @pytest.mark.parametrize('flags', [[False], [False, False], [True, True], [True, True, True]])
    def test_zero_or_several_correct_is_rejected(self, flags):
        is_valid, reason = validate_question_payload(choice_payload('single_choice', flags))
        assert not is_valid
        assert reason == RejectionReason.SINGLE_CHOICE_REQUIRES_EXACTLY_ONE_CORRECT

    def test_missing_options_is_rejected(self):
        payload = choice_payload('single_choice', [])
        assert validate_question_payload(payload) == (False, RejectionReason.MISSING_OPTIONS)
        del payload['options']
        assert validate_question_payload(payload) == (False, RejectionReason.MISSING_OPTIONS)


class TestMultipleChoice:
    """Multiple choice questions need at least one correct option."""

    def test_no_correct_option_is_rejected(self):
        is_valid, reason = validate_question_payload(choice_payload('multiple_choice', [False, False]))
        assert not is_valid
        assert reason == RejectionReason.MULTIPLE_CHOICE_REQUIRES_AT_LEAST_ONE_CORRECT

    @pytest.mark.parametrize('flags', [[True], [True, False], [True, True, False], [True, True]])
    def test_one_or_more_correct_is_accepted(self, flags):
        assert validate_question_payload(choice_payload('multiple_choice', flags)) == (True, None)

    def test_is_correct_must_be_literally_true(self):
        payload = choice_payload('multiple_choice', ['yes', 1])
        assert validate_question_payload(payload) == (
            False, RejectionReason.MULTIPLE_CHOICE_REQUIRES_AT_LEAST_ONE_CORRECT
        )

    def test_empty_option_text_is_rejected(self):
        payload = choice_payload('multiple_choice', [True, False])
        payload['options'][1]['text'] = ''
        assert validate_question_payload(payload) == (False, RejectionReason.EMPTY_OPTION_TEXT)


class TestTextBased:
    """Text-based questions need a correct text answer."""

    def test_valid_payload_is_accepted(self):
        assert validate_question_payload(text_payload()) == (True, None)

    @pytest.mark.parametrize('answer', [None, ''])
    def test_missing_correct_answer_is_rejected(self, answer):
        payload = text_payload(correctTextAnswer=answer)
        assert validate_question_payload(payload) == (False, RejectionReason.MISSING_CORRECT_TEXT_ANSWER)

    def test_absent_correct_answer_is_rejected(self):
        payload = text_payload()
        del payload['correctTextAnswer']
        assert validate_question_payload(payload) == (False, RejectionReason.MISSING_CORRECT_TEXT_ANSWER)

    def test_answer_length_limit(self):
        assert validate_question_payload(text_payload(correctTextAnswer='a' * 300)) == (True, None)
        assert validate_question_payload(text_payload(correctTextAnswer='a' * 301)) == (
            False, RejectionReason.CORRECT_TEXT_ANSWER_TOO_LONG
        )

    def test_extra_options_are_ignored(self):
        payload = text_payload(options=[{'text': '', 'isCorrect': False}])
        assert validate_question_payload(payload) == (True, None)


class TestCheckOrder:
    """The first failing check decides the reason."""

    def test_question_text_checks(self):
        assert validate_question_payload(text_payload(text='')) == (False, RejectionReason.EMPTY_QUESTION_TEXT)
        assert validate_question_payload(text_payload(text=None)) == (False, RejectionReason.EMPTY_QUESTION_TEXT)
        assert validate_question_payload(text_payload(text='q' * 300)) == (True, None)
        assert validate_question_payload(text_payload(text='q' * 301)) == (
            False, RejectionReason.QUESTION_TEXT_TOO_LONG
        )

    def test_empty_text_wins_over_invalid_type(self):
        payload = {'text': '', 'type': 'essay'}
        assert validate_question_payload(payload) == (False, RejectionReason.EMPTY_QUESTION_TEXT)

    def test_long_text_wins_over_invalid_type(self):
        payload = {'text': 'q' * 301, 'type': 'essay'}
        assert validate_question_payload(payload) == (False, RejectionReason.QUESTION_TEXT_TOO_LONG)

    @pytest.mark.parametrize('question_type', ['essay', '', None, 'SINGLE_CHOICE', ['single_choice']])
    def test_unknown_type_is_rejected(self, question_type):
        payload = choice_payload('single_choice', [True], type=question_type)
        assert validate_question_payload(payload) == (False, RejectionReason.INVALID_QUESTION_TYPE)

    def test_correct_count_wins_over_empty_option_text(self):
        payload = choice_payload('single_choice', [True, True])
        payload['options'][0]['text'] = ''
        assert validate_question_payload(payload) == (
            False, RejectionReason.SINGLE_CHOICE_REQUIRES_EXACTLY_ONE_CORRECT
        )

    def test_non_mapping_payload_is_rejected(self):
        assert validate_question_payload(None) == (False, RejectionReason.EMPTY_QUESTION_TEXT)
        assert validate_question_payload(['text']) == (False, RejectionReason.EMPTY_QUESTION_TEXT)

    def test_validation_is_deterministic(self):
        payload = choice_payload('single_choice', [True, True])
        assert validate_question_payload(payload) == validate_question_payload(payload)

    def test_reasons_have_messages(self):
        for reason in RejectionReason:
            assert reason.message


class TestQuizTitle:
    """Quiz titles are required and limited to 200 characters."""

    def test_valid_title(self):
        assert validate_quiz_title('World capitals') == (True, None)
        assert validate_quiz_title('t' * 200) == (True, None)

    @pytest.mark.parametrize('title', [None, '', 42])
    def test_missing_title(self, title):
        assert validate_quiz_title(title) == (False, 'Quiz title is required')

    def test_title_too_long(self):
        is_valid, error = validate_quiz_title('t' * 201)
        assert not is_valid
        assert '200' in error
