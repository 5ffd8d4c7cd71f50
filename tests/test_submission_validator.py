import pytest

from app.constants.constants import ReasonCode
from app.services.SubmissionValidator import validate_submission


@pytest.mark.parametrize("form_data", [None, {}, [], "user_name=Kolja", ["user_name"]])
def test_absent_or_empty_input_is_rejected(form_data):
    outcome = validate_submission(form_data)
    assert not outcome.accepted
    assert outcome.reason_code == ReasonCode.MISSING_INPUT
    assert outcome.human_message == "No data was sent"


@pytest.mark.parametrize(
    "form_data, reason_code, human_message",
    [
        ({"user_email": "a@b.com", "message": "hi"}, ReasonCode.MISSING_NAME, 'The "Name" field is empty'),
        ({"user_name": "", "user_email": "a@b.com", "message": "hi"}, ReasonCode.MISSING_NAME, 'The "Name" field is empty'),
        ({"user_name": "Kolja", "message": "hi"}, ReasonCode.MISSING_EMAIL, 'The "E-Mail" field is empty'),
        ({"user_name": "Kolja", "user_email": None, "message": "hi"}, ReasonCode.MISSING_EMAIL, 'The "E-Mail" field is empty'),
        ({"user_name": "Kolja", "user_email": "a@b.com"}, ReasonCode.MISSING_MESSAGE, "No message was sent"),
        ({"user_name": "Kolja", "user_email": "a@b.com", "message": ""}, ReasonCode.MISSING_MESSAGE, "No message was sent"),
    ],
)
def test_single_missing_field(form_data, reason_code, human_message):
    outcome = validate_submission(form_data)
    assert not outcome.accepted
    assert outcome.reason_code == reason_code
    assert outcome.human_message == human_message


def test_name_is_checked_before_email_and_message():
    outcome = validate_submission({"user_name": "", "user_email": "", "message": ""})
    assert outcome.reason_code == ReasonCode.MISSING_NAME


def test_email_is_checked_before_message():
    outcome = validate_submission({"user_name": "Kolja", "user_email": "", "message": ""})
    assert outcome.reason_code == ReasonCode.MISSING_EMAIL


def test_complete_form_is_accepted(valid_form):
    outcome = validate_submission(valid_form)
    assert outcome.accepted
    assert outcome.reason_code is None
    assert outcome.human_message is None


def test_email_syntax_is_not_checked():
    outcome = validate_submission({"user_name": "K", "user_email": "not-an-email", "message": " "})
    assert outcome.accepted


def test_validation_is_repeatable(valid_form):
    assert validate_submission(valid_form) == validate_submission(valid_form)
    missing = {"user_name": "Kolja"}
    assert validate_submission(missing) == validate_submission(missing)
