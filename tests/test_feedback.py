import pytest

from portfolio_contact.llm.refinement_client import Empty, Refined, RefinementError
from portfolio_contact.net.backoff import Failure, HttpFailure, Success, TransportFailure
from portfolio_contact.services.feedback import (
    ERROR,
    NO_SUGGESTION_TEXT,
    SEND_FAILED_TEXT,
    SEND_NETWORK_TEXT,
    SENT_TEXT,
    SUCCESS,
    Feedback,
    apply_refinement,
    describe_refinement,
    describe_submission,
    describe_validation,
    sending_feedback,
)
from portfolio_contact.services.validation import ValidationError, validate_refinement_input


def test_submission_messages_are_distinct(fake_response):
    sent = describe_submission(Success(fake_response(200)))
    rejected = describe_submission(Failure(HttpFailure(422)))
    offline = describe_submission(Failure(TransportFailure("getaddrinfo failed")))

    assert sent == Feedback(SENT_TEXT, SUCCESS)
    assert rejected == Feedback(SEND_FAILED_TEXT, ERROR)
    assert offline == Feedback(SEND_NETWORK_TEXT, ERROR)
    assert "getaddrinfo" not in offline.text
    assert not sending_feedback().is_error


def test_refinement_messages():
    assert describe_refinement(Refined("Polished")) == Feedback("Polished", SUCCESS)
    assert describe_refinement(Empty()) == Feedback(NO_SUGGESTION_TEXT, ERROR)
    assert describe_refinement(RefinementError("API call failed.")).is_error


def test_apply_refinement_replaces_message_only():
    fields = {"name": "Ada", "message": "draft"}

    updated = apply_refinement(fields, Refined("Refined draft"))

    assert updated == {"name": "Ada", "message": "Refined draft"}
    assert fields["message"] == "draft"
    assert apply_refinement(fields, Empty()) == fields


@pytest.mark.parametrize(
    "draft, category, field",
    [
        ("short", "Portfolio", "message"),
        ("   padded but short        ", "Portfolio", "message"),
        (None, "Portfolio", "message"),
        ("A sufficiently long draft message.", "", "project_type"),
        ("A sufficiently long draft message.", None, "project_type"),
    ],
)
def test_validation_rejects_bad_input(draft, category, field):
    with pytest.raises(ValidationError) as excinfo:
        validate_refinement_input(draft, category)
    assert excinfo.value.field == field
    assert describe_validation(excinfo.value).is_error


def test_validation_accepts_twenty_characters():
    validate_refinement_input("x" * 20, "Portfolio")
