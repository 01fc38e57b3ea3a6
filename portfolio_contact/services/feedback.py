"""
Maps request outcomes to the copy shown next to the contact form.

Nothing here touches the page; the caller decides where the text goes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, TypeVar

from portfolio_contact.llm.refinement_client import Refined, RefinementError, RefinementResult
from portfolio_contact.net.backoff import Failure, HttpFailure, Success
from portfolio_contact.services.form_submitter import SubmissionOutcome
from portfolio_contact.services.validation import ValidationError

INFO = "info"
SUCCESS = "success"
ERROR = "error"

SENDING_TEXT = "Sending message..."
SENT_TEXT = "Message sent successfully! I will be in touch soon."
SEND_FAILED_TEXT = "Error: Failed to send message. Please try again or check the console."
SEND_NETWORK_TEXT = "A network error occurred. Please try again."
NO_SUGGESTION_TEXT = "Refinement failed: Could not generate a suggestion."

V = TypeVar("V")


@dataclass(frozen=True)
class Feedback:
    text: str
    tone: str = INFO

    @property
    def is_error(self) -> bool:
        return self.tone == ERROR


def sending_feedback() -> Feedback:
    return Feedback(SENDING_TEXT, INFO)


def describe_submission(outcome: SubmissionOutcome) -> Feedback:
    if isinstance(outcome, Success):
        return Feedback(SENT_TEXT, SUCCESS)
    if isinstance(outcome, Failure) and isinstance(outcome.reason, HttpFailure):
        return Feedback(SEND_FAILED_TEXT, ERROR)
    return Feedback(SEND_NETWORK_TEXT, ERROR)


def describe_refinement(result: RefinementResult) -> Feedback:
    if isinstance(result, Refined):
        return Feedback(result.text, SUCCESS)
    if isinstance(result, RefinementError):
        return Feedback(result.detail, ERROR)
    return Feedback(NO_SUGGESTION_TEXT, ERROR)


def describe_validation(error: ValidationError) -> Feedback:
    return Feedback(str(error), ERROR)


def apply_refinement(fields: Mapping[str, V], result: RefinementResult) -> Dict[str, V]:
    """Copy of ``fields`` with the message swapped for the refined text."""
    updated = dict(fields)
    if isinstance(result, Refined):
        updated["message"] = result.text
    return updated


__all__ = [
    "Feedback",
    "apply_refinement",
    "describe_refinement",
    "describe_submission",
    "describe_validation",
    "sending_feedback",
]
