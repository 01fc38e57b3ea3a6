from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Union

import requests

from portfolio_contact.config.settings import ContactConfig
from portfolio_contact.net.backoff import (
    Failure,
    FormBlob,
    NetworkOutcome,
    NetworkRequest,
    Success,
    default_session_factory,
    send_once,
)

logger = logging.getLogger(__name__)

FieldValue = Union[str, FormBlob]
SubmissionOutcome = NetworkOutcome


@dataclass
class ContactForm:
    """The contact form as laid out on the site."""

    name: str
    email: str
    message: str
    project_type: str = ""
    extra: Dict[str, FieldValue] = field(default_factory=dict)

    def to_fields(self) -> Dict[str, FieldValue]:
        fields: Dict[str, FieldValue] = dict(self.extra)
        fields.update(
            {
                "name": self.name,
                "email": self.email,
                "message": self.message,
                "project_type": self.project_type,
            }
        )
        return fields


class FormSubmitter:
    """Posts contact form data to the form-processing service.

    Exactly one request per submission; failures go straight back to the
    caller so the visitor gets immediate feedback.
    """

    def __init__(
        self,
        config: Optional[ContactConfig] = None,
        *,
        session_factory: Callable[[], requests.Session] = default_session_factory,
    ) -> None:
        self.config = config or ContactConfig()
        self._session_factory = session_factory

    def build_request(self, form_fields: Union[ContactForm, Mapping[str, FieldValue]]) -> NetworkRequest:
        fields = form_fields.to_fields() if isinstance(form_fields, ContactForm) else dict(form_fields)
        return NetworkRequest(
            url=self.config.form_endpoint,
            method="POST",
            headers={"Accept": "application/json"},
            body=fields,
            body_format="multipart",
        )

    def submit_form(self, form_fields: Union[ContactForm, Mapping[str, FieldValue]]) -> SubmissionOutcome:
        request = self.build_request(form_fields)
        session = self._session_factory()
        try:
            outcome = send_once(request, session=session, timeout=self.config.request_timeout)
        finally:
            session.close()

        if isinstance(outcome, Success):
            logger.info("Contact form delivered (status %s)", outcome.response.status_code)
        elif isinstance(outcome, Failure):
            logger.error("Contact form submission failed: %s", outcome.reason.describe())
        return outcome
