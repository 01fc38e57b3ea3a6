# portfolio_contact/llm/refinement_client.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

import requests

from portfolio_contact.config.settings import ContactConfig, resolve_api_key
from portfolio_contact.net.backoff import (
    NetworkRequest,
    RetriesExhausted,
    default_session_factory,
    fetch_with_retry,
)
from portfolio_contact.services.validation import ValidationError, validate_refinement_input

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a professional communication expert. Your task is to take a draft message from a "
    "potential client/recruiter to a web developer and refine it to be more professional, clear, "
    "and compelling. Ensure the tone is respectful and concise. Do NOT add salutations (like "
    "'Hello Sandeep') or sign-offs (like 'Sincerely'). Return ONLY the refined message text, "
    "maintaining paragraph breaks if present."
)

RETRIES_EXHAUSTED_DETAIL = "API call failed after multiple retries. Please try again later."
NETWORK_ERROR_DETAIL = "API call failed. Please check your network connection."
UNREADABLE_RESPONSE_DETAIL = "Refinement failed: the service returned an unreadable response."


# --------------------------
# Results
# --------------------------
@dataclass(frozen=True)
class Refined:
    text: str


@dataclass(frozen=True)
class Empty:
    """The call succeeded but carried no usable suggestion."""


@dataclass(frozen=True)
class RefinementError:
    detail: str


RefinementResult = Union[Refined, Empty, RefinementError]


# --------------------------
# Payload helpers
# --------------------------
def build_user_query(draft_text: str, category: str) -> str:
    return (
        f'Refine the following message for an inquiry categorized as "{category}". '
        f'Original message: "{draft_text}"'
    )


def build_refinement_payload(draft_text: str, category: str) -> Dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": build_user_query(draft_text, category)}]}],
        "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
    }


def extract_refined_text(data: Any) -> Optional[str]:
    """Read candidates[0].content.parts[0].text, or None if any level is missing."""
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content") or {}
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if not isinstance(text, str):
        return None
    return text.strip() or None


# --------------------------
# Requester
# --------------------------
class RefinementRequester:
    """Sends a draft to the generative-text endpoint and interprets the reply."""

    def __init__(
        self,
        config: Optional[ContactConfig] = None,
        *,
        session_factory: Callable[[], requests.Session] = default_session_factory,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or ContactConfig()
        self._session_factory = session_factory
        self._sleep = sleep

    def build_request(self, draft_text: str, category: str, api_key_override: Optional[str] = None) -> NetworkRequest:
        params: Dict[str, str] = {}
        api_key = resolve_api_key(api_key_override, self.config)
        if api_key:
            params["key"] = api_key
        return NetworkRequest(
            url=self.config.refinement_url(),
            method="POST",
            headers={"Content-Type": "application/json"},
            body=build_refinement_payload(draft_text, category),
            body_format="json",
            params=params,
        )

    def request_refinement(
        self,
        draft_text: str,
        category: str,
        api_key_override: Optional[str] = None,
    ) -> RefinementResult:
        try:
            validate_refinement_input(draft_text, category, min_length=self.config.min_draft_length)
        except ValidationError as exc:
            logger.info("Skipping refinement request: %s", exc)
            return RefinementError(str(exc))

        request = self.build_request(draft_text, category, api_key_override)
        try:
            success = fetch_with_retry(
                request,
                self.config.retry,
                session_factory=self._session_factory,
                timeout=self.config.request_timeout,
                sleep=self._sleep,
            )
        except RetriesExhausted as exc:
            logger.error("Refinement API network/retry error: %s (last failure: %s)", exc, exc.last_failure)
            detail = NETWORK_ERROR_DETAIL if exc.transport_level else RETRIES_EXHAUSTED_DETAIL
            return RefinementError(detail)

        try:
            data = success.json()
        except ValueError as exc:
            logger.error("Refinement API returned a non-JSON body: %s", exc)
            return RefinementError(UNREADABLE_RESPONSE_DETAIL)

        refined = extract_refined_text(data)
        if refined is None:
            logger.error("Refinement API response error: %s", data)
            return Empty()
        return Refined(refined)
