"""
Retrying HTTP helper shared by the refinement and contact-form call sites.

Every non-2xx status and every transport error counts as a failed attempt;
there is no split between retryable and fatal status codes.
"""
from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

import requests
from requests import Response

logger = logging.getLogger(__name__)


# --------------------------
# Policy / request primitives
# --------------------------
@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 5
    initial_delay: float = 1.0  # seconds
    backoff_multiplier: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0:
            raise ValueError("initial_delay cannot be negative")
        if self.backoff_multiplier <= 1:
            raise ValueError("backoff_multiplier must be greater than 1")

    def delay_for(self, attempt_index: int) -> float:
        """Pause taken after the failed attempt at ``attempt_index`` (0-based)."""
        return self.initial_delay * self.backoff_multiplier ** attempt_index

    def schedule(self) -> List[float]:
        return [self.delay_for(i) for i in range(self.max_attempts - 1)]


@dataclass(frozen=True)
class FormBlob:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class NetworkRequest:
    url: str
    method: str = "POST"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    body_format: str = "json"  # json | multipart | raw
    params: Dict[str, str] = field(default_factory=dict)

    def send_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"headers": dict(self.headers)}
        if self.params:
            kwargs["params"] = dict(self.params)
        if self.body is None:
            return kwargs
        if self.body_format == "json":
            kwargs["headers"].setdefault("Content-Type", "application/json; charset=utf-8")
            kwargs["data"] = json.dumps(self.body, ensure_ascii=False).encode("utf-8")
        elif self.body_format == "multipart":
            kwargs["files"] = _multipart_fields(self.body)
        elif self.body_format == "raw":
            kwargs["data"] = self.body
        else:
            raise ValueError(f"Unsupported body format '{self.body_format}'")
        return kwargs


def _multipart_fields(fields: Mapping[str, Union[str, FormBlob]]) -> Dict[str, Tuple]:
    # (None, value) keeps plain fields in the multipart body without a filename
    parts: Dict[str, Tuple] = {}
    for name, value in fields.items():
        if isinstance(value, FormBlob):
            parts[name] = (value.filename, value.content, value.content_type)
        else:
            parts[name] = (None, "" if value is None else str(value))
    return parts


# --------------------------
# Outcomes
# --------------------------
@dataclass(frozen=True)
class HttpFailure:
    status_code: int

    def describe(self) -> str:
        return f"status {self.status_code}"


@dataclass(frozen=True)
class TransportFailure:
    message: str

    def describe(self) -> str:
        return f"error: {self.message}"


FailureReason = Union[HttpFailure, TransportFailure]


@dataclass
class Success:
    response: Response

    @property
    def ok(self) -> bool:
        return True

    def json(self) -> Any:
        return self.response.json()


@dataclass
class Failure:
    reason: FailureReason

    @property
    def ok(self) -> bool:
        return False


NetworkOutcome = Union[Success, Failure]


class NetworkError(RuntimeError):
    """Base class for failures surfaced by this module."""


class RetriesExhausted(NetworkError):
    def __init__(self, attempts: int, last_failure: Optional[FailureReason] = None) -> None:
        super().__init__(f"Request failed after {attempts} attempt(s)")
        self.attempts = attempts
        self.last_failure = last_failure

    @property
    def transport_level(self) -> bool:
        return isinstance(self.last_failure, TransportFailure)


# --------------------------
# Sending
# --------------------------
def default_session_factory() -> requests.Session:
    session = requests.Session()
    adapter = requests.adapters.HTTPAdapter(max_retries=0)  # manual retries
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def send_once(request: NetworkRequest, *, session: requests.Session, timeout: float = 60.0) -> NetworkOutcome:
    """Perform exactly one attempt and classify the result."""
    try:
        resp: Response = session.request(request.method, request.url, timeout=timeout, **request.send_kwargs())
    except requests.RequestException as exc:
        message = str(exc) or exc.__class__.__name__
        for secret in request.params.values():
            if secret:
                message = message.replace(secret, "***")
        return Failure(TransportFailure(message))

    if resp.status_code // 100 == 2:
        return Success(resp)
    return Failure(HttpFailure(resp.status_code))


def fetch_with_retry(
    request: NetworkRequest,
    policy: Optional[RetryPolicy] = None,
    *,
    session_factory: Callable[[], requests.Session] = default_session_factory,
    timeout: float = 60.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Success:
    """Send ``request`` until it succeeds or the policy runs out of attempts.

    Returns the first :class:`Success`. Raises :class:`RetriesExhausted` when
    every attempt failed; no partial response is handed back in that case.
    """
    policy = policy or RetryPolicy()
    session = session_factory()
    last_failure: Optional[FailureReason] = None

    try:
        for attempt_index in range(policy.max_attempts):
            outcome = send_once(request, session=session, timeout=timeout)
            if isinstance(outcome, Success):
                if attempt_index:
                    logger.info("Request to %s succeeded on attempt %s", _safe_url(request), attempt_index + 1)
                return outcome

            last_failure = outcome.reason
            attempt = attempt_index + 1
            if attempt >= policy.max_attempts:
                logger.warning("Attempt %s failed with %s. Giving up.", attempt, last_failure.describe())
                break

            delay = policy.delay_for(attempt_index)
            logger.warning("Attempt %s failed with %s. Retrying in %.2fs...", attempt, last_failure.describe(), delay)
            sleep(delay)
    finally:
        session.close()

    logger.error("Request to %s failed after %s attempts", _safe_url(request), policy.max_attempts)
    raise RetriesExhausted(policy.max_attempts, last_failure)


def _safe_url(request: NetworkRequest) -> str:
    # query params may carry the API key
    return request.url.split("?", 1)[0]
