from .backoff import (
    Failure,
    FormBlob,
    HttpFailure,
    NetworkError,
    NetworkRequest,
    RetriesExhausted,
    RetryPolicy,
    Success,
    TransportFailure,
    default_session_factory,
    fetch_with_retry,
    send_once,
)

__all__ = [
    "Failure",
    "FormBlob",
    "HttpFailure",
    "NetworkError",
    "NetworkRequest",
    "RetriesExhausted",
    "RetryPolicy",
    "Success",
    "TransportFailure",
    "default_session_factory",
    "fetch_with_retry",
    "send_once",
]
