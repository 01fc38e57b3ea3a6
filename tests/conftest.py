import os
import sys

import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from portfolio_contact.config.settings import TestingConfig


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Replays queued responses/exceptions; the last one repeats."""

    def __init__(self, *outcomes):
        self._outcomes = list(outcomes) or [FakeResponse()]
        self.calls = []
        self.closed = False

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        index = min(len(self.calls), len(self._outcomes)) - 1
        outcome = self._outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


@pytest.fixture
def make_session():
    def factory(*outcomes):
        session = FakeSession(*outcomes)
        return lambda: session

    return factory


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def config():
    return TestingConfig()


@pytest.fixture
def delays():
    return []
