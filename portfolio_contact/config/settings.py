from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from portfolio_contact.net.backoff import RetryPolicy

FORM_ENDPOINT = "https://formspree.io/f/mldpnjad"
REFINEMENT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
REFINEMENT_MODEL = "gemini-2.5-flash-preview-05-20"


@dataclass
class ContactConfig:
    form_endpoint: str = FORM_ENDPOINT
    refinement_endpoint: str = REFINEMENT_ENDPOINT
    refinement_model: str = REFINEMENT_MODEL
    api_key: Optional[str] = None
    request_timeout: float = 60.0  # seconds, per attempt
    min_draft_length: int = 20
    retry: RetryPolicy = field(default_factory=RetryPolicy)

    def refinement_url(self) -> str:
        return self.refinement_endpoint.format(model=self.refinement_model)


@dataclass
class DevelopmentConfig(ContactConfig):
    request_timeout: float = 30.0


@dataclass
class TestingConfig(ContactConfig):
    form_endpoint: str = "https://forms.test/f/contact"
    refinement_endpoint: str = "https://llm.test/v1beta/models/{model}:generateContent"
    retry: RetryPolicy = field(default_factory=lambda: RetryPolicy(initial_delay=0.0))


CONFIG_MAP: Dict[str, type] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ContactConfig,
}


def load_config(name: str = "production", environ: Optional[Mapping[str, str]] = None) -> ContactConfig:
    """Build a config and pick up the ambient API key, if one is set."""
    environ = os.environ if environ is None else environ
    config_class = CONFIG_MAP.get(name, ContactConfig)
    config = config_class()
    ambient_key = (environ.get("GEMINI_API_KEY") or "").strip()
    if ambient_key:
        config.api_key = ambient_key
    return config


def resolve_api_key(override: Optional[str], config: ContactConfig) -> Optional[str]:
    # explicit override > configured value > absent
    for candidate in (override, config.api_key):
        if candidate and candidate.strip():
            return candidate.strip()
    return None
