from portfolio_contact import create_services
from portfolio_contact.config.settings import (
    FORM_ENDPOINT,
    ContactConfig,
    DevelopmentConfig,
    TestingConfig,
    load_config,
    resolve_api_key,
)
from portfolio_contact.net.backoff import RetryPolicy


def test_defaults_match_site_endpoints():
    config = ContactConfig()
    assert config.form_endpoint == FORM_ENDPOINT
    assert config.refinement_url() == (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-2.5-flash-preview-05-20:generateContent"
    )
    assert config.retry == RetryPolicy(max_attempts=5, initial_delay=1.0, backoff_multiplier=2.0)
    assert config.api_key is None


def test_load_config_picks_up_ambient_key():
    config = load_config("production", environ={"GEMINI_API_KEY": " env-key "})
    assert config.api_key == "env-key"


def test_load_config_ignores_blank_key():
    assert load_config("production", environ={"GEMINI_API_KEY": "  "}).api_key is None
    assert load_config("production", environ={}).api_key is None


def test_load_config_selects_environment_class():
    assert isinstance(load_config("development", environ={}), DevelopmentConfig)
    assert isinstance(load_config("testing", environ={}), TestingConfig)
    assert type(load_config("unknown", environ={})) is ContactConfig


def test_load_config_reads_process_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "from-process")
    assert load_config().api_key == "from-process"


def test_resolve_api_key_precedence():
    config = ContactConfig(api_key="ambient")
    assert resolve_api_key("explicit", config) == "explicit"
    assert resolve_api_key(None, config) == "ambient"
    assert resolve_api_key("", ContactConfig()) is None


def test_create_services_shares_one_config(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    services = create_services("testing")
    assert services.refinement.config is services.config
    assert services.forms.config is services.config
    assert services.config.retry.initial_delay == 0.0
