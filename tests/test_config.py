import pytest

from product_extractor.core.config import Settings, load_settings
from product_extractor.core.errors import ConfigError


def test_defaults_follow_the_demo(settings):
    config = settings.model_config_for_client()
    assert config.model_id == "llama-3.3-70b-versatile"
    assert config.temperature == 0.7
    assert config.max_output_tokens is None
    assert config.max_retries == 2


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk_env")
    monkeypatch.setenv("MODEL_ID", "llama-3.1-8b-instant")
    monkeypatch.setenv("MAX_RETRIES", "4")
    settings = Settings(_env_file=None)
    assert settings.require_api_key() == "gsk_env"
    config = settings.model_config_for_client()
    assert config.model_id == "llama-3.1-8b-instant"
    assert config.max_retries == 4


def test_model_config_is_frozen(settings):
    config = settings.model_config_for_client()
    with pytest.raises(Exception):
        config.temperature = 0.1


@pytest.mark.parametrize(
    "overrides",
    [{"temperature": 1.5}, {"temperature": -0.1}, {"max_retries": -1}, {"max_output_tokens": 0}, {"model_id": ""}],
)
def test_invalid_values_raise_config_error(monkeypatch, overrides):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    settings = Settings(_env_file=None, **overrides)
    with pytest.raises(ConfigError) as excinfo:
        settings.model_config_for_client()
    assert excinfo.value.details["errors"]


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    with pytest.raises(ConfigError):
        Settings(_env_file=None).require_api_key()


@pytest.mark.parametrize("name, value", [("TEMPERATURE", "warm"), ("MAX_RETRIES", "abc"), ("JSON_MODE", "maybe")])
def test_unparseable_environment_is_config_error(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError) as excinfo:
        load_settings(_env_file=None)
    assert [issue["field"] for issue in excinfo.value.details["errors"]] == [name.lower()]


def test_json_mode_flows_into_model_config(monkeypatch):
    monkeypatch.setenv("JSON_MODE", "true")
    assert load_settings(_env_file=None).model_config_for_client().json_mode is True
