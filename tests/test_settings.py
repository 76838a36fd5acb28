import pytest

from gate_ai.core import config
from gate_ai.core.exceptions import SettingsError
from gate_ai.core.providers_registry import AI_PROVIDERS, get_provider_config
from gate_ai.core.settings import AISettings
from gate_ai.domain.value_objects import ProviderId


def test_defaults():
    settings = AISettings.from_dict({})
    assert settings.provider is ProviderId.GEMINI
    assert settings.api_keys == {}
    assert settings.use_custom_model is False
    assert settings.default_language == "English"
    for provider_id in ProviderId:
        assert settings.models[provider_id] == AI_PROVIDERS[provider_id].default_model


def test_camel_case_payload():
    settings = AISettings.from_dict({
        "provider": "claude",
        "apiKeys": {"claude": "sk-ant-1", "openai": "sk-2"},
        "models": {"claude": "claude-opus"},
        "useCustomModel": True,
        "customModel": "my-model",
        "defaultLanguage": "Korean",
    })
    assert settings.provider is ProviderId.CLAUDE
    assert settings.get_api_key(ProviderId.CLAUDE) == "sk-ant-1"
    assert settings.get_api_key("openai") == "sk-2"
    assert settings.models[ProviderId.CLAUDE] == "claude-opus"
    assert settings.models[ProviderId.GLM] == "glm-4.6"
    assert settings.use_custom_model is True
    assert settings.custom_model == "my-model"
    assert settings.default_language == "Korean"


def test_unknown_keys_are_ignored():
    settings = AISettings.from_dict({
        "apiKeys": {"gemini": "AIza-1", "mistral": "x"},
        "models": {"mistral": "m", "grok": ""},
        "theme": "dark",
    })
    assert settings.api_keys == {ProviderId.GEMINI: "AIza-1"}
    assert settings.models[ProviderId.GROK] == "grok-4-1-fast"


def test_blank_provider_means_none():
    assert AISettings.from_dict({"provider": "  "}).provider is None


def test_invalid_provider_raises_settings_error():
    with pytest.raises(SettingsError):
        AISettings.from_dict({"provider": "mistral"})


def test_settings_are_frozen():
    settings = AISettings.from_dict({})
    with pytest.raises(Exception):
        settings.provider = ProviderId.GLM


def test_with_updates_returns_new_object():
    settings = AISettings.from_dict({"apiKeys": {"gemini": "AIza-1"}})
    updated = settings.with_updates(provider=ProviderId.OPENAI, api_keys={"openai": "sk-1"})
    assert updated is not settings
    assert updated.provider is ProviderId.OPENAI
    assert updated.get_api_key(ProviderId.OPENAI) == "sk-1"
    assert settings.provider is ProviderId.GEMINI


def test_from_env(monkeypatch):
    monkeypatch.setattr(config, "AI_PROVIDER", "GLM")
    monkeypatch.setattr(config, "GLM_API_KEY", "id.secret")
    monkeypatch.setattr(config, "GEMINI_API_KEY", None)
    monkeypatch.setattr(config, "GROK_API_KEY", None)
    monkeypatch.setattr(config, "CLAUDE_API_KEY", None)
    monkeypatch.setattr(config, "OPENAI_API_KEY", None)
    monkeypatch.setattr(config, "GLM_MODEL", "glm-4-plus")
    monkeypatch.setattr(config, "AI_CUSTOM_MODEL", "")
    monkeypatch.setattr(config, "AI_DEFAULT_LANGUAGE", "Japanese")

    settings = AISettings.from_env()
    assert settings.provider is ProviderId.GLM
    assert settings.api_keys == {ProviderId.GLM: "id.secret"}
    assert settings.models[ProviderId.GLM] == "glm-4-plus"
    assert settings.use_custom_model is False
    assert settings.default_language == "Japanese"


def test_registry_key_hints():
    assert get_provider_config(ProviderId.OPENAI).looks_like_key("sk-abc")
    assert not get_provider_config(ProviderId.GEMINI).looks_like_key("sk-abc")
    assert get_provider_config(ProviderId.GLM).looks_like_key("anything")
