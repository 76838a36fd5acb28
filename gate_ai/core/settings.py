"""
AI settings model.

Parses the host's configuration payload ({provider, apiKeys, models,
useCustomModel, customModel, defaultLanguage}). Unknown keys are ignored and
missing keys fall back to defaults. Instances are frozen: a settings update
builds a new object and swaps it in whole.
"""
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import config
from .exceptions import SettingsError
from .logging_config import get_logger
from .providers_registry import default_models
from ..domain.value_objects import ProviderId

logger = get_logger(__name__)

_VALID_IDS = {provider_id.value for provider_id in ProviderId}


def _known_providers_only(value: Any, field_name: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{field_name} must be a mapping of provider id to string")
    filtered = {}
    for key, item in value.items():
        key_str = key.value if isinstance(key, ProviderId) else str(key)
        if key_str not in _VALID_IDS:
            logger.debug(f"Ignoring unknown provider '{key_str}' in {field_name}")
            continue
        if item is None:
            continue
        filtered[key_str] = item
    return filtered


class AISettings(BaseModel):
    """Live AI configuration consumed by AIService."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    provider: Optional[ProviderId] = ProviderId.GEMINI
    api_keys: Dict[ProviderId, str] = Field(default_factory=dict, alias="apiKeys")
    models: Dict[ProviderId, str] = Field(default_factory=default_models)
    use_custom_model: bool = Field(default=False, alias="useCustomModel")
    custom_model: str = Field(default="", alias="customModel")
    default_language: str = Field(default="English", alias="defaultLanguage")

    @field_validator("provider", mode="before")
    @classmethod
    def _blank_provider_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("api_keys", mode="before")
    @classmethod
    def _filter_api_keys(cls, value: Any) -> Dict[str, str]:
        return _known_providers_only(value, "apiKeys")

    @field_validator("models", mode="before")
    @classmethod
    def _merge_model_defaults(cls, value: Any) -> Dict[str, str]:
        merged = {provider_id.value: model for provider_id, model in default_models().items()}
        for key, model in _known_providers_only(value, "models").items():
            if isinstance(model, str) and model.strip():
                merged[key] = model.strip()
        return merged

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AISettings":
        """
        Build settings from a host configuration payload.

        Raises:
            SettingsError: If a recognized option has an invalid value
        """
        try:
            return cls.model_validate(dict(data or {}))
        except ValidationError as e:
            raise SettingsError(f"Invalid AI settings: {e}") from e

    @classmethod
    def from_env(cls) -> "AISettings":
        """Build settings from environment-backed configuration."""
        api_keys = {
            ProviderId.GEMINI.value: config.GEMINI_API_KEY,
            ProviderId.GROK.value: config.GROK_API_KEY,
            ProviderId.CLAUDE.value: config.CLAUDE_API_KEY,
            ProviderId.OPENAI.value: config.OPENAI_API_KEY,
            ProviderId.GLM.value: config.GLM_API_KEY,
        }
        models = {
            ProviderId.GEMINI.value: config.GEMINI_MODEL,
            ProviderId.GROK.value: config.GROK_MODEL,
            ProviderId.CLAUDE.value: config.CLAUDE_MODEL,
            ProviderId.OPENAI.value: config.OPENAI_MODEL,
            ProviderId.GLM.value: config.GLM_MODEL,
        }
        return cls.from_dict({
            "provider": config.AI_PROVIDER.lower().strip(),
            "apiKeys": {key: value for key, value in api_keys.items() if value},
            "models": models,
            "useCustomModel": bool(config.AI_CUSTOM_MODEL.strip()),
            "customModel": config.AI_CUSTOM_MODEL,
            "defaultLanguage": config.AI_DEFAULT_LANGUAGE,
        })

    def get_api_key(self, provider_id: ProviderId) -> Optional[str]:
        return self.api_keys.get(ProviderId(provider_id))

    def with_updates(self, **changes: Any) -> "AISettings":
        """Return a new settings object with ``changes`` applied (field names, not aliases)."""
        data = self.model_dump()
        data.update(changes)
        return self.__class__.from_dict(data)
