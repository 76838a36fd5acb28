"""
Static registry of supported AI providers.

One ProviderConfig per ProviderId, created at import time and never mutated.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional

from ..domain.value_objects import ProviderId


@dataclass(frozen=True)
class ProviderConfig:
    id: ProviderId
    name: str
    display_name: str
    default_model: str
    endpoint: str
    api_key_prefix: Optional[str] = None  # format hint, e.g. 'sk-', 'AIza'

    def looks_like_key(self, api_key: str) -> bool:
        """Check the key against the vendor's format hint (True when no hint exists)."""
        if not self.api_key_prefix:
            return bool(api_key.strip())
        return api_key.strip().startswith(self.api_key_prefix)


AI_PROVIDERS: Mapping[ProviderId, ProviderConfig] = MappingProxyType({
    ProviderId.GEMINI: ProviderConfig(
        id=ProviderId.GEMINI,
        name="Google Gemini",
        display_name="Gemini",
        default_model="gemini-2.5-flash",
        endpoint="https://generativelanguage.googleapis.com/v1beta",
        api_key_prefix="AIza",
    ),
    ProviderId.GROK: ProviderConfig(
        id=ProviderId.GROK,
        name="xAI Grok",
        display_name="Grok",
        default_model="grok-4-1-fast",
        endpoint="https://api.x.ai/v1",
    ),
    ProviderId.CLAUDE: ProviderConfig(
        id=ProviderId.CLAUDE,
        name="Anthropic Claude",
        display_name="Claude",
        default_model="claude-sonnet-4-5-20241022",
        # The Anthropic SDK appends /v1/messages itself
        endpoint="https://api.anthropic.com",
    ),
    ProviderId.OPENAI: ProviderConfig(
        id=ProviderId.OPENAI,
        name="OpenAI",
        display_name="OpenAI",
        default_model="gpt-5",
        endpoint="https://api.openai.com/v1",
        api_key_prefix="sk-",
    ),
    ProviderId.GLM: ProviderConfig(
        id=ProviderId.GLM,
        name="Zhipu AI (GLM)",
        display_name="GLM",
        default_model="glm-4.6",
        endpoint="https://open.bigmodel.cn/api/paas/v4",
    ),
})


def get_provider_config(provider_id: ProviderId) -> ProviderConfig:
    return AI_PROVIDERS[ProviderId(provider_id)]


def get_all_provider_configs() -> List[ProviderConfig]:
    return list(AI_PROVIDERS.values())


def default_models() -> dict:
    """Registry default model per provider, keyed by ProviderId."""
    return {provider_id: config.default_model for provider_id, config in AI_PROVIDERS.items()}
