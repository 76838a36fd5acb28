"""
AI Provider Factory.

Maps each ProviderId to its concrete provider class. The mapping is an
exhaustive if/elif chain over the closed ProviderId enum; an id without a
branch raises instead of silently falling through.
"""
from typing import Dict, Optional

import httpx

from ...core import config
from ...core.logging_config import get_logger
from ...domain.value_objects import ProviderId
from .base import AIProvider
from .claude_provider import ClaudeProvider
from .gemini_provider import GeminiProvider
from .glm_provider import GLMProvider
from .grok_provider import GrokProvider
from .openai_provider import OpenAIProvider

logger = get_logger(__name__)


class AIProviderFactory:
    """Factory for creating AI provider instances."""

    @staticmethod
    def create(
        provider_id: ProviderId,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = config.AI_REQUEST_TIMEOUT,
    ) -> AIProvider:
        """
        Create the provider for ``provider_id``.

        Args:
            provider_id: One of the supported ProviderId values
            http_client: Optional shared async HTTP client
            timeout: Request timeout in seconds

        Returns:
            AIProvider instance

        Raises:
            ValueError: If provider_id is not a supported provider
        """
        provider_id = ProviderId(provider_id)
        if provider_id is ProviderId.GEMINI:
            return GeminiProvider(http_client=http_client, timeout=timeout)
        elif provider_id is ProviderId.GROK:
            return GrokProvider(http_client=http_client, timeout=timeout)
        elif provider_id is ProviderId.CLAUDE:
            return ClaudeProvider(http_client=http_client, timeout=timeout)
        elif provider_id is ProviderId.OPENAI:
            return OpenAIProvider(http_client=http_client, timeout=timeout)
        elif provider_id is ProviderId.GLM:
            return GLMProvider(http_client=http_client, timeout=timeout)
        raise ValueError(f"Unsupported AI provider: {provider_id}")

    @staticmethod
    def create_all(
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = config.AI_REQUEST_TIMEOUT,
    ) -> Dict[ProviderId, AIProvider]:
        """Create one provider per ProviderId."""
        providers = {
            provider_id: AIProviderFactory.create(provider_id, http_client=http_client, timeout=timeout)
            for provider_id in ProviderId
        }
        logger.debug(f"Initialized providers: {', '.join(p.value for p in providers)}")
        return providers
