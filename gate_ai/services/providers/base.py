"""
Base AI Provider Interface.

All AI providers must inherit from this base class and implement
the vendor-specific hooks. The public methods wrap those hooks so that
no provider ever raises across its public boundary.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

import httpx

from ...core import config
from ...core.logging_config import get_logger
from ...core.providers_registry import ProviderConfig, get_provider_config
from ...domain.entities import AIMessage, GenerationOptions, ProviderResponse
from ...domain.value_objects import ProviderId
from .errors import normalize_error

logger = get_logger(__name__)


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    Each provider translates vendor-neutral messages and options into one
    vendor's wire format, issues exactly one HTTP call, and parses the
    result back into a ProviderResponse. There are no retries here;
    retry policy belongs to the caller.
    """

    provider_id: ProviderId

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = config.AI_REQUEST_TIMEOUT,
    ):
        """
        Initialize the provider.

        Args:
            http_client: Shared async HTTP client; when omitted each call
                opens and closes its own client
            timeout: Request timeout in seconds for clients the provider owns
        """
        self._http_client = http_client
        self.timeout = timeout

    @property
    def config(self) -> ProviderConfig:
        return get_provider_config(self.provider_id)

    @property
    def name(self) -> str:
        return self.config.name

    async def test_api_key(self, api_key: str) -> bool:
        """
        Check a credential with a minimal request.

        Returns:
            True only if the vendor answered without an error and with a
            recognizable response container; network failures return False
        """
        try:
            return await self._test_api_key(api_key)
        except Exception as e:
            logger.warning(f"{self.name} API key test failed: {e}")
            return False

    async def generate_text(
        self,
        messages: Sequence[AIMessage],
        api_key: str,
        options: Optional[GenerationOptions] = None,
    ) -> ProviderResponse:
        """
        Generate a completion for ``messages``.

        Args:
            messages: Non-empty conversation
            api_key: Vendor credential (callers check it is non-empty)
            options: Generation options; model defaults to the registry default

        Returns:
            ProviderResponse; failures are returned, never raised
        """
        options = options or GenerationOptions()
        model = options.model or self.config.default_model
        logger.debug(
            f"{self.name}: generating with model={model}, "
            f"messages={len(messages)}, max_tokens={options.max_tokens}"
        )
        try:
            return await self._generate(list(messages), api_key, model, options)
        except Exception as e:
            return normalize_error(e)

    @abstractmethod
    async def _test_api_key(self, api_key: str) -> bool:
        pass

    @abstractmethod
    async def _generate(
        self,
        messages: List[AIMessage],
        api_key: str,
        model: str,
        options: GenerationOptions,
    ) -> ProviderResponse:
        pass

    @staticmethod
    def split_system(messages: Sequence[AIMessage]) -> Tuple[Optional[str], List[AIMessage]]:
        """
        Hoist the system message out of a conversation.

        For vendors with a dedicated system field; the last system message wins.
        """
        system_prompt = None
        rest = []
        for message in messages:
            if message.role == "system":
                system_prompt = message.content
            else:
                rest.append(message)
        return system_prompt, rest
