"""
OpenAI Provider.

Uses the chat completions API for generation; the credential test lists
models instead of spending tokens on a prompt.
"""
from ...core.logging_config import get_logger
from ...domain.value_objects import ProviderId
from .openai_compatible import OpenAICompatibleProvider, get_field

logger = get_logger(__name__)


class OpenAIProvider(OpenAICompatibleProvider):
    """AI Provider using the OpenAI API."""

    provider_id = ProviderId.OPENAI

    async def _test_api_key(self, api_key: str) -> bool:
        page = await self._with_client(api_key, lambda client: client.models.list())
        return get_field(page, "data") is not None and not get_field(page, "error")
