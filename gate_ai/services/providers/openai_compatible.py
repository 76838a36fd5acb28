"""
OpenAI-compatible chat completions provider.

Shared by the vendors that speak the OpenAI chat completions wire format
(OpenAI itself, xAI Grok, Zhipu GLM). Uses the official openai SDK pointed
at the vendor's base URL, with SDK retries disabled.
"""
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from openai import AsyncOpenAI

from ...core.logging_config import get_logger
from ...domain.entities import AIMessage, GenerationOptions, ProviderResponse
from .base import AIProvider
from .errors import vendor_error_response

logger = get_logger(__name__)

T = TypeVar("T")

TEST_PROMPT = "Hello"
TEST_MAX_TOKENS = 10


def get_field(obj: Any, key: str) -> Any:
    """Read ``key`` from an SDK model or a plain dict."""
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


class OpenAICompatibleProvider(AIProvider):
    """Base for providers using ``POST {endpoint}/chat/completions`` with a Bearer token."""

    def bearer_token(self, api_key: str) -> str:
        """Value sent as ``Authorization: Bearer <token>``."""
        return api_key

    def _client(self, api_key: str) -> AsyncOpenAI:
        kwargs: Dict[str, Any] = {
            "api_key": self.bearer_token(api_key),
            "base_url": self.config.endpoint,
            "max_retries": 0,
            "timeout": self.timeout,
        }
        if self._http_client is not None:
            kwargs["http_client"] = self._http_client
        return AsyncOpenAI(**kwargs)

    async def _with_client(self, api_key: str, call: Callable[[AsyncOpenAI], Awaitable[T]]) -> T:
        client = self._client(api_key)
        try:
            return await call(client)
        finally:
            # A shared client belongs to the caller
            if self._http_client is None:
                await client.close()

    @staticmethod
    def convert_messages(messages: List[AIMessage]) -> List[Dict[str, str]]:
        return [{"role": message.role, "content": message.content} for message in messages]

    async def _test_api_key(self, api_key: str) -> bool:
        response = await self._with_client(
            api_key,
            lambda client: client.chat.completions.create(
                model=self.config.default_model,
                messages=[{"role": "user", "content": TEST_PROMPT}],
                max_tokens=TEST_MAX_TOKENS,
            ),
        )
        return not get_field(response, "error") and get_field(response, "choices") is not None

    async def _generate(
        self,
        messages: List[AIMessage],
        api_key: str,
        model: str,
        options: GenerationOptions,
    ) -> ProviderResponse:
        response = await self._with_client(
            api_key,
            lambda client: client.chat.completions.create(
                model=model,
                messages=self.convert_messages(messages),
                temperature=options.temperature,
                max_tokens=options.max_tokens,
                stream=False,
            ),
        )

        error = get_field(response, "error")
        if error:
            return vendor_error_response(error)

        choices = get_field(response, "choices")
        if not choices:
            return ProviderResponse.no_response()

        message = get_field(choices[0], "message")
        content = get_field(message, "content") if message is not None else None
        if not isinstance(content, str) or not content:
            return ProviderResponse.no_response()

        return ProviderResponse.ok(content, self._tokens_used(response))

    @staticmethod
    def _tokens_used(response: Any) -> Optional[int]:
        usage = get_field(response, "usage")
        if not usage:
            return None
        total = get_field(usage, "total_tokens")
        return int(total) if isinstance(total, (int, float)) else None
