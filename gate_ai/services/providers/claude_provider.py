"""
Anthropic Claude Provider.

Uses the official anthropic SDK against the Messages API. The SDK sends the
credential in ``x-api-key`` together with the ``anthropic-version`` header
and always owns its transport; a shared httpx client is not passed through.
Claude has no system role inside ``messages``; the system prompt is hoisted
into the top-level ``system`` field.
"""
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from anthropic import AsyncAnthropic

from ...core.logging_config import get_logger
from ...domain.entities import AIMessage, GenerationOptions, ProviderResponse
from ...domain.value_objects import ProviderId
from .base import AIProvider
from .errors import vendor_error_response
from .openai_compatible import TEST_MAX_TOKENS, TEST_PROMPT, get_field

logger = get_logger(__name__)

T = TypeVar("T")

ANTHROPIC_VERSION = "2023-06-01"


class ClaudeProvider(AIProvider):
    """AI Provider using the Anthropic Claude API."""

    provider_id = ProviderId.CLAUDE

    def _client(self, api_key: str) -> AsyncAnthropic:
        return AsyncAnthropic(
            api_key=api_key,
            base_url=self.config.endpoint,
            max_retries=0,
            timeout=self.timeout,
            default_headers={"anthropic-version": ANTHROPIC_VERSION},
        )

    async def _with_client(self, api_key: str, call: Callable[[AsyncAnthropic], Awaitable[T]]) -> T:
        client = self._client(api_key)
        try:
            return await call(client)
        finally:
            await client.close()

    @staticmethod
    def convert_messages(messages: List[AIMessage]) -> Dict[str, Any]:
        """Build ``messages`` (+ ``system``) from neutral messages."""
        system_prompt, rest = AIProvider.split_system(messages)
        request: Dict[str, Any] = {
            "messages": [{"role": message.role, "content": message.content} for message in rest]
        }
        if system_prompt:
            request["system"] = system_prompt
        return request

    async def _test_api_key(self, api_key: str) -> bool:
        response = await self._with_client(
            api_key,
            lambda client: client.messages.create(
                model=self.config.default_model,
                messages=[{"role": "user", "content": TEST_PROMPT}],
                max_tokens=TEST_MAX_TOKENS,
            ),
        )
        return not get_field(response, "error") and get_field(response, "content") is not None

    async def _generate(
        self,
        messages: List[AIMessage],
        api_key: str,
        model: str,
        options: GenerationOptions,
    ) -> ProviderResponse:
        request = self.convert_messages(messages)
        response = await self._with_client(
            api_key,
            lambda client: client.messages.create(
                model=model,
                max_tokens=options.max_tokens,
                temperature=options.temperature,
                **request,
            ),
        )

        error = get_field(response, "error")
        if error:
            return vendor_error_response(error)

        blocks = get_field(response, "content")
        if not blocks:
            return ProviderResponse.no_response()

        text = "".join(
            get_field(block, "text") or ""
            for block in blocks
            if get_field(block, "type") == "text"
        )
        if not text:
            return ProviderResponse.no_response()

        return ProviderResponse.ok(text, self._tokens_used(response))

    @staticmethod
    def _tokens_used(response: Any) -> Optional[int]:
        usage = get_field(response, "usage")
        if not usage:
            return None
        input_tokens = get_field(usage, "input_tokens")
        output_tokens = get_field(usage, "output_tokens")
        if not isinstance(input_tokens, int) or not isinstance(output_tokens, int):
            return None
        return input_tokens + output_tokens
