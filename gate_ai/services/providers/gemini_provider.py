"""
Google Gemini Provider.

Calls the Gemini generateContent REST endpoint directly with httpx.
The credential travels in the ``key`` query parameter.
https://ai.google.dev/api/generate-content
"""
from typing import Any, Dict, List, Optional

import httpx

from ...core.exceptions import ProviderHTTPError
from ...core.logging_config import get_logger
from ...domain.entities import AIMessage, GenerationOptions, ProviderResponse
from ...domain.value_objects import ProviderId
from .base import AIProvider
from .errors import vendor_error_response

logger = get_logger(__name__)

TOP_P = 0.95
TOP_K = 40


class GeminiProvider(AIProvider):
    """AI Provider using the Google Gemini API."""

    provider_id = ProviderId.GEMINI

    def _url(self, model: str) -> str:
        return f"{self.config.endpoint}/models/{model}:generateContent"

    async def _post(self, url: str, api_key: str, body: Dict[str, Any]) -> httpx.Response:
        params = {"key": api_key}
        headers = {"Content-Type": "application/json"}
        if self._http_client is not None:
            return await self._http_client.post(url, params=params, json=body, headers=headers)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(url, params=params, json=body, headers=headers)

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        message = response.reason_phrase or "HTTP error"
        vendor_code = None
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            message = payload["error"].get("message") or message
            vendor_code = payload["error"].get("status")
        raise ProviderHTTPError(response.status_code, message, vendor_code)

    @staticmethod
    def convert_messages(messages: List[AIMessage]) -> Dict[str, Any]:
        """Build ``contents`` (+ ``systemInstruction``) from neutral messages."""
        system_prompt, rest = AIProvider.split_system(messages)
        body: Dict[str, Any] = {
            "contents": [
                {
                    "parts": [{"text": message.content}],
                    "role": "model" if message.role == "assistant" else "user",
                }
                for message in rest
            ]
        }
        if system_prompt:
            body["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        return body

    async def _test_api_key(self, api_key: str) -> bool:
        body = {"contents": [{"parts": [{"text": "Hello"}], "role": "user"}]}
        response = await self._post(self._url(self.config.default_model), api_key, body)
        if not response.is_success:
            logger.warning(f"Gemini API key test returned HTTP {response.status_code}")
            return False
        data = response.json()
        return not data.get("error") and isinstance(data.get("candidates"), list)

    async def _generate(
        self,
        messages: List[AIMessage],
        api_key: str,
        model: str,
        options: GenerationOptions,
    ) -> ProviderResponse:
        body = self.convert_messages(messages)
        body["generationConfig"] = {
            "temperature": options.temperature,
            "maxOutputTokens": options.max_tokens,
            "topP": TOP_P,
            "topK": TOP_K,
        }

        response = await self._post(self._url(model), api_key, body)
        self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError:
            logger.warning("Gemini returned a non-JSON body")
            return ProviderResponse.no_response()
        if not isinstance(data, dict):
            return ProviderResponse.no_response()

        if data.get("error"):
            return vendor_error_response(data["error"])

        candidates = data.get("candidates")
        if not candidates or not isinstance(candidates, list):
            return ProviderResponse.no_response()

        first = candidates[0] if isinstance(candidates[0], dict) else {}
        content = first.get("content") or {}
        parts = (content.get("parts") or []) if isinstance(content, dict) else []
        text = "".join(
            part.get("text", "") for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
        if not text:
            return ProviderResponse.no_response()

        return ProviderResponse.ok(text, self._tokens_used(data))

    @staticmethod
    def _tokens_used(data: Dict[str, Any]) -> Optional[int]:
        usage = data.get("usageMetadata") or {}
        total = usage.get("totalTokenCount")
        return int(total) if isinstance(total, (int, float)) else None
