import asyncio
from typing import Any, Awaitable, Callable, List, Tuple

import httpx
import pytest

from gate_ai.core.settings import AISettings
from gate_ai.domain.entities import AIMessage


class RecordingHandler:
    """MockTransport handler that records every request it answers."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)



@pytest.fixture
def run_with_http():
    """
    Run ``fn(client)`` on a fresh event loop with a mocked httpx.AsyncClient.

    Returns (result, handler) so tests can inspect the recorded requests.
    """
    def _run(
        responder: Callable[[httpx.Request], httpx.Response],
        fn: Callable[[httpx.AsyncClient], Awaitable[Any]],
    ) -> Tuple[Any, RecordingHandler]:
        handler = RecordingHandler(responder)

        async def main():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                return await fn(client)

        return asyncio.run(main()), handler

    return _run


@pytest.fixture
def messages():
    return [
        AIMessage.system("You are a helpful assistant."),
        AIMessage.user("Hi there"),
    ]


@pytest.fixture
def all_keys_settings():
    return AISettings.from_dict({
        "provider": "gemini",
        "apiKeys": {
            "gemini": "AIza-test",
            "grok": "xai-test",
            "claude": "sk-ant-test",
            "openai": "sk-test",
            "glm": "glm-id.glm-secret-that-is-long-enough-for-hs256",
        },
    })
