import json

import httpx

from gate_ai.domain.entities import AIMessage, GenerationOptions
from gate_ai.domain.value_objects import ErrorKind
from gate_ai.services.providers import GeminiProvider

API_KEY = "AIza-test-key"


def _generate(run_with_http, responder, messages, options=None):
    async def call(client):
        provider = GeminiProvider(http_client=client)
        return await provider.generate_text(messages, API_KEY, options)
    return run_with_http(responder, call)


def test_generate_success(run_with_http, messages):
    payload = {
        "candidates": [{"content": {"parts": [{"text": "Hello "}, {"text": "world"}], "role": "model"}}],
        "usageMetadata": {"totalTokenCount": 42},
    }
    response, handler = _generate(
        run_with_http,
        lambda request: httpx.Response(200, json=payload),
        messages,
        GenerationOptions(model="gemini-test", temperature=0.3, max_tokens=100),
    )

    assert response.success is True
    assert response.content == "Hello world"
    assert response.tokens_used == 42

    request = handler.requests[0]
    assert request.url.path.endswith("/models/gemini-test:generateContent")
    assert request.url.params["key"] == API_KEY
    body = json.loads(request.content)
    assert body["systemInstruction"] == {"parts": [{"text": "You are a helpful assistant."}]}
    assert body["contents"] == [{"parts": [{"text": "Hi there"}], "role": "user"}]
    assert body["generationConfig"] == {"temperature": 0.3, "maxOutputTokens": 100, "topP": 0.95, "topK": 40}


def test_assistant_role_maps_to_model():
    body = GeminiProvider.convert_messages([
        AIMessage.user("q"),
        AIMessage.assistant("a"),
    ])
    assert [content["role"] for content in body["contents"]] == ["user", "model"]
    assert "systemInstruction" not in body


def test_default_model_used_when_not_given(run_with_http, messages):
    payload = {"candidates": [{"content": {"parts": [{"text": "ok"}]}}]}
    _, handler = _generate(run_with_http, lambda request: httpx.Response(200, json=payload), messages)
    assert handler.requests[0].url.path.endswith("/models/gemini-2.5-flash:generateContent")


def test_empty_candidates_is_no_response(run_with_http, messages):
    for payload in ({"candidates": []}, {}, {"candidates": [{"content": {"parts": []}}]}, {"candidates": [{}]}):
        response, _ = _generate(run_with_http, lambda request, p=payload: httpx.Response(200, json=p), messages)
        assert response.success is False
        assert response.error_code == ErrorKind.NO_RESPONSE


def test_non_json_body_is_no_response(run_with_http, messages):
    response, _ = _generate(run_with_http, lambda request: httpx.Response(200, text="<html>"), messages)
    assert response.error_code == ErrorKind.NO_RESPONSE


def test_401_is_unauthorized(run_with_http, messages):
    payload = {"error": {"code": 401, "message": "API key not valid", "status": "UNAUTHENTICATED"}}
    response, _ = _generate(run_with_http, lambda request: httpx.Response(401, json=payload), messages)
    assert response.success is False
    assert response.error_code == ErrorKind.UNAUTHORIZED
    assert API_KEY not in response.error


def test_429_is_rate_limited(run_with_http, messages):
    payload = {"error": {"code": 429, "message": "Resource has been exhausted", "status": "RESOURCE_EXHAUSTED"}}
    response, _ = _generate(run_with_http, lambda request: httpx.Response(429, json=payload), messages)
    assert response.error_code == ErrorKind.RATE_LIMITED


def test_other_http_error_keeps_vendor_message(run_with_http, messages):
    payload = {"error": {"code": 400, "message": "Invalid model name", "status": "INVALID_ARGUMENT"}}
    response, _ = _generate(run_with_http, lambda request: httpx.Response(400, json=payload), messages)
    assert response.error_code == ErrorKind.UNKNOWN
    assert response.error == "Invalid model name"
    assert response.vendor_code == "INVALID_ARGUMENT"
    assert API_KEY not in response.error


def test_error_in_success_payload(run_with_http, messages):
    payload = {"error": {"code": 500, "message": "Internal error"}}
    response, _ = _generate(run_with_http, lambda request: httpx.Response(200, json=payload), messages)
    assert response.error == "Internal error"
    assert response.error_code == ErrorKind.UNKNOWN


def test_timeout(run_with_http, messages):
    def responder(request):
        raise httpx.ReadTimeout("timed out", request=request)

    response, _ = _generate(run_with_http, responder, messages)
    assert response.error_code == ErrorKind.TIMEOUT


def _test_key(run_with_http, responder):
    async def call(client):
        return await GeminiProvider(http_client=client).test_api_key(API_KEY)
    return run_with_http(responder, call)


def test_api_key_valid(run_with_http):
    valid, _ = _test_key(run_with_http, lambda request: httpx.Response(200, json={"candidates": []}))
    assert valid is True


def test_api_key_error_flagged_payload_is_invalid(run_with_http):
    payload = {"error": {"code": 400, "message": "API key not valid"}, "candidates": []}
    valid, _ = _test_key(run_with_http, lambda request: httpx.Response(200, json=payload))
    assert valid is False


def test_api_key_http_error_is_invalid(run_with_http):
    valid, _ = _test_key(run_with_http, lambda request: httpx.Response(403, json={}))
    assert valid is False


def test_api_key_network_error_is_invalid(run_with_http):
    def responder(request):
        raise httpx.ConnectError("unreachable", request=request)

    valid, _ = _test_key(run_with_http, responder)
    assert valid is False
