import pytest

from gate_ai.domain.entities import (
    AIMessage,
    GenerationOptions,
    ProviderResponse,
    SourceItem,
    SynthesisRequest,
)
from gate_ai.domain.value_objects import AnalysisType, ErrorKind, SourceType


def test_successful_response_requires_content():
    with pytest.raises(ValueError):
        ProviderResponse(success=True, content="")


def test_successful_response_rejects_error():
    with pytest.raises(ValueError):
        ProviderResponse(success=True, content="text", error="oops")


def test_failed_response_rejects_content():
    with pytest.raises(ValueError):
        ProviderResponse(success=False, content="text", error="oops")


def test_failed_response_requires_error():
    with pytest.raises(ValueError):
        ProviderResponse(success=False)


def test_response_constructors():
    ok = ProviderResponse.ok("hello", tokens_used=12)
    assert ok.success and ok.content == "hello" and ok.error is None and ok.tokens_used == 12

    failed = ProviderResponse.fail("bad", ErrorKind.RATE_LIMITED)
    assert not failed.success and failed.content == "" and failed.error_code == ErrorKind.RATE_LIMITED

    empty = ProviderResponse.no_response()
    assert empty.error_code == ErrorKind.NO_RESPONSE
    assert empty.error == "No response generated"


def test_message_helpers():
    assert AIMessage.system("s").role == "system"
    assert AIMessage.user("u").role == "user"
    assert AIMessage.assistant("a").role == "assistant"


def test_options_with_model_keeps_explicit_model():
    assert GenerationOptions(model="explicit").with_model("fallback").model == "explicit"
    filled = GenerationOptions(temperature=0.2, max_tokens=50).with_model("fallback")
    assert filled.model == "fallback"
    assert filled.temperature == 0.2
    assert filled.max_tokens == 50


def test_source_item_records_char_count():
    source = SourceItem.create("Title", "abcdef", SourceType.WEB_CLIP, url="https://example.com")
    assert source.metadata.char_count == 6
    assert source.metadata.url == "https://example.com"
    assert source.metadata.file_path is None
    assert source.type is SourceType.WEB_CLIP


def test_synthesis_request_normalizes_inputs():
    sources = [SourceItem.create("A", "123"), SourceItem.create("B", "4567")]
    request = SynthesisRequest(sources=sources, analysis_type="comparison")
    assert isinstance(request.sources, tuple)
    assert request.analysis_type is AnalysisType.COMPARISON
    assert request.total_chars == 7
