import asyncio

import httpx

from gate_ai.core.exceptions import ProviderHTTPError
from gate_ai.domain.value_objects import ErrorKind
from gate_ai.services.providers.errors import (
    ERROR_PATTERNS,
    ErrorContext,
    classify,
    normalize_error,
    vendor_error_response,
)


def test_patterns_are_ordered():
    kinds = [pattern.kind for pattern in ERROR_PATTERNS]
    assert kinds == [ErrorKind.UNAUTHORIZED, ErrorKind.RATE_LIMITED, ErrorKind.TIMEOUT]


def test_unauthorized_by_status_code():
    response = normalize_error(ProviderHTTPError(401, "API key not valid"))
    assert response.success is False
    assert response.error_code == ErrorKind.UNAUTHORIZED
    assert response.error == "Invalid API key. Please check your API key in settings."


def test_unauthorized_by_text():
    assert normalize_error(Exception("401 Unauthorized")).error_code == ErrorKind.UNAUTHORIZED
    assert normalize_error("Unauthorized").error_code == ErrorKind.UNAUTHORIZED


def test_rate_limited_is_case_insensitive():
    assert normalize_error(Exception("Rate Limit reached for requests")).error_code == ErrorKind.RATE_LIMITED
    assert normalize_error(ProviderHTTPError(429, "Resource exhausted")).error_code == ErrorKind.RATE_LIMITED


def test_timeout_by_exception_type_and_text():
    assert normalize_error(httpx.ReadTimeout("read")).error_code == ErrorKind.TIMEOUT
    assert normalize_error(asyncio.TimeoutError()).error_code == ErrorKind.TIMEOUT
    assert normalize_error(Exception("connect ETIMEDOUT 1.2.3.4:443")).error_code == ErrorKind.TIMEOUT
    assert normalize_error(Exception("Request timed out.")).error_code == ErrorKind.TIMEOUT


def test_unauthorized_wins_over_timeout():
    # First matching pattern decides
    pattern = classify(ErrorContext(text="401 after timeout"))
    assert pattern.kind == ErrorKind.UNAUTHORIZED


def test_unknown_keeps_vendor_message():
    response = normalize_error(ProviderHTTPError(400, "model not found", vendor_code="INVALID_ARGUMENT"))
    assert response.error_code == ErrorKind.UNKNOWN
    assert response.error == "model not found"
    assert response.vendor_code == "INVALID_ARGUMENT"


def test_unknown_plain_exception():
    response = normalize_error(ValueError("boom"))
    assert response.success is False
    assert response.content == ""
    assert response.error == "boom"
    assert response.error_code == ErrorKind.UNKNOWN


def test_non_exception_input():
    response = normalize_error(None)
    assert response.error == "Unknown error occurred"
    assert response.error_code == ErrorKind.UNKNOWN


def test_vendor_error_payload_unknown():
    response = vendor_error_response({"message": "Quota project missing", "code": 400})
    assert response.error == "Quota project missing"
    assert response.error_code == ErrorKind.UNKNOWN
    assert response.vendor_code == "400"


def test_vendor_error_payload_classified():
    response = vendor_error_response({"message": "API key not valid", "code": 401})
    assert response.error_code == ErrorKind.UNAUTHORIZED
    response = vendor_error_response({"message": "Rate limit reached", "type": "requests"})
    assert response.error_code == ErrorKind.RATE_LIMITED


def test_error_message_never_contains_url():
    error = ProviderHTTPError(403, "Permission denied")
    assert "key=" not in str(error)
    assert "403" in str(error)
