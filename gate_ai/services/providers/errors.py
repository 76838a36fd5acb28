"""
Provider error normalization.

Every provider converts caught exceptions and vendor error payloads through
this module, so a given failure produces the same user-facing text and
ErrorKind regardless of vendor.

Classification is an ordered table of ErrorPattern entries; the first
matching pattern wins. Add new patterns by appending to ERROR_PATTERNS.
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

import anthropic
import httpx
import openai

from ...core.logging_config import get_logger
from ...domain.entities import ProviderResponse
from ...domain.value_objects import ErrorKind

logger = get_logger(__name__)

TIMEOUT_EXCEPTIONS: Tuple[type, ...] = (
    httpx.TimeoutException,
    openai.APITimeoutError,
    anthropic.APITimeoutError,
    asyncio.TimeoutError,
)


@dataclass(frozen=True)
class ErrorContext:
    """What the patterns look at: the error text and, when known, the HTTP status."""
    text: str
    status_code: Optional[int] = None
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class ErrorPattern:
    kind: ErrorKind
    predicate: Callable[[ErrorContext], bool]
    message: str


def _status_or_text(status: int, *needles: str, case_sensitive: bool = True) -> Callable[[ErrorContext], bool]:
    def predicate(ctx: ErrorContext) -> bool:
        if ctx.status_code == status:
            return True
        haystack = ctx.text if case_sensitive else ctx.text.lower()
        return any(needle in haystack for needle in needles)
    return predicate


def _is_timeout(ctx: ErrorContext) -> bool:
    if ctx.error is not None and isinstance(ctx.error, TIMEOUT_EXCEPTIONS):
        return True
    lowered = ctx.text.lower()
    return "timeout" in lowered or "timed out" in lowered or "ETIMEDOUT" in ctx.text


ERROR_PATTERNS: List[ErrorPattern] = [
    ErrorPattern(
        kind=ErrorKind.UNAUTHORIZED,
        predicate=_status_or_text(401, "401", "Unauthorized"),
        message="Invalid API key. Please check your API key in settings.",
    ),
    ErrorPattern(
        kind=ErrorKind.RATE_LIMITED,
        predicate=_status_or_text(429, "429", "rate limit", case_sensitive=False),
        message="Rate limit exceeded. Please wait a moment and try again.",
    ),
    ErrorPattern(
        kind=ErrorKind.TIMEOUT,
        predicate=_is_timeout,
        message="Request timed out. Please try again.",
    ),
]


def classify(ctx: ErrorContext) -> Optional[ErrorPattern]:
    """Return the first pattern matching ``ctx``, or None for unknown errors."""
    for pattern in ERROR_PATTERNS:
        if pattern.predicate(ctx):
            return pattern
    return None


def _vendor_message(error: BaseException) -> Optional[str]:
    # SDK status errors keep the decoded JSON body on .body
    body = getattr(error, "body", None)
    if isinstance(body, Mapping):
        inner = body.get("error", body)
        if isinstance(inner, Mapping) and isinstance(inner.get("message"), str):
            return inner["message"]
    vendor_message = getattr(error, "vendor_message", None)
    if isinstance(vendor_message, str) and vendor_message:
        return vendor_message
    return None


def normalize_error(error: Any) -> ProviderResponse:
    """
    Turn a caught exception (or error string) into a failed ProviderResponse.

    Args:
        error: Exception raised by an HTTP client/SDK, or a plain message

    Returns:
        ProviderResponse with success=False and a classified error_code
    """
    if isinstance(error, BaseException):
        text = str(error) or error.__class__.__name__
        status_code = getattr(error, "status_code", None)
        ctx = ErrorContext(
            text=text,
            status_code=status_code if isinstance(status_code, int) else None,
            error=error,
        )
    elif isinstance(error, str):
        ctx = ErrorContext(text=error)
    else:
        ctx = ErrorContext(text="Unknown error occurred")

    pattern = classify(ctx)
    if pattern is not None:
        logger.warning(f"Provider call failed ({pattern.kind.value}): {ctx.text}")
        return ProviderResponse.fail(pattern.message, pattern.kind)

    message = ctx.text
    if ctx.error is not None:
        message = _vendor_message(ctx.error) or ctx.text
    logger.error(f"Provider call failed: {message}")
    return ProviderResponse.fail(message, ErrorKind.UNKNOWN, vendor_code=_vendor_code(ctx.error))


def _vendor_code(error: Optional[BaseException]) -> Optional[str]:
    if error is None:
        return None
    for attr in ("vendor_code", "code", "type"):
        value = getattr(error, attr, None)
        if isinstance(value, (str, int)) and not isinstance(value, bool) and value != "":
            return str(value)
    status_code = getattr(error, "status_code", None)
    return str(status_code) if isinstance(status_code, int) else None


def vendor_error_response(payload_error: Any) -> ProviderResponse:
    """
    Surface a structured vendor error (``{"message": ..., "code"|"status"|"type": ...}``).

    The vendor's own message is kept and classified as unknown, unless it
    matches one of the ERROR_PATTERNS.
    """
    if isinstance(payload_error, Mapping):
        message = payload_error.get("message")
        code = payload_error.get("code") or payload_error.get("status") or payload_error.get("type")
    else:
        message = getattr(payload_error, "message", None) or str(payload_error)
        code = getattr(payload_error, "code", None)

    message = str(message) if message else "Unknown error occurred"
    status_code = code if isinstance(code, int) and not isinstance(code, bool) else None
    pattern = classify(ErrorContext(text=message, status_code=status_code))
    if pattern is not None:
        logger.warning(f"Vendor reported error ({pattern.kind.value}): {message}")
        return ProviderResponse.fail(pattern.message, pattern.kind, vendor_code=str(code) if code else None)

    logger.error(f"Vendor reported error: {message}")
    return ProviderResponse.fail(message, ErrorKind.UNKNOWN, vendor_code=str(code) if code else None)
