"""
Custom exceptions for gate-ai.

Generation paths never raise these across their public boundary; they are
used by settings loading and note persistence, and internally by the raw
HTTP provider before its errors are normalized.
"""
from typing import Optional


class GateAIError(Exception):
    """Base class for library errors."""
    pass


class SettingsError(GateAIError):
    """Raised when an AI settings payload cannot be parsed."""
    pass


class NoteSinkError(GateAIError):
    """Raised when a finished note cannot be persisted."""
    pass


class ProviderHTTPError(GateAIError):
    """
    Raised for a non-2xx vendor response.

    The message carries the status code and the vendor's own error text,
    never the request URL (which may hold the credential).
    """

    def __init__(self, status_code: int, message: str, vendor_code: Optional[str] = None):
        self.status_code = status_code
        self.vendor_message = message
        self.vendor_code = vendor_code
        super().__init__(f"Request failed, status {status_code}: {message}")
