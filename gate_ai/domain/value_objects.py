"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from enum import Enum
from typing import Literal

Role = Literal["system", "user", "assistant"]


class ProviderId(str, Enum):
    """Closed set of supported AI vendors."""
    GEMINI = "gemini"
    GROK = "grok"
    CLAUDE = "claude"
    OPENAI = "openai"
    GLM = "glm"


class ErrorKind(str, Enum):
    """Closed failure taxonomy shared by every provider."""
    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    NO_RESPONSE = "no_response"
    UNKNOWN = "unknown"


class SourceType(str, Enum):
    """Where a synthesis source was collected from."""
    WEB_CLIP = "web-clip"
    NOTE = "note"
    SELECTION = "selection"
    MANUAL = "manual"

    @property
    def label(self) -> str:
        return SOURCE_TYPE_LABELS[self]


class AnalysisType(str, Enum):
    """Kind of multi-source analysis requested."""
    SYNTHESIS = "synthesis"
    COMPARISON = "comparison"
    SUMMARY = "summary"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return ANALYSIS_TYPE_LABELS[self]


SOURCE_TYPE_LABELS = {
    SourceType.WEB_CLIP: "Web clip",
    SourceType.NOTE: "Note",
    SourceType.SELECTION: "Selection",
    SourceType.MANUAL: "Manual input",
}

ANALYSIS_TYPE_LABELS = {
    AnalysisType.SYNTHESIS: "Synthesis",
    AnalysisType.COMPARISON: "Comparison",
    AnalysisType.SUMMARY: "Summary",
    AnalysisType.CUSTOM: "Custom analysis",
}
