from .entities import (
    AIMessage,
    GenerationOptions,
    ProviderResponse,
    SourceItem,
    SourceMetadata,
    SynthesisRequest,
    SynthesisResult,
)
from .value_objects import AnalysisType, ErrorKind, ProviderId, SourceType

__all__ = [
    "AIMessage",
    "GenerationOptions",
    "ProviderResponse",
    "SourceItem",
    "SourceMetadata",
    "SynthesisRequest",
    "SynthesisResult",
    "AnalysisType",
    "ErrorKind",
    "ProviderId",
    "SourceType",
]
