"""
gate-ai: one interface over Gemini, Grok, Claude, OpenAI and GLM, plus a
multi-source synthesis pipeline that writes markdown notes.
"""
from .core.exceptions import GateAIError, NoteSinkError, SettingsError
from .core.logging_config import get_logger, setup_logging
from .core.providers_registry import AI_PROVIDERS, ProviderConfig, get_provider_config
from .core.settings import AISettings
from .domain import (
    AIMessage,
    AnalysisType,
    ErrorKind,
    GenerationOptions,
    ProviderId,
    ProviderResponse,
    SourceItem,
    SourceMetadata,
    SourceType,
    SynthesisRequest,
    SynthesisResult,
)
from .services import AIService, SynthesisService
from .services.storage import LocalNoteSink, NoteSink, NoteSinkFactory

__version__ = "0.1.0"

__all__ = [
    "AI_PROVIDERS",
    "AIMessage",
    "AIService",
    "AISettings",
    "AnalysisType",
    "ErrorKind",
    "GateAIError",
    "GenerationOptions",
    "LocalNoteSink",
    "NoteSink",
    "NoteSinkError",
    "NoteSinkFactory",
    "ProviderConfig",
    "ProviderId",
    "ProviderResponse",
    "SettingsError",
    "SourceItem",
    "SourceMetadata",
    "SourceType",
    "SynthesisRequest",
    "SynthesisResult",
    "SynthesisService",
    "get_logger",
    "get_provider_config",
    "setup_logging",
]
