"""
AI Providers Module - Modular AI provider implementations.

This module provides a plug-and-play architecture for AI providers
using the Strategy pattern.

To add a new AI provider:
1. Add its id to ProviderId and its config to the provider registry
2. Create a provider class inheriting from AIProvider
3. Add a branch for it in AIProviderFactory.create
"""
from .base import AIProvider
from .claude_provider import ClaudeProvider
from .errors import ERROR_PATTERNS, ErrorPattern, normalize_error, vendor_error_response
from .factory import AIProviderFactory
from .gemini_provider import GeminiProvider
from .glm_provider import GLMProvider, derive_glm_token
from .grok_provider import GrokProvider
from .openai_compatible import OpenAICompatibleProvider
from .openai_provider import OpenAIProvider

__all__ = [
    "AIProvider",
    "AIProviderFactory",
    "ClaudeProvider",
    "ERROR_PATTERNS",
    "ErrorPattern",
    "GeminiProvider",
    "GLMProvider",
    "GrokProvider",
    "OpenAICompatibleProvider",
    "OpenAIProvider",
    "derive_glm_token",
    "normalize_error",
    "vendor_error_response",
]
