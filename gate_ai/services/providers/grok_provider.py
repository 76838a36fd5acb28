"""
xAI Grok Provider.

Grok exposes an OpenAI-compatible chat completions API at https://api.x.ai/v1.
"""
from ...domain.value_objects import ProviderId
from .openai_compatible import OpenAICompatibleProvider


class GrokProvider(OpenAICompatibleProvider):
    """AI Provider using the xAI Grok API."""

    provider_id = ProviderId.GROK
