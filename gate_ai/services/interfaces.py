"""
Service interfaces - Define contracts for AI services.
Follows Interface Segregation Principle.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..core.settings import AISettings
from ..domain.entities import AIMessage, GenerationOptions, ProviderResponse, SynthesisRequest, SynthesisResult
from ..domain.value_objects import ProviderId


class IAIService(ABC):
    """Interface for provider-agnostic AI operations."""

    @property
    @abstractmethod
    def settings(self) -> AISettings:
        """Current settings snapshot."""
        pass

    @abstractmethod
    def is_provider_configured(self, provider_id: ProviderId) -> bool:
        """Check whether a non-blank API key exists for the provider."""
        pass

    @abstractmethod
    def get_model_for_provider(self, provider_id: ProviderId) -> str:
        """Resolve the model name used for the provider."""
        pass

    @abstractmethod
    def resolve_model(self, provider_id: ProviderId, settings: Optional[AISettings] = None) -> str:
        """Resolve the model for the provider against a settings snapshot (defaults to current)."""
        pass

    @abstractmethod
    async def generate_text(
        self,
        messages: Sequence[AIMessage],
        options: Optional[GenerationOptions] = None
    ) -> ProviderResponse:
        """Generate text with the active default provider."""
        pass

    @abstractmethod
    async def generate_text_with_provider(
        self,
        provider_id: ProviderId,
        messages: Sequence[AIMessage],
        options: Optional[GenerationOptions] = None
    ) -> ProviderResponse:
        """Generate text with an explicitly named provider."""
        pass

    @abstractmethod
    async def summarize_content(
        self,
        content: str,
        language: Optional[str] = None,
        options: Optional[GenerationOptions] = None
    ) -> ProviderResponse:
        """Summarize content in the requested language."""
        pass


class ISynthesisService(ABC):
    """Interface for multi-source synthesis."""

    @abstractmethod
    async def synthesize(self, request: SynthesisRequest) -> SynthesisResult:
        """Combine all sources of the request into one analysis."""
        pass
