"""
Domain entities - Core business objects.
These represent the AI request/response concepts, independent of any vendor wire format.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .value_objects import AnalysisType, ErrorKind, ProviderId, Role, SourceType

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096


@dataclass(frozen=True)
class AIMessage:
    """One turn of a vendor-neutral conversation."""
    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "AIMessage":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "AIMessage":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "AIMessage":
        return cls(role="assistant", content=content)


@dataclass(frozen=True)
class GenerationOptions:
    """
    Per-call generation options.

    ``stream`` is accepted for interface compatibility; every provider
    call is made in full-response mode.
    """
    model: Optional[str] = None
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    stream: bool = False

    def with_model(self, model: str) -> "GenerationOptions":
        """Return a copy with ``model`` filled in when it was not set explicitly."""
        if self.model:
            return self
        return GenerationOptions(
            model=model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            stream=self.stream,
        )


@dataclass(frozen=True)
class ProviderResponse:
    """
    Neutral response produced by every provider.

    A successful response always carries non-empty content and no error;
    a failed one always carries an error and empty content.
    """
    success: bool
    content: str = ""
    tokens_used: Optional[int] = None
    error: Optional[str] = None
    error_code: Optional[ErrorKind] = None
    vendor_code: Optional[str] = None

    def __post_init__(self):
        if self.success:
            if not self.content:
                raise ValueError("Successful response must carry content")
            if self.error is not None:
                raise ValueError("Successful response cannot carry an error")
        else:
            if self.content:
                raise ValueError("Failed response cannot carry content")
            if not self.error:
                raise ValueError("Failed response must carry an error message")

    @classmethod
    def ok(cls, content: str, tokens_used: Optional[int] = None) -> "ProviderResponse":
        return cls(success=True, content=content, tokens_used=tokens_used)

    @classmethod
    def fail(
        cls,
        error: str,
        error_code: Optional[ErrorKind] = ErrorKind.UNKNOWN,
        vendor_code: Optional[str] = None,
    ) -> "ProviderResponse":
        return cls(
            success=False,
            content="",
            error=error or "Unknown error occurred",
            error_code=error_code,
            vendor_code=vendor_code,
        )

    @classmethod
    def no_response(cls) -> "ProviderResponse":
        return cls.fail("No response generated", ErrorKind.NO_RESPONSE)


@dataclass(frozen=True)
class SourceMetadata:
    """Provenance of a synthesis source, kept for citation."""
    char_count: int
    url: Optional[str] = None
    file_path: Optional[str] = None
    site_name: Optional[str] = None


@dataclass(frozen=True)
class SourceItem:
    """
    One unit of input content to a synthesis request.

    Use :meth:`create` to collect a source; it records ``char_count``
    from the content at collection time.
    """
    title: str
    content: str
    type: SourceType
    metadata: SourceMetadata

    @classmethod
    def create(
        cls,
        title: str,
        content: str,
        source_type: SourceType = SourceType.MANUAL,
        url: Optional[str] = None,
        file_path: Optional[str] = None,
        site_name: Optional[str] = None,
    ) -> "SourceItem":
        return cls(
            title=title,
            content=content,
            type=SourceType(source_type),
            metadata=SourceMetadata(
                char_count=len(content),
                url=url or None,
                file_path=file_path or None,
                site_name=site_name or None,
            ),
        )


@dataclass(frozen=True)
class SynthesisRequest:
    """A multi-source analysis request; source order is significant."""
    sources: Tuple[SourceItem, ...]
    analysis_type: AnalysisType = AnalysisType.SYNTHESIS
    custom_prompt: Optional[str] = None
    include_source_references: bool = True
    language: str = "English"

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "sources", tuple(self.sources))
        object.__setattr__(self, "analysis_type", AnalysisType(self.analysis_type))

    @property
    def total_chars(self) -> int:
        return sum(source.metadata.char_count for source in self.sources)


@dataclass(frozen=True)
class SynthesisResult:
    """Outcome of one synthesis run: the vendor response plus back-references."""
    response: ProviderResponse
    sources: Tuple[SourceItem, ...] = field(default_factory=tuple)
    provider: Optional[ProviderId] = None
    model: Optional[str] = None
    title: Optional[str] = None
    document: Optional[str] = None
    total_chars: int = 0
    saved_path: Optional[str] = None
    save_error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.response.success

    @property
    def error(self) -> Optional[str]:
        return self.response.error

    def source_titles(self) -> List[str]:
        return [source.title for source in self.sources]
