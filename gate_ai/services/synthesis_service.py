"""
Multi-source synthesis service.

Combines several independently collected sources into one aggregated
prompt, runs a single provider call through AIService and wraps the
result in a markdown document ready for a NoteSink.
"""
import dataclasses
import json
from datetime import datetime
from typing import List, Optional

from ..core import config
from ..core.logging_config import get_logger
from ..core.providers_registry import AI_PROVIDERS
from ..domain.entities import (
    AIMessage,
    GenerationOptions,
    ProviderResponse,
    SourceItem,
    SynthesisRequest,
    SynthesisResult,
)
from ..domain.value_objects import AnalysisType, ErrorKind, ProviderId
from .interfaces import IAIService, ISynthesisService
from .storage.base import NoteSink

logger = get_logger(__name__)

SOURCE_SEPARATOR = "\n\n---\n\n"

BASE_INSTRUCTIONS = {
    AnalysisType.SYNTHESIS: (
        "Integrate the sources below into one coherent analysis. "
        "Identify the common themes, point out where the sources agree or "
        "contradict each other, and draw an overall conclusion."
    ),
    AnalysisType.COMPARISON: (
        "Compare the sources below. For each source summarize its main claims "
        "and evaluate its strengths and weaknesses, then lay out the key "
        "similarities and differences between them."
    ),
    AnalysisType.SUMMARY: (
        "Condense the sources below into a single concise summary that keeps "
        "the key points of every source."
    ),
    AnalysisType.CUSTOM: "",
}


def render_source_block(index: int, source: SourceItem) -> str:
    """Render one source as a numbered prompt block (index is 1-based)."""
    lines = [
        f"### [Source {index}] {source.title}",
        f"- Type: {source.type.label}",
    ]
    if source.metadata.url:
        lines.append(f"- URL: {source.metadata.url}")
    if source.metadata.file_path:
        lines.append(f"- File: {source.metadata.file_path}")
    lines.append(f"- Characters: {source.metadata.char_count}")
    return "\n".join(lines) + f"\n\n{source.content}"


def render_sources(sources) -> str:
    return SOURCE_SEPARATOR.join(
        render_source_block(index, source) for index, source in enumerate(sources, start=1)
    )


def build_instruction(analysis_type: AnalysisType, custom_prompt: Optional[str] = None) -> str:
    """Base instruction for the analysis type, with a custom prompt prepended if given."""
    base = BASE_INSTRUCTIONS[AnalysisType(analysis_type)]
    custom_prompt = (custom_prompt or "").strip()
    if not custom_prompt:
        return base
    if not base:
        return custom_prompt
    return f"{custom_prompt}\n\n{base}"


def build_system_prompt(language: str, include_source_references: bool) -> str:
    prompt = f"""You are an expert research analyst who synthesizes information from multiple sources.
Always respond in {language}.
Format the output as Markdown."""
    if include_source_references:
        prompt += (
            "\nWhen you use information from a source, cite it inline as [Source N], "
            "where N is the source number."
        )
    return prompt


def build_user_prompt(request: SynthesisRequest) -> str:
    instruction = build_instruction(request.analysis_type, request.custom_prompt)
    count = len(request.sources)
    noun = "source" if count == 1 else "sources"
    parts = []
    if instruction:
        parts.append(instruction)
    parts.append(f"## Sources\n\n{render_sources(request.sources)}")
    parts.append(f"Base your answer on all {count} {noun} above.")
    return "\n\n".join(parts)


def build_messages(request: SynthesisRequest) -> List[AIMessage]:
    return [
        AIMessage.system(build_system_prompt(request.language, request.include_source_references)),
        AIMessage.user(build_user_prompt(request)),
    ]


def format_source_reference(source: SourceItem) -> str:
    """URL link if present, else a wiki link to the file, else the plain title."""
    if source.metadata.url:
        return f"[{source.title}]({source.metadata.url})"
    if source.metadata.file_path:
        return f"[[{source.metadata.file_path}|{source.title}]]"
    return source.title


def default_title(request: SynthesisRequest) -> str:
    label = request.analysis_type.label
    if not request.sources:
        return label
    title = f"{label}: {request.sources[0].title}"
    others = len(request.sources) - 1
    if others > 0:
        title += f" and {others} more"
    return title


def build_document(
    request: SynthesisRequest,
    body: str,
    provider_id: ProviderId,
    model: str,
    title: Optional[str] = None,
    created: Optional[datetime] = None,
) -> str:
    """
    Build the markdown note for a finished synthesis.

    Layout: frontmatter, title, analysis type, source references, total
    character count, then the analysis body.

    Args:
        request: The synthesis request
        body: Generated analysis text
        provider_id: Provider that produced the body
        model: Model that produced the body
        title: Note title (defaults to default_title(request))
        created: Creation time (defaults to now)

    Returns:
        Markdown document
    """
    title = title or default_title(request)
    created = created or datetime.now()
    timestamp = created.date().isoformat()

    references = "\n".join(
        f"{index}. {format_source_reference(source)}"
        for index, source in enumerate(request.sources, start=1)
    )

    return f"""---
title: {json.dumps(title, ensure_ascii=False)}
type: ai-synthesis
analysis_type: {request.analysis_type.value}
provider: {provider_id.value}
model: {model}
source_count: {len(request.sources)}
created: {timestamp}
tags:
  - ai-synthesis
---

# {title}

**Analysis type:** {request.analysis_type.label}

## Sources

{references}

**Total characters:** {request.total_chars}

## Analysis

{body}
"""


class SynthesisService(ISynthesisService):
    """
    Synthesis service implementation.
    Sends every source in one aggregated prompt through
    AIService.generate_text_with_provider; the whole run succeeds once or
    fails once.
    """

    def __init__(
        self,
        ai_service: IAIService,
        note_sink: Optional[NoteSink] = None,
        temperature: float = config.SYNTHESIS_TEMPERATURE,
        max_tokens: int = config.SYNTHESIS_MAX_TOKENS,
    ):
        self.ai_service = ai_service
        self.note_sink = note_sink
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def synthesize(self, request: SynthesisRequest) -> SynthesisResult:
        if not request.sources:
            return SynthesisResult(
                response=ProviderResponse.fail("No sources provided for synthesis", ErrorKind.UNKNOWN)
            )

        settings = self.ai_service.settings
        provider_id = settings.provider
        if provider_id is None:
            return SynthesisResult(
                response=ProviderResponse.fail("No provider selected", ErrorKind.UNKNOWN),
                sources=request.sources,
                total_chars=request.total_chars,
            )

        model = self.ai_service.resolve_model(provider_id, settings)
        options = GenerationOptions(
            model=model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        logger.info(
            f"Synthesizing {len(request.sources)} sources "
            f"({request.analysis_type.value}, {request.total_chars} chars) "
            f"with {AI_PROVIDERS[provider_id].name}"
        )
        response = await self.ai_service.generate_text_with_provider(
            provider_id, build_messages(request), options
        )

        result = SynthesisResult(
            response=response,
            sources=request.sources,
            provider=provider_id,
            model=model,
            total_chars=request.total_chars,
        )
        if not response.success:
            logger.warning(f"Synthesis failed: {response.error}")
            return result

        title = default_title(request)
        document = build_document(request, response.content, provider_id, model, title=title)
        return dataclasses.replace(result, title=title, document=document)

    async def synthesize_and_save(
        self,
        request: SynthesisRequest,
        sink: Optional[NoteSink] = None,
        title: Optional[str] = None,
    ) -> SynthesisResult:
        """
        Synthesize and hand the finished document to a note sink.

        A save failure is reported in ``save_error``; the synthesized
        document is still returned.

        Args:
            request: The synthesis request
            sink: Note sink (defaults to the one given at construction)
            title: Note title (defaults to the generated title)

        Returns:
            SynthesisResult with ``saved_path`` set on success
        """
        result = await self.synthesize(request)
        if not result.success:
            return result

        if title and title.strip() and title != result.title:
            title = title.strip()
            document = build_document(request, result.response.content, result.provider, result.model, title=title)
            result = dataclasses.replace(result, title=title, document=document)

        sink = sink or self.note_sink
        if sink is None:
            return dataclasses.replace(result, save_error="No note sink configured")

        try:
            saved_path = await sink.save_note(result.title, result.document)
        except Exception as e:
            logger.error(f"Saving synthesis note failed: {e}", exc_info=True)
            return dataclasses.replace(result, save_error=str(e))

        return dataclasses.replace(result, saved_path=saved_path)
