from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..core import config
from ..core.logging_config import get_logger
from ..core.providers_registry import AI_PROVIDERS, ProviderConfig, get_all_provider_configs
from ..core.settings import AISettings
from ..domain.entities import AIMessage, GenerationOptions, ProviderResponse
from ..domain.value_objects import ErrorKind, ProviderId
from .interfaces import IAIService
from .providers import AIProvider, AIProviderFactory, normalize_error
from .templates import build_analysis_prompt

logger = get_logger(__name__)


class AIService(IAIService):
    """
    AI service implementation.
    Resolves provider, credential and model for each request and dispatches
    to the matching provider. Never raises across its public methods: local
    validation failures and provider errors come back as failed
    ProviderResponse objects.

    Settings are an immutable snapshot; update_settings swaps the whole
    object, so a call in flight keeps the settings it started with.
    """
    def __init__(
        self,
        settings: AISettings,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = config.AI_REQUEST_TIMEOUT,
        providers: Optional[Dict[ProviderId, AIProvider]] = None,
    ):
        """
        Initialize the AI service.

        Args:
            settings: Current AI settings
            http_client: Optional shared async HTTP client handed to every
                provider; it stays owned by the caller
            timeout: Request timeout in seconds
            providers: Provider instances keyed by id (defaults to one per
                ProviderId from AIProviderFactory)
        """
        self._settings = settings
        self._http_client = http_client
        self._owns_http_client = False
        self._providers = providers if providers is not None else AIProviderFactory.create_all(
            http_client=http_client, timeout=timeout
        )
        logger.info(
            f"Initialized AIService (default provider: "
            f"{settings.provider.value if settings.provider else 'none'})"
        )

    @classmethod
    def with_shared_client(
        cls,
        settings: AISettings,
        timeout: float = config.AI_REQUEST_TIMEOUT,
    ) -> "AIService":
        """Create a service that owns one pooled HTTP client; close it with aclose()."""
        client = httpx.AsyncClient(timeout=timeout)
        service = cls(settings, http_client=client, timeout=timeout)
        service._owns_http_client = True
        return service

    async def aclose(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            self._owns_http_client = False

    async def __aenter__(self) -> "AIService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def settings(self) -> AISettings:
        return self._settings

    def update_settings(self, settings: AISettings) -> None:
        """Replace the settings snapshot."""
        self._settings = settings
        logger.debug("AI settings updated")

    def get_current_provider(self) -> Optional[AIProvider]:
        provider_id = self._settings.provider
        return self._providers.get(provider_id) if provider_id else None

    def get_provider(self, provider_id: ProviderId) -> Optional[AIProvider]:
        return self._providers.get(ProviderId(provider_id))

    def get_all_provider_configs(self) -> List[ProviderConfig]:
        return get_all_provider_configs()

    def get_configured_providers(self) -> List[ProviderId]:
        """Providers that have a non-blank API key."""
        return [provider_id for provider_id in ProviderId if self.is_provider_configured(provider_id)]

    def is_provider_configured(self, provider_id: ProviderId) -> bool:
        api_key = self._settings.get_api_key(provider_id)
        return bool(api_key and api_key.strip())

    @staticmethod
    def _resolve_model(settings: AISettings, provider_id: ProviderId) -> str:
        provider_id = ProviderId(provider_id)
        configured = settings.models.get(provider_id) or AI_PROVIDERS[provider_id].default_model
        # The override only ever applies to the active default provider
        if settings.use_custom_model and settings.provider == provider_id:
            return settings.custom_model.strip() or configured
        return configured

    def resolve_model(self, provider_id: ProviderId, settings: Optional[AISettings] = None) -> str:
        return self._resolve_model(settings or self._settings, provider_id)

    def get_model_for_provider(self, provider_id: ProviderId) -> str:
        return self.resolve_model(provider_id)

    async def test_api_key(self, provider_id: ProviderId, api_key: str) -> Dict[str, Any]:
        """
        Test a credential against a provider.

        Returns:
            {"success": bool, "error": Optional[str]}
        """
        provider = self._providers.get(ProviderId(provider_id))
        if provider is None:
            return {"success": False, "error": "Provider not found"}
        if not api_key or not api_key.strip():
            return {"success": False, "error": "API key is empty"}

        try:
            is_valid = await provider.test_api_key(api_key.strip())
        except Exception as e:
            logger.error(f"API key test for {provider.name} failed: {e}", exc_info=True)
            return {"success": False, "error": str(e) or "Unknown error"}

        logger.info(f"API key test for {provider.name}: {'ok' if is_valid else 'invalid'}")
        return {"success": is_valid, "error": None if is_valid else "Invalid API key"}

    async def generate_text(
        self,
        messages: Sequence[AIMessage],
        options: Optional[GenerationOptions] = None
    ) -> ProviderResponse:
        settings = self._settings
        if settings.provider is None:
            return ProviderResponse.fail("No provider selected", ErrorKind.UNKNOWN)
        return await self._dispatch(settings, settings.provider, messages, options)

    async def generate_text_with_provider(
        self,
        provider_id: ProviderId,
        messages: Sequence[AIMessage],
        options: Optional[GenerationOptions] = None
    ) -> ProviderResponse:
        try:
            provider_id = ProviderId(provider_id)
        except ValueError:
            return ProviderResponse.fail("Provider not found", ErrorKind.UNKNOWN)
        return await self._dispatch(self._settings, provider_id, messages, options)

    async def _dispatch(
        self,
        settings: AISettings,
        provider_id: ProviderId,
        messages: Sequence[AIMessage],
        options: Optional[GenerationOptions],
    ) -> ProviderResponse:
        provider = self._providers.get(provider_id)
        if provider is None:
            return ProviderResponse.fail("Provider not found", ErrorKind.UNKNOWN)

        api_key = settings.get_api_key(provider_id)
        if not api_key or not api_key.strip():
            logger.warning(f"API key not configured for {provider.name}")
            return ProviderResponse.fail(f"API key not configured for {provider.name}", ErrorKind.UNKNOWN)

        if not messages:
            return ProviderResponse.fail("No messages to send", ErrorKind.UNKNOWN)

        final_options = (options or GenerationOptions()).with_model(self._resolve_model(settings, provider_id))
        logger.info(f"Dispatching to {provider.name} (model: {final_options.model})")

        try:
            response = await provider.generate_text(messages, api_key.strip(), final_options)
        except Exception as e:
            logger.error(f"{provider.name} raised unexpectedly: {e}", exc_info=True)
            return normalize_error(e)

        if response.success:
            logger.debug(
                f"{provider.name} responded (length: {len(response.content)} chars, "
                f"tokens: {response.tokens_used})"
            )
        else:
            logger.warning(f"{provider.name} failed ({response.error_code}): {response.error}")
        return response

    async def simple_generate(
        self,
        user_prompt: str,
        system_prompt: Optional[str] = None,
        options: Optional[GenerationOptions] = None
    ) -> ProviderResponse:
        """Generate from a single prompt (plus optional system prompt) with the active provider."""
        messages: List[AIMessage] = []
        if system_prompt:
            messages.append(AIMessage.system(system_prompt))
        messages.append(AIMessage.user(user_prompt))
        return await self.generate_text(messages, options)

    async def summarize_content(
        self,
        content: str,
        language: Optional[str] = None,
        options: Optional[GenerationOptions] = None
    ) -> ProviderResponse:
        language = language or self._settings.default_language
        logger.debug(f"Summarizing content (length: {len(content)} chars, language: {language})")
        system_prompt = f"""You are a helpful assistant that summarizes web content.
Always respond in {language}.
Provide clear, concise summaries that capture the key points."""
        user_prompt = f"Please summarize the following content:\n\n{content}"
        return await self.simple_generate(user_prompt, system_prompt, options)

    async def analyze(
        self,
        content: str,
        template_id: Optional[str] = None,
        custom_prompt: Optional[str] = None,
        provider_id: Optional[ProviderId] = None,
        language: Optional[str] = None,
        options: Optional[GenerationOptions] = None
    ) -> ProviderResponse:
        """
        Analyze one document with a template and/or a custom prompt.

        Args:
            content: Document text
            template_id: Analysis template id (see templates.list_templates)
            custom_prompt: Free-form instructions; appended to the template
                prompt, or used alone when no template is given
            provider_id: Provider to use (defaults to the active provider)
            language: Output language (defaults to settings.default_language)
            options: Generation options

        Returns:
            ProviderResponse with the analysis text
        """
        try:
            user_prompt = build_analysis_prompt(content, template_id, custom_prompt)
        except ValueError as e:
            return ProviderResponse.fail(str(e), ErrorKind.UNKNOWN)

        target = provider_id or self._settings.provider
        if target is None:
            return ProviderResponse.fail("No provider selected", ErrorKind.UNKNOWN)

        language = language or self._settings.default_language
        system_prompt = f"""You are an expert analyst who turns web content into well-structured notes.
Always respond in {language}.
Format the output as Markdown."""
        messages = [AIMessage.system(system_prompt), AIMessage.user(user_prompt)]
        return await self.generate_text_with_provider(target, messages, options)

    def get_provider_status(self, provider_id: ProviderId) -> Dict[str, Any]:
        """Provider state for display: name, configured, resolved model, default flag."""
        provider_id = ProviderId(provider_id)
        provider_config = AI_PROVIDERS[provider_id]
        return {
            "id": provider_id,
            "name": provider_config.name,
            "display_name": provider_config.display_name,
            "configured": self.is_provider_configured(provider_id),
            "model": self.get_model_for_provider(provider_id),
            "is_default": self._settings.provider == provider_id,
        }

    def get_all_provider_status(self) -> List[Dict[str, Any]]:
        return [self.get_provider_status(provider_id) for provider_id in ProviderId]
