"""
Dispatcher Handlers - Chat completion dispatch across providers.

This module hides the differences between the supported LLM providers
behind a single call: given a provider, model, temperature and a
(system prompt, user prompt) pair, return one cleaned text answer.

Key components:
- ChatRequest: One request/response turn for a provider
- ChatDispatcher: Resolves credentials, picks the provider variant, normalizes output
- get_dispatcher(): Dispatcher built from the process settings
"""

import logging
import time
from dataclasses import dataclass

import httpx

from hcailt.config import Settings, get_settings
from hcailt.dispatcher.cleanup import normalize_response
from hcailt.dispatcher.providers import (
    ChatProvider,
    FireworksProvider,
    GoogleProvider,
    GroqProvider,
    OpenAIProvider,
)
from hcailt.errors import MissingCredentialError, UnsupportedProviderError
from hcailt.registry.providers import (
    ProviderMetadata,
    ProviderName,
    get_provider_registry,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatRequest:
    """
    A single chat completion turn.

    Attributes:
        provider: Provider name ("openai", "google", "groq", "fireworks")
        model: Provider-specific model identifier
        temperature: Sampling temperature, already clamped to [0, 1] by the caller
        system_prompt: Task instructions
        user_prompt: The interpolated request text
    """

    provider: ProviderName | str
    model: str
    temperature: float
    system_prompt: str
    user_prompt: str


class ChatDispatcher:
    """
    Provider-abstraction layer for chat completions.

    Holds the settings it was built with and no other state apart from
    lazily created provider variants, so one instance can serve any number
    of concurrent requests.
    """

    def __init__(
        self,
        settings: Settings,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._http_transport = http_transport
        self._registry = get_provider_registry()
        self._providers: dict[ProviderName, ChatProvider] = {}

    def credential_for(self, metadata: ProviderMetadata) -> str:
        """
        Resolve the credential for a provider.

        Raises:
            MissingCredentialError: If the credential is not configured.
        """
        secret = getattr(self._settings, metadata.settings_field, None)
        value = secret.get_secret_value() if secret is not None else ""
        if not value:
            raise MissingCredentialError(metadata.credential_env)
        return value

    def provider_for(self, name: ProviderName | str) -> ChatProvider:
        """
        Get the provider variant for ``name`` (lazy initialization).

        Raises:
            UnsupportedProviderError: If ``name`` is not a supported provider.
            MissingCredentialError: If its credential is not configured.
        """
        metadata = self._registry.get_provider(name)
        if metadata is None:
            raise UnsupportedProviderError(name)

        provider = self._providers.get(metadata.name)
        if provider is not None:
            return provider

        api_key = self.credential_for(metadata)
        settings = self._settings

        match metadata.name:
            case ProviderName.OPENAI:
                provider = OpenAIProvider(api_key)
            case ProviderName.GROQ:
                provider = GroqProvider(api_key)
            case ProviderName.GOOGLE:
                provider = GoogleProvider(
                    api_key,
                    max_attempts=settings.google_max_attempts,
                    backoff_seconds=settings.google_backoff_seconds,
                )
            case ProviderName.FIREWORKS:
                provider = FireworksProvider(
                    api_key,
                    base_url=settings.fireworks_base_url,
                    timeout=settings.request_timeout,
                    transport=self._http_transport,
                )
            case _:
                raise UnsupportedProviderError(name)

        self._providers[metadata.name] = provider
        return provider

    async def dispatch(self, request: ChatRequest) -> str:
        """
        Run one chat completion and return the cleaned answer.

        Args:
            request: The chat turn to send.

        Returns:
            The normalized answer text (see cleanup.normalize_response).

        Raises:
            UnsupportedProviderError: Unknown provider name.
            MissingCredentialError: Provider credential not configured.
            Exception: Provider errors propagate unchanged.
        """
        provider = self.provider_for(request.provider)
        logger.info(f"Dispatching to {request.model} via {provider.name.value}")

        start_time = time.perf_counter()
        raw = await provider.send(request)
        latency_ms = (time.perf_counter() - start_time) * 1000

        result = normalize_response(raw)
        logger.info(
            f"{provider.name.value} dispatch completed: model={request.model}, "
            f"latency={latency_ms:.0f}ms, chars={len(result)}"
        )
        return result


_dispatcher: ChatDispatcher | None = None


def get_dispatcher() -> ChatDispatcher:
    """
    Get the global dispatcher instance.

    Built on first use from get_settings().

    Returns:
        The singleton ChatDispatcher instance.
    """
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = ChatDispatcher(get_settings())
    return _dispatcher
