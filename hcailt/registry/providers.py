"""
Provider Registry

This module defines the closed set of supported LLM providers with the
metadata the dispatcher and the API need for each one:
- OpenAI: chat completions via the official async SDK
- Groq: chat completions via the official async SDK (same shape as OpenAI)
- Google: Gemini generation via LangChain, no native system role, retried on overload
- Fireworks: raw HTTP chat completions endpoint

Each provider entry includes:
- The environment variable holding its credential
- Whether system prompts are sent as a separate message
- Its retry policy
- Suggested model identifiers for the client's model picker
"""

from enum import Enum
from pydantic import BaseModel, Field


class ProviderName(str, Enum):
    """Supported inference providers."""

    OPENAI = "openai"
    GOOGLE = "google"
    GROQ = "groq"
    FIREWORKS = "fireworks"


class RoleModel(str, Enum):
    """How the system and user prompts are laid out in the request."""

    SYSTEM_AND_USER = "system_and_user"  # two separate messages
    MERGED_USER = "merged_user"  # system prompt prepended to a single user turn


class ProviderMetadata(BaseModel):
    """
    Complete metadata for a registered provider.

    This class holds all information needed to:
    1. Resolve the provider credential from settings
    2. Shape the outbound request
    3. Describe the provider to API clients
    """

    name: ProviderName = Field(..., description="Provider identifier used in requests")

    display_name: str = Field(..., description="Human-readable provider name")

    credential_env: str = Field(
        ...,
        description="Environment variable holding the provider credential",
    )

    settings_field: str = Field(
        ...,
        description="Settings attribute holding the provider credential",
    )

    role_model: RoleModel = Field(
        default=RoleModel.SYSTEM_AND_USER,
        description="How prompts are placed in the outbound request",
    )

    max_attempts: int = Field(
        default=1,
        ge=1,
        description="Total attempts per request (1 = no retry)",
    )

    suggested_models: list[str] = Field(
        default_factory=list,
        description="Model identifiers offered by the client, first is the default",
    )


# Models that reject every temperature other than the pinned value.
TEMPERATURE_LOCKED_MODELS: dict[str, float] = {
    "gpt-5-mini": 1.0,
}

# Default temperatures per workflow step, as used by the browser client.
DEFAULT_TASK_TEMPERATURES: dict[str, float] = {
    "translate": 0.3,
    "plain": 0.7,
    "qe": 0.2,
}


def effective_temperature(model: str, requested: float) -> float:
    """Return the temperature actually sent upstream for ``model``."""
    return TEMPERATURE_LOCKED_MODELS.get(model, requested)


class ProviderRegistry:
    """
    Central registry of all supported providers.

    Attributes:
        _providers: Dictionary mapping provider names to their metadata
    """

    def __init__(self) -> None:
        self._providers: dict[ProviderName, ProviderMetadata] = {}
        self._initialize_providers()

    def _initialize_providers(self) -> None:
        """Register all supported providers with their metadata."""

        self._register(
            ProviderMetadata(
                name=ProviderName.OPENAI,
                display_name="OpenAI",
                credential_env="OPENAI_API_KEY",
                settings_field="openai_api_key",
                suggested_models=["gpt-5.1", "gpt-5-mini"],
            )
        )

        self._register(
            ProviderMetadata(
                name=ProviderName.GOOGLE,
                display_name="Google Gemini",
                credential_env="GOOGLE_API_KEY",
                settings_field="google_api_key",
                role_model=RoleModel.MERGED_USER,
                max_attempts=3,
                suggested_models=[
                    "models/gemini-2.5-flash",
                    "models/gemini-flash-lite-latest",
                ],
            )
        )

        self._register(
            ProviderMetadata(
                name=ProviderName.GROQ,
                display_name="Groq",
                credential_env="GROQ_API_KEY",
                settings_field="groq_api_key",
                suggested_models=["openai/gpt-oss-120b"],
            )
        )

        self._register(
            ProviderMetadata(
                name=ProviderName.FIREWORKS,
                display_name="Fireworks AI",
                credential_env="FIREWORKS_API_KEY",
                settings_field="fireworks_api_key",
                suggested_models=["accounts/fireworks/models/deepseek-v3p1-terminus"],
            )
        )

    def _register(self, provider: ProviderMetadata) -> None:
        self._providers[provider.name] = provider

    def get_provider(self, name: ProviderName | str) -> ProviderMetadata | None:
        """
        Retrieve provider metadata by name.

        Args:
            name: Provider enum member or its string value

        Returns:
            ProviderMetadata if the provider is supported, None otherwise
        """
        try:
            key = ProviderName(name)
        except ValueError:
            return None
        return self._providers.get(key)

    def list_providers(self) -> list[ProviderMetadata]:
        """Return all registered providers, in registration order."""
        return list(self._providers.values())


_registry_instance: ProviderRegistry | None = None


def get_provider_registry() -> ProviderRegistry:
    """
    Get the global provider registry instance.

    Uses lazy initialization to create the registry only when needed.

    Returns:
        The singleton ProviderRegistry instance
    """
    global _registry_instance
    if _registry_instance is None:
        _registry_instance = ProviderRegistry()
    return _registry_instance
