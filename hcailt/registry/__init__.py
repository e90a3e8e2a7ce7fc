"""
Registry module: supported LLM providers and model quirks.

Key exports:
- ProviderName: Closed enum of supported providers
- ProviderMetadata: Credential, role model and retry policy per provider
- get_provider_registry(): Get the global registry instance
- effective_temperature(): Apply per-model temperature locks
"""

from hcailt.registry.providers import (
    DEFAULT_TASK_TEMPERATURES,
    TEMPERATURE_LOCKED_MODELS,
    ProviderMetadata,
    ProviderName,
    ProviderRegistry,
    RoleModel,
    effective_temperature,
    get_provider_registry,
)

__all__ = [
    "DEFAULT_TASK_TEMPERATURES",
    "TEMPERATURE_LOCKED_MODELS",
    "ProviderMetadata",
    "ProviderName",
    "ProviderRegistry",
    "RoleModel",
    "effective_temperature",
    "get_provider_registry",
]
