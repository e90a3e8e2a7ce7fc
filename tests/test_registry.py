"""
Provider Registry Tests

Tests for provider metadata lookup and the temperature lock.
"""

import pytest

from hcailt.registry import (
    ProviderName,
    RoleModel,
    effective_temperature,
    get_provider_registry,
)


class TestProviderRegistry:
    """Tests for ProviderRegistry lookups."""

    def test_closed_provider_set(self):
        names = [p.name for p in get_provider_registry().list_providers()]
        assert names == [
            ProviderName.OPENAI,
            ProviderName.GOOGLE,
            ProviderName.GROQ,
            ProviderName.FIREWORKS,
        ]

    @pytest.mark.parametrize("name", ["openai", ProviderName.GROQ])
    def test_lookup_by_string_or_enum(self, name):
        assert get_provider_registry().get_provider(name) is not None

    @pytest.mark.parametrize("name", ["anthropic", "", "OpenAI"])
    def test_unknown_name_returns_none(self, name):
        assert get_provider_registry().get_provider(name) is None

    def test_only_google_merges_roles(self):
        registry = get_provider_registry()
        merged = [
            p.name for p in registry.list_providers() if p.role_model == RoleModel.MERGED_USER
        ]
        assert merged == [ProviderName.GOOGLE]

    def test_credential_variables(self):
        registry = get_provider_registry()
        assert {p.name.value: p.credential_env for p in registry.list_providers()} == {
            "openai": "OPENAI_API_KEY",
            "google": "GOOGLE_API_KEY",
            "groq": "GROQ_API_KEY",
            "fireworks": "FIREWORKS_API_KEY",
        }

    def test_singleton(self):
        assert get_provider_registry() is get_provider_registry()


class TestEffectiveTemperature:
    """Tests for effective_temperature()."""

    def test_locked_model_pinned(self):
        assert effective_temperature("gpt-5-mini", 0.1) == 1.0

    def test_other_models_unchanged(self):
        assert effective_temperature("gpt-5.1", 0.1) == 0.1
