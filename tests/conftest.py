"""
Pytest configuration and shared fixtures.

Provides test settings, mock provider SDK clients, a stub dispatcher and
FastAPI test clients for the HCAILT test suite.

IMPORTANT: Environment variables must be set BEFORE importing hcailt modules
that use pydantic-settings, as hcailt.main reads settings on import.
"""

import os
import sys

# Set test environment variables before importing hcailt modules
os.environ["OPENAI_API_KEY"] = "test-key-not-real"
os.environ["GOOGLE_API_KEY"] = "test-key-not-real"
os.environ["GROQ_API_KEY"] = "test-key-not-real"
os.environ["FIREWORKS_API_KEY"] = "test-key-not-real"
os.environ["ALLOWED_ORIGIN"] = "https://hcailt.awordz.com, http://localhost:5173"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DEBUG"] = "false"

# Now safe to import everything else
import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "asyncio: mark test as async")
    config.addinivalue_line(
        "markers", "integration: mark test as requiring real API calls"
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """
    Reset all singleton instances between tests.

    This ensures each test starts with a clean state.
    """
    yield

    from hcailt.config import get_settings

    get_settings.cache_clear()

    from hcailt.dispatcher import handlers

    handlers._dispatcher = None

    from hcailt.registry import providers

    providers._registry_instance = None


@pytest.fixture
def settings():
    """Settings with fake credentials for every provider, no .env file."""
    from hcailt.config import Settings

    return Settings(
        _env_file=None,
        openai_api_key="sk-openai-test",
        google_api_key="google-test",
        groq_api_key="gsk-groq-test",
        fireworks_api_key="fw-test",
        google_max_attempts=3,
        google_backoff_seconds=1.0,
    )


@pytest.fixture
def make_completion():
    """
    Factory fixture for OpenAI/Groq-style completion objects.

    Usage:
        completion = make_completion("Hello")
    """

    def _create(content: str | None = "The patient has hypertension."):
        completion = MagicMock()
        completion.choices = [MagicMock(message=MagicMock(content=content))]
        return completion

    return _create


@pytest.fixture
def make_chat_client(make_completion):
    """
    Factory fixture for a fully mocked AsyncOpenAI / AsyncGroq client.

    Usage:
        client = make_chat_client("answer")
        client = make_chat_client(side_effect=Exception("boom"))
    """

    def _create(content: str | None = "The patient has hypertension.", side_effect=None):
        client = AsyncMock()
        client.chat = MagicMock()
        client.chat.completions = MagicMock()
        if side_effect is not None:
            client.chat.completions.create = AsyncMock(side_effect=side_effect)
        else:
            client.chat.completions.create = AsyncMock(
                return_value=make_completion(content)
            )
        return client

    return _create


@pytest.fixture
def chat_request():
    """
    Factory fixture for ChatRequest objects.

    Usage:
        request = chat_request("groq", model="openai/gpt-oss-120b")
    """

    def _create(
        provider: str = "openai",
        model: str = "gpt-5.1",
        temperature: float = 0.3,
        system_prompt: str = "You are a medical translator.",
        user_prompt: str = "Text: Paciente con disnea.",
    ):
        from hcailt.dispatcher.handlers import ChatRequest

        return ChatRequest(
            provider=provider,
            model=model,
            temperature=temperature,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
        )

    return _create


@pytest.fixture
def stub_dispatcher():
    """
    Create a dispatcher stub whose dispatch() returns a fixed answer.

    Set ``stub_dispatcher.dispatch.return_value`` or ``side_effect`` to
    control the answer.
    """
    dispatcher = MagicMock()
    dispatcher.dispatch = AsyncMock(return_value="The patient has hypertension.")
    return dispatcher


@pytest.fixture
def test_client(stub_dispatcher):
    """
    Create a FastAPI TestClient with the dispatcher replaced by a stub.

    No provider is contacted; every endpoint gets ``stub_dispatcher``.
    """
    # Clear cached app module to ensure a fresh import with test settings
    if "hcailt.main" in sys.modules:
        del sys.modules["hcailt.main"]

    from hcailt.dispatcher.handlers import get_dispatcher
    from hcailt.main import app

    app.dependency_overrides[get_dispatcher] = lambda: stub_dispatcher

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()

    # Clean up
    if "hcailt.main" in sys.modules:
        del sys.modules["hcailt.main"]


@pytest.fixture
def sample_texts():
    """Sample workflow payload texts."""
    return {
        "original": "Paciente con HTA en tratamiento con enalapril 10 mg.",
        "translated": "Patient with HTN on treatment with enalapril 10 mg.",
        "simplified": "The patient has high blood pressure and takes enalapril 10 mg.",
    }
