"""
Dispatcher module: one chat-completion contract over several LLM providers.

This module provides a unified interface for sending a (system prompt,
user prompt) pair to OpenAI, Google, Groq or Fireworks. It handles
provider-specific request construction, authentication, response
extraction and the Google overload retry policy.

Key exports:
- ChatRequest: One request/response turn
- ChatDispatcher: Provider selection and response normalization
- get_dispatcher(): Get the global dispatcher instance
- normalize_response(): Reasoning-trace stripping and fallback messaging
"""

from hcailt.dispatcher.cleanup import (
    REASONING_ONLY_MARKER,
    normalize_response,
    strip_reasoning_trace,
)
from hcailt.dispatcher.handlers import (
    ChatDispatcher,
    ChatRequest,
    get_dispatcher,
)
from hcailt.dispatcher.providers import (
    ChatProvider,
    FireworksProvider,
    GoogleProvider,
    GroqProvider,
    OpenAIProvider,
)

__all__ = [
    # Core dispatch
    "ChatRequest",
    "ChatDispatcher",
    "get_dispatcher",
    # Response normalization
    "REASONING_ONLY_MARKER",
    "normalize_response",
    "strip_reasoning_trace",
    # Provider variants
    "ChatProvider",
    "OpenAIProvider",
    "GroqProvider",
    "GoogleProvider",
    "FireworksProvider",
]
