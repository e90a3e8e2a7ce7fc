"""
Provider variants - one class per supported LLM provider.

Every variant exposes the same capability, ``await send(request) -> str``,
returning the raw (untrimmed, uncleaned) answer text. Request shaping,
authentication and response extraction stay inside the variant; the
dispatcher only picks one and normalizes what it returns.

- OpenAIProvider / GroqProvider: official async SDKs, system + user messages
- GoogleProvider: Gemini through LangChain, prompts merged into one user
  turn, retried while the service reports 503/overloaded
- FireworksProvider: raw HTTP POST with a bearer header
"""

from abc import ABC, abstractmethod
import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx
from groq import AsyncGroq
from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from openai import AsyncOpenAI

from hcailt.errors import UpstreamError
from hcailt.registry.providers import ProviderName, effective_temperature

if TYPE_CHECKING:
    from hcailt.dispatcher.handlers import ChatRequest

logger = logging.getLogger(__name__)


def chat_messages(request: "ChatRequest") -> list[dict[str, str]]:
    """Build the two-message (system, user) conversation."""
    return [
        {"role": "system", "content": request.system_prompt},
        {"role": "user", "content": request.user_prompt},
    ]


def merged_prompt(request: "ChatRequest") -> str:
    """Single user turn for providers without a system role."""
    return f"{request.system_prompt}\n\n{request.user_prompt}"


def _completion_text(completion: Any) -> str:
    """Extract ``choices[0].message.content`` from an SDK completion."""
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else ""


class ChatProvider(ABC):
    """Base class for provider variants."""

    name: ProviderName

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    @abstractmethod
    async def send(self, request: "ChatRequest") -> str:
        """Send one chat turn and return the raw answer text."""


class OpenAIProvider(ChatProvider):
    """OpenAI chat completions. Single attempt."""

    name = ProviderName.OPENAI

    def __init__(self, api_key: str) -> None:
        super().__init__(api_key)
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        """AsyncOpenAI client (lazy initialization)."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
            logger.debug("Initialized OpenAI client")
        return self._client

    async def send(self, request: "ChatRequest") -> str:
        completion = await self.client.chat.completions.create(
            model=request.model,
            temperature=effective_temperature(request.model, request.temperature),
            messages=chat_messages(request),
        )
        return _completion_text(completion)


class GroqProvider(ChatProvider):
    """Groq chat completions (OpenAI-compatible shape). Single attempt."""

    name = ProviderName.GROQ

    def __init__(self, api_key: str) -> None:
        super().__init__(api_key)
        self._client: AsyncGroq | None = None

    @property
    def client(self) -> AsyncGroq:
        """AsyncGroq client (lazy initialization)."""
        if self._client is None:
            self._client = AsyncGroq(api_key=self._api_key)
            logger.debug("Initialized Groq client")
        return self._client

    async def send(self, request: "ChatRequest") -> str:
        completion = await self.client.chat.completions.create(
            model=request.model,
            temperature=request.temperature,
            messages=chat_messages(request),
        )
        return _completion_text(completion)


def is_overloaded_error(exc: BaseException) -> bool:
    """
    Check whether a Google error signals transient overload.

    Matches a 503 status attribute, or "503" / "overloaded" anywhere in the
    error text.
    """
    for attr in ("status_code", "code"):
        if getattr(exc, attr, None) == 503:
            return True
    message = str(exc).lower()
    return "503" in message or "overloaded" in message


def _message_text(message: Any) -> str:
    """Text of a LangChain message whose content may be a string or parts."""
    content = getattr(message, "content", "")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text") or "")
        return "".join(parts)
    return ""


class GoogleProvider(ChatProvider):
    """
    Gemini generation through LangChain.

    Gemini gets no separate system message; the system prompt is prepended
    to the user content. Calls that fail with 503/overloaded are retried up
    to ``max_attempts`` in total, waiting ``attempt * backoff_seconds``
    after failed attempt N. Other errors, and the last overload error,
    propagate unchanged.
    """

    name = ProviderName.GOOGLE

    def __init__(
        self,
        api_key: str,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
    ) -> None:
        super().__init__(api_key)
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds

    def build_model(self, request: "ChatRequest") -> ChatGoogleGenerativeAI:
        # Retries are handled here, not by the SDK.
        return ChatGoogleGenerativeAI(
            api_key=self._api_key,
            model=request.model,
            temperature=request.temperature,
            max_retries=1,
        )

    async def send(self, request: "ChatRequest") -> str:
        model = self.build_model(request)
        messages = [HumanMessage(content=merged_prompt(request))]

        for attempt in range(1, self.max_attempts + 1):
            try:
                message = await model.ainvoke(messages)
                return _message_text(message)
            except Exception as e:
                if not is_overloaded_error(e) or attempt >= self.max_attempts:
                    raise
                wait_time = attempt * self.backoff_seconds
                logger.warning(
                    f"Google 503/overloaded (attempt {attempt}/{self.max_attempts}), "
                    f"retrying attempt {attempt + 1} in {wait_time:.1f}s: {e}"
                )
                await asyncio.sleep(wait_time)

        # max_attempts >= 1, so the loop always returns or raises
        raise RuntimeError("Google retry loop exited without a result")


class FireworksProvider(ChatProvider):
    """
    Fireworks AI over raw HTTP.

    The request body and bearer header are built by hand. Any non-2xx
    response becomes an UpstreamError carrying the status and body text.
    """

    name = ProviderName.FIREWORKS

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.fireworks.ai/inference/v1",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(api_key)
        self.url = f"{base_url.rstrip('/')}/chat/completions"
        self.timeout = timeout
        self._transport = transport

    async def send(self, request: "ChatRequest") -> str:
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            response = await client.post(
                self.url,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "model": request.model,
                    "temperature": request.temperature,
                    "messages": chat_messages(request),
                },
            )

        if not response.is_success:
            raise UpstreamError(
                f"Fireworks error {response.status_code}: {response.text}",
                status=response.status_code,
                body=response.text,
            )

        data = response.json()
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return ""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            return "\n".join(str(part) for part in content)
        return ""
