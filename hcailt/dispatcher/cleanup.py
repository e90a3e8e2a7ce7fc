"""
Response normalization for model output.

Some reasoning-capable models leak their deliberation into the answer,
wrapped in tags that are frequently malformed. The pattern below starts at
an opening ``<tool_call>`` tag and ends at the next closing ``</think>``
tag (non-greedy, across newlines). The open and close markers are not a
matching pair; models emit them this way.
"""

import re

REASONING_TRACE_PATTERN = re.compile(r"<tool_call>[\s\S]*?</think>")

REASONING_ONLY_MARKER = "⚠️ Model only output reasoning (no final answer found):"


def strip_reasoning_trace(text: str) -> str:
    """Remove every reasoning trace from ``text`` and trim the remainder."""
    # Removing one trace can splice a new one together from its neighbours.
    previous = None
    while previous != text:
        previous = text
        text = REASONING_TRACE_PATTERN.sub("", text)
    return text.strip()


def normalize_response(raw: str | None) -> str:
    """
    Turn raw provider text into the final answer returned to callers.

    Args:
        raw: Text extracted from the provider response (may be None).

    Returns:
        The cleaned answer. If only a reasoning trace was produced, the raw
        text prefixed with REASONING_ONLY_MARKER. Empty string when the
        provider returned nothing.
    """
    content = (raw or "").strip()
    clean = strip_reasoning_trace(content)
    if clean:
        return clean
    if content:
        return f"{REASONING_ONLY_MARKER}\n\n{content}"
    return ""
