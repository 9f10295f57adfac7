"""Token estimation and counting.

Two layers:
- A heuristic estimator (CJK characters, ASCII words, other symbols) that needs
  no tokenizer and deliberately overestimates a little.
- Counters that prefer a precise, model-provided TokenCounter and silently fall
  back to the estimator when it is missing or misbehaves.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import math
import re

from ..utils.serializer import content_to_text
from .types import Message, TokenCounter

logger = logging.getLogger(__name__)

# Role and formatting overhead added to every message
MESSAGE_TOKEN_OVERHEAD = 4

WORD_TOKEN_WEIGHT = 1.3
OTHER_TOKEN_WEIGHT = 0.5

_CJK_RE = re.compile(r"[\u4e00-\u9fa5]")
_WORD_RE = re.compile(r"[a-zA-Z]+")
_NOT_OTHER_RE = re.compile(r"[\u4e00-\u9fa5a-zA-Z\s]")

_ROLE_LABELS = {
    "system": "system",
    "human": "user",
    "user": "user",
    "ai": "assistant",
    "assistant": "assistant",
}


# -- Heuristic estimator --------------------------------------------------------


def estimate_tokens(text: str | None) -> int:
    """Estimate token count for a string.

    CJK characters count 1 token each, ASCII words 1.3 and any other
    non-whitespace character 0.5. The sum is rounded up.

    Other characters are counted in UTF-16 code units, so characters outside
    the Basic Multilingual Plane (most emoji) count twice.
    """
    if not text:
        return 0
    cjk_chars = len(_CJK_RE.findall(text))
    words = len(_WORD_RE.findall(text))
    other_chars = len(_NOT_OTHER_RE.sub("", text).encode("utf-16-le")) // 2
    return math.ceil(cjk_chars + words * WORD_TOKEN_WEIGHT + other_chars * OTHER_TOKEN_WEIGHT)


def estimate_message_tokens(message: Message) -> int:
    """Estimate token count for a single conversation message, including overhead."""
    return estimate_tokens(content_to_text(message.get("content"))) + MESSAGE_TOKEN_OVERHEAD


def estimate_total_tokens(messages: list[Message]) -> int:
    """Estimate total token count for a list of conversation messages."""
    total = 0
    for msg in messages:
        total += estimate_message_tokens(msg)
    return total


# -- Message helpers ------------------------------------------------------------


def message_type(message: Message) -> str:
    """Raw role tag of a message ("role" key, falling back to LangChain-style "type")."""
    return str(message.get("role") or message.get("type") or "")


def is_system_message(message: Message) -> bool:
    return message_type(message) == "system"


def role_label(message: Message) -> str:
    """Canonical role label; unknown tags pass through unchanged."""
    raw = message_type(message)
    return _ROLE_LABELS.get(raw, raw)


def serialize_message_for_token_count(message: Message) -> str:
    return f"[{role_label(message)}]\n{content_to_text(message.get('content'))}"


# -- Model-aware counting -------------------------------------------------------


async def _try_count_tokens_by_model(text: str, counter: TokenCounter | None) -> int | None:
    """Ask the precise counter for a token count.

    Returns None when the precise count is unavailable (no counter, invalid
    result, or the counter raised).
    """
    if not text:
        return 0
    if counter is None:
        return None
    try:
        counted = counter(text)
        if inspect.isawaitable(counted):
            counted = await counted
    except Exception as err:
        logger.debug("Token counter failed, falling back to estimate: %s", err)
        return None
    if isinstance(counted, bool) or not isinstance(counted, (int, float)):
        logger.debug("Token counter returned %r, falling back to estimate", counted)
        return None
    if not math.isfinite(counted) or counted < 0:
        logger.debug("Token counter returned %r, falling back to estimate", counted)
        return None
    return math.ceil(counted)


async def count_tokens_with_model(text: str | None, counter: TokenCounter | None = None) -> int:
    """Count tokens for text, preferring the precise counter over the estimator.

    Args:
        text: Text to count
        counter: Optional precise token counter

    Returns:
        Token count (never raises on counter failures)
    """
    normalized = text or ""
    model_tokens = await _try_count_tokens_by_model(normalized, counter)
    if model_tokens is not None:
        return model_tokens
    return estimate_tokens(normalized)


async def count_message_tokens_with_model(
    message: Message, counter: TokenCounter | None = None
) -> int:
    """Count tokens for a single message as "[role]\\ncontent" plus overhead."""
    serialized = serialize_message_for_token_count(message)
    content_tokens = await count_tokens_with_model(serialized, counter)
    return content_tokens + MESSAGE_TOKEN_OVERHEAD


async def count_total_tokens_with_model(
    messages: list[Message], counter: TokenCounter | None = None
) -> int:
    """Count total tokens for messages, dispatching per-message counts concurrently."""
    if not messages:
        return 0
    counts = await asyncio.gather(
        *(count_message_tokens_with_model(msg, counter) for msg in messages)
    )
    return sum(counts)
