"""Per-conversation facade over token counting, compaction and the memory flush gate."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from .memory.compaction import compact_messages, should_auto_compact
from .memory.tokens import count_total_tokens_with_model
from .memory.types import CompactionConfig, CompactionResult, Message, Summarizer, TokenCounter
from .memory.usage import get_context_usage_info
from .middleware.memory_flush import (
    MemoryFlushState,
    create_memory_flush_state,
    mark_flush_completed,
    set_total_tokens,
    should_trigger_memory_flush,
)

logger = logging.getLogger(__name__)


class ContextObservation(BaseModel):
    """What the agent loop should do after a token observation."""

    total_tokens: int
    should_compact: bool
    should_flush: bool
    usage: str


class ContextSession:
    """Context budget tracking for a single conversation.

    Owns one MemoryFlushState. Not safe for concurrent use; each conversation
    gets its own session.

    Usage::

        session = ContextSession(config, counter=model.count_tokens)

        observation = await session.observe(messages)
        if observation.should_flush:
            await flush_memory(messages)
            session.mark_flush_completed()
        if observation.should_compact:
            result = await session.compact(messages, summarize)
            messages = result.messages
    """

    def __init__(self, config: CompactionConfig, counter: TokenCounter | None = None):
        self.config = config
        self.counter = counter
        self.flush_state: MemoryFlushState = create_memory_flush_state()

    async def observe(self, messages: list[Message]) -> ContextObservation:
        """Count tokens for the conversation and update the flush gate."""
        total_tokens = await count_total_tokens_with_model(messages, self.counter)
        self.flush_state = set_total_tokens(self.flush_state, total_tokens, self.config)
        observation = ContextObservation(
            total_tokens=total_tokens,
            should_compact=should_auto_compact(total_tokens, self.config),
            should_flush=should_trigger_memory_flush(self.flush_state, self.config),
            usage=get_context_usage_info(total_tokens, self.config),
        )
        logger.debug(
            "%s compact=%s flush=%s",
            observation.usage,
            observation.should_compact,
            observation.should_flush,
        )
        return observation

    def mark_flush_completed(self) -> None:
        self.flush_state = mark_flush_completed(self.flush_state)

    async def compact(self, messages: list[Message], summarize: Summarizer) -> CompactionResult:
        return await compact_messages(messages, self.config, summarize, self.counter)
