"""Types for the context budgeting and compaction system.

Token budgets are derived from a single CompactionConfig:
- Hard budget: context window minus the headroom reserved for the response
- Auto-compact threshold: nominal trigger point, clamped to the hard budget
- History budget: share of the hard budget kept for conversation history
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

Message = dict[str, Any]

# A precise token counter (usually backed by the model's own tokenizer).
# May be sync or async; anything that is not a finite non-negative number
# is treated as "unavailable" by the counter functions.
TokenCounter = Callable[[str], Union[float, Awaitable[float]]]

# External summarizer: receives dropped messages oldest-first, returns summary text.
Summarizer = Callable[[list[Message]], Awaitable[str]]


class CompactionConfig(BaseModel):
    """Static compaction configuration supplied by the host application."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    context_window: int = Field(ge=1)
    reserve_tokens: int = Field(default=0, ge=0)
    auto_compact_threshold: int = Field(ge=0)
    max_history_share: float = Field(default=0.5, gt=0, le=1)
    memory_flush_rearm_ratio: float = Field(default=0.8, gt=0, lt=1)


class PruneResult(BaseModel):
    """Result from prune_messages."""

    kept: list[Message] = Field(default_factory=list)
    dropped: list[Message] = Field(default_factory=list)
    kept_tokens: int = 0
    dropped_tokens: int = 0


class CompactionResult(BaseModel):
    """Result from compact_messages."""

    compacted: bool
    messages: list[Message]
    summary: str | None = None
    original_tokens: int
    final_tokens: int
    dropped_count: int = 0
