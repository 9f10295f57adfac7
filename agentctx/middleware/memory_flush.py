"""Memory flush gate.

A memory flush is a heavier compaction/summarization cycle. It fires once when
total tokens reach the trigger threshold, then stays quiet until usage drops to
the rearm threshold, so a conversation hovering around the trigger point does
not flush on every turn.

States are immutable; every transition returns a new MemoryFlushState:

    ARMED   --mark_flush_completed-->            COOLING
    COOLING --set_total_tokens(<= rearm)-->      ARMED
"""

from __future__ import annotations

import logging
import math
from enum import Enum

from pydantic import BaseModel, ConfigDict

from ..memory.budget import get_effective_auto_compact_threshold
from ..memory.types import CompactionConfig

logger = logging.getLogger(__name__)


class FlushPhase(Enum):
    """Phase of the memory flush gate."""

    ARMED = "armed"
    COOLING = "cooling"


class MemoryFlushState(BaseModel):
    """Last observed token total and whether a flush may fire."""

    model_config = ConfigDict(frozen=True)

    total_tokens: int = 0
    flush_cycle_armed: bool = True

    @property
    def phase(self) -> FlushPhase:
        return FlushPhase.ARMED if self.flush_cycle_armed else FlushPhase.COOLING


def create_memory_flush_state() -> MemoryFlushState:
    """Initial state for a new conversation: armed, no tokens observed."""
    return MemoryFlushState()


def get_memory_flush_trigger_threshold(config: CompactionConfig) -> int:
    """Token total at which a flush fires (the effective auto-compact threshold)."""
    return get_effective_auto_compact_threshold(config)


def get_memory_flush_rearm_threshold(config: CompactionConfig) -> int:
    """Token total at or below which a cooling gate rearms.

    Always strictly below the trigger threshold.
    """
    trigger = get_memory_flush_trigger_threshold(config)
    rearm = math.floor(trigger * config.memory_flush_rearm_ratio)
    return max(0, min(trigger - 1, rearm))


def set_total_tokens(
    state: MemoryFlushState, tokens: int, config: CompactionConfig
) -> MemoryFlushState:
    """Record a token observation, rearming the gate once usage has dropped enough."""
    armed = state.flush_cycle_armed
    if not armed and tokens <= get_memory_flush_rearm_threshold(config):
        logger.debug("Memory flush rearmed at %d tokens", tokens)
        armed = True
    return state.model_copy(update={"total_tokens": tokens, "flush_cycle_armed": armed})


def should_trigger_memory_flush(state: MemoryFlushState, config: CompactionConfig) -> bool:
    return state.flush_cycle_armed and state.total_tokens >= get_memory_flush_trigger_threshold(
        config
    )


def mark_flush_completed(state: MemoryFlushState) -> MemoryFlushState:
    """Disarm the gate until usage falls back to the rearm threshold."""
    if not state.flush_cycle_armed:
        return state
    return state.model_copy(update={"flush_cycle_armed": False})
