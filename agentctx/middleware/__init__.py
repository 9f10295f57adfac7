from .memory_flush import (
    FlushPhase,
    MemoryFlushState,
    create_memory_flush_state,
    get_memory_flush_rearm_threshold,
    get_memory_flush_trigger_threshold,
    mark_flush_completed,
    set_total_tokens,
    should_trigger_memory_flush,
)

__all__ = [
    "FlushPhase",
    "MemoryFlushState",
    "create_memory_flush_state",
    "get_memory_flush_rearm_threshold",
    "get_memory_flush_trigger_threshold",
    "mark_flush_completed",
    "set_total_tokens",
    "should_trigger_memory_flush",
]
