__version__ = "0.1.0"

from .memory import (
    MESSAGE_TOKEN_OVERHEAD,
    SUMMARY_PREFIX,
    CompactionConfig,
    CompactionResult,
    Message,
    PruneResult,
    Summarizer,
    TokenCounter,
    compact_messages,
    count_message_tokens_with_model,
    count_total_tokens_with_model,
    count_tokens_with_model,
    create_summary_message,
    estimate_message_tokens,
    estimate_total_tokens,
    estimate_tokens,
    format_token_count,
    get_compaction_hard_context_budget,
    get_compaction_history_token_budget,
    get_context_usage_info,
    get_effective_auto_compact_threshold,
    is_summary_message,
    prune_messages,
    should_auto_compact,
)
from .middleware.memory_flush import (
    FlushPhase,
    MemoryFlushState,
    create_memory_flush_state,
    get_memory_flush_rearm_threshold,
    get_memory_flush_trigger_threshold,
    mark_flush_completed,
    set_total_tokens,
    should_trigger_memory_flush,
)
from .session import ContextObservation, ContextSession
from .utils.config import load_compaction_config

__all__ = [
    # Types
    "CompactionConfig",
    "CompactionResult",
    "ContextObservation",
    "FlushPhase",
    "MemoryFlushState",
    "Message",
    "PruneResult",
    "Summarizer",
    "TokenCounter",
    # Session
    "ContextSession",
    # Tokens
    "MESSAGE_TOKEN_OVERHEAD",
    "count_message_tokens_with_model",
    "count_total_tokens_with_model",
    "count_tokens_with_model",
    "estimate_message_tokens",
    "estimate_total_tokens",
    "estimate_tokens",
    # Budgets and compaction
    "SUMMARY_PREFIX",
    "compact_messages",
    "create_summary_message",
    "get_compaction_hard_context_budget",
    "get_compaction_history_token_budget",
    "get_effective_auto_compact_threshold",
    "is_summary_message",
    "prune_messages",
    "should_auto_compact",
    # Memory flush
    "create_memory_flush_state",
    "get_memory_flush_rearm_threshold",
    "get_memory_flush_trigger_threshold",
    "mark_flush_completed",
    "set_total_tokens",
    "should_trigger_memory_flush",
    # Display and config
    "format_token_count",
    "get_context_usage_info",
    "load_compaction_config",
]
