"""Memory module - token budgeting and compaction for agent conversations."""

from .budget import (
    get_compaction_hard_context_budget,
    get_compaction_history_token_budget,
    get_effective_auto_compact_threshold,
)
from .compaction import (
    SUMMARY_PREFIX,
    compact_messages,
    create_summary_message,
    is_summary_message,
    prune_messages,
    should_auto_compact,
)
from .tokens import (
    MESSAGE_TOKEN_OVERHEAD,
    count_message_tokens_with_model,
    count_total_tokens_with_model,
    count_tokens_with_model,
    estimate_message_tokens,
    estimate_total_tokens,
    estimate_tokens,
)
from .types import (
    CompactionConfig,
    CompactionResult,
    Message,
    PruneResult,
    Summarizer,
    TokenCounter,
)
from .usage import format_token_count, get_context_usage_info

__all__ = [
    "CompactionConfig",
    "CompactionResult",
    "Message",
    "PruneResult",
    "Summarizer",
    "TokenCounter",
    "MESSAGE_TOKEN_OVERHEAD",
    "SUMMARY_PREFIX",
    "compact_messages",
    "count_message_tokens_with_model",
    "count_total_tokens_with_model",
    "count_tokens_with_model",
    "create_summary_message",
    "estimate_message_tokens",
    "estimate_total_tokens",
    "estimate_tokens",
    "format_token_count",
    "get_compaction_hard_context_budget",
    "get_compaction_history_token_budget",
    "get_context_usage_info",
    "get_effective_auto_compact_threshold",
    "is_summary_message",
    "prune_messages",
    "should_auto_compact",
]
