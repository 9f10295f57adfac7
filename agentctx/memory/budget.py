"""Token budgets derived from CompactionConfig.

All budgets are recomputed on every call and floored at one token, so a
misconfigured window never yields a zero or negative budget.
"""

from __future__ import annotations

import math

from .types import CompactionConfig

MIN_CONTEXT_BUDGET_TOKENS = 1


def get_compaction_hard_context_budget(config: CompactionConfig) -> int:
    """Tokens available for the prompt once the response reserve is set aside."""
    return max(MIN_CONTEXT_BUDGET_TOKENS, config.context_window - config.reserve_tokens)


def get_effective_auto_compact_threshold(config: CompactionConfig) -> int:
    """Auto-compact threshold, never above the hard budget."""
    return min(config.auto_compact_threshold, get_compaction_hard_context_budget(config))


def get_compaction_history_token_budget(config: CompactionConfig) -> int:
    """Share of the hard budget allotted to retained conversation history."""
    return max(
        MIN_CONTEXT_BUDGET_TOKENS,
        math.floor(get_compaction_hard_context_budget(config) * config.max_history_share),
    )
