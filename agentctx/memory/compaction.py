"""Auto-compaction policy and message pruning.

Pruning keeps every system message plus the most recent run of conversation
messages that fits the budget. Compaction prunes against the history budget and
replaces the dropped messages with a summary produced by an external summarizer.
"""

from __future__ import annotations

import logging

from .budget import (
    get_compaction_hard_context_budget,
    get_compaction_history_token_budget,
    get_effective_auto_compact_threshold,
)
from .tokens import (
    count_total_tokens_with_model,
    estimate_message_tokens,
    estimate_total_tokens,
    is_system_message,
)
from .types import (
    CompactionConfig,
    CompactionResult,
    Message,
    PruneResult,
    Summarizer,
    TokenCounter,
)

logger = logging.getLogger(__name__)

# -- Constants ----------------------------------------------------------------

SUMMARY_PREFIX = "[Previous conversation summary]\n"

# -- Policy -------------------------------------------------------------------


def should_auto_compact(total_tokens: int, config: CompactionConfig) -> bool:
    """Check if auto-compaction should be triggered (threshold is inclusive)."""
    if not config.enabled:
        return False
    return total_tokens >= get_effective_auto_compact_threshold(config)


def prune_messages(messages: list[Message], max_tokens: int) -> PruneResult:
    """Prune messages to fit within max_tokens, keeping the most recent ones.

    System messages are always kept and their cost comes off the budget first.
    Conversation messages are scanned newest to oldest; the first one that does
    not fit ends the kept run, and it and everything older are dropped. The kept
    history is therefore always a contiguous suffix of the conversation.

    Args:
        messages: Conversation messages, oldest first
        max_tokens: Token budget for the kept messages

    Returns:
        PruneResult with kept messages (original order) and dropped messages
        (in the order they were evicted, newest first)
    """
    result = PruneResult()
    if not messages:
        return result

    system_messages = [m for m in messages if is_system_message(m)]
    history = [m for m in messages if not is_system_message(m)]

    system_tokens = estimate_total_tokens(system_messages)
    available_tokens = max(0, max_tokens - system_tokens)

    kept_history: list[Message] = []
    history_tokens = 0
    exhausted = False

    for msg in reversed(history):
        msg_tokens = estimate_message_tokens(msg)
        if not exhausted and history_tokens + msg_tokens <= available_tokens:
            kept_history.insert(0, msg)
            history_tokens += msg_tokens
        else:
            exhausted = True
            result.dropped.append(msg)
            result.dropped_tokens += msg_tokens

    result.kept = system_messages + kept_history
    result.kept_tokens = system_tokens + history_tokens
    return result


# -- Summary messages ---------------------------------------------------------


def create_summary_message(summary: str) -> Message:
    """Build the system message that stands in for dropped conversation."""
    return {"role": "system", "content": SUMMARY_PREFIX + summary}


def is_summary_message(message: Message) -> bool:
    content = message.get("content")
    return (
        is_system_message(message)
        and isinstance(content, str)
        and content.startswith(SUMMARY_PREFIX)
    )


# -- Main function ------------------------------------------------------------


async def compact_messages(
    messages: list[Message],
    config: CompactionConfig,
    summarize: Summarizer,
    counter: TokenCounter | None = None,
) -> CompactionResult:
    """Compact conversation messages down to the history token budget.

    1. Set aside summary messages from earlier compactions
    2. Prune the rest against the history token budget
    3. If nothing was dropped -> return as-is (no-op)
    4. Otherwise:
       - Call the summarizer with the old summaries and dropped messages, oldest first
       - Insert one new summary message after the retained system messages
    5. On summarizer failure -> log warning, keep old summaries and the pruned messages

    The summary is not counted against the history budget. Callers bound its
    length in the summarizer; a result over the hard context budget is logged
    as a warning.
    """
    original_tokens = await count_total_tokens_with_model(messages, counter)

    previous_summaries = [m for m in messages if is_summary_message(m)]
    remaining = [m for m in messages if not is_summary_message(m)]

    pruned = prune_messages(remaining, get_compaction_history_token_budget(config))
    if not pruned.dropped:
        return CompactionResult(
            compacted=False,
            messages=messages,
            original_tokens=original_tokens,
            final_tokens=original_tokens,
        )

    dropped = list(reversed(pruned.dropped))
    system_messages = [m for m in pruned.kept if is_system_message(m)]
    recent_messages = pruned.kept[len(system_messages) :]

    summary: str | None
    try:
        summary = await summarize(previous_summaries + dropped)
        summary_messages = [create_summary_message(summary)]
    except Exception as err:
        logger.warning("Summarization failed, falling back to truncation: %s", err)
        summary = None
        summary_messages = previous_summaries

    new_messages = system_messages + summary_messages + recent_messages

    final_tokens = await count_total_tokens_with_model(new_messages, counter)
    logger.info(
        "Compacted %d message(s): %d -> %d tokens",
        len(dropped),
        original_tokens,
        final_tokens,
    )
    hard_budget = get_compaction_hard_context_budget(config)
    if final_tokens > hard_budget:
        logger.warning(
            "Compacted context is %d tokens, over the %d token budget; "
            "the summary is too long",
            final_tokens,
            hard_budget,
        )
    return CompactionResult(
        compacted=True,
        messages=new_messages,
        summary=summary,
        original_tokens=original_tokens,
        final_tokens=final_tokens,
        dropped_count=len(dropped),
    )
