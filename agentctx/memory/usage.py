"""Human-readable context usage strings."""

from __future__ import annotations

import math

from .types import CompactionConfig


def format_token_count(tokens: int) -> str:
    """Format a token count for display ("999", "1.5K", "128.0K").

    Thousands are shown to one decimal place, rounding half up (1250 -> "1.3K").
    """
    if tokens >= 1000:
        tenths = (tokens + 50) // 100
        return f"{tenths // 10}.{tenths % 10}K"
    return f"{tokens}"


def get_context_usage_info(current_tokens: int, config: CompactionConfig) -> str:
    """Build the "[Context: 54.0K/128.0K (42%)]" usage line."""
    # Half-up rounding; round() would round 12.5 down to 12.
    percentage = math.floor(current_tokens / config.context_window * 100 + 0.5)
    return (
        f"[Context: {format_token_count(current_tokens)}/"
        f"{format_token_count(config.context_window)} ({percentage}%)]"
    )
