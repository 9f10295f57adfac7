"""Environment-based configuration for host applications.

The budgeting functions never read the environment themselves; hosts that want
env/.env driven settings build their CompactionConfig here.
"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv

from ..memory.types import CompactionConfig

DEFAULT_CONTEXT_WINDOW = 128_000
DEFAULT_RESERVE_TOKENS = 20_000
DEFAULT_AUTO_COMPACT_THRESHOLD = 100_000
DEFAULT_MAX_HISTORY_SHARE = 0.5
DEFAULT_MEMORY_FLUSH_REARM_RATIO = 0.8


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_number(name: str, default: Any, cast: type) -> Any:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return cast(value.strip())
    except ValueError as e:
        raise ValueError(f"Invalid value for {name}: {value!r}") from e


def load_compaction_config(**overrides: Any) -> CompactionConfig:
    """Build a CompactionConfig from AGENTCTX_* environment variables.

    Variables from a .env file are loaded first. Keyword overrides take
    precedence over the environment.

    Args:
        **overrides: Explicit CompactionConfig field values

    Returns:
        Validated CompactionConfig

    Raises:
        ValueError: If an environment variable cannot be parsed
        pydantic.ValidationError: If the resulting values are out of range
    """
    load_dotenv()

    values: dict[str, Any] = {
        "enabled": _env_bool("AGENTCTX_COMPACTION_ENABLED", True),
        "context_window": _env_number("AGENTCTX_CONTEXT_WINDOW", DEFAULT_CONTEXT_WINDOW, int),
        "reserve_tokens": _env_number("AGENTCTX_RESERVE_TOKENS", DEFAULT_RESERVE_TOKENS, int),
        "auto_compact_threshold": _env_number(
            "AGENTCTX_AUTO_COMPACT_THRESHOLD", DEFAULT_AUTO_COMPACT_THRESHOLD, int
        ),
        "max_history_share": _env_number(
            "AGENTCTX_MAX_HISTORY_SHARE", DEFAULT_MAX_HISTORY_SHARE, float
        ),
        "memory_flush_rearm_ratio": _env_number(
            "AGENTCTX_MEMORY_FLUSH_REARM_RATIO", DEFAULT_MEMORY_FLUSH_REARM_RATIO, float
        ),
    }
    values.update(overrides)
    return CompactionConfig(**values)
