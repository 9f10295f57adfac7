"""Shared pytest configuration and fixtures."""

import pytest

from agentctx.memory.types import CompactionConfig


@pytest.fixture
def compaction_config():
    """128K window with a 20K reserve and a threshold above the hard budget."""
    return CompactionConfig(
        enabled=True,
        auto_compact_threshold=120_000,
        context_window=128_000,
        reserve_tokens=20_000,
        max_history_share=0.5,
    )


@pytest.fixture
def flush_config():
    """Config used by the memory flush tests (trigger 80K, rearm 64K)."""
    return CompactionConfig(
        enabled=True,
        auto_compact_threshold=80_000,
        context_window=128_000,
        reserve_tokens=20_000,
        max_history_share=0.5,
    )
