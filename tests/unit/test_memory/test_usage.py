"""Unit tests for agentctx.memory.usage module."""

import pytest

from agentctx.memory.types import CompactionConfig
from agentctx.memory.usage import format_token_count, get_context_usage_info


class TestFormatTokenCount:
    """Tests for format_token_count function."""

    @pytest.mark.parametrize(
        "tokens,expected",
        [
            (0, "0"),
            (999, "999"),
            (1000, "1.0K"),
            (1050, "1.1K"),
            (1250, "1.3K"),
            (1500, "1.5K"),
            (2250, "2.3K"),
            (1949, "1.9K"),
            (1950, "2.0K"),
            (128_000, "128.0K"),
        ],
    )
    def test_format(self, tokens, expected):
        assert format_token_count(tokens) == expected


class TestGetContextUsageInfo:
    """Tests for get_context_usage_info function."""

    def test_usage_line(self, compaction_config):
        # 54000 / 128000 = 42.19%
        assert get_context_usage_info(54_000, compaction_config) == (
            "[Context: 54.0K/128.0K (42%)]"
        )

    def test_zero_tokens(self, compaction_config):
        assert get_context_usage_info(0, compaction_config) == "[Context: 0/128.0K (0%)]"

    def test_small_window_and_half_rounds_up(self):
        config = CompactionConfig(
            context_window=200, reserve_tokens=0, auto_compact_threshold=150
        )
        assert get_context_usage_info(25, config) == "[Context: 25/200 (13%)]"

    def test_over_window(self):
        config = CompactionConfig(
            context_window=1_000, reserve_tokens=0, auto_compact_threshold=800
        )
        assert get_context_usage_info(1_500, config) == "[Context: 1.5K/1.0K (150%)]"
