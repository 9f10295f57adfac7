"""Unit tests for agentctx.utils.config module."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from agentctx.utils.config import load_compaction_config

ENV_VARS = [
    "AGENTCTX_COMPACTION_ENABLED",
    "AGENTCTX_CONTEXT_WINDOW",
    "AGENTCTX_RESERVE_TOKENS",
    "AGENTCTX_AUTO_COMPACT_THRESHOLD",
    "AGENTCTX_MAX_HISTORY_SHARE",
    "AGENTCTX_MEMORY_FLUSH_REARM_RATIO",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the process environment and any .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    with patch("agentctx.utils.config.load_dotenv"):
        yield


class TestLoadCompactionConfig:
    """Tests for load_compaction_config function."""

    def test_defaults(self):
        config = load_compaction_config()
        assert config.enabled is True
        assert config.context_window == 128_000
        assert config.reserve_tokens == 20_000
        assert config.auto_compact_threshold == 100_000
        assert config.max_history_share == 0.5
        assert config.memory_flush_rearm_ratio == 0.8

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("AGENTCTX_COMPACTION_ENABLED", "false")
        monkeypatch.setenv("AGENTCTX_CONTEXT_WINDOW", "200000")
        monkeypatch.setenv("AGENTCTX_RESERVE_TOKENS", "8000")
        monkeypatch.setenv("AGENTCTX_AUTO_COMPACT_THRESHOLD", "150000")
        monkeypatch.setenv("AGENTCTX_MAX_HISTORY_SHARE", "0.25")
        monkeypatch.setenv("AGENTCTX_MEMORY_FLUSH_REARM_RATIO", "0.9")

        config = load_compaction_config()

        assert config.enabled is False
        assert config.context_window == 200_000
        assert config.reserve_tokens == 8_000
        assert config.auto_compact_threshold == 150_000
        assert config.max_history_share == 0.25
        assert config.memory_flush_rearm_ratio == 0.9

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on"])
    def test_truthy_enabled_values(self, monkeypatch, value):
        monkeypatch.setenv("AGENTCTX_COMPACTION_ENABLED", value)
        assert load_compaction_config().enabled is True

    def test_empty_value_uses_default(self, monkeypatch):
        monkeypatch.setenv("AGENTCTX_CONTEXT_WINDOW", "  ")
        assert load_compaction_config().context_window == 128_000

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("AGENTCTX_CONTEXT_WINDOW", "200000")
        config = load_compaction_config(context_window=32_000, auto_compact_threshold=20_000)
        assert config.context_window == 32_000
        assert config.auto_compact_threshold == 20_000

    def test_invalid_number_names_variable(self, monkeypatch):
        monkeypatch.setenv("AGENTCTX_CONTEXT_WINDOW", "lots")
        with pytest.raises(ValueError, match="AGENTCTX_CONTEXT_WINDOW"):
            load_compaction_config()

    def test_out_of_range_value(self, monkeypatch):
        monkeypatch.setenv("AGENTCTX_MAX_HISTORY_SHARE", "2.0")
        with pytest.raises(ValidationError):
            load_compaction_config()

    def test_loads_dotenv(self):
        with patch("agentctx.utils.config.load_dotenv") as mock_load:
            load_compaction_config()
        mock_load.assert_called_once()
