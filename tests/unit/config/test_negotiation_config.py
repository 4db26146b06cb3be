"""Unit tests for NegotiationConfig.

Tests defaults, validation and environment loading.
"""

from __future__ import annotations

import os
from datetime import timedelta
from unittest.mock import patch

import pytest

from wombat.config.negotiation_config import (
    DEFAULT_ANALYSIS_FALLBACK,
    DEFAULT_NEGOTIATION_CONFIG,
    DEFAULT_WAGER_FALLBACK,
    TEST_NEGOTIATION_CONFIG,
    NegotiationConfig,
)


class TestNegotiationConfig:
    """Tests for NegotiationConfig dataclass."""

    def test_defaults(self) -> None:
        config = NegotiationConfig()

        assert config.solution_check_days == 7
        assert config.solution_check_delay == timedelta(days=7)
        assert config.max_write_attempts == 3
        assert config.analysis_fallback == DEFAULT_ANALYSIS_FALLBACK
        assert config.translation_fallback == "Translation failed."

    def test_zero_check_days_allowed(self) -> None:
        assert NegotiationConfig(solution_check_days=0).solution_check_delay == timedelta(0)

    def test_negative_check_days_raises(self) -> None:
        with pytest.raises(ValueError) as exc_info:
            NegotiationConfig(solution_check_days=-1)

        assert "solution_check_days must be non-negative" in str(exc_info.value)

    def test_zero_write_attempts_raises(self) -> None:
        with pytest.raises(ValueError) as exc_info:
            NegotiationConfig(max_write_attempts=0)

        assert "max_write_attempts must be at least 1" in str(exc_info.value)

    def test_blank_fallback_raises(self) -> None:
        """An empty sentinel would re-trigger the checkpoint forever."""
        with pytest.raises(ValueError) as exc_info:
            NegotiationConfig(analysis_fallback="  ")

        assert "analysis_fallback" in str(exc_info.value)

    def test_config_is_frozen(self) -> None:
        config = NegotiationConfig()

        with pytest.raises(AttributeError):
            config.max_write_attempts = 5  # type: ignore[misc]


class TestPredefinedConfigs:
    def test_default_config(self) -> None:
        assert DEFAULT_NEGOTIATION_CONFIG == NegotiationConfig()

    def test_test_config(self) -> None:
        assert TEST_NEGOTIATION_CONFIG.solution_check_days == 0
        assert TEST_NEGOTIATION_CONFIG.max_write_attempts == 1


class TestFromEnvironment:
    def test_defaults_when_unset(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = NegotiationConfig.from_environment()

        assert config == NegotiationConfig()

    def test_reads_environment(self) -> None:
        env = {
            "WOMBAT_SOLUTION_CHECK_DAYS": "3",
            "WOMBAT_MAX_WRITE_ATTEMPTS": "5",
            "WOMBAT_ANALYSIS_FALLBACK": "No verdict today.",
            "WOMBAT_WAGER_FALLBACK": "No bet.",
        }
        with patch.dict(os.environ, env, clear=True):
            config = NegotiationConfig.from_environment()

        assert config.solution_check_days == 3
        assert config.max_write_attempts == 5
        assert config.analysis_fallback == "No verdict today."
        assert config.wager_fallback == "No bet."

    def test_invalid_values_fall_back(self) -> None:
        env = {
            "WOMBAT_SOLUTION_CHECK_DAYS": "a week",
            "WOMBAT_WAGER_FALLBACK": "   ",
        }
        with patch.dict(os.environ, env, clear=True):
            config = NegotiationConfig.from_environment()

        assert config.solution_check_days == 7
        assert config.wager_fallback == DEFAULT_WAGER_FALLBACK

    def test_out_of_range_value_raises(self) -> None:
        with patch.dict(os.environ, {"WOMBAT_MAX_WRITE_ATTEMPTS": "0"}, clear=True):
            with pytest.raises(ValueError):
                NegotiationConfig.from_environment()
