"""Unit tests for TeamworkConfig.

Tests for runtime configuration including:
- Default values
- Environment variable loading
- Input validation
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from teamwork.config import (
    DEFAULT_TEAMWORK_CONFIG,
    TEST_TEAMWORK_CONFIG,
    TeamworkConfig,
)


class TestDefaults:
    """Tests for default configuration values."""

    def test_default_window_is_one_day(self) -> None:
        assert TeamworkConfig().deadline_window_hours == 24

    def test_default_sweep_runs_daily(self) -> None:
        assert DEFAULT_TEAMWORK_CONFIG.deadline_sweep_interval_seconds == 86_400.0

    def test_default_issue_policy_is_permissive(self) -> None:
        assert DEFAULT_TEAMWORK_CONFIG.issue_policy == "permissive"

    def test_test_config_is_fast(self) -> None:
        """Test config shortens the sweep so workers finish quickly."""
        assert TEST_TEAMWORK_CONFIG.deadline_sweep_interval_seconds < 1
        assert TEST_TEAMWORK_CONFIG.notification_page_size == 5


class TestValidation:
    """Tests for __post_init__ validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"environment": "staging"},
            {"deadline_window_hours": 0},
            {"deadline_sweep_interval_seconds": 0},
            {"notification_page_size": 0},
            {"notification_page_size": 101},
            {"issue_policy": "chaotic"},
            {"service_name": "  "},
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            TeamworkConfig(**kwargs)

    def test_config_is_frozen(self) -> None:
        config = TeamworkConfig()
        with pytest.raises(AttributeError):
            config.deadline_window_hours = 2  # type: ignore[misc]


class TestFromEnvironment:
    """Tests for environment variable loading."""

    def test_reads_all_variables(self) -> None:
        env = {
            "TEAMWORK_ENVIRONMENT": "Production",
            "TEAMWORK_DEADLINE_WINDOW_HOURS": "48",
            "TEAMWORK_DEADLINE_SWEEP_INTERVAL_SECONDS": "3600",
            "TEAMWORK_NOTIFICATION_PAGE_SIZE": "50",
            "TEAMWORK_ISSUE_POLICY": "STRICT",
            "SERVICE_NAME": "teamwork-eu",
        }
        with patch.dict(os.environ, env):
            config = TeamworkConfig.from_environment()

        assert config.environment == "production"
        assert config.deadline_window_hours == 48
        assert config.deadline_sweep_interval_seconds == 3600.0
        assert config.notification_page_size == 50
        assert config.issue_policy == "strict"
        assert config.service_name == "teamwork-eu"

    def test_unparseable_numbers_fall_back_to_defaults(self) -> None:
        env = {
            "TEAMWORK_DEADLINE_WINDOW_HOURS": "soon",
            "TEAMWORK_DEADLINE_SWEEP_INTERVAL_SECONDS": "often",
        }
        with patch.dict(os.environ, env):
            config = TeamworkConfig.from_environment()

        assert config.deadline_window_hours == 24
        assert config.deadline_sweep_interval_seconds == 86_400.0

    def test_invalid_policy_raises(self) -> None:
        with patch.dict(os.environ, {"TEAMWORK_ISSUE_POLICY": "anything"}):
            with pytest.raises(ValueError):
                TeamworkConfig.from_environment()
