"""TeamWork runtime configuration.

Values come from environment variables (a ``.env`` file is loaded
first when present) with validated defaults.

Environment Variables:
- TEAMWORK_ENVIRONMENT: production | development (default: development)
- TEAMWORK_DEADLINE_WINDOW_HOURS: Look-ahead of the deadline sweep (default: 24)
- TEAMWORK_DEADLINE_SWEEP_INTERVAL_SECONDS: Sweep period (default: 86400)
- TEAMWORK_NOTIFICATION_PAGE_SIZE: Default inbox page size (default: 20)
- TEAMWORK_ISSUE_POLICY: permissive | strict (default: permissive)
- SERVICE_NAME: ``service`` label on metrics (default: teamwork-api)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from teamwork.domain.models.issue import ISSUE_POLICIES

VALID_ENVIRONMENTS = frozenset({"production", "development"})


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class TeamworkConfig:
    """Configuration for the TeamWork core and its HTTP shell.

    Attributes:
        environment: 'production' selects JSON logs, 'development' console logs.
        deadline_window_hours: Tasks due within this many hours get reminders.
        deadline_sweep_interval_seconds: Delay between deadline sweeps.
        notification_page_size: Default page size of the notification inbox.
        issue_policy: Name of the issue transition policy.
        service_name: Value of the ``service`` label on every metric.
    """

    environment: str = "development"
    deadline_window_hours: int = 24
    deadline_sweep_interval_seconds: float = 86_400.0
    notification_page_size: int = 20
    issue_policy: str = "permissive"
    service_name: str = "teamwork-api"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {sorted(VALID_ENVIRONMENTS)}, "
                f"got {self.environment!r}"
            )
        if self.deadline_window_hours < 1:
            raise ValueError(
                f"deadline_window_hours must be positive, got {self.deadline_window_hours}"
            )
        if self.deadline_sweep_interval_seconds <= 0:
            raise ValueError(
                "deadline_sweep_interval_seconds must be positive, "
                f"got {self.deadline_sweep_interval_seconds}"
            )
        if not 1 <= self.notification_page_size <= 100:
            raise ValueError(
                "notification_page_size must be between 1 and 100, "
                f"got {self.notification_page_size}"
            )
        if self.issue_policy not in ISSUE_POLICIES:
            raise ValueError(
                f"issue_policy must be one of {sorted(ISSUE_POLICIES)}, "
                f"got {self.issue_policy!r}"
            )
        if not self.service_name.strip():
            raise ValueError("service_name must not be empty")

    @classmethod
    def from_environment(cls) -> "TeamworkConfig":
        """Create config from environment variables with defaults."""
        load_dotenv()
        return cls(
            environment=os.environ.get("TEAMWORK_ENVIRONMENT", "development").lower(),
            deadline_window_hours=_get_int_env("TEAMWORK_DEADLINE_WINDOW_HOURS", 24),
            deadline_sweep_interval_seconds=_get_float_env(
                "TEAMWORK_DEADLINE_SWEEP_INTERVAL_SECONDS", 86_400.0
            ),
            notification_page_size=_get_int_env("TEAMWORK_NOTIFICATION_PAGE_SIZE", 20),
            issue_policy=os.environ.get("TEAMWORK_ISSUE_POLICY", "permissive").lower(),
            service_name=os.environ.get("SERVICE_NAME", "teamwork-api"),
        )


DEFAULT_TEAMWORK_CONFIG = TeamworkConfig()

# Short intervals for tests
TEST_TEAMWORK_CONFIG = TeamworkConfig(
    deadline_sweep_interval_seconds=0.01,
    notification_page_size=5,
)
