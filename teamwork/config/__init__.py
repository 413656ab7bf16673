"""Configuration module for TeamWork.

Available Configurations:
- TeamworkConfig: Deadline sweep, inbox paging, issue policy, environment
"""

from teamwork.config.teamwork_config import (
    DEFAULT_TEAMWORK_CONFIG,
    TEST_TEAMWORK_CONFIG,
    TeamworkConfig,
)

__all__ = [
    "TeamworkConfig",
    "DEFAULT_TEAMWORK_CONFIG",
    "TEST_TEAMWORK_CONFIG",
]
