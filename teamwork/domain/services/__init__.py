"""Pure domain services for TeamWork."""

from teamwork.domain.services.fan_out_rules import (
    FAN_OUT_RULES,
    FanOutContext,
    NotificationDraft,
    plan_notifications,
    resolve_recipients,
)

__all__: list[str] = [
    "FAN_OUT_RULES",
    "FanOutContext",
    "NotificationDraft",
    "plan_notifications",
    "resolve_recipients",
]
