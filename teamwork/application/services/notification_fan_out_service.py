"""Notification fan-out: turns domain events into persisted notifications.

Recipient resolution is delegated to the pure rules in
``teamwork.domain.services.fan_out_rules``; this service only loads
the membership snapshot and writes the drafts.

Delivery Semantics:
- Writes for one batch run concurrently (``asyncio.gather``)
- Each event is planned independently: an event whose recipients cannot
  be resolved is logged, counted and skipped
- Each write is independent: a failure is logged and counted for that
  recipient only and never raises into the triggering action
- At-least-once per recipient; no atomicity across the fan-out set
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from uuid import UUID, uuid4

from structlog import get_logger

from teamwork.application.dtos import FanOutReport
from teamwork.application.ports.fan_out_metrics import FanOutMetricsProtocol
from teamwork.application.ports.membership_repository import (
    MembershipRepositoryProtocol,
)
from teamwork.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from teamwork.domain.events import DomainEvent, WorkspaceEvent
from teamwork.domain.models.notification import Notification
from teamwork.domain.services.fan_out_rules import (
    FanOutContext,
    NotificationDraft,
    plan_notifications,
)

logger = get_logger(__name__)


class NotificationFanOutService:
    """Writes one notification per resolved recipient of each event."""

    def __init__(
        self,
        notifications: NotificationRepositoryProtocol,
        memberships: MembershipRepositoryProtocol,
        metrics: FanOutMetricsProtocol | None = None,
    ) -> None:
        self._notifications = notifications
        self._memberships = memberships
        self._metrics = metrics

    async def _context_for(self, event: DomainEvent) -> FanOutContext:
        if not isinstance(event, WorkspaceEvent):
            return FanOutContext()
        members = await self._memberships.list_for_workspace(event.workspace_id)
        return FanOutContext(members={m.account_id: m.role for m in members})

    async def _plan_event(self, event: DomainEvent) -> list[NotificationDraft] | None:
        try:
            context = await self._context_for(event)
            return plan_notifications(event, context)
        except Exception as exc:
            logger.warning(
                "notification_plan_failed",
                event=event.to_dict(),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            if self._metrics is not None:
                self._metrics.record_notification_plan_failed(event.event_type)
            return None

    async def _plan_all(
        self, events: Sequence[DomainEvent]
    ) -> tuple[list[NotificationDraft], list[str]]:
        drafts: list[NotificationDraft] = []
        unplanned: list[str] = []
        for event in events:
            planned = await self._plan_event(event)
            if planned is None:
                unplanned.append(event.event_type)
            else:
                drafts.extend(planned)
        return drafts, unplanned

    async def plan(self, events: Sequence[DomainEvent]) -> list[NotificationDraft]:
        """Resolve drafts for ``events`` without writing anything.

        Events whose recipients cannot be resolved contribute no drafts.
        """
        drafts, _ = await self._plan_all(events)
        return drafts

    async def _write(self, draft: NotificationDraft) -> Notification:
        notification = Notification(
            id=uuid4(),
            recipient_account_id=draft.recipient_account_id,
            notification_type=draft.notification_type,
            title=draft.title,
            description=draft.description,
            references=draft.references,
            action_url=draft.action_url,
            created_by_account_id=draft.created_by_account_id,
        )
        await self._notifications.save(notification)
        return notification

    async def dispatch(self, events: Sequence[DomainEvent]) -> FanOutReport:
        """Plan and persist notifications for ``events``.

        Args:
            events: Events returned by a lifecycle operation.

        Returns:
            FanOutReport with planned/written counts, failed recipients
            and the types of events that could not be planned.
        """
        if not events:
            return FanOutReport()

        drafts, unplanned = await self._plan_all(events)
        results = await asyncio.gather(
            *(self._write(draft) for draft in drafts),
            return_exceptions=True,
        )

        written = 0
        failed: list[UUID] = []
        for draft, result in zip(drafts, results, strict=True):
            notification_type = draft.notification_type.value
            if isinstance(result, BaseException):
                failed.append(draft.recipient_account_id)
                logger.warning(
                    "notification_write_failed",
                    draft=draft.to_dict(),
                    error=str(result),
                    error_type=type(result).__name__,
                )
                if self._metrics is not None:
                    self._metrics.record_notification_failed(notification_type)
                continue
            written += 1
            if self._metrics is not None:
                self._metrics.record_notification_written(notification_type)

        logger.info(
            "notifications_dispatched",
            event_types=[e.event_type for e in events],
            planned=len(drafts),
            written=written,
            failed=len(failed),
            unplanned=len(unplanned),
        )
        return FanOutReport(
            planned=len(drafts),
            written=written,
            failed=failed,
            unplanned=unplanned,
        )
