"""Recording stub for MailDispatcherProtocol.

Keeps dispatched mail in memory instead of delivering it.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from teamwork.domain.models.account import Account
from teamwork.domain.models.mail import Mail

logger = structlog.get_logger()


@dataclass(frozen=True)
class DispatchedMail:
    """A mail handed to the dispatcher."""

    mail: Mail
    recipient_email: str


class MailDispatcherStub:
    """In-memory implementation of MailDispatcherProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self.dispatched: list[DispatchedMail] = []
        self._fail_with: Exception | None = None

    async def dispatch(self, mail: Mail, recipient: Account) -> None:
        if self._fail_with is not None:
            raise self._fail_with
        self.dispatched.append(DispatchedMail(mail=mail, recipient_email=recipient.email))
        logger.debug(
            "mail_dispatched",
            mail_id=str(mail.id),
            mail_type=mail.mail_type.value,
        )

    # Test helper methods

    def fail_with(self, error: Exception | None) -> None:
        """Make ``dispatch`` raise ``error`` (None to clear)."""
        self._fail_with = error

    def reset(self) -> None:
        self.dispatched.clear()
        self._fail_with = None
