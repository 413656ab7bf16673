"""Outbound mail dispatch port.

Called after a mail record is persisted. Delivery (SMTP, provider API)
happens outside the core; callers do not wait on it and a dispatch
failure never undoes the persisted record.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from teamwork.domain.models.account import Account
from teamwork.domain.models.mail import Mail


class MailDispatcherProtocol(Protocol):
    """Protocol for handing persisted mail to delivery."""

    @abstractmethod
    async def dispatch(self, mail: Mail, recipient: Account) -> None:
        """Queue ``mail`` for delivery to ``recipient``."""
        ...
