"""Account domain model.

An account is the identity that joins workspaces, gets assigned tasks
and receives notifications. The list of workspaces an account belongs
to is not stored on the account; it is derived from memberships.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from uuid import UUID


@dataclass(frozen=True, eq=True)
class AccountSettings:
    """Per-account preferences.

    Attributes:
        email_notifications: Whether mail copies of notifications are wanted.
        dark_mode: UI theme preference, carried for clients.
    """

    email_notifications: bool = True
    dark_mode: bool = False


@dataclass(frozen=True, eq=True)
class Account:
    """A registered identity.

    Attributes:
        id: Unique account identifier.
        email: Unique, case-insensitive email address.
        display_name: Name shown to other members.
        settings: Account preferences.
    """

    id: UUID
    email: str
    display_name: str
    settings: AccountSettings = field(default_factory=AccountSettings)

    def __post_init__(self) -> None:
        """Validate account fields."""
        if "@" not in self.email:
            raise ValueError(f"Invalid email address: {self.email!r}")

    @property
    def normalized_email(self) -> str:
        """Email used for lookups."""
        return normalize_email(self.email)

    def with_settings(self, settings: AccountSettings) -> Account:
        """Return a copy with replaced settings."""
        return replace(self, settings=settings)


def normalize_email(email: str) -> str:
    """Lower-case and strip an email address for comparison."""
    return email.strip().lower()
