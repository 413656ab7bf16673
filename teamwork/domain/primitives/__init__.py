"""Domain primitives shared across services."""

from teamwork.domain.primitives.ensure_atomicity import (
    AtomicOperationContext,
    RollbackHandler,
)

__all__: list[str] = ["AtomicOperationContext", "RollbackHandler"]
