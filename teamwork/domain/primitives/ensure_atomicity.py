"""All-or-nothing multi-step writes with compensating rollbacks.

The in-memory and document stores behind the repositories have no
cross-entity transactions. Multi-step writes (task cascade delete,
invitation acceptance) register a compensating action after each step;
if a later step fails, the compensations run newest-first and the
original exception propagates.

Usage:
    async with AtomicOperationContext("task_cascade_delete") as ctx:
        await issues.delete(issue.id)
        ctx.add_rollback(lambda: issues.save(issue))
        await tasks.delete(task.id)
        # On exception: issue re-saved, exception re-raised
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from types import TracebackType

import structlog

log = structlog.get_logger()

# Rollback handlers take no arguments and may be sync or async
RollbackHandler = Callable[[], Awaitable[object] | object]


class AtomicOperationContext:
    """Async context manager running compensations on failure.

    Handlers run in reverse registration order (LIFO). A failing handler
    is logged and does not stop the remaining handlers. The original
    exception is always re-raised.

    Attributes:
        operation: Name used in log entries.
        rolled_back: True once compensations have run.
    """

    def __init__(self, operation: str = "atomic_operation") -> None:
        self.operation = operation
        self.rolled_back = False
        self._rollback_handlers: list[RollbackHandler] = []

    def add_rollback(self, handler: RollbackHandler) -> None:
        """Register a compensation for the step that just succeeded.

        Args:
            handler: Zero-argument callable, sync or async. Any awaitable
                it returns is awaited.
        """
        self._rollback_handlers.append(handler)

    @property
    def pending_rollbacks(self) -> int:
        return len(self._rollback_handlers)

    async def __aenter__(self) -> AtomicOperationContext:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        """Run compensations if the block raised; never suppress the error."""
        if exc_val is None:
            return False

        log.warning(
            "atomic_operation_failed",
            operation=self.operation,
            error=str(exc_val),
            error_type=exc_type.__name__ if exc_type else "Unknown",
            rollback_count=len(self._rollback_handlers),
        )

        for handler in reversed(self._rollback_handlers):
            try:
                result = handler()
                if inspect.isawaitable(result):
                    await result
            except Exception as rollback_error:
                log.error(
                    "rollback_handler_failed",
                    operation=self.operation,
                    rollback_error=str(rollback_error),
                    rollback_error_type=type(rollback_error).__name__,
                )

        self.rolled_back = True
        return False
