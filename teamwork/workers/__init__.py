"""Background workers for TeamWork."""

from teamwork.workers.deadline_worker import DeadlineWorker

__all__: list[str] = ["DeadlineWorker"]
