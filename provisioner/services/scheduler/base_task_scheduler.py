"""Abstract Task Scheduler - scheduled task registration."""

from abc import ABC, abstractmethod


class BaseTaskScheduler(ABC):

    @abstractmethod
    async def exists(self, name: str) -> bool:
        pass

    @abstractmethod
    async def delete(self, name: str) -> None:
        pass

    @abstractmethod
    async def create_startup_task(self, name: str, command: str, account: str, password: str) -> None:
        """Register a task that runs command at system start as account, with highest privileges."""
        pass

    @abstractmethod
    async def run(self, name: str) -> None:
        """Trigger the task immediately."""
        pass


def task_name_for_drive(prefix: str, drive_letter: str) -> str:
    """Deterministic task name, one task per drive letter."""
    return f"{prefix}_{drive_letter.upper()}"
