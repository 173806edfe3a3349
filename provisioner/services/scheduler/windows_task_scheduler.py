"""Windows Task Scheduler - schtasks.exe based task registration."""

import logging

from .base_task_scheduler import BaseTaskScheduler
from ..command_runner import CommandRunner


class WindowsTaskScheduler(BaseTaskScheduler):
    """Scheduled tasks via schtasks.exe. SRP: task registration ONLY."""

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    async def exists(self, name: str) -> bool:
        result = await self._runner.run(["schtasks", "/Query", "/TN", name])
        return result.ok

    async def delete(self, name: str) -> None:
        logging.debug(f"Deleting scheduled task '{name}'")
        (await self._runner.run(["schtasks", "/Delete", "/TN", name, "/F"])).check()

    async def create_startup_task(self, name: str, command: str, account: str, password: str) -> None:
        result = await self._runner.run(
            [
                "schtasks", "/Create",
                "/TN", name,
                "/TR", command,
                "/SC", "ONSTART",
                "/RU", account,
                "/RP", password,
                "/RL", "HIGHEST",
                "/F",
            ],
            secrets=[password],
        )
        result.check()

    async def run(self, name: str) -> None:
        (await self._runner.run(["schtasks", "/Run", "/TN", name])).check()
