"""Windows Service Controller - sc.exe based service management."""

import logging
import re
from typing import Optional

from .base_service_controller import BaseServiceController, ServiceState
from ..command_runner import CommandRunner

# sc.exe exit code for "The specified service does not exist as an installed service."
SERVICE_DOES_NOT_EXIST = 1060
# sc.exe exit code for "The service has not been started."
SERVICE_NOT_ACTIVE = 1062
# sc.exe exit code for "An instance of the service is already running."
SERVICE_ALREADY_RUNNING = 1056

STATE_PATTERN = re.compile(r"^\s*STATE\s*:\s*\d+\s+(\w+)", re.MULTILINE)
START_NAME_PATTERN = re.compile(r"^\s*SERVICE_START_NAME\s*:\s*(.+?)\s*$", re.MULTILINE)


def parse_state(output: str) -> ServiceState:
    match = STATE_PATTERN.search(output)
    if not match:
        return ServiceState.UNKNOWN
    try:
        return ServiceState(match.group(1).upper())
    except ValueError:
        return ServiceState.UNKNOWN


class WindowsServiceController(BaseServiceController):
    """Windows services via sc.exe. SRP: service control operations ONLY."""

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    async def query_state(self, name: str) -> Optional[ServiceState]:
        result = await self._runner.run(["sc.exe", "query", name])
        if result.returncode == SERVICE_DOES_NOT_EXIST:
            return None
        result.check()
        return parse_state(result.stdout)

    async def stop(self, name: str) -> None:
        result = await self._runner.run(["sc.exe", "stop", name])
        if result.returncode == SERVICE_NOT_ACTIVE:
            logging.debug(f"Service '{name}' was not running")
            return
        result.check()

    async def start(self, name: str) -> None:
        result = await self._runner.run(["sc.exe", "start", name])
        if result.returncode == SERVICE_ALREADY_RUNNING:
            logging.debug(f"Service '{name}' is already running")
            return
        result.check()

    async def set_run_as(self, name: str, account: str, password: str) -> None:
        result = await self._runner.run(
            ["sc.exe", "config", name, "obj=", account, "password=", password],
            secrets=[password],
        )
        result.check()

    async def get_run_as(self, name: str) -> Optional[str]:
        result = (await self._runner.run(["sc.exe", "qc", name])).check()
        match = START_NAME_PATTERN.search(result.stdout)
        return match.group(1) if match else None
