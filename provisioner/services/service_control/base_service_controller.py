"""Abstract Service Controller - query and reconfigure OS services."""

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class ServiceState(str, Enum):
    """Service states as reported by the service control manager."""

    STOPPED = "STOPPED"
    START_PENDING = "START_PENDING"
    STOP_PENDING = "STOP_PENDING"
    RUNNING = "RUNNING"
    CONTINUE_PENDING = "CONTINUE_PENDING"
    PAUSE_PENDING = "PAUSE_PENDING"
    PAUSED = "PAUSED"
    UNKNOWN = "UNKNOWN"


class BaseServiceController(ABC):

    @abstractmethod
    async def query_state(self, name: str) -> Optional[ServiceState]:
        """Current state, or None if the service is not installed."""
        pass

    @abstractmethod
    async def stop(self, name: str) -> None:
        pass

    @abstractmethod
    async def start(self, name: str) -> None:
        pass

    @abstractmethod
    async def set_run_as(self, name: str, account: str, password: str) -> None:
        """Change the identity the service logs on as."""
        pass

    @abstractmethod
    async def get_run_as(self, name: str) -> Optional[str]:
        pass


async def wait_for_state(
    controller: BaseServiceController,
    name: str,
    target: ServiceState,
    timeout: float,
    interval: float,
) -> Optional[ServiceState]:
    """Poll until the service reaches target or timeout expires. Returns the last observed state."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout

    while True:
        state = await controller.query_state(name)
        if state == target:
            return state
        if loop.time() >= deadline:
            logging.debug(f"Service '{name}' still {state} after {timeout}s (wanted {target.value})")
            return state
        await asyncio.sleep(interval)
