"""Windows Mount Probe - checks UNC reachability and drive letters."""

import asyncio
import logging

import aiofiles.os

from .base_mount_probe import BaseMountProbe


class WindowsMountProbe(BaseMountProbe):
    """Windows-specific mount checks. SRP: Windows mount probing ONLY."""

    def __init__(self, timeout: float = 10.0):
        self._timeout = timeout

    async def is_reachable(self, path: str) -> bool:
        """A UNC path that does not answer can block for a long time, so bound the check."""
        try:
            reachable = await asyncio.wait_for(aiofiles.os.path.isdir(path), timeout=self._timeout)
        except asyncio.TimeoutError:
            logging.warning(f"Reachability check timed out for: {path}")
            return False

        if not reachable:
            logging.debug(f"Network path not reachable: {path}")
        return reachable

    async def is_drive_mounted(self, drive_letter: str) -> bool:
        root = f"{drive_letter.upper()}:\\"
        try:
            return await asyncio.wait_for(aiofiles.os.path.exists(root), timeout=self._timeout)
        except asyncio.TimeoutError:
            logging.debug(f"Drive check timed out for: {root}")
            return False

    def get_platform_name(self) -> str:
        return "Windows"
