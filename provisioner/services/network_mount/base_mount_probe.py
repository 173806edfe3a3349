"""Abstract Mount Probe - reachability and drive-letter checks."""

import asyncio
import logging
import re
from abc import ABC, abstractmethod

DRIVE_LETTER_PATTERN = re.compile(r"^([A-Za-z]):?\\?$")


class BaseMountProbe(ABC):
    """Abstract base class for platform-specific mount checks."""

    @abstractmethod
    async def is_reachable(self, path: str) -> bool:
        """Check if a network path can currently be reached."""
        pass

    @abstractmethod
    async def is_drive_mounted(self, drive_letter: str) -> bool:
        """Check if drive letter is currently bound."""
        pass

    @abstractmethod
    def get_platform_name(self) -> str:
        """Get platform name for logging."""
        pass


def normalize_drive_letter(value: str) -> str:
    """Accept 'Z', 'z', 'Z:' or 'Z:\\' and return 'Z'."""
    match = DRIVE_LETTER_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid drive letter: {value!r}")
    return match.group(1).upper()


def to_unc_path(share_url: str) -> str:
    """Convert an smb:// URL to UNC form. UNC paths pass through unchanged."""
    if share_url.startswith("smb://"):
        path_part = share_url[len("smb://"):]
        return "\\\\" + path_part.replace("/", "\\").rstrip("\\")
    if share_url.startswith("//"):
        return share_url.replace("/", "\\").rstrip("\\")
    return share_url


async def wait_for_drive(
    probe: BaseMountProbe,
    drive_letter: str,
    timeout: float,
    interval: float,
) -> bool:
    """Poll until drive_letter shows up or timeout expires."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout

    while True:
        if await probe.is_drive_mounted(drive_letter):
            return True
        if loop.time() >= deadline:
            logging.debug(f"Drive {drive_letter}: not visible after {timeout}s")
            return False
        await asyncio.sleep(interval)
