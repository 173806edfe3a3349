"""
Network Mount Probing

- BaseMountProbe: Abstract interface for reachability and drive checks
- WindowsMountProbe: aiofiles based Windows implementation
- wait_for_drive: bounded polling for a drive letter to appear
"""

from .base_mount_probe import (
    BaseMountProbe,
    normalize_drive_letter,
    to_unc_path,
    wait_for_drive,
)
from .windows_mount_probe import WindowsMountProbe

__all__ = [
    "BaseMountProbe",
    "normalize_drive_letter",
    "to_unc_path",
    "wait_for_drive",
    "WindowsMountProbe",
]
