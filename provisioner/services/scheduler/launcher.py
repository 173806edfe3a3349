"""
Launcher generation for the scheduled mount task.

The launcher is a small .cmd file that optionally authenticates to the
share and then starts the mirroring executable. It is rewritten in full on
every run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os


@dataclass
class LauncherSpec:
    remote_path: str
    drive_letter: str
    mirror_executable: str
    global_flag: str = ""
    share_username: Optional[str] = None
    share_password: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.share_username and self.share_password)

    @property
    def file_name(self) -> str:
        return f"mount_{self.drive_letter.upper()}.cmd"


def _batch_escape(value: str) -> str:
    # cmd expands %VAR% even inside quotes
    return value.replace("%", "%%")


def render_bootstrap_line(spec: LauncherSpec) -> str:
    return (
        f'net use "{_batch_escape(spec.remote_path)}" "{_batch_escape(spec.share_password)}" '
        f'/user:"{_batch_escape(spec.share_username)}" /persistent:no'
    )


def render_mirror_line(spec: LauncherSpec) -> str:
    line = (
        f'"{_batch_escape(spec.mirror_executable)}" /r "{_batch_escape(spec.remote_path)}" '
        f"/l {spec.drive_letter.upper()}"
    )
    if spec.global_flag:
        line += f" {spec.global_flag}"
    return line


def render_launcher(spec: LauncherSpec) -> str:
    lines = [
        "@echo off",
        f"rem Mounts {spec.remote_path} as {spec.drive_letter.upper()}: (generated, do not edit)",
    ]
    if spec.has_credentials:
        lines.append(render_bootstrap_line(spec))
    lines.append(render_mirror_line(spec))
    return "\r\n".join(lines) + "\r\n"


async def write_launcher(directory: Path, spec: LauncherSpec) -> Path:
    """Write the launcher into directory, replacing any previous version."""
    await aiofiles.os.makedirs(directory, exist_ok=True)
    path = directory / spec.file_name
    async with aiofiles.open(path, "w", encoding="utf-8", newline="") as f:
        await f.write(render_launcher(spec))
    return path
