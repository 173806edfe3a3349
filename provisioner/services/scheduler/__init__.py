from .base_task_scheduler import BaseTaskScheduler, task_name_for_drive
from .launcher import LauncherSpec, render_launcher, write_launcher
from .windows_task_scheduler import WindowsTaskScheduler

__all__ = [
    "BaseTaskScheduler",
    "task_name_for_drive",
    "LauncherSpec",
    "render_launcher",
    "write_launcher",
    "WindowsTaskScheduler",
]
