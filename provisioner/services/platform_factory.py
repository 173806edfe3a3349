"""Platform Factory - platform detection and creation of the provisioning backends."""

import ctypes
import platform
from dataclasses import dataclass

from .accounts import BaseAccountStore
from .command_runner import CommandRunner
from .network_mount import BaseMountProbe
from .scheduler import BaseTaskScheduler
from .security_policy import BasePolicyStore
from .service_control import BaseServiceController
from ..config import Settings
from ..core.exceptions import UnsupportedPlatformError
from ..logging_config import get_app_logger


@dataclass
class ProvisioningBackends:
    """The five external stores the workflow configures."""

    accounts: BaseAccountStore
    policy: BasePolicyStore
    services: BaseServiceController
    scheduler: BaseTaskScheduler
    mounts: BaseMountProbe


class PlatformFactory:
    """Factory for platform-specific backends. SRP: Platform detection/creation ONLY."""

    def __init__(self):
        self._logger = get_app_logger()

    def require_windows(self) -> None:
        """Raise UnsupportedPlatformError unless running on Windows."""
        system = platform.system()
        if system.lower() != "windows":
            raise UnsupportedPlatformError(
                f"Provisioning requires Windows (detected: {system or 'unknown'})"
            )

    def is_elevated(self) -> bool:
        """Check whether the process runs with administrator rights."""
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except AttributeError:
            # ctypes.windll only exists on Windows
            return False

    def create_backends(self, settings: Settings) -> ProvisioningBackends:
        self.require_windows()

        from .accounts import WindowsAccountStore
        from .network_mount import WindowsMountProbe
        from .scheduler import WindowsTaskScheduler
        from .security_policy import WindowsPolicyStore
        from .service_control import WindowsServiceController

        runner = CommandRunner(default_timeout=settings.command_timeout_seconds)
        mounts = WindowsMountProbe(timeout=settings.network_probe_timeout_seconds)
        self._logger.debug(f"Creating {mounts.get_platform_name()} provisioning backends")
        return ProvisioningBackends(
            accounts=WindowsAccountStore(runner),
            policy=WindowsPolicyStore(runner),
            services=WindowsServiceController(runner),
            scheduler=WindowsTaskScheduler(runner),
            mounts=mounts,
        )
