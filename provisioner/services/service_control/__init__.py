from .base_service_controller import BaseServiceController, ServiceState, wait_for_state
from .windows_service_controller import WindowsServiceController

__all__ = ["BaseServiceController", "ServiceState", "wait_for_state", "WindowsServiceController"]
