from functools import lru_cache
from typing import Dict, Any

from .config import Settings
from .services.platform_factory import PlatformFactory, ProvisioningBackends
from .services.provisioning_service import ConfirmFn, ProvisioningService

# Global singleton instances
_singletons: Dict[str, Any] = {}


@lru_cache
def get_settings() -> Settings:
    """Hent Settings singleton instance."""
    return Settings()


def get_platform_factory() -> PlatformFactory:
    if "platform_factory" not in _singletons:
        _singletons["platform_factory"] = PlatformFactory()
    return _singletons["platform_factory"]


def get_backends() -> ProvisioningBackends:
    if "backends" not in _singletons:
        _singletons["backends"] = get_platform_factory().create_backends(get_settings())
    return _singletons["backends"]


def get_provisioning_service(confirm: ConfirmFn) -> ProvisioningService:
    # Not cached: the confirm function belongs to the caller
    return ProvisioningService(get_settings(), get_backends(), confirm)


def reset_singletons() -> None:
    """Reset all singletons (til testing)."""
    _singletons.clear()
    get_settings.cache_clear()
