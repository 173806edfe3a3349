"""
Pytest configuration og shared fixtures.
"""

from pathlib import Path

import pytest

from provisioner.config import Settings
from provisioner.dependencies import reset_singletons
from provisioner.models import ProvisioningRequest
from provisioner.services.platform_factory import ProvisioningBackends
from provisioner.services.service_control import ServiceState
from tests.fakes import (
    FakeAccountStore,
    FakeMountProbe,
    FakePolicyStore,
    FakeServiceController,
    FakeTaskScheduler,
)

SERVICE_NAME = "BackupSvc"


@pytest.fixture(autouse=True)
def clean_singletons():
    """Automatically reset singletons before hver test."""
    reset_singletons()
    yield
    reset_singletons()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with a temporary launcher directory and no waiting."""
    return Settings(
        backup_service_name=SERVICE_NAME,
        launcher_directory=str(tmp_path / "launchers"),
        log_file_path=str(tmp_path / "logs" / "provisioner.log"),
        service_state_timeout_seconds=0,
        service_poll_interval_seconds=0,
        mount_wait_timeout_seconds=0,
        mount_poll_interval_seconds=0,
    )


@pytest.fixture
def mirror_exe(tmp_path: Path) -> Path:
    exe = tmp_path / "mirror.exe"
    exe.write_bytes(b"MZ")
    return exe


@pytest.fixture
def backends() -> ProvisioningBackends:
    probe = FakeMountProbe()
    return ProvisioningBackends(
        accounts=FakeAccountStore(),
        policy=FakePolicyStore(),
        services=FakeServiceController({SERVICE_NAME: ServiceState.RUNNING}),
        scheduler=FakeTaskScheduler(probe),
        mounts=probe,
    )


@pytest.fixture
def request_factory(mirror_exe: Path):
    def _make(**overrides) -> ProvisioningRequest:
        values = dict(
            network_path=r"\\nas\backup",
            drive_letter="Z",
            account_name="ShareMountSvc",
            account_password="S3cret!pw",
            mirror_executable=str(mirror_exe),
        )
        values.update(overrides)
        return ProvisioningRequest(**values)

    return _make
