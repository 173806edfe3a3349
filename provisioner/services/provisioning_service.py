"""
Provisioning Service - runs the share mount setup workflow.

Steps, in order:
1. Preconditions: mirroring executable present, network path reachable
2. Account: create local account if absent, add to administrators
3. Service logon right: grant the account SeServiceLogonRight
4. Service identity: run the backup service as the account
5. Mount task: write launcher, register startup task, optionally run it

A fatal failure aborts the run. Effects of earlier steps are left in place.
"""

from pathlib import Path
from typing import Awaitable, Callable, List, Tuple

import aiofiles.os

from .network_mount import wait_for_drive
from .platform_factory import ProvisioningBackends
from .scheduler import LauncherSpec, task_name_for_drive, write_launcher
from .service_control import ServiceState, wait_for_state
from ..config import Settings
from ..core.exceptions import (
    CommandFailedError,
    PrerequisiteMissingError,
    ProvisioningAbortedError,
    ProvisioningError,
    SecurityPolicyError,
)
from ..logging_config import get_app_logger
from ..models import ProvisioningReport, ProvisioningRequest, StepName, StepResult

ConfirmFn = Callable[[str], bool]


class ProvisioningService:
    """Orchestrates the five provisioning steps. SRP: workflow ordering and failure policy ONLY."""

    def __init__(self, settings: Settings, backends: ProvisioningBackends, confirm: ConfirmFn):
        self._settings = settings
        self._backends = backends
        self._confirm = confirm
        self._logger = get_app_logger()

    async def run(self, request: ProvisioningRequest) -> ProvisioningReport:
        """Run every step in order. Raises ProvisioningError on the first fatal failure."""
        report = ProvisioningReport()
        steps: List[Tuple[StepName, Callable[[ProvisioningRequest], Awaitable[StepResult]]]] = [
            (StepName.PRECONDITIONS, self.check_preconditions),
            (StepName.ACCOUNT, self.ensure_account),
            (StepName.POLICY, self.grant_service_logon),
            (StepName.SERVICE, self.reconfigure_service),
            (StepName.TASK, self.register_mount_task),
        ]

        for step, handler in steps:
            try:
                result = await handler(request)
            except ProvisioningError as e:
                self._logger.error(f"❌ {step.value}: {e}")
                report.results.append(StepResult(step=step, success=False, message=str(e)))
                raise

            report.results.append(result)
            icon = "⚠️ " if result.warnings else "✅"
            self._logger.info(f"{icon} {step.value}: {result.message}")

        return report

    async def check_preconditions(self, request: ProvisioningRequest) -> StepResult:
        if not await aiofiles.os.path.isfile(request.mirror_executable):
            raise PrerequisiteMissingError(
                f"Mirroring executable not found: {request.mirror_executable}"
            )

        warnings = []
        if not await self._backends.mounts.is_reachable(request.network_path):
            warning = f"Network path {request.network_path} is not reachable"
            self._logger.warning(f"⚠️  {warning}")
            if not self._confirm(f"{warning}. Continue anyway?"):
                raise ProvisioningAbortedError("Aborted by operator: network path not reachable")
            warnings.append(warning)

        return StepResult(
            step=StepName.PRECONDITIONS,
            success=True,
            message="Mirroring executable found",
            warnings=warnings,
        )

    async def ensure_account(self, request: ProvisioningRequest) -> StepResult:
        accounts = self._backends.accounts
        name = request.account_name

        if await accounts.exists(name):
            # Existing accounts are left untouched, including their password
            return StepResult(
                step=StepName.ACCOUNT,
                success=True,
                message=f"Account '{name}' already exists, left unchanged",
            )

        await accounts.create(name, request.account_password)
        await accounts.add_to_group(self._settings.administrators_group, name)
        return StepResult(
            step=StepName.ACCOUNT,
            success=True,
            message=f"Created account '{name}' in {self._settings.administrators_group}",
        )

    async def grant_service_logon(self, request: ProvisioningRequest) -> StepResult:
        right = self._settings.service_logon_right
        try:
            sid = await self._backends.accounts.lookup_sid(request.account_name)
            document = await self._backends.policy.export()
            added = document.grant_right(right, f"*{sid}")
            if document.modified:
                await self._backends.policy.apply(document)
        except (SecurityPolicyError, CommandFailedError) as e:
            warning = f"Could not grant {right} to '{request.account_name}': {e}"
            self._logger.warning(f"⚠️  {warning}")
            return StepResult(step=StepName.POLICY, success=True, message="Grant skipped", warnings=[warning])

        message = f"Granted {right} to {sid}" if added else f"{sid} already holds {right}"
        return StepResult(step=StepName.POLICY, success=True, message=message)

    async def reconfigure_service(self, request: ProvisioningRequest) -> StepResult:
        services = self._backends.services
        name = self._settings.backup_service_name
        timeout = self._settings.service_state_timeout_seconds
        interval = self._settings.service_poll_interval_seconds
        warnings = []

        state = await services.query_state(name)
        if state is None:
            raise PrerequisiteMissingError(f"Service '{name}' is not installed")

        if state != ServiceState.STOPPED:
            self._logger.info(f"Stopping service '{name}' ({state.value})")
            try:
                await services.stop(name)
            except CommandFailedError as e:
                warnings.append(f"Stop request for '{name}' failed: {e}")
            state = await wait_for_state(services, name, ServiceState.STOPPED, timeout, interval)
            if state != ServiceState.STOPPED:
                warnings.append(f"Service '{name}' did not stop within {timeout}s (state: {_state_name(state)})")

        await services.set_run_as(name, request.qualified_account, request.account_password)
        await services.start(name)

        state = await wait_for_state(services, name, ServiceState.RUNNING, timeout, interval)
        if state != ServiceState.RUNNING:
            warnings.append(f"Service '{name}' not running after {timeout}s (state: {_state_name(state)})")

        for warning in warnings:
            self._logger.warning(f"⚠️  {warning}")

        return StepResult(
            step=StepName.SERVICE,
            success=True,
            message=f"Service '{name}' runs as {request.qualified_account}",
            warnings=warnings,
        )

    async def register_mount_task(self, request: ProvisioningRequest) -> StepResult:
        scheduler = self._backends.scheduler
        spec = LauncherSpec(
            remote_path=request.network_path,
            drive_letter=request.drive_letter,
            mirror_executable=request.mirror_executable,
            global_flag=self._settings.mirror_global_flag,
            share_username=request.share_username,
            share_password=request.share_password,
        )

        try:
            launcher = await write_launcher(Path(self._settings.launcher_directory), spec)
        except OSError as e:
            raise ProvisioningError(f"Could not write launcher: {e}") from e
        self._logger.debug(f"Launcher written to {launcher}")

        task_name = task_name_for_drive(self._settings.task_name_prefix, request.drive_letter)
        if await scheduler.exists(task_name):
            self._logger.info(f"Replacing existing task '{task_name}'")
            await scheduler.delete(task_name)

        await scheduler.create_startup_task(
            task_name, f'"{launcher}"', request.qualified_account, request.account_password
        )

        warnings = []
        if request.run_now:
            warnings.extend(await self._run_and_verify(task_name, request.drive_letter))

        return StepResult(
            step=StepName.TASK,
            success=True,
            message=f"Task '{task_name}' mounts {request.network_path} as {request.drive_letter}:",
            warnings=warnings,
        )

    async def _run_and_verify(self, task_name: str, drive_letter: str) -> List[str]:
        try:
            await self._backends.scheduler.run(task_name)
        except CommandFailedError as e:
            warning = f"Could not start task '{task_name}' now: {e}"
            self._logger.warning(f"⚠️  {warning}")
            return [warning]

        mounted = await wait_for_drive(
            self._backends.mounts,
            drive_letter,
            self._settings.mount_wait_timeout_seconds,
            self._settings.mount_poll_interval_seconds,
        )
        if not mounted:
            warning = f"Drive {drive_letter}: not visible yet, the task may need more time"
            self._logger.warning(f"⚠️  {warning}")
            return [warning]

        self._logger.info(f"Drive {drive_letter}: is mounted")
        return []


def _state_name(state) -> str:
    return state.value if state is not None else "not installed"
