"""Windows Account Store - net user / net localgroup based account management."""

import logging
import re

from .base_account_store import BaseAccountStore
from ..command_runner import CommandRunner
from ...core.exceptions import CommandFailedError

# "System error 1378 has occurred. The specified account name is already a member of the group."
ALREADY_MEMBER_CODE = "1378"
SID_PATTERN = re.compile(r"S-1-[0-9-]+")


class WindowsAccountStore(BaseAccountStore):
    """Windows local accounts via net.exe. SRP: account operations ONLY."""

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    async def exists(self, name: str) -> bool:
        result = await self._runner.run(["net", "user", name])
        return result.ok

    async def create(self, name: str, password: str) -> None:
        logging.info(f"Creating local account '{name}'")
        result = await self._runner.run(
            ["net", "user", name, password, "/add", "/passwordchg:no", "/expires:never"],
            secrets=[password],
        )
        result.check()

    async def add_to_group(self, group: str, name: str) -> None:
        result = await self._runner.run(["net", "localgroup", group, name, "/add"])
        if not result.ok and ALREADY_MEMBER_CODE in result.output:
            logging.debug(f"'{name}' is already a member of '{group}'")
            return
        result.check()

    async def is_in_group(self, group: str, name: str) -> bool:
        result = (await self._runner.run(["net", "localgroup", group])).check()
        members = [line.strip().lower() for line in result.stdout.splitlines()]
        return name.lower() in members

    async def lookup_sid(self, name: str) -> str:
        script = (
            "(New-Object System.Security.Principal.NTAccount('{0}'))"
            ".Translate([System.Security.Principal.SecurityIdentifier]).Value"
        ).format(name.replace("'", "''"))
        result = (await self._runner.run(
            ["powershell", "-NoProfile", "-NonInteractive", "-Command", script]
        )).check()

        match = SID_PATTERN.search(result.stdout)
        if not match:
            raise CommandFailedError(result.command, result.returncode,
                                     f"No SID in output for '{name}': {result.output}")
        return match.group(0)
