"""Command Runner - executes OS management tools and captures their output."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.exceptions import CommandFailedError

MASK = "********"


@dataclass
class CommandResult:
    """Outcome of a single OS tool invocation."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined output, stderr first since the tools report errors there."""
        return "\n".join(part for part in (self.stderr.strip(), self.stdout.strip()) if part)

    def check(self) -> "CommandResult":
        """Raise CommandFailedError unless the command succeeded."""
        if not self.ok:
            raise CommandFailedError(self.command, self.returncode, self.output)
        return self


def mask_command(cmd: Sequence[str], secrets: Iterable[str] = ()) -> str:
    """Render a command for logging with every secret replaced."""
    secrets = [s for s in secrets if s]
    rendered = []
    for part in cmd:
        for secret in secrets:
            part = part.replace(secret, MASK)
        rendered.append(part)
    return " ".join(rendered)


class CommandRunner:
    """Runs external commands via asyncio subprocesses. SRP: process execution ONLY."""

    def __init__(self, default_timeout: Optional[float] = 60.0):
        self._default_timeout = default_timeout

    async def run(
        self,
        cmd: Sequence[str],
        timeout: Optional[float] = None,
        secrets: Iterable[str] = (),
    ) -> CommandResult:
        """Run cmd and return its result. Non-zero exit codes are returned, not raised."""
        timeout = timeout if timeout is not None else self._default_timeout
        printable = mask_command(cmd, secrets)
        logging.debug(f"RUN: {printable}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            logging.error(f"Command not found: {cmd[0]}")
            return CommandResult(list(cmd), 127, "", str(e))

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            logging.error(f"Command timed out after {timeout}s: {printable}")
            try:
                process.kill()
            except ProcessLookupError:
                # Exited between the timeout and the kill
                pass
            await process.wait()
            return CommandResult(list(cmd), -1, "", f"Timed out after {timeout}s")

        result = CommandResult(
            command=list(cmd),
            returncode=process.returncode,
            stdout=stdout.decode(errors="replace") if stdout else "",
            stderr=stderr.decode(errors="replace") if stderr else "",
        )
        if not result.ok:
            logging.debug(f"Command exited with {result.returncode}: {printable}")
        return result
