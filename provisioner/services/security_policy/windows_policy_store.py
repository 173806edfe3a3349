"""Windows Policy Store - secedit export/configure of the USER_RIGHTS area."""

import logging
import tempfile
from pathlib import Path

import aiofiles

from .base_policy_store import BasePolicyStore
from .policy_document import PolicyDocument
from ..command_runner import CommandRunner
from ...core.exceptions import SecurityPolicyError

POLICY_AREA = "USER_RIGHTS"


async def read_policy_file(path: Path) -> str:
    """secedit writes UTF-16 with a BOM; fall back to UTF-8 for hand-made files."""
    async with aiofiles.open(path, "rb") as f:
        data = await f.read()
    if data[:2] in (b"\xff\xfe", b"\xfe\xff"):
        return data.decode("utf-16")
    return data.decode("utf-8-sig")


async def write_policy_file(path: Path, text: str) -> None:
    async with aiofiles.open(path, "wb") as f:
        await f.write(text.encode("utf-16"))


class WindowsPolicyStore(BasePolicyStore):
    """Local security policy via secedit.exe. SRP: policy export/import ONLY."""

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    async def export(self) -> PolicyDocument:
        with tempfile.TemporaryDirectory(prefix="provisioner-secpol-") as tmp:
            cfg = Path(tmp) / "export.inf"
            result = await self._runner.run(
                ["secedit", "/export", "/cfg", str(cfg), "/areas", POLICY_AREA, "/quiet"]
            )
            if not result.ok or not cfg.exists():
                raise SecurityPolicyError(f"Policy export failed: {result.output or 'no output file'}")

            text = await read_policy_file(cfg)

        logging.debug(f"Exported {len(text)} characters of security policy")
        return PolicyDocument.parse(text)

    async def apply(self, document: PolicyDocument) -> None:
        with tempfile.TemporaryDirectory(prefix="provisioner-secpol-") as tmp:
            cfg = Path(tmp) / "import.inf"
            db = Path(tmp) / "secedit.sdb"
            await write_policy_file(cfg, document.serialize())

            result = await self._runner.run(
                ["secedit", "/configure", "/db", str(db), "/cfg", str(cfg),
                 "/areas", POLICY_AREA, "/quiet"]
            )
            if not result.ok:
                raise SecurityPolicyError(f"Policy import failed: {result.output}")

        logging.debug("Security policy imported")
