# provisioner/core/exceptions.py
from typing import Sequence


class ProvisioningError(Exception):
    """Base exception for failures that abort the provisioning run."""
    pass


class PrerequisiteMissingError(ProvisioningError):
    """Raised when something the workflow needs is not present (executable, service, rights)."""
    pass


class UnsupportedPlatformError(PrerequisiteMissingError):
    """Raised when the current platform has no provisioning backend."""
    pass


class ProvisioningAbortedError(ProvisioningError):
    """Raised when the operator declines to continue after a warning."""
    pass


class CommandFailedError(ProvisioningError):
    """Raised when an OS management tool exits with a non-zero status."""
    def __init__(self, command: Sequence[str], returncode: int, output: str):
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"'{self.command[0] if self.command else '?'}' failed with exit code "
            f"{returncode}: {output.strip() or 'no output'}"
        )


class SecurityPolicyError(ProvisioningError):
    """Raised when the local security policy cannot be exported, parsed or applied."""
    pass
