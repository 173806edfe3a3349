from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .services.network_mount import normalize_drive_letter, to_unc_path


class StepName(str, Enum):
    """
    De fem trin i provisioneringen, i den rækkefølge de køres.

    Hvert trin kræver at det forrige lykkedes eller allerede var opfyldt.
    """

    PRECONDITIONS = "Preconditions"
    ACCOUNT = "Account"
    POLICY = "ServiceLogonRight"
    SERVICE = "ServiceIdentity"
    TASK = "MountTask"


class ProvisioningRequest(BaseModel):
    """Invocation inputs for a single provisioning run."""

    network_path: str
    drive_letter: str
    account_name: str
    account_password: str = Field(min_length=1)
    share_username: Optional[str] = None
    share_password: Optional[str] = None
    mirror_executable: str
    run_now: bool = True

    @field_validator("network_path")
    @classmethod
    def _normalize_network_path(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("network path is required")
        return to_unc_path(value)

    @field_validator("drive_letter")
    @classmethod
    def _normalize_drive_letter(cls, value: str) -> str:
        return normalize_drive_letter(value)

    @model_validator(mode="after")
    def _credentials_come_in_pairs(self) -> "ProvisioningRequest":
        if bool(self.share_username) != bool(self.share_password):
            raise ValueError("share username and share password must be given together")
        return self

    @property
    def qualified_account(self) -> str:
        """Account name in local-machine form, as services and tasks expect it."""
        return f".\\{self.account_name}"


class StepResult(BaseModel):
    step: StepName
    success: bool
    message: str = ""
    warnings: List[str] = Field(default_factory=list)


class ProvisioningReport(BaseModel):
    results: List[StepResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return bool(self.results) and all(r.success for r in self.results)

    @property
    def warnings(self) -> List[str]:
        return [w for r in self.results for w in r.warnings]
