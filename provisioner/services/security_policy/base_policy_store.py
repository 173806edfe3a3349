"""Abstract Policy Store - read/modify/write access to the local security policy."""

from abc import ABC, abstractmethod

from .policy_document import PolicyDocument


class BasePolicyStore(ABC):

    @abstractmethod
    async def export(self) -> PolicyDocument:
        """Export the live user-rights policy. Raises SecurityPolicyError."""
        pass

    @abstractmethod
    async def apply(self, document: PolicyDocument) -> None:
        """Import document, restricted to the user-rights area. Raises SecurityPolicyError."""
        pass
