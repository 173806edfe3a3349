"""Abstract Account Store - local user account operations."""

from abc import ABC, abstractmethod


class BaseAccountStore(ABC):
    """Abstract base class for the local account database."""

    @abstractmethod
    async def exists(self, name: str) -> bool:
        """Check whether a local account with this name exists."""
        pass

    @abstractmethod
    async def create(self, name: str, password: str) -> None:
        """Create a local account."""
        pass

    @abstractmethod
    async def add_to_group(self, group: str, name: str) -> None:
        """Add account to a local group. Already being a member is not an error."""
        pass

    @abstractmethod
    async def is_in_group(self, group: str, name: str) -> bool:
        pass

    @abstractmethod
    async def lookup_sid(self, name: str) -> str:
        """Resolve account name to its security identifier (S-1-5-...)."""
        pass
