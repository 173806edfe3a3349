from .base_account_store import BaseAccountStore
from .windows_account_store import WindowsAccountStore

__all__ = ["BaseAccountStore", "WindowsAccountStore"]
