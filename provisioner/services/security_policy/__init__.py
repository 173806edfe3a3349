from .base_policy_store import BasePolicyStore
from .policy_document import PolicyDocument, PRIVILEGE_RIGHTS_SECTION
from .windows_policy_store import WindowsPolicyStore

__all__ = ["BasePolicyStore", "PolicyDocument", "PRIVILEGE_RIGHTS_SECTION", "WindowsPolicyStore"]
