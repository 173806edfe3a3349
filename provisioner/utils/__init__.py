"""
Utilities package for the share mount provisioner.
"""

from .host_config import get_hostname, get_hostname_settings_file, list_all_settings_files

__all__ = [
    "get_hostname",
    "get_hostname_settings_file",
    "list_all_settings_files",
]
