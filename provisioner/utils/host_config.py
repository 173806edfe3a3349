"""
Host-specific configuration management utility.

Picks the provisioner settings file for the current machine, creating it
from the shared base file the first time the tool runs on a host.
"""

import logging
import shutil
import socket
from pathlib import Path

BASE_SETTINGS_FILE = "provisioner.env"


def get_hostname() -> str:
    """Get the current hostname (without domain)."""
    return socket.gethostname().split('.')[0]


def get_hostname_settings_file(base_dir: Path = Path(".")) -> str:
    """
    Get the appropriate settings file for this host.

    Logic:
    1. Look for {hostname}-provisioner.env
    2. If missing, copy provisioner.env to it with a hostname header
    3. If provisioner.env is missing too, fall back to provisioner.env

    Returns:
        str: Path to the settings file to load
    """
    base_settings = base_dir / BASE_SETTINGS_FILE
    try:
        hostname = get_hostname()
        host_settings = base_dir / f"{hostname}-{BASE_SETTINGS_FILE}"

        if host_settings.exists():
            logging.debug(f"Using existing host-specific configuration: {host_settings}")
            return str(host_settings)

        if not base_settings.exists():
            logging.debug(f"No {BASE_SETTINGS_FILE} found, using defaults and environment")
            return str(base_settings)

        content = base_settings.read_text(encoding="utf-8")
        host_header = (
            f"# Host-specific provisioner configuration for: {hostname}\n"
            f"# Auto-generated from {BASE_SETTINGS_FILE}\n"
            "# ==========================================================\n\n"
        )
        shutil.copy2(base_settings, host_settings)
        host_settings.write_text(host_header + content, encoding="utf-8")
        logging.info(f"Created host-specific configuration: {host_settings}")
        return str(host_settings)

    except OSError as e:
        logging.error(f"Error handling host-specific settings: {e}")
        return str(base_settings)


def list_all_settings_files(base_dir: Path = Path(".")) -> list[str]:
    """List the base settings file and every host-specific variant."""
    settings_files = []

    if (base_dir / BASE_SETTINGS_FILE).exists():
        settings_files.append(str(base_dir / BASE_SETTINGS_FILE))

    for file_path in base_dir.glob(f"*-{BASE_SETTINGS_FILE}"):
        settings_files.append(str(file_path))

    return settings_files
