from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from .utils.host_config import get_hostname_settings_file


class Settings(BaseSettings):
    # Lokal service-konto
    default_account_name: str = "ShareMountSvc"
    administrators_group: str = "Administrators"
    service_logon_right: str = "SeServiceLogonRight"

    # Mirroring executable (Dokan mirror sample)
    mirror_executable: str = (
        r"C:\Program Files\Dokan\Dokan Library-2.1.0\sample\mirror\mirror.exe"
    )
    mirror_global_flag: str = "/o"  # Mount via Mount Manager so all sessions see the drive

    # Backup service der skal køre som den nye konto
    backup_service_name: str = "UrBackupClientBackend"

    # Launcher + scheduled task
    launcher_directory: str = r"C:\ProgramData\ShareMount"
    task_name_prefix: str = "ShareMount"

    # Timing konfiguration
    network_probe_timeout_seconds: float = 10.0
    service_state_timeout_seconds: float = 30.0
    service_poll_interval_seconds: float = 1.0
    mount_wait_timeout_seconds: float = 30.0
    mount_poll_interval_seconds: float = 2.0
    command_timeout_seconds: float = 60.0

    # Logging konfiguration
    log_level: str = "INFO"
    log_file_path: str = "logs/provisioner.log"
    log_retention_days: int = 30

    model_config = SettingsConfigDict(
        env_file=get_hostname_settings_file(),
        env_prefix="PROVISIONER_",
        extra="ignore",
    )

    @property
    def log_directory(self) -> Path:
        """Returnerer log directory som Path objekt"""
        return Path(self.log_file_path).parent

    @property
    def config_file_info(self) -> dict:
        """Return information about which configuration file is being used."""
        from .utils.host_config import get_hostname, list_all_settings_files

        return {
            "hostname": get_hostname(),
            "active_config_file": get_hostname_settings_file(),
            "all_available_configs": list_all_settings_files(),
        }
