"""Runtime configuration — env-driven via pydantic-settings.

Reads from a ``.env`` file and ``ADDONFORGE_*`` environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class AddOnSettings(BaseSettings):
    """Add-on package format and host settings.

    Examples
    --------
    Override via environment::

        export ADDONFORGE_HOST_VERSION=2.7.0
        export ADDONFORGE_JAVA_VERSION=11.0.2
        export ADDONFORGE_LOG_LEVEL=DEBUG

    Or via .env file::

        ADDONFORGE_PACKAGE_EXTENSION=.zap
        ADDONFORGE_SCAN_WORKERS=8
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ADDONFORGE_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"

    # Package format
    package_extension: str = ".zap"
    manifest_entry_name: str = "ZapAddOn.xml"
    manifest_root: str = "zapaddon"

    # Host the add-ons are checked against; unset means "do not check"
    host_version: str | None = None
    java_version: str | None = None

    # Manifests larger than this (bytes) are rejected
    max_manifest_size: int = 1024 * 1024

    # Directory scans
    scan_workers: int = 4

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# Module-level singleton; import as `from addonforge.config import settings`
settings = AddOnSettings()
