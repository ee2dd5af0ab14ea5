"""EZID client configuration using Pydantic.

Settings are read from ``EZID_*`` environment variables, an optional ``.env``
file, or a YAML file via :meth:`EzidSettings.from_yaml`.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EzidSettings(BaseSettings):
    """Connection and client settings for the EZID registry."""

    model_config = SettingsConfigDict(
        env_prefix="EZID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # --- Registry host ---
    host: str = Field(default="ezid.cdlib.org")
    port: int = Field(default=443)
    use_ssl: bool = True

    # --- Credentials ---
    user: str = Field(default="")
    password: str = Field(default="")

    # --- Identifier defaults ---
    default_shoulder: str | None = None

    # --- Transport ---
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0

    # --- Logging ---
    log_level: str = "INFO"

    @computed_field
    @property
    def base_url(self) -> str:
        """Scheme, host and (non-default) port of the registry."""
        scheme = "https" if self.use_ssl else "http"
        default_port = 443 if self.use_ssl else 80
        if self.port == default_port:
            return f"{scheme}://{self.host}"
        return f"{scheme}://{self.host}:{self.port}"

    @classmethod
    def from_yaml(cls, yaml_path: str | Path = "config/ezid.yaml") -> "EzidSettings":
        """Load settings from a YAML file; environment variables still apply."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            return cls()

        with open(yaml_path) as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)


# Global settings instance
_settings: Optional[EzidSettings] = None


def get_settings() -> EzidSettings:
    """Get or create the global settings instance"""
    global _settings
    if _settings is None:
        _settings = EzidSettings.from_yaml()
    return _settings


def reload_settings(yaml_path: Optional[str | Path] = None) -> EzidSettings:
    """Rebuild the global settings instance"""
    global _settings
    _settings = EzidSettings.from_yaml(yaml_path) if yaml_path else EzidSettings.from_yaml()
    return _settings
