"""
Configuration management for gh-vault.
Uses Pydantic settings with optional YAML file support.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_config_dir() -> Path:
    """Return the tool's config directory, honouring XDG_CONFIG_HOME."""
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return Path(base) / "gh-vault"


def default_token_file() -> Path:
    """Return the default location of the fallback token file."""
    return default_config_dir() / "token"


class VaultSettings(BaseSettings):
    """Main application configuration."""
    model_config = SettingsConfigDict(
        env_prefix="GH_VAULT_",
        extra="ignore",
    )

    # Storage
    token_file: Path = Field(default_factory=default_token_file)

    # GitHub API used to verify tokens
    api_url: str = "https://api.github.com"
    request_timeout: float = Field(default=30.0, gt=0)
    request_retry: int = Field(default=3, ge=0, le=10)

    # Logging and debugging
    log_level: str = "WARNING"
    debug: bool = False

    @field_validator("token_file", mode="before")
    @classmethod
    def expand_token_file(cls, v: Union[str, Path, None]) -> Path:
        """Expand ~ in the token file path."""
        if v is None or not str(v).strip():
            raise ValueError("token_file must not be empty")
        return Path(v).expanduser()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Tokens are bearer credentials; only send them over HTTPS."""
        if not v.startswith("https://"):
            raise ValueError(f"api_url must use https: {v}")
        return v.rstrip("/")

    @classmethod
    def from_file(cls, config_file: Union[str, Path]) -> "VaultSettings":
        """Load configuration from a YAML file.

        Keys may be written with hyphens (``token-file``) or underscores.
        Environment variables still override file values.
        """
        config_path = Path(config_file).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            try:
                yaml_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {config_file}: {e}") from e

        if not yaml_config:
            yaml_config = {}
        if not isinstance(yaml_config, dict):
            raise ValueError(f"Config file must contain a mapping: {config_file}")

        values: Dict[str, Any] = {
            str(key).replace("-", "_"): value for key, value in yaml_config.items()
        }
        # Environment variables take precedence over the file
        for name in cls.model_fields:
            if f"GH_VAULT_{name}".upper() in os.environ:
                values.pop(name, None)
        return cls(**values)

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.token_file.exists() and self.token_file.is_dir():
            errors.append(f"Token file path is a directory: {self.token_file}")

        parent = self.token_file.parent
        if parent.exists() and not parent.is_dir():
            errors.append(f"Token file parent is not a directory: {parent}")

        return errors


def load_config(config_file: Optional[Union[str, Path]] = None) -> VaultSettings:
    """Load configuration from file or environment."""
    if config_file:
        return VaultSettings.from_file(config_file)

    default_file = default_config_dir() / "config.yaml"
    if default_file.exists():
        return VaultSettings.from_file(default_file)

    return VaultSettings()
