"""
Configuration for the token cache using Pydantic settings.

Settings are read from keyword arguments, from ``TOKEN_CACHE_*`` environment
variables, or from a YAML file via :meth:`CacheSettings.from_yaml`.
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path

import yaml
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from token_cache.enums import BackendKind
from token_cache.exceptions import ConfigurationError
from token_cache.keys import DRIVER_ID
from token_cache.keyring_backend import DEFAULT_SERVICE_NAME

DEFAULT_FILE_NAME = "credential_cache_v1.json"


def default_cache_dir() -> Path:
    """Platform cache directory for the credential file."""
    if sys.platform == "win32":
        base = os.getenv("LOCALAPPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Local"
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Caches"
    else:
        base = os.getenv("XDG_CACHE_HOME")
        root = Path(base) if base else Path.home() / ".cache"
    return root / "token_cache"


class CacheSettings(BaseSettings):
    """Token cache settings.

    Example:
        >>> settings = CacheSettings(backend="local", cache_dir="/tmp/tokens")
        >>> settings.credential_file
        PosixPath('/tmp/tokens/credential_cache_v1.json')
    """

    model_config = SettingsConfigDict(
        env_prefix="TOKEN_CACHE_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    backend: BackendKind = Field(default=BackendKind.AUTO, description="Backend selection mode")
    cache_dir: Path = Field(
        default_factory=default_cache_dir,
        validation_alias=AliasChoices(
            "TOKEN_CACHE_CACHE_DIR",
            "SF_TEMPORARY_CREDENTIAL_CACHE_DIR",
        ),
        description="Directory holding the local credential file",
    )
    file_name: str = Field(default=DEFAULT_FILE_NAME, description="Local credential file name")
    keyring_service: str = Field(default=DEFAULT_SERVICE_NAME, description="Keyring service namespace")
    driver_id: str = Field(default=DRIVER_ID, min_length=1, description="Driver identifier in composite keys")
    legacy_key_format: bool = Field(
        default=False,
        description="Build composite keys with the trailing doubled brace used by older drivers",
    )

    @field_validator("file_name")
    @classmethod
    def validate_file_name(cls, value: str) -> str:
        """Reject file names that would escape the cache directory."""
        if not value or Path(value).name != value:
            raise ValueError(f"file_name must be a bare file name, got: {value!r}")
        return value

    @property
    def credential_file(self) -> Path:
        """Get the local credential file path."""
        return self.cache_dir.expanduser() / self.file_name

    @classmethod
    def from_yaml(cls, config_path: str) -> CacheSettings:
        """Load settings from YAML file with environment variable interpolation.

        Supports ${VAR_NAME} and ${VAR_NAME:-default} substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            CacheSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            yaml_content = config_file.read_text()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except Exception as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @classmethod
    def from_env(cls) -> CacheSettings:
        """Load settings from TOKEN_CACHE_* environment variables.

        Raises:
            ConfigurationError: If an environment value is invalid
        """
        try:
            return cls()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Replace ${VAR_NAME} and ${VAR_NAME:-default} placeholders.

        Comment lines are left unchanged.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))
