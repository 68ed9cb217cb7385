"""Configuration settings for mail-organizer-mcp using pydantic-settings."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import SecretStr, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from mail_organizer_mcp.email.connectors.config import IMAPConfig, SMTPConfig
from mail_organizer_mcp.exceptions import ConfigError

ENV_PREFIX = "MAILORG_"


def _located(message: str, file_path: Path, line: int | None = None) -> str:
    location = f" in {file_path}"
    if line is not None:
        location += f" at line {line + 1}"
    return f"Configuration error{location}: {message}"


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that loads configuration from a YAML file.

    Looks for config file in the following order:
    1. MAILORG_CONFIG_FILE environment variable
    2. ./mail-organizer.yaml (current directory)
    3. $XDG_CONFIG_HOME/mail-organizer-mcp/config.yaml (defaults to ~/.config)
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML config."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load and cache YAML config file."""
        if not hasattr(self, "_yaml_data"):
            self._yaml_data = self._read_yaml_file()
        return self._yaml_data

    def _read_yaml_file(self) -> dict[str, Any]:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        config_paths = [
            os.environ.get(f"{ENV_PREFIX}CONFIG_FILE"),
            Path.cwd() / "mail-organizer.yaml",
            Path(xdg_config) / "mail-organizer-mcp" / "config.yaml",
        ]

        for path in config_paths:
            if not path:
                continue
            path_obj = Path(path)
            if not path_obj.exists():
                continue
            try:
                with open(path_obj) as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                mark = getattr(e, "problem_mark", None)
                problem = getattr(e, "problem", None) or str(e)
                line = mark.line if mark else None
                raise ConfigError(
                    _located(f"Invalid YAML syntax: {problem}", path_obj, line)
                ) from e
            except OSError as e:
                raise ConfigError(_located(f"Cannot read config file: {e}", path_obj)) from e
            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError(_located("Top level must be a mapping", path_obj))
            return data

        return {}


def _parse_validation_error(error: ValidationError) -> str:
    """Convert Pydantic ValidationError to user-friendly message."""
    missing: list[str] = []
    invalid: list[str] = []
    for err in error.errors():
        loc = err.get("loc", ())
        field_name = ".".join(str(part) for part in loc)
        if err.get("type") == "missing":
            missing.append(f"{ENV_PREFIX}{field_name.upper()}")
        else:
            invalid.append(f"Invalid value for '{field_name}': {err.get('msg', '')}")

    parts = []
    if missing:
        parts.append(f"Missing required settings: {', '.join(missing)}")
    parts.extend(invalid)
    return "; ".join(parts) or str(error)


class Settings(BaseSettings):
    """Application settings loaded from environment variables with MAILORG_ prefix.

    Values may also come from a dotenv file or a YAML config file:
        imap_host: imap.example.com
        imap_username: me@example.com
        smtp_host: smtp.example.com
        smtp_username: me@example.com

    Passwords are best supplied through MAILORG_IMAP_PASSWORD and
    MAILORG_SMTP_PASSWORD.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # IMAP (retrieval)
    imap_host: str
    imap_port: int = 993
    imap_username: str
    imap_password: SecretStr
    imap_ssl: bool = True

    # SMTP (sending)
    smtp_host: str
    smtp_port: int = 587
    smtp_username: str
    smtp_password: SecretStr
    smtp_ssl: bool = False
    smtp_from: str | None = None

    # Application
    log_level: str = "INFO"
    startup_check: bool = True
    startup_check_timeout: float = 5.0

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @field_validator("startup_check_timeout")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("startup_check_timeout must be positive")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            dotenv_settings,
            file_secret_settings,
        )

    def imap_config(self, timeout: float | None = None) -> IMAPConfig:
        return IMAPConfig(
            host=self.imap_host,
            port=self.imap_port,
            username=self.imap_username,
            password=self.imap_password,
            ssl=self.imap_ssl,
            timeout=timeout,
        )

    def smtp_config(self, timeout: float | None = None) -> SMTPConfig:
        return SMTPConfig(
            host=self.smtp_host,
            port=self.smtp_port,
            username=self.smtp_username,
            password=self.smtp_password,
            ssl=self.smtp_ssl,
            from_address=self.smtp_from,
            timeout=timeout,
        )


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Load settings with eager validation at startup.

    Args:
        env_file: Optional dotenv file to read instead of ``./.env``.

    Raises:
        ConfigError: If configuration is missing or invalid.
    """
    if env_file is not None and not Path(env_file).is_file():
        raise ConfigError(f"Environment file not found: {env_file}")

    try:
        if env_file is not None:
            return Settings(_env_file=env_file)  # type: ignore[call-arg]
        return Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        raise ConfigError(_parse_validation_error(e)) from e
