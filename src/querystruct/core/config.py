"""
Configuration management for querystruct.

Loads settings from environment variables and provides a centralized
configuration object for the encoder and its logging.

Configuration precedence (highest to lowest):
1. Explicit kwargs passed to QuerystructConfig
2. Environment variables (QUERYSTRUCT_* prefix)
3. .env file
4. pyproject.toml [tool.querystruct] section
5. Hardcoded defaults
"""

import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ..models.enums import LogLevel

logger = logging.getLogger(__name__)

DEFAULT_ALIAS_TAG = "schema"


def load_pyproject_defaults() -> dict[str, Any]:
    """
    Load defaults from [tool.querystruct] section in pyproject.toml.

    Returns:
        Dictionary of configuration overrides from pyproject.toml
    """
    pyproject_path = Path("pyproject.toml")

    if not pyproject_path.exists():
        return {}

    try:
        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        logger.warning(f"Could not load pyproject.toml: {e}")
        return {}
    except tomllib.TOMLDecodeError as e:
        logger.warning(f"Could not parse pyproject.toml: {e}")
        return {}

    tool_config = data.get("tool", {}).get("querystruct", {})

    if tool_config:
        logger.debug(f"Loaded {len(tool_config)} settings from pyproject.toml")

    return tool_config


class PyProjectTomlSettingsSource(PydanticBaseSettingsSource):
    """
    A pydantic-settings source that loads configuration from pyproject.toml.
    """

    def get_field_value(self, field_name: str, field_info: Any) -> tuple[Any, str, bool]:
        """Not used in this implementation."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load and return configuration from pyproject.toml."""
        return load_pyproject_defaults()


class QuerystructConfig(BaseSettings):
    """
    Settings shared by every Encoder created without explicit overrides.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUERYSTRUCT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Field metadata
    alias_tag: str = Field(
        default=DEFAULT_ALIAS_TAG,
        description="Metadata key holding field aliases and options",
    )

    # Logging
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_file: Path | None = Field(
        default=None,
        description="Path to log file (set to None to disable file logging)",
    )
    log_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Maximum log file size before rotation"  # 10MB
    )
    log_backup_count: int = Field(default=5, description="Number of backup log files to keep")
    rich_tracebacks: bool = Field(
        default=True, description="Install rich traceback rendering for the CLI"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            PyProjectTomlSettingsSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("alias_tag")
    @classmethod
    def validate_alias_tag(cls, v: str) -> str:
        """Alias tags are plain metadata keys"""
        v = v.strip()
        if not v:
            raise ValueError("alias_tag must not be empty")
        if "," in v:
            raise ValueError(f"alias_tag must not contain commas, got {v!r}")
        return v

    @field_validator("log_max_bytes", "log_backup_count")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Log rotation settings must be >= 0, got {v}")
        return v

    def ensure_log_directory(self) -> None:
        """Ensure the log directory exists."""
        if self.log_file and self.log_file.parent:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Global configuration instance
_config: QuerystructConfig | None = None


def get_config() -> QuerystructConfig:
    """
    Get the global configuration instance.

    Returns:
        QuerystructConfig instance
    """
    global _config
    if _config is None:
        _config = QuerystructConfig()
        _config.ensure_log_directory()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
