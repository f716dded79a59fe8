"""Configuration system for disk-usage application.

This module implements the configuration schema using Pydantic for
validation, with support for environment variable resolution and fail-fast
validation with actionable error messages. Every section has defaults, so
running without a configuration file is the common case.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from disk_usage.types.aliases import RawConfig

# Regular expression pattern for environment variable references
# Matches ${VARIABLE_NAME} syntax where VARIABLE_NAME can contain letters, digits, and underscores
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")

# Environment variable naming a configuration file when --config is not given
CONFIG_ENV_VAR: Final[str] = "DU_CONFIG"

VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class _Section(BaseModel):
    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
    )


class TraversalConfig(_Section):
    """Configuration for directory traversal behavior."""

    follow_symlinks: Annotated[
        bool,
        Field(
            description="Classify symlinks by their target and descend into linked directories",
        ),
    ] = False


class OutputConfig(_Section):
    """Configuration for the printed summary."""

    human_readable: Annotated[
        bool,
        Field(
            description="Append a binary-unit size (KB/MB/GB/TB) after the byte count",
        ),
    ] = False


class LoggingConfig(_Section):
    """Configuration for diagnostic logging.

    Log records go to stderr so they never interleave with the summary
    printed on stdout.
    """

    level: Annotated[
        str,
        Field(
            description="Logging level",
        ),
    ] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept log levels case-insensitively.

        Args:
            v: Raw level value

        Returns:
            Uppercase level name

        Raises:
            ValueError: If the level is not a known logging level
        """
        if not isinstance(v, str):
            return v
        normalized = v.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            msg = f"Invalid log level '{v}'. Valid options: {', '.join(sorted(VALID_LOG_LEVELS))}"
            raise ValueError(msg)
        return normalized


class MainConfig(_Section):
    """Main application configuration schema.

    Top-level configuration container aggregating all configuration sections:
    - traversal: Filesystem walk settings
    - output: Summary formatting settings
    - logging: Diagnostic logging settings
    """

    traversal: Annotated[
        TraversalConfig,
        Field(
            default_factory=TraversalConfig,
            description="Directory traversal configuration",
        ),
    ]
    output: Annotated[
        OutputConfig,
        Field(
            default_factory=OutputConfig,
            description="Summary output configuration",
        ),
    ]
    logging: Annotated[
        LoggingConfig,
        Field(
            default_factory=LoggingConfig,
            description="Logging configuration",
        ),
    ]


class ConfigurationError(Exception):
    """Raised when a configuration file cannot be read, parsed or validated."""


class EnvironmentVariableError(Exception):
    """Raised when a ``${VAR}`` reference names an unset variable."""


def resolve_env_var(value: str) -> str:
    """Substitute every ``${VAR}`` reference in ``value`` from the environment.

    All unset names are reported together rather than one at a time.

    Examples:
        >>> os.environ["DU_LEVEL"] = "DEBUG"
        >>> resolve_env_var("${DU_LEVEL}")
        'DEBUG'
    """
    missing = [name for name in ENV_VAR_PATTERN.findall(value) if name not in os.environ]
    if missing:
        msg = f"Environment variable not set: {', '.join(missing)}"
        raise EnvironmentVariableError(msg)
    return ENV_VAR_PATTERN.sub(lambda match: os.environ[match.group(1)], value)


def _resolve_value(value: object) -> object:
    if isinstance(value, str):
        return resolve_env_var(value)
    if isinstance(value, Mapping):
        return resolve_env_vars_in_dict(value)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    if isinstance(value, list):
        return [_resolve_value(item) for item in value]  # pyright: ignore[reportUnknownVariableType]  # YAML boundary
    return value


def resolve_env_vars_in_dict(data: Mapping[str, object]) -> RawConfig:
    """Return a copy of ``data`` with ``${VAR}`` references resolved at any depth.

    Raises:
        EnvironmentVariableError: If a referenced variable is unset
    """
    return {key: _resolve_value(value) for key, value in data.items()}


def _read_yaml(config_path: Path) -> RawConfig:
    if not config_path.is_file():
        msg = f"Configuration file not found: {config_path}"
        raise ConfigurationError(msg)

    try:
        document: object = yaml.safe_load(config_path.read_text(encoding="utf-8"))  # pyright: ignore[reportAny]
    except yaml.YAMLError as e:
        msg = f"Failed to parse YAML configuration file {config_path}:\n{e}"
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file {config_path}: {e.strerror}"
        raise ConfigurationError(msg) from e

    # Empty document: all defaults
    if document is None:
        return {}
    if not isinstance(document, dict):
        msg = f"{config_path}: Expected YAML dictionary at root level, got {type(document).__name__}"
        raise ConfigurationError(msg)
    return document  # pyright: ignore[reportUnknownVariableType]  # YAML boundary


def _describe_validation_error(config_path: Path, error: ValidationError) -> str:
    lines = [f"Configuration validation failed: {config_path}"]
    lines.extend(f"  {' → '.join(str(loc) for loc in detail['loc'])}: {detail['msg']}" for detail in error.errors())
    return "\n".join(lines)


def load_main_config(config_path: Path) -> MainConfig:
    """Read, resolve and validate a YAML configuration file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Validated MainConfig instance

    Raises:
        ConfigurationError: If the file is missing, unreadable, not a YAML
            mapping, references an unset variable, or fails validation
    """
    raw_data = _read_yaml(config_path)

    try:
        resolved_data = resolve_env_vars_in_dict(raw_data)
    except EnvironmentVariableError as e:
        msg = f"Environment variable resolution failed in {config_path}: {e}"
        raise ConfigurationError(msg) from e

    try:
        return MainConfig.model_validate(resolved_data)
    except ValidationError as e:
        raise ConfigurationError(_describe_validation_error(config_path, e)) from e


def load_config(config_path: Path | None = None) -> MainConfig:
    """Load configuration from an explicit path, ``$DU_CONFIG``, or defaults.

    Args:
        config_path: Explicit configuration file (takes precedence)

    Returns:
        Validated MainConfig instance

    Raises:
        ConfigurationError: If a named configuration file cannot be loaded
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return MainConfig()
        config_path = Path(env_path)

    return load_main_config(config_path)
