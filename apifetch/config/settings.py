"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Configuration management for Apifetch.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from apifetch.exceptions import InvalidConfigurationError
from apifetch.logging_config import get_logger

logger = get_logger(__name__)


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${API_BASE_URL}" -> value of API_BASE_URL env var
        "${API_BASE_URL:http://localhost:8000}" -> value or the default if not set
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class ClientConfig:
    """Request pipeline configuration."""

    base_url: str = ""
    default_headers: Dict[str, str] = field(default_factory=dict)
    timeout_seconds: float = 30.0
    follow_redirects: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    format: str = "console"


@dataclass
class ApifetchConfig:
    """Main Apifetch configuration."""

    client: ClientConfig = field(default_factory=ClientConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.apifetch/config.yaml")


def get_default_config() -> ApifetchConfig:
    """
    Get default configuration with sensible defaults.

    Returns:
        ApifetchConfig: Default configuration object
    """
    return ApifetchConfig(
        client=ClientConfig(),
        logging=LoggingConfig(),
    )


def load_config(config_path: Optional[str] = None) -> ApifetchConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        ApifetchConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(str(config_path))

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        ) from e
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        ) from e

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': top level must be a mapping"
        )

    config_data = _expand_env_vars(config_data)

    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        ) from e

    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _build_config_from_dict(config_data: Dict[str, Any]) -> ApifetchConfig:
    """
    Build ApifetchConfig from dictionary loaded from YAML.

    Missing sections and keys fall back to defaults.

    Args:
        config_data: Dictionary loaded from YAML file

    Returns:
        ApifetchConfig: Configuration object

    Raises:
        InvalidConfigurationError: If a section or value has the wrong type
    """
    defaults = get_default_config()

    client_data = config_data.get('client') or {}
    logging_data = config_data.get('logging') or {}
    if not isinstance(client_data, dict):
        raise InvalidConfigurationError("'client' section must be a mapping")
    if not isinstance(logging_data, dict):
        raise InvalidConfigurationError("'logging' section must be a mapping")

    headers = client_data.get('default_headers') or {}
    if not isinstance(headers, dict):
        raise InvalidConfigurationError("client.default_headers must be a mapping")

    try:
        timeout_seconds = float(
            client_data.get('timeout_seconds', defaults.client.timeout_seconds)
        )
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(
            f"client.timeout_seconds must be a number, got "
            f"{client_data.get('timeout_seconds')!r}"
        ) from e

    client = ClientConfig(
        base_url=str(client_data.get('base_url', defaults.client.base_url) or ""),
        default_headers={str(k): str(v) for k, v in headers.items()},
        timeout_seconds=timeout_seconds,
        follow_redirects=bool(
            client_data.get('follow_redirects', defaults.client.follow_redirects)
        ),
    )

    logging = LoggingConfig(
        level=str(logging_data.get('level', defaults.logging.level)),
        file=os.path.expanduser(str(logging_data.get('file', defaults.logging.file) or "")),
        format=str(logging_data.get('format', defaults.logging.format)),
    )

    return ApifetchConfig(client=client, logging=logging)


def _validate_config(config: ApifetchConfig) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    base_url = config.client.base_url
    if base_url and not base_url.startswith(("http://", "https://")):
        raise InvalidConfigurationError(
            f"client.base_url must start with http:// or https://, got '{base_url}'"
        )

    if config.client.timeout_seconds <= 0:
        raise InvalidConfigurationError(
            f"client.timeout_seconds must be positive, got {config.client.timeout_seconds}"
        )

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.logging.level.upper() not in valid_log_levels:
        raise InvalidConfigurationError(
            f"logging level must be one of {valid_log_levels}, "
            f"got '{config.logging.level}'"
        )

    valid_formats = ["json", "console"]
    if config.logging.format not in valid_formats:
        raise InvalidConfigurationError(
            f"logging format must be one of {valid_formats}, "
            f"got '{config.logging.format}'"
        )
