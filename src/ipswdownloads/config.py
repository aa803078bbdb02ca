"""
Configuration loading for ipswdownloads.

Settings come from an optional YAML file and are then overridden by
environment variables. Example file:

    server_url: https://api.ipsw.me/v4
    timeout: 15
    log_level: DEBUG
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import platformdirs
import yaml

from ipswdownloads.constants import (
    APP_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_REQUEST_TIMEOUT,
    LOG_LEVEL_ENV_VAR,
    SERVER_URL_ENV_VAR,
    TIMEOUT_ENV_VAR,
)
from ipswdownloads.exceptions import ConfigFileError, ConfigurationError, InvalidURL
from ipswdownloads.log_utils import logger
from ipswdownloads.urls import default_server_url, validate_url

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


@dataclass(frozen=True)
class ClientConfig:
    server_url: Optional[str] = None
    """Base URL of the service; None means the production default"""

    timeout: float = DEFAULT_REQUEST_TIMEOUT
    """Total request timeout in seconds, applied by the transport"""

    log_level: Optional[str] = None
    """Log level name to apply when the client is opened"""

    def resolved_server_url(self) -> str:
        if self.server_url is None:
            return default_server_url()
        return validate_url(self.server_url)


def default_config_path() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME)) / CONFIG_FILE_NAME


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigFileError(
            "Could not read configuration file", path=str(path), details=str(e)
        ) from e
    except yaml.YAMLError as e:
        raise ConfigFileError(
            "Could not parse configuration file", path=str(path), details=str(e)
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(
            "Configuration file must contain a mapping",
            path=str(path),
            details=f"got {type(data).__name__}",
        )
    return data


def _coerce(values: Mapping[str, Any]) -> ClientConfig:
    known = {f.name for f in fields(ClientConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigurationError(
            "Unknown configuration keys", details=", ".join(unknown)
        )

    server_url = values.get("server_url")
    if server_url is not None:
        try:
            validate_url(server_url)
        except InvalidURL as e:
            raise ConfigurationError(
                "Invalid server_url", details=str(server_url)
            ) from e

    raw_timeout = values.get("timeout", DEFAULT_REQUEST_TIMEOUT)
    try:
        timeout = float(raw_timeout)
    except (TypeError, ValueError) as e:
        raise ConfigurationError("Invalid timeout", details=repr(raw_timeout)) from e
    if timeout <= 0:
        raise ConfigurationError("timeout must be positive", details=repr(raw_timeout))

    log_level = values.get("log_level")
    if log_level is not None:
        log_level = str(log_level).upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigurationError("Invalid log_level", details=log_level)

    return ClientConfig(server_url=server_url, timeout=timeout, log_level=log_level)


def load_config(path: Optional[Union[str, Path]] = None) -> ClientConfig:
    """
    Load configuration from YAML and the environment.

    If `path` is given the file must exist. Otherwise the platformdirs config
    location is used when a file is present there. Environment variables
    (IPSWDOWNLOADS_SERVER_URL, IPSWDOWNLOADS_TIMEOUT, IPSWDOWNLOADS_LOG_LEVEL)
    override file values.

    Raises:
        ConfigFileError: If the file cannot be read or is not a YAML mapping.
        ConfigurationError: If a value is invalid or a key is unknown.
    """
    values: Dict[str, Any] = {}

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigFileError("Configuration file not found", path=str(config_path))
        values.update(_read_yaml(config_path))
    else:
        config_path = default_config_path()
        if config_path.exists():
            logger.debug(f"Loading configuration from {config_path}")
            values.update(_read_yaml(config_path))

    env_overrides = {
        "server_url": os.environ.get(SERVER_URL_ENV_VAR),
        "timeout": os.environ.get(TIMEOUT_ENV_VAR),
        "log_level": os.environ.get(LOG_LEVEL_ENV_VAR),
    }
    for key, value in env_overrides.items():
        if value:
            values[key] = value

    return _coerce(values)
