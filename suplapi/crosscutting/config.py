import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

from suplapi.application.client import DEFAULT_BASE_URL
from suplapi.infrastructure.transports.requests_transport import DEFAULT_TIMEOUT

ENV_BASE_URL = 'SUPLAPI_BASE_URL'
ENV_TIMEOUT = 'SUPLAPI_TIMEOUT'
ENV_LOG_LEVEL = 'SUPLAPI_LOG_LEVEL'

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


class ConfigError(Exception):
    """Configuration error."""
    pass


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the command line entry point."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = 'WARNING'

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def _read_env_file(env_file: Optional[str]) -> Mapping[str, Optional[str]]:
    if env_file is None:
        return {}
    path = Path(env_file)
    if not path.exists():
        raise ConfigError(f"Env file not found: {path}")
    try:
        return dotenv_values(path)
    except OSError as e:
        raise ConfigError(f"Failed to load env file {path}: {e}")


def _lookup(name: str, environ: Mapping[str, str], file_values: Mapping[str, Optional[str]]) -> Optional[str]:
    value = environ.get(name)
    if value is None or not value.strip():
        value = file_values.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_settings(env_file: Optional[str] = None,
                  environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Load settings from the environment, then an optional .env file, then defaults.

    Args:
        env_file: Path to a dotenv file. Values in the process environment win.
        environ: Environment mapping, defaults to os.environ.

    Raises:
        ConfigError: if the env file is missing or a value is invalid.
    """
    environ = os.environ if environ is None else environ
    file_values = _read_env_file(env_file)

    base_url = _lookup(ENV_BASE_URL, environ, file_values) or DEFAULT_BASE_URL

    raw_timeout = _lookup(ENV_TIMEOUT, environ, file_values)
    timeout = DEFAULT_TIMEOUT
    if raw_timeout is not None:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"{ENV_TIMEOUT} must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigError(f"{ENV_TIMEOUT} must be positive, got {raw_timeout!r}")

    log_level = (_lookup(ENV_LOG_LEVEL, environ, file_values) or Settings.log_level).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"{ENV_LOG_LEVEL} must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Settings(base_url=base_url, timeout=timeout, log_level=log_level)
