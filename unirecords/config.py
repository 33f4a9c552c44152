"""Configuration and logging setup.

Configuration is resolved from built-in defaults, then ``UNIRECORDS_*``
environment variables, then explicit overrides.

Usage:
    from unirecords.config import load_config, configure_logging

    config = load_config({"log_level": "DEBUG"})
    configure_logging(config)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping

import structlog

from .core.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

ENV_PREFIX = "UNIRECORDS_"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_FORMATS = ("console", "json")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class RecordsConfig:
    """Runtime options for a records manager."""

    thread_safe: bool = True
    log_level: str = "INFO"
    log_format: str = "console"

    def __post_init__(self) -> None:
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {self.log_level}",
                error_code="INVALID_CONFIG",
                details={"log_level": self.log_level},
            )
        self.log_format = str(self.log_format).lower()
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log format: {self.log_format}",
                error_code="INVALID_CONFIG",
                details={"log_format": self.log_format},
            )
        if not isinstance(self.thread_safe, bool):
            raise ConfigurationError(
                "thread_safe must be a boolean",
                error_code="INVALID_CONFIG",
                details={"thread_safe": self.thread_safe},
            )


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "thread_safe": True,
        "log_level": "INFO",
        "log_format": "console",
    }


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Invalid boolean for {name}: {raw!r}",
        error_code="INVALID_CONFIG",
        details={name: raw},
    )


def _from_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    """Read configuration values from UNIRECORDS_* variables."""
    values: dict[str, Any] = {}

    thread_safe = environ.get(f"{ENV_PREFIX}THREAD_SAFE")
    if thread_safe is not None:
        values["thread_safe"] = _parse_bool("thread_safe", thread_safe)

    log_level = environ.get(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level

    log_format = environ.get(f"{ENV_PREFIX}LOG_FORMAT")
    if log_format:
        values["log_format"] = log_format

    return values


def load_config(
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> RecordsConfig:
    """Build a RecordsConfig from defaults, environment and overrides.

    Args:
        overrides: Explicit values that win over everything else.
        environ: Environment mapping; defaults to ``os.environ``.

    Raises:
        ConfigurationError: On unknown keys or invalid values.
    """
    data = _get_defaults()
    data.update(_from_environ(os.environ if environ is None else environ))

    if overrides:
        unknown = set(overrides) - set(data)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                error_code="INVALID_CONFIG",
                details={"unknown": sorted(unknown)},
            )
        data.update(overrides)

    config = RecordsConfig(**data)
    logger.debug("loaded_config", **data)
    return config


def configure_logging(config: RecordsConfig | None = None) -> None:
    """Configure structlog processors and level filtering."""
    config = config or RecordsConfig()

    if config.log_format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVELS[config.log_level]),
        cache_logger_on_first_use=False,
    )
