# doors/config.py
import logging
import os
from dataclasses import dataclass
from enum import StrEnum

from rich.console import Console
from rich.logging import RichHandler

from doors.exceptions import ConfigurationError

ENV_VAR_PREFIX = "DOORS_"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_PATH_SEPARATOR = "/"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GateFileFormat(StrEnum):
    """Supported gate definition file formats"""
    YAML = "yaml"
    JSON = "json"
    AUTO = "auto"  # Detect from file extension


@dataclass(frozen=True)
class DoorsConfig:
    """Configuration for the Doors CLI and loader"""

    log_level: str = DEFAULT_LOG_LEVEL
    path_separator: str = DEFAULT_PATH_SEPARATOR
    default_format: GateFileFormat = GateFileFormat.AUTO

    def __post_init__(self):
        """Validate configuration after initialization"""
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level '{self.log_level}'. Expected one of: {', '.join(LOG_LEVELS)}",
                config_key="log_level",
            )
        if not self.path_separator:
            raise ConfigurationError(
                "Path separator cannot be empty", config_key="path_separator"
            )

    @classmethod
    def from_env(cls, env_prefix: str = ENV_VAR_PREFIX) -> "DoorsConfig":
        """Create configuration from environment variables"""
        log_level = os.environ.get(f"{env_prefix}LOG_LEVEL", DEFAULT_LOG_LEVEL)
        path_separator = os.environ.get(
            f"{env_prefix}PATH_SEPARATOR", DEFAULT_PATH_SEPARATOR
        )

        format_str = os.environ.get(f"{env_prefix}DEFAULT_FORMAT", GateFileFormat.AUTO.value)
        try:
            default_format = GateFileFormat(format_str.lower())
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid default format '{format_str}'",
                config_key="default_format",
            ) from e

        return cls(
            log_level=log_level,
            path_separator=path_separator,
            default_format=default_format,
        )


def configure_logging(config: DoorsConfig) -> logging.Logger:
    """Attach a rich handler to the ``doors`` logger at the configured level."""
    logger = logging.getLogger("doors")
    logger.setLevel(config.log_level.upper())
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        )
    return logger
