"""Configuration management module for the listing extractor."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import apply_environment_overrides, load_config
from .models import (
    DEFAULT_ACCEPT,
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_USER_AGENT,
    ExtractionConfig,
    ExtractorConfig,
    FetchConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_environment_config",
    "apply_environment_overrides",
    # Configuration models
    "ExtractorConfig",
    "FetchConfig",
    "ExtractionConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums and defaults
    "LogLevel",
    "LogFormat",
    "DEFAULT_USER_AGENT",
    "DEFAULT_ACCEPT_LANGUAGE",
    "DEFAULT_ACCEPT",
    # Exceptions
    "ConfigurationError",
]
