"""Environment variable loading and validation."""

import os
from typing import Optional

from .duration import DurationParseError, parse_duration, validate_duration_range
from .exceptions import ConfigurationError

ENV_PREFIX = "LISTING_EXTRACTOR_"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_FORMATS = ["json", "key-value"]


class EnvironmentConfig:
    """Environment variable overrides. Unset variables are None."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
        fetch_timeout: Optional[str] = None,
        user_agent: Optional[str] = None,
    ):
        self.log_level = log_level
        self.log_format = log_format
        self.environment = environment
        self.fetch_timeout = fetch_timeout
        self.user_agent = user_agent

    def is_empty(self) -> bool:
        return not any(
            (self.log_level, self.log_format, self.environment, self.fetch_timeout, self.user_agent)
        )


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate ``LISTING_EXTRACTOR_*`` environment variables.

    All variables are optional:
    - LISTING_EXTRACTOR_LOG_LEVEL
    - LISTING_EXTRACTOR_LOG_FORMAT
    - LISTING_EXTRACTOR_ENVIRONMENT
    - LISTING_EXTRACTOR_FETCH_TIMEOUT
    - LISTING_EXTRACTOR_USER_AGENT

    Returns:
        EnvironmentConfig with the values found

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    log_level = _getenv("LOG_LEVEL")
    log_format = _getenv("LOG_FORMAT")
    environment = _getenv("ENVIRONMENT")
    fetch_timeout = _getenv("FETCH_TIMEOUT")
    user_agent = _getenv("USER_AGENT")

    if log_level:
        log_level = log_level.upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid {ENV_PREFIX}LOG_LEVEL: '{log_level}'. "
                f"Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    if log_format:
        log_format = log_format.lower()
        if log_format not in VALID_LOG_FORMATS:
            errors.append(
                f"Invalid {ENV_PREFIX}LOG_FORMAT: '{log_format}'. "
                f"Must be one of: {', '.join(VALID_LOG_FORMATS)}"
            )

    if fetch_timeout:
        try:
            validate_duration_range(parse_duration(fetch_timeout))
        except DurationParseError as e:
            errors.append(f"Invalid {ENV_PREFIX}FETCH_TIMEOUT: {e}")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the LISTING_EXTRACTOR_* variables in your shell or .env file",
                "Use durations like '20s' or 'PT20S' for LISTING_EXTRACTOR_FETCH_TIMEOUT",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level,
        log_format=log_format,
        environment=environment,
        fetch_timeout=fetch_timeout,
        user_agent=user_agent,
    )


def _getenv(name: str) -> Optional[str]:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    if value is None or not value.strip():
        return None
    return value.strip()
