"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .duration import DurationParseError, parse_duration, validate_duration_range

# Some listing sites serve degraded markup to clients that do not look like a browser
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE = "ja,en-US;q=0.9,en;q=0.8"
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class FetchConfig(BaseModel):
    """HTTP retrieval settings for the page fetcher."""

    timeout: Union[float, str] = Field(
        "20s", description="Wall-clock limit for a whole document fetch (e.g. 20s, PT20S, 15)"
    )
    user_agent: str = Field(
        DEFAULT_USER_AGENT, min_length=1, description="User-Agent header for page requests"
    )
    accept_language: str = Field(
        DEFAULT_ACCEPT_LANGUAGE, min_length=1, description="Accept-Language header"
    )
    max_response_bytes: int = Field(
        10 * 1024 * 1024, ge=1024, description="Largest document body accepted"
    )

    # Computed field
    timeout_seconds: Optional[float] = None

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: Union[float, str]) -> Union[float, str]:
        """Validate that the timeout parses and lies within 1s..120s."""
        try:
            validate_duration_range(parse_duration(v))
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("user_agent", "accept_language")
    @classmethod
    def strip_header_value(cls, v: str) -> str:
        """Strip whitespace from header values."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Header value cannot be empty or whitespace-only")
        return stripped

    @model_validator(mode="after")
    def compute_timeout_seconds(self):
        """Compute timeout_seconds from the validated timeout."""
        self.timeout_seconds = parse_duration(self.timeout)
        return self


class ExtractionConfig(BaseModel):
    """Settings that affect how extracted values are normalized."""

    as_of_year: Optional[int] = Field(
        None,
        ge=1900,
        le=2200,
        description="Calendar year used to convert '築N年' ages (defaults to the current year)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )
    environment: str = Field("local", min_length=1, description="Environment label")

    model_config = {"use_enum_values": True}


class ExtractorConfig(BaseModel):
    """Root configuration object for the listing extractor."""

    fetch: FetchConfig = Field(default_factory=FetchConfig, description="Fetcher settings")
    extraction: ExtractionConfig = Field(
        default_factory=ExtractionConfig, description="Normalization settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
