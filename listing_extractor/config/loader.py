"""Configuration loader for the listing extractor."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import ExtractorConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_LOCATIONS = (
    Path("listing_extractor.yaml"),
    Path("config") / "listing_extractor.yaml",
)


def load_config(config_path: Optional[Path] = None) -> ExtractorConfig:
    """
    Load configuration from an optional YAML file and environment variables.

    Lookup order for the file:
    1. ``config_path`` if given (must exist)
    2. ``listing_extractor.yaml`` in the current directory
    3. ``config/listing_extractor.yaml``
    4. Built-in defaults when no file exists

    ``LISTING_EXTRACTOR_*`` environment variables override file values.

    Args:
        config_path: Optional path to a configuration file

    Returns:
        Validated ExtractorConfig

    Raises:
        ConfigurationError: If the file is unreadable or invalid
    """
    config_file = _find_config_file(config_path)
    config_dict: Dict[str, Any] = _read_yaml(config_file) if config_file else {}

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        env_config = load_environment_config()
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load environment configuration: {e}",
            suggestions=["Check the LISTING_EXTRACTOR_* environment variables"],
        ) from e

    return _validate(apply_environment_overrides(config_dict, env_config))


def apply_environment_overrides(
    config_dict: Dict[str, Any], env_config: EnvironmentConfig
) -> Dict[str, Any]:
    """Return a copy of ``config_dict`` with environment values layered on top."""
    merged = {key: dict(value) if isinstance(value, dict) else value for key, value in config_dict.items()}

    def section(name: str) -> Dict[str, Any]:
        current = merged.get(name)
        if not isinstance(current, dict):
            current = {}
            merged[name] = current
        return current

    if env_config.log_level:
        section("logging")["level"] = env_config.log_level
    if env_config.log_format:
        section("logging")["format"] = env_config.log_format
    if env_config.environment:
        section("logging")["environment"] = env_config.environment
    if env_config.fetch_timeout:
        section("fetch")["timeout"] = env_config.fetch_timeout
    if env_config.user_agent:
        section("fetch")["user_agent"] = env_config.user_agent

    return merged


def _read_yaml(config_file: Path) -> Dict[str, Any]:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Configuration file not found: {config_file}",
            suggestions=[
                "Copy config.example.yaml to listing_extractor.yaml",
                f"Ensure {config_file} exists and is readable",
            ],
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[f"Ensure {config_file} is readable", "Check file permissions"],
        ) from e

    if config_dict is None:
        return {}

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping at the top level",
            suggestions=["Review config.example.yaml for the expected layout"],
        )

    return config_dict


def _validate(config_dict: Dict[str, Any]) -> ExtractorConfig:
    try:
        return ExtractorConfig.model_validate(config_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            if error["type"] == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif "enum" in error["type"]:
                errors.append(f"Invalid value for '{field_path}': {error['msg']}")
            else:
                errors.append(f"{field_path}: {error['msg']}")

        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Review config.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
        ) from e


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find the configuration file, or None when running on defaults.

    Raises:
        ConfigurationError: If an explicit path was given and does not exist
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Omit --config to run with built-in defaults",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate

    return None
