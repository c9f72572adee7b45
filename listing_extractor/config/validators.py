"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

from .duration import DurationParseError, parse_duration


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check a raw configuration mapping for settings that are valid but risky.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    fetch = config_dict.get("fetch", {})
    if isinstance(fetch, dict):
        timeout = fetch.get("timeout")
        if timeout is not None:
            try:
                if parse_duration(timeout) < 5:
                    warning_messages.append(
                        f"Short fetch timeout ({timeout}) will cut off slow listing pages"
                    )
            except (DurationParseError, TypeError, AttributeError):
                # Reported as a validation error by the model
                pass

        user_agent = fetch.get("user_agent")
        if isinstance(user_agent, str) and user_agent.strip() and "Mozilla" not in user_agent:
            warning_messages.append(
                "Custom user_agent does not look like a browser; some sources serve "
                "degraded or challenge pages to unrecognized clients"
            )

        accept_language = fetch.get("accept_language")
        if isinstance(accept_language, str) and "ja" not in accept_language.lower():
            warning_messages.append(
                f"accept_language ({accept_language}) does not include Japanese; "
                "listing labels may be served in another language"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
