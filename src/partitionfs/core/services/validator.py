from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration dictionaries (defaults, JSON files,
caller overrides) and the session. Coerces types, rejects values the
partition cannot be built from, and fills missing keys with defaults.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from partitionfs.domain.config import get_default_config
from partitionfs.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a session configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions instead of coercing or falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.

    Raises:
        TypeError: In strict mode, on a type mismatch.
        ValueError: In strict mode, on an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    # 2. Field Processing & Normalization
    merged["root_name"] = _as_str(
        merged.get("root_name"), defaults["root_name"], "root_name", warnings, strict
    )
    merged["capacity"] = _as_non_negative_int(
        merged.get("capacity"), defaults["capacity"], "capacity", warnings, strict
    )
    merged["indent_width"] = _as_non_negative_int(
        merged.get("indent_width"), defaults["indent_width"], "indent_width", warnings, strict
    )
    merged["log_level"] = _as_log_level(
        merged.get("log_level"), defaults["log_level"], warnings, strict
    )
    merged["log_file"] = _as_optional_str(merged.get("log_file"), "log_file", warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate a required, non-empty string."""
    if isinstance(value, str) and value.strip():
        return value.strip()

    if isinstance(value, str) or value is None:
        msg = f"Invalid field '{field}': must not be empty."
        if strict:
            raise ValueError(msg)
    else:
        msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_optional_str(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[str]:
    """Accept a string or None; blank strings collapse to None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Ignored.")
    return None


def _as_non_negative_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce numeric input into a non-negative integer byte/width count."""
    if isinstance(value, bool):
        msg = f"Invalid field '{field}': expected int, received bool."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if isinstance(value, int):
        if value >= 0:
            return value
        msg = f"Invalid field '{field}': {value} is negative."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if not strict:
        # Support numeric strings coming from JSON or environment sources
        if isinstance(value, str) and value.strip().isdigit():
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
            return int(value.strip())
        if isinstance(value, float) and value.is_integer() and value >= 0:
            warnings.append(f"Field '{field}' converted from float {value} to int.")
            return int(value)

    msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_log_level(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    """Normalize a logging level name."""
    if isinstance(value, str) and value.strip().upper() in _LEVEL_MAP:
        return value.strip().upper()

    msg = f"Invalid field 'log_level': unknown level {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
