from __future__ import annotations

"""
Configuration Validation Service.

Ensures that configuration dictionaries coming from disk, the CLI or the GUI
conform to the expected schema. Handles type coercion and default value
injection so that scans always run with well-typed parameters.
"""

import logging
from typing import Any, Dict, List, Tuple

from dirstat.domain.config import get_default_config
from dirstat.infra.logging.config import _LEVEL_MAP

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
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    merged["input_path"] = _as_str(merged.get("input_path"), defaults["input_path"], "input_path", warnings, strict)
    merged["follow_symlinks"] = _as_bool(
        merged.get("follow_symlinks"), defaults["follow_symlinks"], "follow_symlinks", warnings, strict
    )
    merged["max_workers"] = _as_int(merged.get("max_workers"), defaults["max_workers"], "max_workers", warnings, strict)
    merged["top_n"] = _as_int(merged.get("top_n"), defaults["top_n"], "top_n", warnings, strict)
    merged["extent"] = _as_positive_float(merged.get("extent"), defaults["extent"], "extent", warnings, strict)
    merged["log_level"] = _as_level(merged.get("log_level"), defaults["log_level"], warnings, strict)

    return merged, warnings


def workers_or_none(config: Dict[str, Any]) -> Any:
    """Translate the persisted worker count into an executor argument."""
    workers = config.get("max_workers") or 0
    return workers if workers > 0 else None


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _fail(msg: str, warnings: List[str], strict: bool, exc: type = TypeError) -> None:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    _fail(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    _fail(f"Invalid field '{field}': expected bool, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce non-negative integers, accepting numeric strings in lenient mode."""
    if value is None:
        return fallback
    if isinstance(value, bool):
        _fail(f"Invalid field '{field}': expected int, received bool.", warnings, strict)
        return fallback

    if isinstance(value, str) and not strict:
        try:
            value = int(value.strip())
            warnings.append(f"Field '{field}' converted from string to int.")
        except ValueError:
            _fail(f"Invalid field '{field}': '{value}' is not an integer.", warnings, strict)
            return fallback

    if not isinstance(value, int):
        _fail(f"Invalid field '{field}': expected int, received {type(value).__name__}.", warnings, strict)
        return fallback

    if value < 0:
        _fail(f"Invalid field '{field}': must be >= 0, received {value}.", warnings, strict, ValueError)
        return fallback
    return value


def _as_positive_float(value: Any, fallback: float, field: str, warnings: List[str], strict: bool) -> float:
    """Coerce strictly positive floats."""
    if value is None:
        return fallback
    if isinstance(value, bool):
        _fail(f"Invalid field '{field}': expected number, received bool.", warnings, strict)
        return fallback

    if isinstance(value, str) and not strict:
        try:
            value = float(value.strip())
            warnings.append(f"Field '{field}' converted from string to float.")
        except ValueError:
            _fail(f"Invalid field '{field}': '{value}' is not a number.", warnings, strict)
            return fallback

    if not isinstance(value, (int, float)):
        _fail(f"Invalid field '{field}': expected number, received {type(value).__name__}.", warnings, strict)
        return fallback

    if value <= 0:
        _fail(f"Invalid field '{field}': must be > 0, received {value}.", warnings, strict, ValueError)
        return fallback
    return float(value)


def _as_level(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    """Accept only logging level names known to the logging subsystem."""
    if value is None:
        return fallback
    if isinstance(value, str) and value.strip().upper() in _LEVEL_MAP:
        return value.strip().upper()

    _fail(f"Invalid field 'log_level': unknown level {value!r}.", warnings, strict, ValueError)
    return fallback
