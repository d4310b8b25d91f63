from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper for the build pipeline, ensuring that the
configuration dictionary conforms to the expected schema. Handles type
coercion, extension normalization and default value injection.
"""

import logging
from typing import Any, Dict, List, Tuple

from htlm.domain.config import get_default_config

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("src_dir", "out_dir", "source_extension", "output_extension")
_BOOL_FIELDS = ("overwrite",)
_EXTENSION_FIELDS = ("source_extension", "output_extension")


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

    Converts untrusted inputs (config file, CLI) into strictly typed
    parameters and fills missing keys with domain defaults. Unknown keys
    are kept untouched.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
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

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in _EXTENSION_FIELDS:
        merged[field] = _normalize_extension(merged[field], field, warnings, strict)

    if merged["source_extension"].lower() == merged["output_extension"].lower():
        msg = "Source and output extensions must differ."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using defaults.")
        merged["source_extension"] = defaults["source_extension"]
        merged["output_extension"] = defaults["output_extension"]

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
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
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extension(ext: str, field: str, warnings: List[str], strict: bool) -> str:
    """Ensure a file extension is prefixed with a dot."""
    if ext.startswith("."):
        return ext
    if strict:
        raise ValueError(f"Invalid extension '{ext}' for '{field}': must start with '.'.")
    warnings.append(f"Extension '{ext}' corrected to '.{ext}'.")
    return "." + ext
