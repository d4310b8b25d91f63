from __future__ import annotations

"""
Unit tests for configuration validation.

Verifies type coercion, extension normalization and fallback behaviour in
both lenient and strict modes.
"""

from typing import Any, Dict

import pytest

from htlm.core.pipeline.stages.validator import validate_config


def test_valid_config_passes_through(mock_config_dict: Dict[str, Any]) -> None:
    """TC-01: A complete config is returned without warnings."""
    cfg, warnings = validate_config(mock_config_dict)
    assert cfg == mock_config_dict
    assert warnings == []


def test_non_dict_falls_back_to_defaults() -> None:
    """TC-02: Garbage input yields defaults and a warning."""
    cfg, warnings = validate_config(["not", "a", "dict"])
    assert cfg["out_dir"] == "./dist"
    assert len(warnings) == 1


def test_non_dict_strict_raises() -> None:
    with pytest.raises(TypeError):
        validate_config(None, strict=True)


def test_missing_keys_are_filled() -> None:
    """TC-03: Partial configs inherit defaults."""
    cfg, _ = validate_config({"src_dir": "pages"})
    assert cfg["src_dir"] == "pages"
    assert cfg["out_dir"] == "./dist"
    assert cfg["overwrite"] is True


def test_bool_coercion() -> None:
    """TC-04: String booleans are coerced with a warning."""
    cfg, warnings = validate_config({"overwrite": "no"})
    assert cfg["overwrite"] is False
    assert any("overwrite" in w for w in warnings)


def test_invalid_types_use_fallback() -> None:
    """TC-05: Wrong types are replaced by defaults in lenient mode."""
    cfg, warnings = validate_config({"out_dir": 42, "overwrite": [1]})
    assert cfg["out_dir"] == "./dist"
    assert cfg["overwrite"] is True
    assert len(warnings) == 2


def test_invalid_types_strict_raise() -> None:
    with pytest.raises(TypeError):
        validate_config({"out_dir": 42}, strict=True)


def test_extension_gets_dot_prefix() -> None:
    """TC-06: Extensions without a leading dot are corrected."""
    cfg, warnings = validate_config({"output_extension": "htm"})
    assert cfg["output_extension"] == ".htm"
    assert warnings


def test_equal_extensions_are_rejected() -> None:
    """TC-07: Source and output extensions must differ."""
    cfg, warnings = validate_config({"source_extension": ".html", "output_extension": ".HTML"})
    assert cfg["source_extension"] == ".htlm"
    assert cfg["output_extension"] == ".html"
    assert warnings

    with pytest.raises(ValueError):
        validate_config({"source_extension": ".x", "output_extension": ".x"}, strict=True)
