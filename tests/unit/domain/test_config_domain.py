from __future__ import annotations

"""
Unit tests for the Configuration Domain.

Verifies default generation and loading of 'htlm.config.json',
including the camelCase key mapping and tolerance of broken files.
"""

import json
from pathlib import Path

from htlm.domain.config import get_default_config, load_config, read_config_file


def test_default_config_values() -> None:
    """TC-01: Defaults point at the CWD and ./dist."""
    cfg = get_default_config()
    assert cfg["src_dir"] == "."
    assert cfg["out_dir"] == "./dist"
    assert cfg["source_extension"] == ".htlm"
    assert cfg["output_extension"] == ".html"
    assert cfg["overwrite"] is True


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    """TC-02: A missing config file is not an error."""
    assert read_config_file(str(tmp_path / "absent.json")) == {}
    assert load_config(str(tmp_path / "absent.json")) == get_default_config()


def test_camel_case_keys_are_mapped(tmp_path: Path) -> None:
    """TC-03: srcDir/outDir map onto the pipeline keys."""
    path = tmp_path / "htlm.config.json"
    path.write_text(json.dumps({"srcDir": "pages", "outDir": "public"}), encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg["src_dir"] == "pages"
    assert cfg["out_dir"] == "public"
    assert "srcDir" not in cfg


def test_invalid_json_is_ignored(tmp_path: Path) -> None:
    """TC-04: Malformed JSON falls back to defaults."""
    path = tmp_path / "htlm.config.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


def test_non_object_json_is_ignored(tmp_path: Path) -> None:
    """TC-05: A JSON array is not a configuration."""
    path = tmp_path / "htlm.config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert read_config_file(str(path)) == {}
