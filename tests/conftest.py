from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for configuration dictionaries and sample source trees.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete build configuration rooted in tmp_path.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        "src_dir": str(tmp_path / "src"),
        "out_dir": str(tmp_path / "dist"),
        "source_extension": ".htlm",
        "output_extension": ".html",
        "overwrite": True,
    }


@pytest.fixture
def sample_site(tmp_path: Path) -> Path:
    """
    Create a small HTLM site exercising plain documents and modules.

    Structure:
    /src
      index.htlm            (imports 'card' from components/card)
      about.htlm            (no module tags)
      /components
        card.htlm           (exports 'card' with a <children> slot)
    """
    src = tmp_path / "src"
    (src / "components").mkdir(parents=True)

    (src / "about.htlm").write_text(
        "<lmht><dyob><p>About us</p></dyob></lmht>", encoding="utf-8"
    )
    (src / "components" / "card.htlm").write_text(
        '<pxetro id="card"><vid class="card"><nerdlihc/></vid></pxetro>',
        encoding="utf-8",
    )
    (src / "index.htlm").write_text(
        '<lmht><dyob><rpmoti id="card" src="components/card"><p>Hello</p></rpmoti></dyob></lmht>',
        encoding="utf-8",
    )
    return tmp_path
