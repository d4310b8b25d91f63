from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, the source-to-output file mapping and
directory creation helpers used by the build pipeline.
"""

import os
from typing import List, Optional

from htlm.domain.constants import OUTPUT_EXTENSION

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Relative paths are resolved against the CWD.
    Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def target_path_for(out_dir: str, rel_path: str, output_extension: str = OUTPUT_EXTENSION) -> str:
    """
    Map a source document to its output document.

    The folder structure is preserved and the extension substituted:
    'pages/index.htlm' -> '<out_dir>/pages/index.html'.

    Args:
        out_dir: Absolute output root.
        rel_path: Source path relative to the source root.
        output_extension: Extension of the output document.

    Returns:
        str: Absolute output path.
    """
    stem, _ = os.path.splitext(rel_path)
    return os.path.join(out_dir, stem + output_extension)

# -----------------------------------------------------------------------------
# FILESYSTEM OPERATIONS
# -----------------------------------------------------------------------------

def ensure_directory_exists(dir_path: str) -> None:
    """Create a directory (recursively) if it does not exist yet."""
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)


def check_existing_output_files(paths: List[str]) -> List[str]:
    """
    Identify output documents that already exist.

    Args:
        paths: Absolute output paths.

    Returns:
        List[str]: The subset of paths present on disk.
    """
    return [p for p in paths if os.path.exists(p)]
