from __future__ import annotations

"""
Source Document Discovery Service.

Walks the source directory and yields every HTLM document, relative to the
source root, in a stable (sorted) order.
"""

import logging
import os
from typing import Iterable, List

from htlm.domain.constants import SOURCE_EXTENSION

logger = logging.getLogger(__name__)


def yield_source_files(src_dir: str, source_extension: str = SOURCE_EXTENSION) -> Iterable[str]:
    """
    Traverse the source directory and yield HTLM documents.

    Extension matching is case-insensitive. Directories and files are
    visited in sorted order so that batches are deterministic.

    Args:
        src_dir: Source root directory.
        source_extension: Extension of source documents.

    Yields:
        str: Path of each document relative to src_dir.

    Raises:
        FileNotFoundError: If the source directory does not exist.
    """
    root_dir = os.path.abspath(src_dir)
    if not os.path.isdir(root_dir):
        raise FileNotFoundError(f"Source directory does not exist: {root_dir}")

    suffix = source_extension.lower()

    for root, dirs, files in os.walk(root_dir):
        dirs.sort()
        files.sort()

        for file_name in files:
            if not file_name.lower().endswith(suffix):
                continue
            yield os.path.relpath(os.path.join(root, file_name), root_dir)


def list_source_files(src_dir: str, source_extension: str = SOURCE_EXTENSION) -> List[str]:
    """Materialized variant of yield_source_files."""
    files = list(yield_source_files(src_dir, source_extension))
    logger.debug(f"Discovered {len(files)} source documents in {src_dir}")
    return files
