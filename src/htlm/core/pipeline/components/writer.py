from __future__ import annotations

"""
Output Document Writing Component.

Persists rendered HTML documents, creating parent directories on demand.
"""

import os

from htlm.core.processing.markup import build_html_from_tree
from htlm.domain.module_models import QueuedDocument
from htlm.infra.fs import ensure_directory_exists


def write_document(target_path: str, html: str) -> None:
    """
    Write a rendered document, overwriting any previous version.

    Args:
        target_path: Absolute output path.
        html: Rendered markup.

    Raises:
        OSError: If filesystem write permissions are denied.
    """
    ensure_directory_exists(os.path.dirname(target_path))
    with open(target_path, "w", encoding="utf-8") as f:
        f.write(html)


def write_queued_document(document: QueuedDocument) -> None:
    """Render a queued document's (linked) tree and write it."""
    write_document(document.target_path, build_html_from_tree(document.content))
