from __future__ import annotations

"""
Source Document Reading Component.

Loads HTLM documents as text. Decoding is resilient: invalid UTF-8
sequences are replaced instead of aborting the document.
"""


def read_document(file_path: str) -> str:
    """
    Read a whole source document.

    Args:
        file_path: Absolute path to the document.

    Returns:
        str: Document text.

    Raises:
        OSError: If the file cannot be opened.
    """
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()
