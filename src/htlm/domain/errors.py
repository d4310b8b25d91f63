from __future__ import annotations

"""
Error Taxonomy.

Decoding errors (unknown tags, malformed markup) are fatal to the single
document being converted. Linking errors (unresolved imports, stale paths)
are raised internally by the module resolver and converted into
diagnostics so that the rest of the batch keeps going.
"""

from typing import Any, Dict, Mapping, Optional


class HtlmError(Exception):
    """Base exception for the HTLM converter."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context is not None else {}


class UnknownTagError(HtlmError, ValueError):
    """Raised when an encoded tag name has no entry in the token table."""

    def __init__(self, tag_name: str) -> None:
        super().__init__(f"Unknown HTML tag <{tag_name}>", context={"tag": tag_name})
        self.tag_name = tag_name


class MarkupSyntaxError(HtlmError, ValueError):
    """Raised when the source text cannot be parsed as markup."""


class UnresolvedImportError(HtlmError, LookupError):
    """Raised when no export matches an import's id (and src)."""


class UnresolvablePathError(HtlmError, LookupError):
    """Raised when the container addressed by a module path no longer exists."""
