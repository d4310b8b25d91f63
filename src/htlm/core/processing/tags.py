from __future__ import annotations

"""
Tag Name Resolution.

Decodes letter-scrambled tag names into canonical HTML tag names using the
token table. Ambiguous keys are settled by the canonical names of the
enclosing elements.
"""

from typing import Iterable, Mapping, Optional

from htlm.domain.errors import UnknownTagError
from htlm.domain.tokens import TOKEN_TABLE, TokenEntry, sorted_letters


def resolve_tag_name(
        encoded_name: str,
        ancestors: Iterable[str] = (),
        table: Optional[Mapping[str, TokenEntry]] = None,
) -> str:
    """
    Resolve an encoded tag name to its canonical name.

    Only membership of the alternative's parent in the ancestor chain
    matters; the order of the chain is irrelevant.

    Args:
        encoded_name: Tag name as written in the source document.
        ancestors: Canonical names of the enclosing elements.
        table: Token table override (defaults to the built-in table).

    Returns:
        str: The canonical tag name.

    Raises:
        UnknownTagError: If the sorted-letter key has no table entry.
    """
    token = (TOKEN_TABLE if table is None else table).get(sorted_letters(encoded_name))
    if token is None:
        raise UnknownTagError(encoded_name)

    if token.alternative is not None and token.alternative.parent in ancestors:
        return token.alternative.value

    return token.default
