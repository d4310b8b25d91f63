from __future__ import annotations

"""
Unit tests for tag name resolution.
"""

import pytest

from htlm.core.processing.tags import resolve_tag_name
from htlm.domain.errors import UnknownTagError
from htlm.domain.tokens import TokenEntry


@pytest.mark.parametrize("encoded", ["body", "bdoy", "yodb", "obdy", "BODY"])
def test_scrambled_variants_resolve_to_body(encoded: str) -> None:
    """TC-01: Any letter permutation decodes to the same tag."""
    assert resolve_tag_name(encoded) == "body"


def test_alternative_applies_under_parent() -> None:
    """TC-02: 'td' decodes to <dt> inside a <dl>, to <td> elsewhere."""
    assert resolve_tag_name("td", ["html", "body", "dl"]) == "dt"
    assert resolve_tag_name("dt", ["table", "tr"]) == "td"
    assert resolve_tag_name("dt") == "td"


def test_alternative_ignores_ancestor_order() -> None:
    """TC-03: The parent may be any ancestor, not only the direct one."""
    assert resolve_tag_name("rt", ["ruby", "span", "b"]) == "rt"
    assert resolve_tag_name("br", ["ruby"]) == "rb"
    assert resolve_tag_name("rb", ["div"]) == "br"


def test_unknown_tag_raises() -> None:
    """TC-04: Keys without an entry raise UnknownTagError."""
    with pytest.raises(UnknownTagError) as excinfo:
        resolve_tag_name("qqq")

    assert excinfo.value.tag_name == "qqq"
    assert "Unknown HTML tag <qqq>" in str(excinfo.value)


def test_custom_table() -> None:
    """TC-05: A custom table overrides the built-in one."""
    table = {"oo": TokenEntry(default="oo")}
    assert resolve_tag_name("oo", table=table) == "oo"
    with pytest.raises(UnknownTagError):
        resolve_tag_name("body", table=table)
