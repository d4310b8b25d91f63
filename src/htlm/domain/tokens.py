from __future__ import annotations

"""
Token Table.

Maps the sorted-letter key of a tag name to its canonical HTML tag name.
Because anagrams collapse onto one key, a few entries carry an alternative
canonical name that applies when a given ancestor tag is present
(e.g. 'dt' decodes to <td> in general but to <dt> inside a <dl>).

The table is built once at import time and exposed read-only.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple


# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Alternative:
    """
    Contextual replacement for a token's default canonical name.

    Attributes:
        parent: Canonical ancestor tag that activates the alternative.
        value: Canonical tag name returned when the ancestor is present.
    """
    parent: str
    value: str


@dataclass(frozen=True)
class TokenEntry:
    """
    A single token table entry.

    Attributes:
        default: Canonical tag name used when no alternative applies.
        alternative: Optional ancestor-dependent replacement.
    """
    default: str
    alternative: Optional[Alternative] = None


def sorted_letters(name: str) -> str:
    """
    Normalize a tag name into its sorted-letter key (case-insensitive).

    Args:
        name: Encoded or canonical tag name.

    Returns:
        str: Lower-cased characters of the name in alphabetical order.
    """
    return "".join(sorted(name.lower()))


# -----------------------------------------------------------------------------
# CANONICAL TAG NAMES
# -----------------------------------------------------------------------------

_STANDARD_TAGS: Tuple[str, ...] = (
    "a", "abbr", "address", "area", "article", "aside", "audio",
    "b", "base", "bdi", "bdo", "blockquote", "body", "button",
    "canvas", "caption", "cite", "code", "col", "colgroup",
    "data", "datalist", "dd", "del", "details", "dfn", "dialog", "div", "dl",
    "em", "embed",
    "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "head", "header", "hgroup", "hr", "html",
    "i", "iframe", "img", "input", "ins",
    "kbd",
    "label", "legend", "li", "link",
    "main", "map", "mark", "math", "meta", "meter",
    "nav", "noscript",
    "object", "ol", "optgroup", "option", "output",
    "p", "param", "picture", "pre", "progress",
    "q",
    "rp", "ruby",
    "s", "samp", "script", "search", "section", "select", "slot", "small",
    "source", "span", "strong", "style", "sub", "summary", "sup", "svg",
    "table", "tbody", "template", "textarea", "tfoot", "th", "thead", "time",
    "title", "track",
    "u", "ul",
    "var", "video",
    "wbr",
)

_DEPRECATED_TAGS: Tuple[str, ...] = (
    "acronym", "applet", "basefont", "bgsound", "big", "blink", "center",
    "content", "decorator", "dir", "element", "font", "frame", "frameset",
    "isindex", "keygen", "listing", "marquee", "menu", "menuitem", "nobr",
    "noframes", "plaintext", "portal", "rtc", "shadow", "spacer", "strike",
    "tt", "xmp",
)

_MODULE_TAGS: Tuple[str, ...] = ("import", "export", "children")

# Tags sharing a sorted-letter key: the default wins unless the ancestor is present.
_CONTEXTUAL_TAGS: Tuple[TokenEntry, ...] = (
    TokenEntry(default="br", alternative=Alternative(parent="ruby", value="rb")),
    TokenEntry(default="td", alternative=Alternative(parent="dl", value="dt")),
    TokenEntry(default="tr", alternative=Alternative(parent="ruby", value="rt")),
)


def _build_token_table() -> Mapping[str, TokenEntry]:
    """Index every entry by the sorted-letter key of its default name."""
    entries = [TokenEntry(default=name) for name in _STANDARD_TAGS + _DEPRECATED_TAGS + _MODULE_TAGS]
    entries.extend(_CONTEXTUAL_TAGS)

    table: Dict[str, TokenEntry] = {}
    for entry in entries:
        key = sorted_letters(entry.default)
        if key in table:
            raise ValueError(
                f"Token key collision '{key}': <{table[key].default}> and <{entry.default}>"
            )
        table[key] = entry
    return MappingProxyType(table)


TOKEN_TABLE: Mapping[str, TokenEntry] = _build_token_table()
