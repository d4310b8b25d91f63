from __future__ import annotations

"""
Markup Parsing and Rendering.

Adapts lxml to the generic tree shape used by the converter:
attributes are stored under '@_'-prefixed keys, inline text under '#text',
repeated sibling tags as lists, and elements without attributes or child
elements collapse to their text. Rendering performs the inverse mapping.

Named HTML entities (&nbsp;, &copy;, ...) are not declared in XML; they
are kept as literal text in the tree and written back unchanged.
"""

import re
from typing import List

from lxml import etree as ET

from htlm.core.processing.transformer import transform_document_tree
from htlm.domain.constants import ATTRIBUTE_PREFIX, TEXT_KEY
from htlm.domain.errors import MarkupSyntaxError
from htlm.domain.markup_models import (
    Node,
    NodeKind,
    NodeMapping,
    attribute_name,
    classify_node,
    insert_child_node,
    is_attribute_key,
    is_text_key,
)
from htlm.domain.pipeline_models import ConversionResult

# Private wrapper allowing documents with several top-level elements
_DOCUMENT_ROOT = "htlm-document"

_PROLOG_RX = re.compile(r"^\s*(<\?xml[^>]*\?>)?\s*(<!DOCTYPE[^>]*>)?", re.IGNORECASE)
_INDENT = "  "

# Named references other than the five predefined XML entities (&nbsp;, &copy;, ...)
_HTML_ENTITY_RX = re.compile(r"&(?!(?:amp|lt|gt|quot|apos);)([A-Za-z][A-Za-z0-9]*);")
_ESCAPED_ENTITY_RX = re.compile(r"&amp;(?!(?:amp|lt|gt|quot|apos);)([A-Za-z][A-Za-z0-9]*);")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def htlm_to_html(content: str) -> ConversionResult:
    """
    Full pipeline: HTLM content -> canonical tree -> HTML string.

    Args:
        content: The HTLM source text.

    Returns:
        ConversionResult: The rendered HTML and the canonical tree.
    """
    parsed = parse_htlm(content)
    transformed = transform_document_tree(parsed)
    return ConversionResult(html=build_html_from_tree(transformed), tree=transformed)


def parse_htlm(content: str) -> NodeMapping:
    """
    Parse raw HTLM text into a generic tree.

    Args:
        content: Markup text, possibly with several top-level elements.

    Returns:
        NodeMapping: Mapping of top-level tag names to their nodes.

    Raises:
        MarkupSyntaxError: If the text is not well-formed markup.
    """
    body = _HTML_ENTITY_RX.sub(r"&amp;\1;", _PROLOG_RX.sub("", content, count=1))
    parser = ET.XMLParser(resolve_entities=False, remove_comments=True, remove_pis=True)
    try:
        root = ET.fromstring(f"<{_DOCUMENT_ROOT}>{body}</{_DOCUMENT_ROOT}>", parser)
    except ET.XMLSyntaxError as e:
        raise MarkupSyntaxError(f"Invalid markup: {e}") from e

    tree: NodeMapping = {}
    for child in _child_elements(root):
        insert_child_node(tree, child.tag, _element_to_node(child))
    return tree


def build_html_from_tree(tree: Node) -> str:
    """
    Render a tree back into indented markup.

    Args:
        tree: Root mapping (or any node) to render.

    Returns:
        str: The rendered markup, one top-level element after another.
    """
    root = ET.Element(_DOCUMENT_ROOT)
    if classify_node(tree) is NodeKind.MAPPING:
        _fill_element(root, tree)

    parts: List[str] = []
    for child in root:
        ET.indent(child, space=_INDENT)
        parts.append(ET.tostring(child, encoding="unicode"))
    html = "\n".join(parts) + ("\n" if parts else "")
    return _ESCAPED_ENTITY_RX.sub(r"&\1;", html)

# -----------------------------------------------------------------------------
# PARSING HELPERS
# -----------------------------------------------------------------------------

def _child_elements(element: ET._Element) -> List[ET._Element]:
    """Element children only (comments and PIs are already removed)."""
    return [child for child in element if isinstance(child.tag, str)]


def _element_to_node(element: ET._Element) -> Node:
    children = _child_elements(element)
    text = _collect_text(element)

    if not element.attrib and not children:
        return text

    node: NodeMapping = {}
    for name, value in element.attrib.items():
        node[ATTRIBUTE_PREFIX + name] = value
    for child in children:
        insert_child_node(node, child.tag, _element_to_node(child))
    if text:
        node[TEXT_KEY] = text
    return node


def _collect_text(element: ET._Element) -> str:
    """Join the stripped text pieces directly owned by an element."""
    pieces = [element.text or ""]
    pieces.extend(child.tail or "" for child in element)
    return " ".join(p.strip() for p in pieces if p and p.strip())

# -----------------------------------------------------------------------------
# RENDERING HELPERS
# -----------------------------------------------------------------------------

def _fill_element(element: ET._Element, node: NodeMapping) -> None:
    texts: List[str] = []

    for key, value in node.items():
        if is_attribute_key(key):
            element.set(attribute_name(key), _stringify(value))
        elif is_text_key(key):
            pieces = value if isinstance(value, list) else [value]
            texts.extend(_stringify(p) for p in pieces if p is not None)
        elif classify_node(value) is NodeKind.SEQUENCE:
            for item in value:
                _append_element(element, key, item)
        else:
            _append_element(element, key, value)

    text = " ".join(t for t in texts if t)
    if text:
        element.text = text


def _append_element(parent: ET._Element, tag: str, value: Node) -> None:
    child = ET.SubElement(parent, tag)
    if classify_node(value) is NodeKind.MAPPING:
        _fill_element(child, value)
        if child.text is None and len(child) == 0:
            child.text = ""
    else:
        # Empty text keeps explicit start and end tags in the output
        child.text = _stringify(value)


def _stringify(value: Node) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
