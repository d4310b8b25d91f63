from __future__ import annotations

"""
Markup Tree Domain Models.

Defines the generic document tree produced by the markup parser and the
predicates used to tell reserved keys (text and attributes) apart from
element keys. A node is one of four closed kinds: a primitive value,
null, a sequence of sibling elements sharing one tag name, or a mapping
from key to node.
"""

from enum import Enum
from typing import Any, Dict, List, Union

from htlm.domain.constants import ATTRIBUTE_PREFIX, TEXT_KEY

Primitive = Union[str, int, float, bool]
Node = Union[None, Primitive, List[Any], Dict[str, Any]]
NodeMapping = Dict[str, Node]


class NodeKind(Enum):
    """Closed set of generic node shapes."""
    PRIMITIVE = "primitive"
    NULL = "null"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def classify_node(node: Node) -> NodeKind:
    """
    Determine which kind of generic node a value is.

    Args:
        node: Any value taken from a parsed tree.

    Returns:
        NodeKind: The node's shape.

    Raises:
        TypeError: If the value is not a valid tree node.
    """
    if node is None:
        return NodeKind.NULL
    if isinstance(node, (str, int, float, bool)):
        return NodeKind.PRIMITIVE
    if isinstance(node, list):
        return NodeKind.SEQUENCE
    if isinstance(node, dict):
        return NodeKind.MAPPING
    raise TypeError(f"Unsupported tree node type: {type(node).__name__}")


def is_leaf(node: Node) -> bool:
    """True for primitives and null."""
    return classify_node(node) in (NodeKind.PRIMITIVE, NodeKind.NULL)


def is_text_key(key: str) -> bool:
    return key == TEXT_KEY


def is_attribute_key(key: str) -> bool:
    return key.startswith(ATTRIBUTE_PREFIX)


def is_text_or_attribute_key(key: str) -> bool:
    """
    Check whether a mapping key is reserved rather than an element name.

    Args:
        key: Mapping key from a tree node.

    Returns:
        bool: True for the text key or any attribute key.
    """
    return is_text_key(key) or is_attribute_key(key)


def attribute_name(key: str) -> str:
    """Strip the attribute prefix from a reserved attribute key."""
    return key[len(ATTRIBUTE_PREFIX):]


def insert_child_node(parent: NodeMapping, key: str, value: Node) -> None:
    """
    Insert a child under a key, merging with an existing value.

    An existing non-sequence value is promoted to a sequence so that the
    original value keeps its position before the new one. A sequence value
    contributes its items as siblings, never as a nested sequence.

    Args:
        parent: Mapping to mutate.
        key: Tag name (or reserved key) of the child.
        value: Child node (or a sequence of sibling nodes).
    """
    if key not in parent:
        parent[key] = list(value) if isinstance(value, list) else value
        return

    new_items = value if isinstance(value, list) else [value]
    existing = parent[key]
    if isinstance(existing, list):
        existing.extend(new_items)
    else:
        parent[key] = [existing, *new_items]
