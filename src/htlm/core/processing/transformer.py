from __future__ import annotations

"""
Document Tree Transformer.

Rewrites every element key of a parsed HTLM tree into its canonical tag
name while preserving the shape of the tree (mappings, sequences and
primitive values) and leaving text and attribute keys untouched.
"""

from typing import Dict, List

from htlm.core.processing.tags import resolve_tag_name
from htlm.domain.markup_models import (
    Node,
    NodeKind,
    NodeMapping,
    classify_node,
    is_leaf,
    is_text_or_attribute_key,
)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def transform_document_tree(tree: NodeMapping) -> NodeMapping:
    """
    Transform a whole parsed document.

    Each top-level element is transformed independently and the results are
    merged into one mapping. Reserved keys at the root are kept verbatim.

    Args:
        tree: Root mapping produced by the markup parser.

    Returns:
        NodeMapping: A new tree whose element keys are canonical tag names.

    Raises:
        UnknownTagError: If any tag cannot be decoded. No partial tree is returned.
    """
    transformed_root: NodeMapping = {}

    for root_key, root_node in tree.items():
        if is_text_or_attribute_key(root_key):
            transformed_root[root_key] = root_node
        else:
            transformed_root.update(transform_node(root_key, root_node, []))

    return transformed_root


def transform_node(key: str, node: Node, parents: List[str]) -> NodeMapping:
    """
    Transform a single keyed node into a one-entry mapping.

    Args:
        key: Encoded tag name of the node.
        node: The node value.
        parents: Canonical names of the enclosing elements.

    Returns:
        NodeMapping: {canonical_name: transformed_value}.
    """
    tag_name = resolve_tag_name(key, parents)
    return {tag_name: _transform_value(tag_name, node, parents)}

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _transform_value(tag_name: str, node: Node, parents: List[str]) -> Node:
    """Transform the value held under an already-resolved tag name."""
    chain = [*parents, tag_name]
    kind = classify_node(node)

    if kind in (NodeKind.PRIMITIVE, NodeKind.NULL):
        return node

    if kind is NodeKind.SEQUENCE:
        # Siblings share one encoded key, so they share the resolved name
        return [item if is_leaf(item) else _transform_value(tag_name, item, parents) for item in node]

    return _transform_children(node, chain)


def _transform_children(node: Dict[str, Node], chain: List[str]) -> NodeMapping:
    children: NodeMapping = {}

    for child_key, child_value in node.items():
        if is_text_or_attribute_key(child_key):
            children[child_key] = child_value
            continue

        child_name = resolve_tag_name(child_key, chain)
        children[child_name] = _transform_value(child_name, child_value, chain)

    return children
