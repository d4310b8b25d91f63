from __future__ import annotations

"""
Unit tests for the generic tree helpers.
"""

import pytest

from htlm.domain.markup_models import (
    NodeKind,
    attribute_name,
    classify_node,
    insert_child_node,
    is_leaf,
    is_text_or_attribute_key,
)


@pytest.mark.parametrize(
    "node,kind",
    [
        ("text", NodeKind.PRIMITIVE),
        (3, NodeKind.PRIMITIVE),
        (True, NodeKind.PRIMITIVE),
        (None, NodeKind.NULL),
        ([], NodeKind.SEQUENCE),
        ({}, NodeKind.MAPPING),
    ],
)
def test_classify_node(node, kind: NodeKind) -> None:
    assert classify_node(node) is kind


def test_classify_node_rejects_foreign_types() -> None:
    with pytest.raises(TypeError):
        classify_node(object())  # type: ignore[arg-type]


def test_is_leaf() -> None:
    assert is_leaf("x") and is_leaf(None)
    assert not is_leaf({"a": "b"})


def test_reserved_keys() -> None:
    assert is_text_or_attribute_key("#text")
    assert is_text_or_attribute_key("@_id")
    assert not is_text_or_attribute_key("div")
    assert attribute_name("@_class") == "class"


def test_insert_child_node_promotes_to_list() -> None:
    """Repeated keys become a list, keeping the original value first."""
    parent = {}
    insert_child_node(parent, "p", "one")
    assert parent == {"p": "one"}

    insert_child_node(parent, "p", "two")
    assert parent == {"p": ["one", "two"]}

    insert_child_node(parent, "p", "three")
    assert parent == {"p": ["one", "two", "three"]}


def test_insert_child_node_merges_sequences_flat() -> None:
    """A sequence value adds siblings instead of a nested list."""
    parent = {"div": "X"}
    insert_child_node(parent, "div", ["1", "2"])
    assert parent == {"div": ["X", "1", "2"]}

    insert_child_node(parent, "div", ["3"])
    assert parent == {"div": ["X", "1", "2", "3"]}


def test_insert_child_node_new_key_copies_sequence() -> None:
    """A new key gets its own list object."""
    items = ["a", "b"]
    parent = {}
    insert_child_node(parent, "li", items)
    parent["li"].append("c")

    assert items == ["a", "b"]
