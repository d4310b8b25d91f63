from __future__ import annotations

"""
Module Tag Collection.

Walks a canonical document tree and records every <import> and <export>
node together with the path that locates it, so that the module resolver
can later splice replacement content at the same place.
"""

from typing import List

from htlm.domain.constants import EXPORT_TAG, IMPORT_TAG
from htlm.domain.markup_models import Node, NodeKind, classify_node, is_text_or_attribute_key
from htlm.domain.module_models import ModuleData, ModuleTag


def collect_module_tags(tree: Node) -> ModuleData:
    """
    Collect <import> and <export> nodes from a canonical tree.

    Traversal is depth-first and continues into recorded nodes, so module
    tags nested inside other module tags are collected as well.

    Args:
        tree: Canonical tree produced by the transformer.

    Returns:
        ModuleData: Located imports and exports in traversal order.
    """
    modules = ModuleData()
    _walk(tree, "", modules)
    return modules


def _walk(node: Node, current_path: str, modules: ModuleData) -> None:
    kind = classify_node(node)

    if kind is NodeKind.SEQUENCE:
        for index, item in enumerate(node):
            _walk(item, f"{current_path}[{index}]", modules)
        return

    if kind is not NodeKind.MAPPING:
        return

    for key, value in node.items():
        if is_text_or_attribute_key(key):
            continue

        next_path = f"{current_path}/{key}" if current_path else key

        if key == IMPORT_TAG:
            _add_module_value(value, modules.imports, next_path)
        elif key == EXPORT_TAG:
            _add_module_value(value, modules.exports, next_path)

        _walk(value, next_path, modules)


def _add_module_value(value: Node, bucket: List[ModuleTag], path: str) -> None:
    if classify_node(value) is NodeKind.SEQUENCE:
        for index, item in enumerate(value):
            bucket.append(ModuleTag(path=f"{path}[{index}]", node=item))
    else:
        bucket.append(ModuleTag(path=path, node=value))
