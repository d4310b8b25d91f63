from __future__ import annotations

"""
Module Resolution Service.

Links every <import> of a batch of queued documents to a matching
<export>, injects the import's own children into the export's
<children> placeholders, and splices the result into the importing tree
in place of the import node.

Resolution order:
1. Imports carrying 'src' only match exports of the document whose target
   path is the importing document's directory joined with 'src' plus the
   output extension.
2. Imports without 'src' match the importing document's own exports first,
   then the exports of every other queued document in batch order.

Exports are matched against deep copies taken before any splicing, so
resolving one document never changes what another document exports.
Linking failures never raise: each failed import yields one diagnostic.
"""

import copy
import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from htlm.domain.constants import (
    CHILDREN_TAG,
    ID_ATTRIBUTE,
    OUTPUT_EXTENSION,
    SRC_ATTRIBUTE,
    TEXT_KEY,
)
from htlm.domain.errors import UnresolvablePathError, UnresolvedImportError
from htlm.domain.markup_models import (
    Node,
    NodeKind,
    NodeMapping,
    classify_node,
    insert_child_node,
    is_attribute_key,
)
from htlm.domain.module_models import (
    DiagnosticKind,
    ModuleDiagnostic,
    ModuleTag,
    QueuedDocument,
    ResolutionReport,
)

logger = logging.getLogger(__name__)

_SEGMENT_RX = re.compile(r"^([^\[\]]+)(?:\[(\d+)\])?$")


@dataclass(frozen=True)
class PathSegment:
    """One step of a module path: a key and an optional sequence index."""
    key: str
    index: Optional[int] = None


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_queued_imports(
        documents: Sequence[QueuedDocument],
        *,
        output_extension: str = OUTPUT_EXTENSION,
) -> ResolutionReport:
    """
    Replace all <import> tags by their matching <export> content.

    Mutates the documents in place. Resolved imports are removed from each
    document's pending import list, so running the resolver again over a
    resolved batch does nothing.

    Args:
        documents: The whole batch of queued documents.
        output_extension: Extension appended to 'src' references.

    Returns:
        ResolutionReport: Resolved count and one diagnostic per failed import.
    """
    report = ResolutionReport()
    snapshots = [_snapshot_exports(document) for document in documents]

    for doc_index, document in enumerate(documents):
        pending: List[ModuleTag] = []

        for import_tag in document.imports:
            try:
                export_tag = find_export_for_import(
                    import_tag, doc_index, documents, snapshots, output_extension
                )
                replace_import_node(document, import_tag, export_tag)
            except UnresolvedImportError as e:
                report.diagnostics.append(
                    _diagnostic(DiagnosticKind.UNRESOLVED_IMPORT, str(e), document, import_tag)
                )
                pending.append(import_tag)
                continue
            except UnresolvablePathError as e:
                report.diagnostics.append(
                    _diagnostic(DiagnosticKind.UNRESOLVABLE_PATH, str(e), document, import_tag)
                )
                pending.append(import_tag)
                continue

            report.resolved += 1
            logger.debug(f"Linked {import_tag.path} in {document.target_path}")

        document.imports = pending

    return report


def find_export_for_import(
        import_tag: ModuleTag,
        doc_index: int,
        documents: Sequence[QueuedDocument],
        snapshots: Sequence[List[ModuleTag]],
        output_extension: str = OUTPUT_EXTENSION,
) -> ModuleTag:
    """
    Find the export targeted by an import tag.

    Args:
        import_tag: The import node with its path.
        doc_index: Position of the importing document in the batch.
        documents: All queued documents.
        snapshots: Export lists of every document, aligned with 'documents'.
        output_extension: Extension appended to 'src' references.

    Returns:
        ModuleTag: The matching export.

    Raises:
        UnresolvedImportError: If no export matches.
    """
    document = documents[doc_index]
    import_id = get_attribute(import_tag.node, ID_ATTRIBUTE)
    if import_id is None:
        raise UnresolvedImportError(
            f"Import without id attribute at {import_tag.path} in {document.target_path}"
        )

    src = get_attribute(import_tag.node, SRC_ATTRIBUTE)
    if src:
        source_path = resolve_source_file_path(document.target_path, src, output_extension)
        for index, candidate in enumerate(documents):
            if os.path.abspath(candidate.target_path) == source_path:
                match = _match_export(snapshots[index], import_id)
                if match is not None:
                    return match
                break
        raise UnresolvedImportError(
            f'Export not found for import id="{import_id}" src="{src}" in {document.target_path}'
        )

    match = _match_export(snapshots[doc_index], import_id)
    if match is not None:
        return match

    for index, exports in enumerate(snapshots):
        if index == doc_index:
            continue
        match = _match_export(exports, import_id)
        if match is not None:
            return match

    raise UnresolvedImportError(f'Export not found for import id="{import_id}" in {document.target_path}')


def resolve_source_file_path(current_file_path: str, src: str, output_extension: str = OUTPUT_EXTENSION) -> str:
    """
    Resolve a relative import source to an absolute output document path.

    Args:
        current_file_path: Target path of the importing document.
        src: Value of the import's 'src' attribute (no extension).
        output_extension: Extension of output documents.

    Returns:
        str: Normalized absolute path of the referenced document.
    """
    current_dir = os.path.dirname(os.path.abspath(current_file_path))
    return os.path.abspath(os.path.join(current_dir, src + output_extension))


def replace_import_node(document: QueuedDocument, import_tag: ModuleTag, export_tag: ModuleTag) -> None:
    """
    Replace an <import> node by the content of an <export>.

    Args:
        document: The document being mutated.
        import_tag: The import to remove.
        export_tag: The export providing the replacement content.

    Raises:
        UnresolvablePathError: If the import can no longer be located.
    """
    segments = parse_path_segments(import_tag.path)
    if not segments:
        raise UnresolvablePathError(f"Empty module path for import in {document.target_path}")

    parent = get_node_at_path(document.content, segments[:-1])
    if classify_node(parent) is not NodeKind.MAPPING:
        raise UnresolvablePathError(f"Unable to resolve parent path for import: {import_tag.path}")

    import_children = extract_import_children(import_tag.node)
    injected = inject_children_placeholder(export_tag.node, import_children)
    replacements = unwrap_export_content(injected)

    _detach_node(parent, segments[-1], import_tag)
    for key, value in replacements:
        insert_child_node(parent, key, value)

# -----------------------------------------------------------------------------
# PATH HANDLING
# -----------------------------------------------------------------------------

def parse_path_segments(path: str) -> List[PathSegment]:
    """
    Split a slash-separated module path into segments.

    Example:
        'html/body/import[0]' -> [html, body, import[0]]
    """
    segments: List[PathSegment] = []
    for part in path.split("/"):
        if not part:
            continue
        match = _SEGMENT_RX.match(part)
        if not match:
            segments.append(PathSegment(key=part))
            continue
        index = match.group(2)
        segments.append(PathSegment(key=match.group(1), index=int(index) if index is not None else None))
    return segments


def get_node_at_path(root: Node, segments: Sequence[PathSegment]) -> Optional[Node]:
    """
    Follow path segments from the root of a tree.

    A segment without index that meets a sequence selects its first item:
    a single value promoted to a sequence by an earlier splice stays first.

    Returns:
        Optional[Node]: The addressed node, or None if the path is broken.
    """
    current: Node = root
    for segment in segments:
        if classify_node(current) is not NodeKind.MAPPING:
            return None
        current = current.get(segment.key)

        if segment.index is not None:
            if not isinstance(current, list) or segment.index >= len(current):
                return None
            current = current[segment.index]
        elif isinstance(current, list):
            current = current[0] if current else None

    return current


def _detach_node(parent: NodeMapping, segment: PathSegment, import_tag: ModuleTag) -> None:
    """Remove the import node from its parent, dropping emptied sequences."""
    value = parent.get(segment.key)
    node = import_tag.node

    if segment.index is None and value is node:
        del parent[segment.key]
        return

    if isinstance(value, list):
        position = segment.index
        if position is None or position >= len(value) or value[position] is not node:
            # Earlier removals shift sibling indices; locate by identity
            position = next((i for i, item in enumerate(value) if item is node), None)
        if position is not None:
            del value[position]
            if not value:
                del parent[segment.key]
            return

    raise UnresolvablePathError(f"Import node no longer present at {import_tag.path}")

# -----------------------------------------------------------------------------
# CONTENT HANDLING
# -----------------------------------------------------------------------------

def get_attribute(node: Node, key: str) -> Optional[str]:
    """Read an attribute value from a node, if it is an element mapping."""
    if classify_node(node) is not NodeKind.MAPPING:
        return None
    value = node.get(key)
    return None if value is None else str(value)


def extract_import_children(node: Node) -> NodeMapping:
    """Return the non-attribute entries defined on an import tag."""
    if classify_node(node) is not NodeKind.MAPPING:
        return {}
    return {key: value for key, value in node.items() if not is_attribute_key(key)}


def inject_children_placeholder(node: Node, import_children: NodeMapping) -> Node:
    """
    Rebuild an export node with every <children> placeholder replaced.

    The import children are inserted verbatim (copied) with the same merge
    rule as a splice. Without a placeholder they are discarded.

    Args:
        node: Export node (or part of it).
        import_children: Entries supplied by the importing tag.

    Returns:
        Node: A new node; the input is left untouched.
    """
    kind = classify_node(node)

    if kind is NodeKind.SEQUENCE:
        return [inject_children_placeholder(item, import_children) for item in node]

    if kind is not NodeKind.MAPPING:
        return node

    result: NodeMapping = {}
    for key, value in node.items():
        if key == CHILDREN_TAG:
            occurrences = len(value) if isinstance(value, list) else 1
            for _ in range(occurrences):
                for child_key, child_value in import_children.items():
                    insert_child_node(result, child_key, copy.deepcopy(child_value))
            continue

        insert_child_node(result, key, inject_children_placeholder(value, import_children))

    return result


def unwrap_export_content(node: Node) -> List[Tuple[str, Node]]:
    """List the non-attribute entries of an export node."""
    kind = classify_node(node)

    if kind is NodeKind.MAPPING:
        return [(key, value) for key, value in node.items() if not is_attribute_key(key)]

    if kind is NodeKind.PRIMITIVE and node != "":
        return [(TEXT_KEY, node)]

    return []

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _snapshot_exports(document: QueuedDocument) -> List[ModuleTag]:
    return [ModuleTag(path=tag.path, node=copy.deepcopy(tag.node)) for tag in document.exports]


def _match_export(exports: Sequence[ModuleTag], import_id: str) -> Optional[ModuleTag]:
    for export_tag in exports:
        if get_attribute(export_tag.node, ID_ATTRIBUTE) == import_id:
            return export_tag
    return None


def _diagnostic(
        kind: DiagnosticKind,
        message: str,
        document: QueuedDocument,
        import_tag: ModuleTag,
) -> ModuleDiagnostic:
    return ModuleDiagnostic(
        kind=kind,
        message=message,
        document_path=document.target_path,
        import_id=get_attribute(import_tag.node, ID_ATTRIBUTE),
        module_path=import_tag.path,
    )
