from __future__ import annotations

"""
Module Linking Domain Models.

Data structures exchanged between the module collector, the module
resolver and the build pipeline: located import/export tags, documents
queued for linking, and the diagnostics produced while linking.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from htlm.domain.markup_models import Node

# -----------------------------------------------------------------------------
# MODULE TAGS
# -----------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ModuleTag:
    """
    An <import> or <export> node located inside a document tree.

    Attributes:
        path: Slash-separated address of the node (e.g. 'html/body/import[0]').
        node: The node itself, held by reference into the owning tree.
    """
    path: str
    node: Node


@dataclass
class ModuleData:
    """
    Module tags collected from a single canonical tree.

    Attributes:
        imports: Located <import> nodes in traversal order.
        exports: Located <export> nodes in traversal order.
    """
    imports: List[ModuleTag] = field(default_factory=list)
    exports: List[ModuleTag] = field(default_factory=list)

    @property
    def has_module_tags(self) -> bool:
        return bool(self.imports or self.exports)


@dataclass(eq=False)
class QueuedDocument:
    """
    A converted document whose output waits for cross-document linking.

    Mutated in place by the module resolver and serialized afterwards.

    Attributes:
        target_path: Absolute path of the output document.
        content: Canonical tree of the document.
        imports: Pending <import> tags.
        exports: Available <export> tags.
    """
    target_path: str
    content: Node
    imports: List[ModuleTag] = field(default_factory=list)
    exports: List[ModuleTag] = field(default_factory=list)


# -----------------------------------------------------------------------------
# DIAGNOSTICS
# -----------------------------------------------------------------------------

class DiagnosticKind(str, Enum):
    UNRESOLVED_IMPORT = "unresolved_import"
    UNRESOLVABLE_PATH = "unresolvable_path"


@dataclass(frozen=True)
class ModuleDiagnostic:
    """
    Non-fatal linking problem reported for a single import.

    Attributes:
        kind: Category of the problem.
        message: Human-readable description.
        document_path: Target path of the document owning the import.
        import_id: Value of the import's id attribute, if any.
        module_path: Path of the import inside its document.
    """
    kind: DiagnosticKind
    message: str
    document_path: str
    import_id: Optional[str] = None
    module_path: str = ""


@dataclass
class ResolutionReport:
    """
    Outcome of one module resolution batch.

    Attributes:
        resolved: Number of imports replaced by export content.
        diagnostics: One entry per import that could not be resolved.
    """
    resolved: int = 0
    diagnostics: List[ModuleDiagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics
