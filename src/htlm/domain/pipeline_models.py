from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the data structures and factory functions used to communicate
conversion results between the build pipeline and the interface layer (CLI).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from htlm.domain.markup_models import Node
from htlm.domain.module_models import ModuleDiagnostic

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ConversionResult:
    """
    Output of converting a single HTLM text.

    Attributes:
        html: Rendered HTML string.
        tree: Canonical tree the HTML was rendered from.
    """
    html: str
    tree: Node


@dataclass(frozen=True)
class ConversionError:
    """
    Failure details for a document that could not be converted.

    Attributes:
        rel_path: Source file path relative to the source directory.
        error: Descriptive exception or error message.
    """
    rel_path: str
    error: str


@dataclass(frozen=True)
class BuildResult:
    """
    Unified result object of a complete build.

    Attributes:
        ok: False when the build aborted or any document/link failed.
        error: Descriptive message when the build aborted.
        src_dir: Normalized source directory.
        out_dir: Normalized output directory.
        dry_run: Whether writing was skipped.
        written_files: Output documents written (or that would be written).
        queued_files: Output documents that went through module linking.
        errors: Per-document conversion failures.
        diagnostics: Module linking problems.
        summary: Execution statistics.
    """
    ok: bool
    error: str

    src_dir: str
    out_dir: str
    dry_run: bool = False

    written_files: List[str] = field(default_factory=list)
    queued_files: List[str] = field(default_factory=list)
    errors: List[ConversionError] = field(default_factory=list)
    diagnostics: List[ModuleDiagnostic] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        src_dir: str,
        out_dir: str = "",
        dry_run: bool = False,
) -> BuildResult:
    """
    Create a result for a build that aborted before converting anything.

    Args:
        error: Detailed error description.
        src_dir: The source directory.
        out_dir: The output directory, if already known.
        dry_run: Whether the build was a simulation.

    Returns:
        BuildResult: An immutable error result object.
    """
    return BuildResult(ok=False, error=error, src_dir=src_dir, out_dir=out_dir, dry_run=dry_run)


def create_build_result(
        src_dir: str,
        out_dir: str,
        written_files: List[str],
        queued_files: List[str],
        errors: Optional[List[ConversionError]] = None,
        diagnostics: Optional[List[ModuleDiagnostic]] = None,
        dry_run: bool = False,
) -> BuildResult:
    """
    Create the result of a completed build.

    The build is considered successful only when every document converted
    and every import was linked.

    Args:
        src_dir: Normalized source directory.
        out_dir: Normalized output directory.
        written_files: Every output path produced.
        queued_files: Output paths that went through module linking.
        errors: Per-document conversion failures.
        diagnostics: Module linking diagnostics.
        dry_run: Whether writing was skipped.

    Returns:
        BuildResult: An immutable result object with a computed summary.
    """
    errors = errors or []
    diagnostics = diagnostics or []
    summary = {
        "converted": len(written_files),
        "linked": len(queued_files),
        "failed": len(errors),
        "unresolved": len(diagnostics),
        "dry_run": dry_run,
    }
    return BuildResult(
        ok=not errors and not diagnostics,
        error="",
        src_dir=src_dir,
        out_dir=out_dir,
        dry_run=dry_run,
        written_files=list(written_files),
        queued_files=list(queued_files),
        errors=list(errors),
        diagnostics=list(diagnostics),
        summary=summary,
    )
