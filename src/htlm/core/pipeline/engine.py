from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the entire build:
1. Validates configuration and paths.
2. Checks for overwrite conflicts.
3. Converts every source document, writing the ones without module tags.
4. Links <import>/<export> tags across the queued documents in one batch.
5. Writes the linked documents.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from htlm.core.modules.resolver import resolve_queued_imports
from htlm.core.pipeline.converter import (
    convert_htlm_files_in_directory,
    write_queued_html_files,
)
from htlm.core.pipeline.stages.validator import validate_config
from htlm.core.services.scanner import list_source_files
from htlm.domain.module_models import ModuleDiagnostic
from htlm.domain.pipeline_models import (
    BuildResult,
    create_build_result,
    create_error_result,
)
from htlm.infra.fs import (
    check_existing_output_files,
    ensure_directory_exists,
    normalize_path,
    target_path_for,
)

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
) -> BuildResult:
    """
    Execute the full HTLM -> HTML build.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, convert and link everything without writing to disk.

    Returns:
        BuildResult: Object containing status, produced files and diagnostics.
    """
    logger.info("Build started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    src_dir = normalize_path(cfg["src_dir"], os.getcwd())
    out_dir = normalize_path(cfg["out_dir"], os.getcwd())
    source_extension = cfg["source_extension"]
    output_extension = cfg["output_extension"]

    if not os.path.isdir(src_dir):
        msg = f"Source directory does not exist: {src_dir}"
        logger.error(msg)
        return create_error_result(msg, src_dir, out_dir, dry_run)

    # -------------------------------------------------------------------------
    # 2) Overwrite Check
    # -------------------------------------------------------------------------
    if not cfg["overwrite"] and not dry_run:
        targets = [
            target_path_for(out_dir, rel_path, output_extension)
            for rel_path in list_source_files(src_dir, source_extension)
        ]
        existing = check_existing_output_files(targets)
        if existing:
            msg = "Existing output files detected and overwrite=False. Aborting."
            logger.warning(f"{msg} Files: {existing}")
            return create_error_result(msg, src_dir, out_dir, dry_run)

    if not dry_run:
        try:
            ensure_directory_exists(out_dir)
        except OSError as e:
            msg = f"Failed to create output directory {out_dir}: {e}"
            logger.critical(msg)
            return create_error_result(msg, src_dir, out_dir, dry_run)

    # -------------------------------------------------------------------------
    # 3) Per-Document Conversion
    # -------------------------------------------------------------------------
    queued, written, errors = convert_htlm_files_in_directory(
        src_dir,
        out_dir,
        source_extension=source_extension,
        output_extension=output_extension,
        dry_run=dry_run,
    )
    logger.info(f"Converted {len(written)} document(s); {len(queued)} queued for module linking.")

    # -------------------------------------------------------------------------
    # 4) Module Linking & Deferred Writes
    # -------------------------------------------------------------------------
    diagnostics: List[ModuleDiagnostic] = []
    if queued:
        report = resolve_queued_imports(queued, output_extension=output_extension)
        diagnostics = report.diagnostics
        for diagnostic in diagnostics:
            logger.warning(diagnostic.message)
        logger.info(f"Linked {report.resolved} import(s).")

        if dry_run:
            logger.info("Dry run: skipping writes of linked documents.")
        else:
            errors.extend(write_queued_html_files(queued))

    queued_paths = [document.target_path for document in queued]
    result = create_build_result(
        src_dir,
        out_dir,
        written_files=written + queued_paths,
        queued_files=queued_paths,
        errors=errors,
        diagnostics=diagnostics,
        dry_run=dry_run,
    )

    if result.ok:
        logger.info("Build completed successfully.")
    else:
        logger.warning(
            f"Build completed with {len(errors)} failed document(s) and "
            f"{len(diagnostics)} unresolved import(s)."
        )
    return result
