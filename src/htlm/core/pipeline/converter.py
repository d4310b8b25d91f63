from __future__ import annotations

"""
Document Conversion Stage.

Converts HTLM documents one at a time. Documents without module tags are
written immediately; documents containing <import> or <export> tags are
returned as queued documents so that module linking can run over the
whole batch before anything is serialized.
"""

import logging
import os
from typing import List, Optional, Tuple

from htlm.core.modules.collector import collect_module_tags
from htlm.core.pipeline.components.reader import read_document
from htlm.core.pipeline.components.writer import write_document, write_queued_document
from htlm.core.processing.markup import htlm_to_html
from htlm.core.services.scanner import list_source_files
from htlm.domain.constants import OUTPUT_EXTENSION, SOURCE_EXTENSION
from htlm.domain.errors import HtlmError
from htlm.domain.module_models import QueuedDocument
from htlm.domain.pipeline_models import ConversionError
from htlm.infra.fs import target_path_for

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def convert_single_htlm_file(
        src_dir: str,
        out_dir: str,
        relative_file_path: str,
        *,
        output_extension: str = OUTPUT_EXTENSION,
        dry_run: bool = False,
) -> Optional[QueuedDocument]:
    """
    Convert a single source document.

    Args:
        src_dir: Absolute source root.
        out_dir: Absolute output root.
        relative_file_path: Source document path relative to src_dir.
        output_extension: Extension of the output document.
        dry_run: If True, nothing is written to disk.

    Returns:
        Optional[QueuedDocument]: The queued document when it contains module
                                  tags, otherwise None (already written).

    Raises:
        UnknownTagError: If a tag cannot be decoded.
        MarkupSyntaxError: If the document is not well-formed.
        OSError: If reading or writing fails.
    """
    src_path = os.path.join(src_dir, relative_file_path)
    target_path = target_path_for(out_dir, relative_file_path, output_extension)

    result = htlm_to_html(read_document(src_path))
    modules = collect_module_tags(result.tree)

    if modules.has_module_tags:
        logger.debug(
            f"Queued {relative_file_path}: {len(modules.imports)} import(s), "
            f"{len(modules.exports)} export(s)"
        )
        return QueuedDocument(
            target_path=target_path,
            content=result.tree,
            imports=modules.imports,
            exports=modules.exports,
        )

    if not dry_run:
        write_document(target_path, result.html)
    logger.debug(f"Converted {relative_file_path} -> {target_path}")
    return None


def convert_htlm_files_in_directory(
        src_dir: str,
        out_dir: str,
        *,
        source_extension: str = SOURCE_EXTENSION,
        output_extension: str = OUTPUT_EXTENSION,
        dry_run: bool = False,
) -> Tuple[List[QueuedDocument], List[str], List[ConversionError]]:
    """
    Convert every source document of a directory tree.

    A document that fails to convert is reported and skipped; the other
    documents are unaffected.

    Args:
        src_dir: Absolute source root.
        out_dir: Absolute output root.
        source_extension: Extension of source documents.
        output_extension: Extension of output documents.
        dry_run: If True, nothing is written to disk.

    Returns:
        Tuple: (queued documents, output paths written directly, conversion errors).

    Raises:
        FileNotFoundError: If the source directory does not exist.
    """
    queued: List[QueuedDocument] = []
    written: List[str] = []
    errors: List[ConversionError] = []

    for rel_path in list_source_files(src_dir, source_extension):
        try:
            document = convert_single_htlm_file(
                src_dir,
                out_dir,
                rel_path,
                output_extension=output_extension,
                dry_run=dry_run,
            )
        except (HtlmError, OSError) as e:
            logger.error(f"Conversion failed for {rel_path}: {e}")
            errors.append(ConversionError(rel_path=rel_path, error=str(e)))
            continue

        if document is None:
            written.append(target_path_for(out_dir, rel_path, output_extension))
        else:
            queued.append(document)

    return queued, written, errors


def write_queued_html_files(queued_files: List[QueuedDocument]) -> List[ConversionError]:
    """
    Write queued documents (after in-memory linking) to disk.

    Args:
        queued_files: The queued documents to write.

    Returns:
        List[ConversionError]: Documents that could not be written.
    """
    errors: List[ConversionError] = []
    for document in queued_files:
        try:
            write_queued_document(document)
        except OSError as e:
            logger.error(f"Failed to write {document.target_path}: {e}")
            errors.append(ConversionError(rel_path=document.target_path, error=str(e)))
    return errors
