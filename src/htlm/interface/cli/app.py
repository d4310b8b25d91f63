from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, config file, CLI overrides), pipeline execution
and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from htlm.core.pipeline.engine import run_pipeline
from htlm.core.pipeline.stages.validator import validate_config
from htlm.domain.config import get_default_config, load_config
from htlm.domain.pipeline_models import BuildResult
from htlm.infra.fs import normalize_path
from htlm.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from htlm.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_MISSING_SOURCE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file), force=True)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_conf = load_config(args.config_path)

    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    src_dir = normalize_path(clean_conf["src_dir"], os.getcwd())
    if not os.path.isdir(src_dir):
        msg = f"Source directory does not exist: {src_dir}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_MISSING_SOURCE

    logger.info(f"Building {src_dir} -> {normalize_path(clean_conf['out_dir'], os.getcwd())}")
    try:
        result = run_pipeline(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Build interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge CLI overrides into the base configuration.

    Only known keys with a value are merged.
    """
    out = dict(base)
    for k in ("src_dir", "out_dir", "overwrite"):
        if overrides.get(k) is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: BuildResult) -> None:
    """Render a BuildResult as a terminal report."""
    if result.error:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary
    if result.dry_run:
        print("Dry run: no files were written.")
    print(f"Output directory: {result.out_dir}")

    labels = {
        "converted": "Documents converted",
        "linked": "Documents linked",
        "failed": "Documents failed",
        "unresolved": "Unresolved imports",
    }
    for key, label in labels.items():
        print(f"{label}: {summary.get(key, 0)}")

    for err in result.errors:
        print(f"  ! {err.rel_path}: {err.error}", file=sys.stderr)
    for diagnostic in result.diagnostics:
        print(f"  ? {diagnostic.message}", file=sys.stderr)

    print("Build succeeded." if result.ok else "Build finished with problems.")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
