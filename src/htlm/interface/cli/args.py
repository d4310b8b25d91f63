from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the `htlm` tool and translates the
parsed namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from htlm.domain.constants import CONFIG_FILE_NAME

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the htlm CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="htlm",
        description="Convert scrambled-tag HTLM documents into HTML, linking <import>/<export> modules.",
    )

    # --- Path Management ---
    p.add_argument(
        "-s", "--src-dir", "--srcDir",
        dest="src_dir",
        default=None,
        help="Directory scanned recursively for .htlm documents.",
    )
    p.add_argument(
        "-o", "--out-dir", "--outDir",
        dest="out_dir",
        default=None,
        help="Directory receiving the generated .html documents.",
    )
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help=f"Configuration file (default: ./{CONFIG_FILE_NAME}).",
    )

    # --- Runtime Constraints and Safety ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Convert and link everything without writing files.",
    )
    p.add_argument(
        "--no-overwrite",
        action="store_true",
        help="Abort if any output document already exists.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this (rotating) file.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the build result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Options left unset map to None so they do not mask file values.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "src_dir": args.src_dir,
        "out_dir": args.out_dir,
    }
    if args.no_overwrite:
        overrides["overwrite"] = False
    return overrides
