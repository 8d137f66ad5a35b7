from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates parsed namespaces into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

from dirstat.domain import constants as const

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the dirstat CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="dirstat",
        description="Measure a directory tree and map every file onto a proportional usage bar.",
    )

    # --- Target ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="File or directory to scan (defaults to the last session or the CWD).",
    )

    # --- Scanner ---
    p.add_argument(
        "--workers",
        dest="max_workers",
        type=int,
        default=None,
        help="Scan thread pool size (0 lets the executor decide).",
    )
    p.add_argument(
        "--no-follow-symlinks",
        dest="no_follow_symlinks",
        action="store_true",
        help="Do not descend into symlinked directories (symlinked files still count).",
    )

    # --- Report ---
    p.add_argument(
        "--top",
        dest="top_n",
        type=int,
        default=None,
        help=f"Number of largest files to list (default {const.DEFAULT_TOP_N}).",
    )
    p.add_argument(
        "--extent",
        type=float,
        default=None,
        help=f"Length of the usage bar used for --segments/--resolve (default {const.DEFAULT_EXTENT:g}).",
    )
    p.add_argument(
        "--segments",
        action="store_true",
        help="Print the painted interval of every file on the bar.",
    )
    p.add_argument(
        "--resolve",
        dest="resolve_position",
        type=float,
        default=None,
        metavar="X",
        help="Resolve a position on the bar (0..extent) to the file drawn there.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted session and start from defaults.",
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
        "--json",
        dest="json_output",
        action="store_true",
        help="Emit the report as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Unset options map to None so that the merge keeps the base value.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "max_workers": args.max_workers,
        "top_n": args.top_n,
        "extent": args.extent,
    }

    if args.no_follow_symlinks:
        overrides["follow_symlinks"] = False
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
