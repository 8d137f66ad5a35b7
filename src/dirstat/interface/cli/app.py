from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the headless workflow: logging bootstrap, configuration
resolution (defaults, persisted session, CLI overrides), the scan itself,
and rendering of the usage report (largest files, bar segments, hit-test).
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from dirstat.core.analysis.mapper import ProportionalMap
from dirstat.core.analysis.sequencer import count_nodes, largest_files, measure
from dirstat.core.services.scanner import scan_with_stats
from dirstat.core.services.validator import validate_config, workers_or_none
from dirstat.domain.config import get_default_config, load_config
from dirstat.infra.fs import normalize_path
from dirstat.infra.logging import LoggingConfig, configure_logging, get_logger
from dirstat.interface.cli import args as cli_args
from dirstat.utils.formatting import format_share, format_size

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 on success, 1 if nothing could be scanned or the scan crashed,
             2 if the input path does not exist, 130 on interruption.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 2. Logging bootstrap (CLI: console only)
    configure_logging(LoggingConfig(level=clean_conf["log_level"], console=True, log_file=None))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 3. Pre-flight input verification
    input_path = normalize_path(clean_conf["input_path"], os.getcwd())
    if not os.path.lexists(input_path):
        msg = f"Path does not exist: {input_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    # 4. Scan
    try:
        result = scan_with_stats(
            input_path,
            max_workers=workers_or_none(clean_conf),
            follow_symlinks=clean_conf["follow_symlinks"],
        )
    except KeyboardInterrupt:
        logger.warning("Scan interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.critical(f"Scan failed: {e}", exc_info=True)
        print(f"ERROR: Scan failed: {e}", file=sys.stderr)
        return 1

    if result.tree is None:
        msg = f"Nothing could be scanned at: {input_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    # 5. Report
    report = build_report(
        result.tree,
        stats=result.stats.as_dict(),
        top_n=clean_conf["top_n"],
        extent=clean_conf["extent"],
        include_segments=args.segments,
        resolve_position=args.resolve_position,
    )

    if args.json_output:
        print(json.dumps(report, ensure_ascii=False, indent=2))
    else:
        _print_human_summary(report)

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge non-None overrides of known keys into the base configuration.
    """
    out = dict(base)
    keys_to_merge = [
        "input_path", "max_workers", "follow_symlinks", "top_n", "extent", "log_level",
    ]
    for k in keys_to_merge:
        if overrides.get(k) is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# REPORT MODEL
# -----------------------------------------------------------------------------

def build_report(
        tree: Any,
        *,
        stats: Dict[str, Any],
        top_n: int,
        extent: float,
        include_segments: bool = False,
        resolve_position: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Assemble a JSON-serializable report for a scanned tree.

    Args:
        tree: Scanned FileTreeNode.
        stats: Scan counters.
        top_n: Number of largest files to include.
        extent: Bar length used for segments and hit-testing.
        include_segments: Whether to list every painted interval.
        resolve_position: Optional bar position to resolve.

    Returns:
        Dict[str, Any]: The report.
    """
    measurement = measure(tree)
    directories, files = count_nodes(tree)
    pmap = ProportionalMap(measurement.files, measurement.total)

    report: Dict[str, Any] = {
        "root": tree.path,
        "total_size": measurement.total,
        "directories": directories,
        "files": files,
        "stats": stats,
        "extent": extent,
        "largest": [
            {"path": f.path, "size": f.size}
            for f in largest_files(measurement.files, top_n)
        ],
    }

    if include_segments:
        report["segments"] = [
            {"path": s.file.path, "size": s.file.size, "start": s.start, "end": s.end}
            for s in pmap.segments(extent)
        ]

    if resolve_position is not None:
        hit = pmap.resolve(extent, resolve_position)
        report["resolved"] = {
            "position": resolve_position,
            "file": None if hit is None else {"path": hit.path, "size": hit.size},
        }

    return report

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(report: Dict[str, Any]) -> None:
    """Print the report as a terminal summary."""
    total = report["total_size"]
    print(f"Root: {report['root']}")
    print(f"Total size: {format_size(total)} ({total:,} bytes)")
    print(f"Directories: {report['directories']}  Files: {report['files']}")

    skipped = report["stats"].get("skipped", 0) + report["stats"].get("unlistable", 0)
    if skipped:
        print(f"Entries skipped: {skipped}")

    if report["largest"]:
        print("\nLargest files:")
        for item in report["largest"]:
            print(
                f"  {format_size(item['size']):>12}  {format_share(item['size'], total):>8}  "
                f"{item['path']}"
            )

    if "segments" in report:
        print(f"\nSegments on [0, {report['extent']:g}]:")
        for seg in report["segments"]:
            print(f"  [{seg['start']:10.4f}, {seg['end']:10.4f})  {seg['path']}")

    if "resolved" in report:
        resolved = report["resolved"]
        hit = resolved["file"]
        if hit is None:
            print(f"\nPosition {resolved['position']:g}: no file")
        else:
            print(f"\nPosition {resolved['position']:g}: {hit['path']} ({format_size(hit['size'])})")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
