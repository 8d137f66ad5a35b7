from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script via subprocess and validates exit codes and
stream output. HOME is redirected so the persisted session of the user
running the suite is never read or written.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "dirstat" / "main.py"


def run_cli(args: List[str], home: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with 'src' on PYTHONPATH.

    Args:
        args: Command line arguments (excluding 'python' and script path).
        home: Directory used as the user's home for this run.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def test_cli_json_report(tmp_path: Path, sample_folder: Path) -> None:
    """TC-01: A standard scan reports totals and resolves a position."""
    result = run_cli(
        ["--use-defaults", "-i", str(sample_folder), "--json", "--segments", "--resolve", "100"],
        tmp_path,
    )
    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"

    data = json.loads(result.stdout)
    assert data["total_size"] == 10
    assert data["files"] == 3
    assert data["directories"] == 4
    assert data["segments"][-1]["end"] == 100.0
    assert data["resolved"]["file"]["path"].endswith("e.bin")


def test_cli_single_file_root(tmp_path: Path, sample_folder: Path) -> None:
    """TC-02: A file given as the root is reported on its own."""
    target = sample_folder / "b" / "c.bin"
    result = run_cli(["--use-defaults", "-i", str(target), "--json"], tmp_path)

    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["total_size"] == 3
    assert data["directories"] == 0


def test_cli_handles_missing_input(tmp_path: Path) -> None:
    """TC-03: Missing input path exits with code 2."""
    result = run_cli(["--use-defaults", "-i", str(tmp_path / "non_existent_folder")], tmp_path)

    assert result.returncode == 2
    assert "does not exist" in result.stderr


def test_cli_help_message(tmp_path: Path) -> None:
    """TC-04: Help message is displayed."""
    result = run_cli(["--help"], tmp_path)

    assert result.returncode == 0
    assert "usage: dirstat" in result.stdout
    assert "--resolve" in result.stdout
