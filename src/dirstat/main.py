from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Routes execution to the CLI (when arguments are given) or the GUI, and
installs a global exception hook so that fatal crashes are logged and
reported in a way suited to the active interface.
"""

import logging
import os
import sys
import traceback
from typing import Any

# Make the 'src' directory importable when run as a plain script
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if not getattr(sys, "frozen", False):
    SRC_DIR = os.path.dirname(BASE_DIR)
    if SRC_DIR not in sys.path:
        sys.path.insert(0, SRC_DIR)


# -----------------------------------------------------------------------------
# GLOBAL SUPERVISOR (EXCEPTION HANDLING)
# -----------------------------------------------------------------------------

def global_exception_handler(exctype: type[BaseException], value: BaseException, tb: Any) -> None:
    """
    Log an unhandled exception and report it through the active interface.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    error_msg = str(value)

    logger = logging.getLogger("dirstat.supervisor")
    logger.critical(f"FATAL EXCEPTION DETECTED: {error_msg}\n{stack_trace}")

    if len(sys.argv) > 1:
        print("\n" + "=" * 80, file=sys.stderr)
        print("CRITICAL ERROR (DIRSTAT CLI)", file=sys.stderr)
        print("=" * 80, file=sys.stderr)
        print(stack_trace, file=sys.stderr)
        sys.exit(1)

    try:
        import tkinter.messagebox as mb
        from tkinter import Tk
        root = Tk()
        root.withdraw()
        mb.showerror(
            "DirStat - Fatal Error",
            f"A critical error occurred in the interface:\n\n{error_msg}\n\n"
            f"Technical details have been saved to the log file."
        )
        root.destroy()
    except Exception:
        print(f"CRITICAL SYSTEM ERROR: {error_msg}\n{stack_trace}", file=sys.stderr)
    sys.exit(1)


sys.excepthook = global_exception_handler


# -----------------------------------------------------------------------------
# EXECUTION ROUTING
# -----------------------------------------------------------------------------

def main() -> int:
    """
    Dispatch to the CLI when arguments are present, otherwise to the GUI.

    Returns:
        int: Process exit code.
    """
    if len(sys.argv) > 1:
        from dirstat.interface.cli.app import main as cli_main
        return cli_main()

    from dirstat.interface.gui.app import main as gui_main
    gui_main()
    return 0


if __name__ == "__main__":
    sys.exit(main())
