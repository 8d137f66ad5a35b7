from __future__ import annotations

"""
GUI Entrypoint and Application Lifecycle Orchestrator.

Sets up logging, restores the last session, builds the window, binds the
controller and enters the Tk main loop. The session is saved on close.
"""

import logging

import customtkinter as ctk

from dirstat.domain import config as cfg
from dirstat.domain import constants as const
from dirstat.core.services.validator import validate_config
from dirstat.infra.logging import LoggingConfig, configure_logging, get_default_log_path
from dirstat.interface.gui.components.dashboard import DashboardFrame
from dirstat.interface.gui.components.main_window import create_main_window
from dirstat.interface.gui.controllers.main_controller import AppController

logger = logging.getLogger(__name__)


def main() -> None:
    """Initialize and launch the graphical interface."""
    # PHASE 1: State recovery
    app_state = cfg.load_app_state()
    config, warnings = validate_config(app_state.get("last_session", {}))

    # PHASE 2: Diagnostics
    configure_logging(LoggingConfig(
        level=config["log_level"], console=True, log_file=get_default_log_path()
    ))
    logger.info(f"GUI Lifecycle: Initializing v{const.CURRENT_CONFIG_VERSION}")
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # PHASE 3: View hierarchy
    app = create_main_window()
    dashboard = DashboardFrame(app, config)
    dashboard.grid(row=0, column=0, sticky="nsew")

    # PHASE 4: Controller binding
    controller = AppController(app, config)
    controller.register_view(dashboard)

    dashboard.btn_scan.configure(command=controller.start_scan)
    dashboard.btn_browse.configure(command=lambda: _browse_folder(app, dashboard))
    dashboard.entry_input.bind("<Return>", lambda _e: controller.start_scan())

    # PHASE 5: Lifecycle finalization
    def on_closing() -> None:
        app_state["last_session"] = config
        cfg.save_app_state(app_state)
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_closing)
    app.mainloop()


def _browse_folder(app: ctk.CTk, dashboard: DashboardFrame) -> None:
    """Prompt for a directory and copy it into the folder entry."""
    path = ctk.filedialog.askdirectory(parent=app, title="Select Directory")
    if path:
        dashboard.set_input_path(path)


if __name__ == "__main__":
    main()
