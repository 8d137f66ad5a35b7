from __future__ import annotations

"""
Main Application Window Factory.

Creates the root CustomTkinter window and its single-column layout grid.
"""

import customtkinter as ctk

from dirstat.domain import constants as const


def create_main_window() -> ctk.CTk:
    """
    Instantiate and configure the primary application window.

    Returns:
        ctk.CTk: The configured root application instance.
    """
    ctk.set_appearance_mode("System")
    ctk.set_default_color_theme("blue")

    app = ctk.CTk()
    app.title(f"{const.APP_NAME} - v{const.CURRENT_CONFIG_VERSION}")
    app.geometry("900x320")

    app.grid_columnconfigure(0, weight=1)
    app.grid_rowconfigure(0, weight=1)

    return app
