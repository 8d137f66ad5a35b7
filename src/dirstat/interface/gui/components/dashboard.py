from __future__ import annotations

"""
Dashboard UI Component.

Top row with the folder entry, browse and traverse buttons; a label with
the selected file; the usage bar; and a status line.
"""

import logging
from typing import Any, Dict

import customtkinter as ctk

from dirstat.interface.gui.components.usage_bar import UsageBarFrame

logger = logging.getLogger(__name__)


class DashboardFrame(ctk.CTkFrame):
    """
    Main workspace. Widgets are exposed as attributes for the controller.
    """

    def __init__(self, master: Any, config: Dict[str, Any], **kwargs: Any):
        super().__init__(master, fg_color="transparent", **kwargs)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        # 1. Folder selection row
        top = ctk.CTkFrame(self, fg_color="transparent")
        top.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))
        top.grid_columnconfigure(0, weight=1)

        self.entry_input = ctk.CTkEntry(top, placeholder_text="Folder path...")
        self.entry_input.grid(row=0, column=0, sticky="ew", padx=(0, 5))
        self.entry_input.insert(0, config.get("input_path", ""))

        self.btn_browse = ctk.CTkButton(top, text="Browse", width=80)
        self.btn_browse.grid(row=0, column=1, padx=(0, 5))

        self.btn_scan = ctk.CTkButton(top, text="Traverse folder", width=130)
        self.btn_scan.grid(row=0, column=2)

        # 2. Selected file
        self.lbl_selected = ctk.CTkLabel(self, text="", anchor="w")
        self.lbl_selected.grid(row=1, column=0, sticky="ew", padx=10)

        # 3. Usage bar
        self.bar = UsageBarFrame(self)
        self.bar.grid(row=2, column=0, sticky="nsew", padx=10, pady=5)

        # 4. Status line
        self.lbl_status = ctk.CTkLabel(self, text="Ready", anchor="w", text_color="gray")
        self.lbl_status.grid(row=3, column=0, sticky="ew", padx=10, pady=(0, 10))

    # ==========================================================================
    # PUBLIC UPDATE METHODS (Called by Controllers)
    # ==========================================================================

    def get_input_path(self) -> str:
        return self.entry_input.get().strip()

    def set_input_path(self, path: str) -> None:
        self.entry_input.delete(0, "end")
        self.entry_input.insert(0, path)

    def set_busy(self, busy: bool) -> None:
        self.btn_scan.configure(state="disabled" if busy else "normal")
        self.btn_browse.configure(state="disabled" if busy else "normal")

    def set_status(self, text: str) -> None:
        self.lbl_status.configure(text=text)

    def set_selected_text(self, text: str) -> None:
        self.lbl_selected.configure(text=text)
