from __future__ import annotations

"""
Usage Bar UI Component.

Canvas that paints one rectangle per file, proportional to its size, and
forwards left clicks (as a position along the bar) to the controller.
"""

import logging
from typing import Any, Callable, List, Optional

import customtkinter as ctk

from dirstat.core.analysis.mapper import Segment
from dirstat.domain.tree_models import FileNode
from dirstat.interface.gui.utils.colors import contrasting_rgb, gradient_rgb, to_hex

logger = logging.getLogger(__name__)


class UsageBarFrame(ctk.CTkFrame):
    """
    Proportional bar of every scanned file.

    The controller supplies the segments; this view only draws them and
    reports geometry (width) and clicks back.
    """

    def __init__(self, master: Any, **kwargs: Any):
        super().__init__(master, corner_radius=6, **kwargs)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.canvas = ctk.CTkCanvas(self, bg="black", highlightthickness=0)
        self.canvas.grid(row=0, column=0, sticky="nsew")

        self._on_click: Optional[Callable[[float, float], None]] = None
        self._on_resize: Optional[Callable[[], None]] = None

        self.canvas.bind("<Button-1>", self._handle_click)
        self.canvas.bind("<Configure>", self._handle_configure)

    # ==========================================================================
    # BINDINGS
    # ==========================================================================

    def set_click_callback(self, callback: Callable[[float, float], None]) -> None:
        """Register ``callback(position, extent)`` for left clicks."""
        self._on_click = callback

    def set_resize_callback(self, callback: Callable[[], None]) -> None:
        self._on_resize = callback

    @property
    def extent(self) -> float:
        return float(self.canvas.winfo_width())

    def _handle_click(self, event: Any) -> None:
        if self._on_click:
            self._on_click(float(event.x), self.extent)

    def _handle_configure(self, _event: Any) -> None:
        if self._on_resize:
            self._on_resize()

    # ==========================================================================
    # PAINTING
    # ==========================================================================

    def draw(self, segments: List[Segment], selected: Optional[FileNode]) -> None:
        """
        Repaint the bar from scratch.

        Args:
            segments: Forward mapping for the current canvas width.
            selected: File to outline, if any.
        """
        self.canvas.delete("all")
        height = self.canvas.winfo_height()

        highlight = None
        for seg in segments:
            fill = gradient_rgb(seg.fraction)
            self.canvas.create_rectangle(
                seg.start, 0, seg.end, height, fill=to_hex(fill), outline=to_hex(fill)
            )
            if selected is not None and seg.file == selected:
                highlight = (seg, fill)

        # Outline drawn last so it stays above neighbouring segments
        if highlight is not None:
            seg, fill = highlight
            self.canvas.create_rectangle(
                seg.start, 1, max(seg.end, seg.start + 1), height - 1,
                outline=to_hex(contrasting_rgb(fill)), width=2
            )
        logger.debug(f"UI: Usage bar painted with {len(segments)} segments")
