"""Tkinter desktop front end."""

from __future__ import annotations

from typing import Any, Mapping


def launch_gui(settings: Mapping[str, Any] | None = None) -> None:
    """Start the GUI; Tk is imported only when the window is requested."""

    from .gui_app import launch_gui as _launch_gui

    _launch_gui(settings)


__all__ = ["launch_gui"]
