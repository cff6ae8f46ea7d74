"""Tkinter GUI: query form, statistics panel and live enthalpy chart."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping

import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from ..config import load_settings
from ..history.history import HistoryStats
from ..reporter.chart_svg import export_history_chart
from ..reporter.console_reporter import export_history_json
from ..reporter.excel_reporter import export_history_to_excel
from ..service import Submission
from .chart_canvas import ChartCanvas
from .debouncer import Debouncer
from .events import (
    ESTIMATE_RECORDED,
    ESTIMATE_REJECTED,
    HISTORY_RESET,
    MEDIUM_CHANGED,
    NOTIFY,
    STATS_CHANGED,
    EventBus,
)
from .model import FieldErrors, SessionModel
from .theme import Theme, get_theme, toggle_theme

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "steam": ("Temperature (°C)", "Pressure (kg/cm²G)"),
    "air": ("Temperature (K)", "Pressure (Pa)"),
}


class EnthalpyGuiApp:
    """Controller wiring the form, stats panel and chart to the session model."""

    def __init__(self, root: tk.Tk, settings: Mapping[str, Any] | None = None) -> None:
        self.root = root
        self.settings = settings if settings is not None else load_settings()

        self.bus = EventBus()
        self.model = SessionModel(self.bus, settings=self.settings)
        self.theme: Theme = get_theme(dark=bool(self.settings.get("ui", {}).get("dark_theme", False)))

        self.temperature_var = tk.StringVar()
        self.pressure_var = tk.StringVar()
        self.medium_var = tk.StringVar(value=self.model.medium)
        self.temperature_error_var = tk.StringVar()
        self.pressure_error_var = tk.StringVar()
        self.current_var = tk.StringVar(value="-")
        self.average_var = tk.StringVar(value="-")
        self.count_var = tk.StringVar(value="0")
        self.detail_var = tk.StringVar(value="")
        self.notification_var = tk.StringVar(value="")

        self._subscriptions: list[Callable[[], None]] = []

        self._build_ui()
        self._notification_timer = Debouncer(self.root, int(self.settings.get("ui", {}).get("notification_ms", 3000)))
        self._register_bus_handlers()
        self._apply_field_labels(self.model.medium)

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        self.root.title("Enthalpy Estimator")
        self._apply_theme_to_styles()

        form = ttk.LabelFrame(self.root, text="Query", padding=(12, 8))
        form.pack(fill="x", padx=12, pady=(12, 4))

        ttk.Label(form, text="Medium").grid(row=0, column=0, sticky="w")
        medium_box = ttk.Combobox(form, textvariable=self.medium_var, values=("steam", "air"), state="readonly", width=8)
        medium_box.grid(row=0, column=1, sticky="w", pady=(0, 6))
        medium_box.bind("<<ComboboxSelected>>", lambda _e: self.model.set_medium(self.medium_var.get()))

        self.temperature_label = ttk.Label(form)
        self.temperature_label.grid(row=1, column=0, sticky="w")
        temperature_entry = ttk.Entry(form, textvariable=self.temperature_var, width=14)
        temperature_entry.grid(row=1, column=1, sticky="w")
        ttk.Label(form, textvariable=self.temperature_error_var, style="Error.TLabel").grid(row=1, column=2, sticky="w", padx=8)

        self.pressure_label = ttk.Label(form)
        self.pressure_label.grid(row=2, column=0, sticky="w")
        pressure_entry = ttk.Entry(form, textvariable=self.pressure_var, width=14)
        pressure_entry.grid(row=2, column=1, sticky="w")
        ttk.Label(form, textvariable=self.pressure_error_var, style="Error.TLabel").grid(row=2, column=2, sticky="w", padx=8)

        buttons = ttk.Frame(form)
        buttons.grid(row=3, column=0, columnspan=3, sticky="w", pady=(8, 0))
        ttk.Button(buttons, text="Calculate", command=self.submit).pack(side="left", padx=(0, 8))
        ttk.Button(buttons, text="Reset", command=self.reset).pack(side="left", padx=(0, 8))
        ttk.Button(buttons, text="Export…", command=self.export_results).pack(side="left", padx=(0, 8))
        ttk.Button(buttons, text="Toggle theme", command=self._toggle_theme).pack(side="left")

        for entry in (temperature_entry, pressure_entry):
            entry.bind("<Return>", lambda _e: self.submit())

        stats = ttk.LabelFrame(self.root, text="Statistics", padding=(12, 8))
        stats.pack(fill="x", padx=12, pady=4)
        for column, (label, variable) in enumerate(
            (
                ("Current (kJ/kg)", self.current_var),
                ("Average (kJ/kg)", self.average_var),
                ("Data points", self.count_var),
            )
        ):
            ttk.Label(stats, text=label, style="Caption.TLabel").grid(row=0, column=column, sticky="w", padx=(0, 24))
            ttk.Label(stats, textvariable=variable, style="Value.TLabel").grid(row=1, column=column, sticky="w", padx=(0, 24))
        ttk.Label(stats, textvariable=self.detail_var, wraplength=640, justify="left").grid(
            row=2, column=0, columnspan=3, sticky="w", pady=(6, 0)
        )

        chart_frame = ttk.LabelFrame(self.root, text="Enthalpy history", padding=(8, 8))
        chart_frame.pack(fill="both", expand=True, padx=12, pady=4)
        self.chart = ChartCanvas(chart_frame, model=self.model, bus=self.bus, theme=self.theme)
        self.chart.pack(fill="both", expand=True)

        self.notification_label = tk.Label(self.root, textvariable=self.notification_var, anchor="w", padx=12, pady=6)
        self.notification_label.pack(fill="x", padx=12, pady=(4, 12))
        self.notification_label.pack_forget()

    def _apply_theme_to_styles(self) -> None:
        style = ttk.Style()
        style.theme_use("default")
        palette = self.theme.palette
        fonts = self.theme.fonts.as_dict()

        self.root.configure(bg=palette.window_bg)
        style.configure("TFrame", background=palette.window_bg)
        style.configure("TLabelframe", background=palette.window_bg, foreground=palette.text_primary)
        style.configure("TLabelframe.Label", background=palette.window_bg, foreground=palette.text_primary, font=fonts["label"])
        style.configure("TLabel", background=palette.window_bg, foreground=palette.text_primary, font=fonts["value"])
        style.configure("Caption.TLabel", foreground=palette.text_secondary, font=fonts["status"])
        style.configure("Value.TLabel", foreground=palette.value_text, font=fonts["title"])
        style.configure("Error.TLabel", foreground=palette.error_text, font=fonts["status"])
        style.configure("TButton", font=fonts["value"])

    def _apply_field_labels(self, medium: str) -> None:
        temperature_label, pressure_label = FIELD_LABELS.get(medium, FIELD_LABELS["steam"])
        self.temperature_label.configure(text=temperature_label)
        self.pressure_label.configure(text=pressure_label)

    # ------------------------------------------------------------------
    # Event bus hooks
    # ------------------------------------------------------------------
    def _register_bus_handlers(self) -> None:
        self._subscriptions.append(self.bus.subscribe(ESTIMATE_RECORDED, self._on_estimate_recorded))
        self._subscriptions.append(self.bus.subscribe(ESTIMATE_REJECTED, self._on_estimate_rejected))
        self._subscriptions.append(self.bus.subscribe(STATS_CHANGED, self._on_stats_changed))
        self._subscriptions.append(self.bus.subscribe(HISTORY_RESET, self._on_history_reset))
        self._subscriptions.append(self.bus.subscribe(NOTIFY, self._on_notify))
        self._subscriptions.append(self.bus.subscribe(MEDIUM_CHANGED, self._on_medium_changed))

    def _on_estimate_recorded(self, submission: Submission, **_: Any) -> None:
        self._show_field_errors(FieldErrors())
        estimate = submission.estimate
        if estimate is None:
            return
        detail = f"Method: {estimate.method.value}, pressure used: {estimate.pressure_used:g}"
        if estimate.bracket is not None:
            bracket = estimate.bracket
            detail += f", between {bracket.t1:g} and {bracket.t2:g} ({bracket.h1:.1f}–{bracket.h2:.1f} kJ/kg)"
        self.detail_var.set(detail)

    def _on_estimate_rejected(self, errors: FieldErrors, **_: Any) -> None:
        self._show_field_errors(errors)

    def _on_stats_changed(self, stats: HistoryStats, **_: Any) -> None:
        self.current_var.set("-" if stats.latest is None else f"{stats.latest:.2f}")
        self.average_var.set("-" if stats.average is None else f"{stats.average:.2f}")
        self.count_var.set(str(stats.count))

    def _on_history_reset(self, **_: Any) -> None:
        self.detail_var.set("")

    def _on_medium_changed(self, medium: str, **_: Any) -> None:
        self._apply_field_labels(medium)

    def _on_notify(self, message: str, kind: str = "success", **_: Any) -> None:
        palette = self.theme.palette
        background = {
            "success": palette.success_bg,
            "warning": palette.warning_bg,
            "error": palette.error_bg,
        }.get(kind, palette.success_bg)
        self.notification_var.set(message)
        self.notification_label.configure(bg=background, fg=palette.text_primary)
        self.notification_label.pack(fill="x", padx=12, pady=(4, 12))
        self._notification_timer.schedule(self.notification_label.pack_forget)

    def _show_field_errors(self, errors: FieldErrors) -> None:
        self.temperature_error_var.set(errors.temperature or "")
        self.pressure_error_var.set(errors.pressure or "")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def submit(self) -> None:
        self.model.submit(self.temperature_var.get(), self.pressure_var.get())

    def reset(self) -> None:
        self.temperature_var.set("")
        self.pressure_var.set("")
        self._show_field_errors(FieldErrors())
        self.model.reset_all()

    def _toggle_theme(self) -> None:
        self.theme = toggle_theme(self.theme)
        self._apply_theme_to_styles()
        self.chart.apply_theme(self.theme)

    def export_results(self) -> None:
        entries = self.model.entries()
        if not entries:
            messagebox.showinfo("Export", "Calculate at least one enthalpy before exporting.", parent=self.root)
            return
        directory = filedialog.askdirectory(title="Select output directory")
        if not directory:
            return
        output_dir = Path(directory)
        stats = self.model.stats
        try:
            export_history_json(entries, stats, output_dir / "history.json")
            export_history_to_excel(entries, stats, output_dir / "history.xlsx")
            export_history_chart(entries, output_dir / "history.svg")
        except OSError as exc:  # pragma: no cover - GUI feedback path
            logger.exception("Export to %s failed", output_dir)
            messagebox.showerror("Export Error", f"Failed to export history:\n{exc}", parent=self.root)
            return
        self._on_notify(f"History exported to {output_dir}")

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------
    def shutdown(self) -> None:
        self._notification_timer.cancel()
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()


def launch_gui(settings: Mapping[str, Any] | None = None) -> None:
    """Entry point for launching the Tkinter GUI."""

    root = tk.Tk()
    app = EnthalpyGuiApp(root, settings)

    def _on_close() -> None:
        app.shutdown()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", _on_close)
    root.mainloop()


__all__ = ["EnthalpyGuiApp", "launch_gui"]
