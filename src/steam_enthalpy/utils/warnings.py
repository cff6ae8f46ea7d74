"""Notice and warning message catalogue shown to users."""

from __future__ import annotations

from typing import Final

WARNING_MESSAGES: Final[dict[str, str]] = {
    "PRESSURE_NEAREST_USED": "Pressure not tabulated, nearest available level used",
    "TEMPERATURE_OUT_OF_RANGE": "Temperature outside the tabulated range",
    "INVALID_INPUT": "Fix input errors",
    "HISTORY_RESET": "Form and data reset",
    "REFERENCE_UNAVAILABLE": "IAPWS-IF97 reference could not be evaluated",
}


def format_warning(code: str, detail: str | None = None) -> str:
    """Return a formatted warning string with catalogue lookup."""

    base = WARNING_MESSAGES.get(code, code)
    if detail:
        return f"[{code}] {base}: {detail}"
    return f"[{code}] {base}"


__all__ = ["format_warning", "WARNING_MESSAGES"]
