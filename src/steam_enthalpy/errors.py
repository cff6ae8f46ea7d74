"""Error taxonomy for the enthalpy estimation core."""

from __future__ import annotations

from typing import Any


class EnthalpyError(ValueError):
    """Base class for every recoverable estimation error."""


class TableError(EnthalpyError):
    """Raised when a reference table is malformed at construction time."""


class InvalidInputError(EnthalpyError):
    """Raised when a query value is non-numeric, non-finite or non-positive."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class OutOfRangeError(EnthalpyError):
    """Raised when the query temperature lies outside the selected curve."""

    def __init__(self, temperature: float, pressure_used: float, t_min: float, t_max: float) -> None:
        self.temperature = temperature
        self.pressure_used = pressure_used
        self.t_min = t_min
        self.t_max = t_max
        self.side = "below" if temperature < t_min else "above"
        self.bound = t_min if self.side == "below" else t_max
        super().__init__(
            f"Temperature {temperature:g} °C is out of range for {pressure_used:g} kg/cm²G "
            f"(valid {t_min:g}–{t_max:g} °C)"
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "error": "out_of_range",
            "temperature": self.temperature,
            "pressure_used": self.pressure_used,
            "t_min": self.t_min,
            "t_max": self.t_max,
            "bound": self.bound,
            "side": self.side,
        }


__all__ = ["EnthalpyError", "TableError", "InvalidInputError", "OutOfRangeError"]
