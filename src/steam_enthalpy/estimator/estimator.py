"""Nearest-pressure, piecewise-linear enthalpy estimation over the steam table."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from numbers import Complex, Number, Real
from typing import Any, Dict, NamedTuple, Sequence

from ..errors import EnthalpyError, InvalidInputError, OutOfRangeError
from ..table.steam_table import ReferenceTable, default_table

logger = logging.getLogger(__name__)


class Method(str, Enum):
    EXACT = "exact"
    INTERPOLATED = "interpolated"
    CORRELATION = "correlation"


@dataclass(frozen=True)
class InterpolationData:
    """Bracketing samples used for a linear interpolation."""

    t1: float
    t2: float
    h1: float
    h2: float

    def as_dict(self) -> Dict[str, float]:
        return {"t1": self.t1, "t2": self.t2, "h1": self.h1, "h2": self.h2}


@dataclass(frozen=True)
class Estimate:
    """Result of one estimation: enthalpy in kJ/kg plus provenance."""

    enthalpy: float
    temperature: float
    pressure_requested: float
    pressure_used: float
    method: Method
    bracket: InterpolationData | None = None
    medium: str = "steam"

    @property
    def used_nearest_pressure(self) -> bool:
        return self.pressure_used != self.pressure_requested

    def as_dict(self) -> Dict[str, Any]:
        return {
            "enthalpy_kJ_per_kg": self.enthalpy,
            "temperature": self.temperature,
            "pressure_requested": self.pressure_requested,
            "pressure_used": self.pressure_used,
            "method": self.method.value,
            "bracket": self.bracket.as_dict() if self.bracket else None,
            "medium": self.medium,
        }


class EstimateOutcome(NamedTuple):
    """Structured result for callers that do not want exceptions."""

    estimate: Estimate | None
    error: EnthalpyError | None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_positive(field: str, value: Any) -> float:
    """Return *value* as float, rejecting non-numeric, non-finite and non-positive input."""

    if isinstance(value, bool) or not isinstance(value, (Number, str)):
        raise InvalidInputError(field, value, "must be a number")
    if isinstance(value, Complex) and not isinstance(value, Real):
        raise InvalidInputError(field, value, "must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(field, value, "must be a number") from None
    if math.isnan(number) or math.isinf(number):
        raise InvalidInputError(field, value, "must be finite")
    if number <= 0:
        raise InvalidInputError(field, value, "must be greater than zero")
    return number


def select_pressure_level(levels: Sequence[float], pressure: float) -> float:
    """Return the level closest to *pressure*; the first declared level wins ties."""

    if not levels:
        raise ValueError("No pressure levels available")
    best = levels[0]
    best_diff = abs(best - pressure)
    for level in levels[1:]:
        diff = abs(level - pressure)
        if diff < best_diff:
            best, best_diff = level, diff
    return best


def find_bracket_index(temperatures: Sequence[float], temperature: float) -> int:
    """Return the index of the lower bracketing sample for *temperature*."""

    index = 0
    last = len(temperatures) - 1
    while index < last and temperatures[index + 1] <= temperature:
        index += 1
    return index


def interpolate(temperature: float, t1: float, t2: float, h1: float, h2: float) -> float:
    if t1 == t2:
        return h1
    return h1 + ((temperature - t1) / (t2 - t1)) * (h2 - h1)


class SteamTableEstimator:
    """Stateless estimator bound to one reference table."""

    def __init__(self, table: ReferenceTable | None = None) -> None:
        self.table = table if table is not None else default_table()

    def estimate(self, temperature: float, pressure: float) -> Estimate:
        temperature_c = validate_positive("temperature", temperature)
        pressure_requested = validate_positive("pressure", pressure)

        pressure_used = select_pressure_level(self.table.levels, pressure_requested)
        curve = self.table.curve(pressure_used)
        if temperature_c < curve.t_min or temperature_c > curve.t_max:
            raise OutOfRangeError(temperature_c, pressure_used, curve.t_min, curve.t_max)

        index = find_bracket_index(curve.temperatures, temperature_c)
        if curve.temperatures[index] == temperature_c:
            return Estimate(
                enthalpy=curve.enthalpies[index],
                temperature=temperature_c,
                pressure_requested=pressure_requested,
                pressure_used=pressure_used,
                method=Method.EXACT,
            )

        bracket = InterpolationData(
            t1=curve.temperatures[index],
            t2=curve.temperatures[index + 1],
            h1=curve.enthalpies[index],
            h2=curve.enthalpies[index + 1],
        )
        enthalpy = interpolate(temperature_c, bracket.t1, bracket.t2, bracket.h1, bracket.h2)
        logger.debug(
            "Interpolated %.2f kJ/kg at %g °C between %g and %g °C (%g kg/cm²G)",
            enthalpy,
            temperature_c,
            bracket.t1,
            bracket.t2,
            pressure_used,
        )
        return Estimate(
            enthalpy=enthalpy,
            temperature=temperature_c,
            pressure_requested=pressure_requested,
            pressure_used=pressure_used,
            method=Method.INTERPOLATED,
            bracket=bracket,
        )


def estimate_enthalpy(temperature: float, pressure: float, table: ReferenceTable | None = None) -> Estimate:
    """Estimate steam enthalpy (kJ/kg) at *temperature* °C and *pressure* kg/cm²G."""

    return SteamTableEstimator(table).estimate(temperature, pressure)


def try_estimate(temperature: float, pressure: float, table: ReferenceTable | None = None) -> EstimateOutcome:
    """Like :func:`estimate_enthalpy` but returns the error instead of raising it."""

    try:
        return EstimateOutcome(estimate_enthalpy(temperature, pressure, table), None)
    except (OutOfRangeError, InvalidInputError) as exc:
        return EstimateOutcome(None, exc)


__all__ = [
    "Estimate",
    "EstimateOutcome",
    "InterpolationData",
    "Method",
    "SteamTableEstimator",
    "estimate_enthalpy",
    "find_bracket_index",
    "interpolate",
    "select_pressure_level",
    "try_estimate",
    "validate_positive",
]
