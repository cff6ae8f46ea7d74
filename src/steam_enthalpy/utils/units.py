"""Unit registry backed by Pint."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pint import Quantity, UnitRegistry

# Aliases used on the command line and in settings files.
UNIT_ALIASES: dict[str, str] = {
    "kgf_cm2": "technical_atmosphere",
    "kgf/cm2": "technical_atmosphere",
    "kg/cm2": "technical_atmosphere",
    "C": "degC",
    "K": "kelvin",
    "Pa": "pascal",
    "kPa": "kilopascal",
    "MPa": "megapascal",
}


def canonical_unit(unit: str) -> str:
    normalized = unit.strip()
    return UNIT_ALIASES.get(normalized, normalized)


@lru_cache(maxsize=1)
def _build_registry() -> UnitRegistry:
    return UnitRegistry(autoconvert_offset_to_baseunit=True)


ureg = _build_registry()
Q_ = ureg.Quantity


def ensure_quantity(value: Any, unit: str) -> Quantity:
    """Return *value* as a quantity expressed in *unit*."""

    target = canonical_unit(unit)
    if isinstance(value, Quantity):
        return value.to(target)
    return Q_(float(value), target)


def magnitude(value: Any, unit: str) -> float:
    """Return the float magnitude of *value* expressed in *unit*."""

    return float(ensure_quantity(value, unit).magnitude)


__all__ = ["ureg", "Q_", "canonical_unit", "ensure_quantity", "magnitude"]
