"""Dry-air enthalpy from a temperature-dependent heat capacity."""

from __future__ import annotations

from .estimator import Estimate, Method, validate_positive

CP_A = 1003.5
CP_B = 0.1
CP_C = -0.00002


def dry_air_cp(temperature_k: float) -> float:
    """Return cp of dry air in J/(kg·K) at *temperature_k*."""

    return CP_A + CP_B * temperature_k + CP_C * temperature_k * temperature_k


def dry_air_enthalpy(temperature_k: float) -> float:
    """Return dry-air enthalpy in J/kg, referenced to 0 K."""

    return dry_air_cp(temperature_k) * temperature_k


class AirCorrelationEstimator:
    """Estimator for dry air; pressure is carried through but does not enter the correlation."""

    medium = "air"

    def estimate(self, temperature: float, pressure: float) -> Estimate:
        temperature_k = validate_positive("temperature", temperature)
        pressure_pa = validate_positive("pressure", pressure)
        return Estimate(
            enthalpy=dry_air_enthalpy(temperature_k) / 1000.0,
            temperature=temperature_k,
            pressure_requested=pressure_pa,
            pressure_used=pressure_pa,
            method=Method.CORRELATION,
            medium=self.medium,
        )


__all__ = ["AirCorrelationEstimator", "dry_air_cp", "dry_air_enthalpy"]
