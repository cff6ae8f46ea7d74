"""Enthalpy estimators: steam table interpolation and dry-air correlation."""
