"""Unit, property and message helpers."""
