"""Validation helpers shared across buffer services."""

from __future__ import annotations


def clamp_fraction(value: float) -> float:
    if value != value:  # NaN
        return 0.0
    return min(max(value, 0.0), 1.0)
