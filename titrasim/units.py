"""Centralized unit conversion utilities."""

from __future__ import annotations

ML_PER_L: float = 1000.0


def ml_to_l(volume_ml: float) -> float:
    """Convert a volume from mL to L.

    Args:
        volume_ml (float): Volume in millilitres (numerically equal to cm^3).

    Returns:
        float: Volume in litres (numerically equal to dm^3).
    """
    return float(volume_ml) / ML_PER_L


def moles_from_volume(molarity: float, volume_ml: float) -> float:
    """Return the amount of solute delivered by ``volume_ml`` of solution.

    Args:
        molarity (float): Concentration in mol/L.
        volume_ml (float): Delivered volume in mL.

    Returns:
        float: Amount of substance in mol, ``molarity * volume_ml / 1000``.
    """
    return float(molarity) * ml_to_l(volume_ml)
