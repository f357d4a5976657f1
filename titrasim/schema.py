"""Define standardized column names for exported curve tables."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CurveColumns:
    """Container for standardized column labels.

    Attributes:
        volume: Cumulative volume of titrant (base) added, in mL. Values are
            non-decreasing down the table because samples are appended in
            volume order.
        ph: Computed pH of the flask after that volume was added.
        band: ColorBand value used to tint the flask (``strong-acid`` ...
            ``strong-base``).
        derivative: First derivative d(pH)/dV in mL^-1, used to locate the
            equivalence point on a simulated curve.
    """

    volume: str = "Volume of base added (mL)"
    ph: str = "pH"
    band: str = "Colour band"
    derivative: str = "dpH/dV"


COLUMNS = CurveColumns()
