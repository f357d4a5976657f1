"""Map pH onto the discrete colour bands shown for the titration flask.

The band is a presentation hint only. Renderers translate it to an actual
colour; the chemistry layer never deals in hex codes.
"""

from __future__ import annotations

import math
from enum import Enum

from ..errors import DomainError


class ColorBand(Enum):
    STRONG_ACID = "strong-acid"
    WEAK_ACID = "weak-acid"
    NEUTRAL = "neutral"
    WEAK_BASE = "weak-base"
    STRONG_BASE = "strong-base"


def classify_solution_color(ph: float) -> ColorBand:
    """Return the colour band for a pH value.

    Bands: ``pH < 4`` strong acid, ``4 <= pH < 6`` weak acid,
    ``6 <= pH <= 8`` neutral, ``8 < pH < 11`` weak base, ``pH >= 11``
    strong base.

    Raises:
        DomainError: If ``ph`` is not finite.
    """
    ph = float(ph)
    if not math.isfinite(ph):
        raise DomainError(f"Cannot classify non-finite pH {ph!r}.")
    if ph < 4.0:
        return ColorBand.STRONG_ACID
    if ph < 6.0:
        return ColorBand.WEAK_ACID
    if ph <= 8.0:
        return ColorBand.NEUTRAL
    if ph < 11.0:
        return ColorBand.WEAK_BASE
    return ColorBand.STRONG_BASE
