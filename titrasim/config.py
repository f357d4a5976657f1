"""Session configuration and simulator defaults."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .chemistry.regimes import ReactionRegime
from .errors import InvalidConfiguration

DEFAULT_MOLARITY: float = 0.1
DEFAULT_ACID_VOLUME_ML: float = 25.0
DEFAULT_MAX_VOLUME_ML: float = 50.0

# Time-driven stepping: each tick adds FRAME_INCREMENT_ML * speed.
FRAME_INCREMENT_ML: float = 0.1
DEFAULT_SPEED: float = 10.0

SMALL_DOSE_ML: float = 0.1
LARGE_DOSE_ML: float = 1.0


@dataclass(frozen=True)
class SessionConfig:
    """Inputs that define one titration session.

    Changing any field requires a full session reset.

    Attributes:
        regime: Acid/base pairing selecting the pH equations.
        acid_molarity: Analyte (acid) concentration in mol/L, > 0.
        base_molarity: Titrant (base) concentration in mol/L, > 0.
        acid_volume_ml: Volume of acid in the flask in mL, > 0. Fixed for the
            lifetime of the session.
        max_volume_ml: Burette capacity in mL, > 0. The titration finishes
            when this much base has been added.
    """

    regime: ReactionRegime = ReactionRegime.STRONG_ACID_STRONG_BASE
    acid_molarity: float = DEFAULT_MOLARITY
    base_molarity: float = DEFAULT_MOLARITY
    acid_volume_ml: float = DEFAULT_ACID_VOLUME_ML
    max_volume_ml: float = DEFAULT_MAX_VOLUME_ML

    def validate(self) -> "SessionConfig":
        """Return a normalised copy, or raise if any input is invalid.

        Raises:
            InvalidConfiguration: If the regime is unknown or any
                concentration or volume is non-positive or non-finite.
        """
        try:
            regime = ReactionRegime.parse(self.regime)
        except ValueError as exc:
            raise InvalidConfiguration(str(exc)) from exc

        values = {}
        for name in ("acid_molarity", "base_molarity", "acid_volume_ml", "max_volume_ml"):
            raw = getattr(self, name)
            try:
                value = float(raw)
            except (TypeError, ValueError) as exc:
                raise InvalidConfiguration(f"{name} must be numeric, got {raw!r}") from exc
            if not math.isfinite(value) or value <= 0:
                raise InvalidConfiguration(f"{name} must be positive and finite, got {raw!r}")
            values[name] = value

        return replace(self, regime=regime, **values)
