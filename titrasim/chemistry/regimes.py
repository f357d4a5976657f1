"""Reaction regimes supported by the simulator and their constants.

Each regime pairs one acid with one base at 1:1 stoichiometry:

    strong acid / strong base:  HCl + NaOH -> NaCl + H2O
    weak acid / strong base:    CH3COOH + NaOH -> CH3COONa + H2O
    strong acid / weak base:    HCl + NH3 -> NH4Cl

Dissociation constants are the 25 °C textbook values used throughout the
simulator; temperature and activity corrections are intentionally absent.
"""

from __future__ import annotations

from enum import Enum

KA_ETHANOIC: float = 1.8e-5
KB_AMMONIA: float = 1.8e-5
KW: float = 1.0e-14


class ReactionRegime(Enum):
    """Acid/base pairing that selects the pH equations."""

    STRONG_ACID_STRONG_BASE = "strong-acid-strong-base"
    WEAK_ACID_STRONG_BASE = "weak-acid-strong-base"
    STRONG_ACID_WEAK_BASE = "strong-acid-weak-base"

    @property
    def acid_label(self) -> str:
        return _LABELS[self][0]

    @property
    def base_label(self) -> str:
        return _LABELS[self][1]

    @property
    def description(self) -> str:
        """Human-readable reagent pairing, e.g. ``HCl (strong acid) + NaOH (strong base)``."""
        return f"{self.acid_label} + {self.base_label}"

    @classmethod
    def parse(cls, value: "str | ReactionRegime") -> "ReactionRegime":
        """Resolve a regime from its value, its member name or a camelCase key.

        Accepted spellings for one regime include ``"weak-acid-strong-base"``,
        ``"WEAK_ACID_STRONG_BASE"`` and ``"weakAcidStrongBase"``.

        Raises:
            ValueError: If ``value`` names no known regime.
        """
        if isinstance(value, cls):
            return value
        key = "".join(ch for ch in str(value).lower() if ch.isalnum())
        for regime in cls:
            if key == regime.value.replace("-", ""):
                return regime
        choices = ", ".join(r.value for r in cls)
        raise ValueError(f"Unknown reaction regime {value!r}; expected one of: {choices}")


_LABELS = {
    ReactionRegime.STRONG_ACID_STRONG_BASE: ("HCl (strong acid)", "NaOH (strong base)"),
    ReactionRegime.WEAK_ACID_STRONG_BASE: ("CH3COOH (weak acid)", "NaOH (strong base)"),
    ReactionRegime.STRONG_ACID_WEAK_BASE: ("HCl (strong acid)", "NH3 (weak base)"),
}
