"""
Titration chemistry engine.

Pure functions mapping a reaction regime and the amounts of acid and base
present to the pH of the mixture, plus the equivalence volume and the
colour band used to tint the flask.

Modules:
    regimes:
        The three supported acid/base pairings, their reagent labels and the
        dissociation constants (Ka of ethanoic acid, Kb of ammonia, Kw).

    engine:
        Closed-form pH equations selected by regime and by the excess
        reagent (pre-equivalence, equivalence, post-equivalence).

    indicator:
        pH to ColorBand classification.

Design Principle:
    This subpackage holds no state and has no dependencies on plotting/ or
    matplotlib, so it can be tested on its own.
"""

from .engine import (
    compute_equivalence_volume,
    compute_ph,
    compute_ph_at_volume,
    theoretical_curve,
)
from .indicator import ColorBand, classify_solution_color
from .regimes import KA_ETHANOIC, KB_AMMONIA, KW, ReactionRegime

__all__ = [
    "ReactionRegime",
    "ColorBand",
    "KA_ETHANOIC",
    "KB_AMMONIA",
    "KW",
    "compute_ph",
    "compute_ph_at_volume",
    "theoretical_curve",
    "compute_equivalence_volume",
    "classify_solution_color",
]
