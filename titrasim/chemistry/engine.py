"""Closed-form pH equations for 1:1 acid-base titrations.

The engine is stateless: given the moles of acid and base present and the
total solution volume it returns the pH, selecting the equation by reaction
regime and by which reagent is in excess.

Regions of a titration curve:
    Before equivalence the acid is in excess. For a strong acid the pH is set
    by the leftover H+; for a weak acid the solution is a buffer and the
    Henderson-Hasselbalch equation applies:

        pH = pKa + log10(n(A-) / n(HA))

    Volumes cancel in the ratio, so moles are used directly.

    At equivalence the acid and base moles are equal. Strong/strong gives
    pH 7; otherwise the conjugate species hydrolyses:

        acetate:   [OH-] = sqrt(Kw * [A-] / Ka)
        ammonium:  [H+]  = sqrt(Kw * [BH+] / Kb)

    After equivalence the base is in excess. A strong base sets [OH-]
    directly; a weak base forms an NH3/NH4+ buffer with
    [OH-] = Kb * [B] / [BH+].

Moles are compared with a relative tolerance because a stepped titration
rarely lands exactly on the equivalence volume.
"""

from __future__ import annotations

import math
import warnings
from typing import Callable, Dict, Sequence

import numpy as np

from ..errors import DomainError, InvalidArgument
from ..units import ml_to_l, moles_from_volume
from .regimes import KA_ETHANOIC, KB_AMMONIA, KW, ReactionRegime

MOLE_TOLERANCE: float = 1e-9
NEUTRAL_PH: float = 7.0


def _neg_log10(value: float, label: str) -> float:
    if not math.isfinite(value) or value <= 0:
        raise DomainError(f"Cannot take -log10 of {label} = {value!r}.")
    return -math.log10(value)


def _ratio(numerator: float, denominator: float, label: str) -> float:
    if not math.isfinite(denominator) or denominator <= 0:
        raise DomainError(f"{label} has a non-positive denominator ({denominator!r}).")
    return numerator / denominator


def _excess_acid_ph(acid_moles: float, base_moles: float, volume_l: float) -> float:
    c_h = (acid_moles - base_moles) / volume_l
    return _neg_log10(c_h, "[H+] from excess strong acid")


def _excess_strong_base_ph(acid_moles: float, base_moles: float, volume_l: float) -> float:
    c_oh = (base_moles - acid_moles) / volume_l
    return _neg_log10(_ratio(KW, c_oh, "[H+] = Kw/[OH-]"), "[H+] from excess strong base")


def _strong_acid_strong_base(n_acid: float, n_base: float, volume_l: float, equal: bool) -> float:
    if equal:
        return NEUTRAL_PH
    if n_acid > n_base:
        return _excess_acid_ph(n_acid, n_base, volume_l)
    return _excess_strong_base_ph(n_acid, n_base, volume_l)


def _weak_acid_strong_base(n_acid: float, n_base: float, volume_l: float, equal: bool) -> float:
    if equal:
        c_a = n_acid / volume_l
        c_oh = math.sqrt(KW * c_a / KA_ETHANOIC)
        return _neg_log10(_ratio(KW, c_oh, "[H+] = Kw/[OH-]"), "[H+] at acetate equivalence")
    if n_acid > n_base:
        if n_base > 0:
            ratio = _ratio(n_base, n_acid - n_base, "[A-]/[HA]")
            return -math.log10(KA_ETHANOIC) - _neg_log10(ratio, "[A-]/[HA]")
        c_ha = n_acid / volume_l
        return _neg_log10(math.sqrt(KA_ETHANOIC * c_ha), "[H+] of weak acid")
    return _excess_strong_base_ph(n_acid, n_base, volume_l)


def _strong_acid_weak_base(n_acid: float, n_base: float, volume_l: float, equal: bool) -> float:
    if equal:
        c_bh = n_acid / volume_l
        return _neg_log10(math.sqrt(KW * c_bh / KB_AMMONIA), "[H+] at ammonium equivalence")
    if n_acid > n_base:
        return _excess_acid_ph(n_acid, n_base, volume_l)
    c_b = (n_base - n_acid) / volume_l
    c_bh = n_acid / volume_l
    c_oh = KB_AMMONIA * _ratio(c_b, c_bh, "[B]/[BH+]")
    return _neg_log10(_ratio(KW, c_oh, "[H+] = Kw/[OH-]"), "[H+] of ammonia buffer")


_PH_HANDLERS: Dict[ReactionRegime, Callable[[float, float, float, bool], float]] = {
    ReactionRegime.STRONG_ACID_STRONG_BASE: _strong_acid_strong_base,
    ReactionRegime.WEAK_ACID_STRONG_BASE: _weak_acid_strong_base,
    ReactionRegime.STRONG_ACID_WEAK_BASE: _strong_acid_weak_base,
}

_missing = set(ReactionRegime) - set(_PH_HANDLERS)
if _missing:
    raise RuntimeError(f"No pH equations registered for: {sorted(r.name for r in _missing)}")


def compute_ph(
    regime: ReactionRegime,
    acid_moles: float,
    base_moles: float,
    total_volume_l: float,
) -> float:
    """Compute the pH of a titration mixture.

    Args:
        regime (ReactionRegime): Acid/base pairing.
        acid_moles (float): Moles of acid initially charged (>= 0).
        base_moles (float): Moles of base added so far (>= 0).
        total_volume_l (float): Total solution volume in L (> 0).

    Returns:
        float: pH of the mixture. Exactly 7.0 at strong/strong equivalence.

    Raises:
        InvalidArgument: If moles are negative or the volume is not positive.
        DomainError: If an intermediate concentration is non-positive, e.g.
            an ammonia buffer with no acid charged.

    Note:
        Results outside (0, 14) are returned unchanged with a ``UserWarning``;
        they only occur for concentrations well beyond the classroom range.
    """
    if not isinstance(regime, ReactionRegime):
        raise TypeError(f"regime must be a ReactionRegime, got {type(regime).__name__}")
    n_acid = float(acid_moles)
    n_base = float(base_moles)
    volume_l = float(total_volume_l)
    if not (math.isfinite(n_acid) and math.isfinite(n_base)) or n_acid < 0 or n_base < 0:
        raise InvalidArgument(
            f"Moles must be finite and non-negative (acid={n_acid!r}, base={n_base!r})."
        )
    if not math.isfinite(volume_l) or volume_l <= 0:
        raise InvalidArgument(f"Total volume must be positive, got {volume_l!r} L.")

    equal = math.isclose(n_acid, n_base, rel_tol=MOLE_TOLERANCE)
    ph = _PH_HANDLERS[regime](n_acid, n_base, volume_l, equal)

    if not 0.0 < ph < 14.0:
        warnings.warn(
            f"Computed pH ({ph:.2f}) lies outside 0-14; the dilute-solution "
            f"approximations are not reliable at these concentrations.",
            UserWarning,
            stacklevel=2,
        )
    return ph


def compute_ph_at_volume(
    regime: ReactionRegime,
    acid_molarity: float,
    base_molarity: float,
    acid_volume_ml: float,
    base_volume_ml: float,
) -> float:
    """Compute pH after ``base_volume_ml`` of titrant has been added."""
    acid_moles = moles_from_volume(acid_molarity, acid_volume_ml)
    base_moles = moles_from_volume(base_molarity, base_volume_ml)
    total_volume_l = ml_to_l(acid_volume_ml + base_volume_ml)
    return compute_ph(regime, acid_moles, base_moles, total_volume_l)


def theoretical_curve(
    regime: ReactionRegime,
    acid_molarity: float,
    base_molarity: float,
    acid_volume_ml: float,
    volumes_ml: Sequence[float],
) -> np.ndarray:
    """Evaluate the pH over an array of added base volumes.

    Returns:
        numpy.ndarray: pH values aligned with ``volumes_ml``.
    """
    volumes = np.asarray(volumes_ml, dtype=float)
    return np.array(
        [
            compute_ph_at_volume(regime, acid_molarity, base_molarity, acid_volume_ml, v)
            for v in volumes
        ],
        dtype=float,
    )


def compute_equivalence_volume(
    acid_volume_ml: float, acid_molarity: float, base_molarity: float
) -> float:
    """Return the base volume (mL) that neutralises the acid charge.

    ``V_eq = V_acid * c_acid / c_base`` for 1:1 stoichiometry.

    Returns:
        float: Equivalence volume in mL, or NaN when ``base_molarity`` is not
        positive or any input is non-finite.
    """
    values = (float(acid_volume_ml), float(acid_molarity), float(base_molarity))
    if not all(math.isfinite(v) for v in values) or values[2] <= 0:
        return math.nan
    return values[0] * values[1] / values[2]
