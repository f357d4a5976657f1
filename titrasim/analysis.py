"""
Analysis of a simulated titration curve.

The same questions asked of a measured curve can be asked of a simulated
one, which lets the simulator check itself against theory:

- Equivalence volume (V_eq) from the maximum of d(pH)/dV (inflection point).
- Buffer-point pH: at half-equivalence a weak acid gives pH = pKa; for a weak
  base titrated with strong acid the NH3/NH4+ buffer is 1:1 at twice the
  equivalence volume, where pH = 14 - pKb.

Interpolation uses PCHIP (monotone, no overshoot on the steep jump) when at
least three distinct volumes are available, otherwise linear.
"""

from __future__ import annotations

import math
from typing import Dict, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.interpolate import PchipInterpolator

from .chemistry.engine import compute_ph_at_volume
from .chemistry.regimes import KA_ETHANOIC, KB_AMMONIA, ReactionRegime
from .schema import COLUMNS
from .session import CurveSample, TitrationSession


def curve_to_arrays(samples: Sequence[CurveSample]) -> Tuple[np.ndarray, np.ndarray]:
    """Return (volume, pH) arrays for a sequence of curve samples."""
    volumes = np.array([s.base_volume_ml for s in samples], dtype=float)
    ph = np.array([s.ph for s in samples], dtype=float)
    return volumes, ph


def _prepare_xy(x: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    mask = np.isfinite(x) & np.isfinite(y)
    x = x[mask]
    y = y[mask]
    if len(x) == 0:
        return x, y
    order = np.argsort(x, kind="stable")
    x = x[order]
    y = y[order]
    if len(np.unique(x)) < len(x):
        df = pd.DataFrame({"x": x, "y": y}).groupby("x", as_index=False).mean()
        x = df["x"].to_numpy(dtype=float)
        y = df["y"].to_numpy(dtype=float)
    return x, y


def derivative_curve(samples: Sequence[CurveSample]) -> pd.DataFrame:
    """Tabulate the curve with its first derivative d(pH)/dV.

    The gradient is taken on the (possibly uneven) sample volumes; repeated
    volumes are averaged first. Fewer than two distinct volumes give a NaN
    derivative column.
    """
    x, y = _prepare_xy(*curve_to_arrays(samples))
    if len(x) >= 2:
        d = np.gradient(y, x)
    else:
        d = np.full_like(y, np.nan)
    return pd.DataFrame({COLUMNS.volume: x, COLUMNS.ph: y, COLUMNS.derivative: d})


def build_ph_interpolator(samples: Sequence[CurveSample]) -> Dict:
    """Build an interpolator over the curve.

    Returns:
        dict: ``method`` (``"pchip"``, ``"linear"`` or ``None``), ``func``
        (pH at a volume), ``deriv_func`` (d(pH)/dV, pchip only) and the
        ``x_min``/``x_max`` bounds. Queries outside the bounds give NaN.
    """
    x, y = _prepare_xy(*curve_to_arrays(samples))
    if len(x) < 2:
        return {
            "method": None,
            "func": lambda xq: np.full_like(np.asarray(xq, dtype=float), np.nan),
        }

    x_min = float(x[0])
    x_max = float(x[-1])

    def _bounded(fn):
        def wrapped(xq):
            xq_arr = np.atleast_1d(np.asarray(xq, dtype=float))
            yq = np.asarray(fn(xq_arr), dtype=float)
            yq[(xq_arr < x_min) | (xq_arr > x_max)] = np.nan
            return float(yq[0]) if np.ndim(xq) == 0 else yq

        return wrapped

    if len(x) >= 3:
        interp = PchipInterpolator(x, y, extrapolate=False)
        return {
            "method": "pchip",
            "func": _bounded(interp),
            "deriv_func": _bounded(interp.derivative()),
            "x_min": x_min,
            "x_max": x_max,
        }

    return {
        "method": "linear",
        "func": _bounded(lambda xq: np.interp(xq, x, y)),
        "x_min": x_min,
        "x_max": x_max,
    }


def estimate_equivalence_volume(
    samples: Sequence[CurveSample], n_points: int = 2500
) -> Dict:
    """Locate the equivalence point as the steepest part of the curve.

    Args:
        samples: Curve samples in volume order.
        n_points: Size of the dense grid searched for the derivative peak.

    Returns:
        dict: ``eq_volume_ml``, ``eq_ph`` and ``method``
        (``"derivative_dense"`` or ``"derivative_step"``). Volumes are NaN
        when the curve has fewer than two distinct volumes.
    """
    interpolator = build_ph_interpolator(samples)
    if "deriv_func" in interpolator:
        x_dense = np.linspace(interpolator["x_min"], interpolator["x_max"], n_points)
        d_dense = np.asarray(interpolator["deriv_func"](x_dense), dtype=float)
        if np.any(np.isfinite(d_dense)):
            idx = int(np.nanargmax(d_dense))
            eq_x = float(x_dense[idx])
            return {
                "eq_volume_ml": eq_x,
                "eq_ph": float(interpolator["func"](eq_x)),
                "method": "derivative_dense",
            }

    deriv_df = derivative_curve(samples)
    d = deriv_df[COLUMNS.derivative]
    if d.dropna().empty:
        return {"eq_volume_ml": math.nan, "eq_ph": math.nan, "method": None}
    peak = int(d.idxmax())
    return {
        "eq_volume_ml": float(deriv_df.loc[peak, COLUMNS.volume]),
        "eq_ph": float(deriv_df.loc[peak, COLUMNS.ph]),
        "method": "derivative_step",
    }


def half_equivalence_ph(
    samples: Sequence[CurveSample], equivalence_volume_ml: float
) -> float:
    """Interpolate the pH at half the equivalence volume.

    Returns NaN when ``equivalence_volume_ml`` is not finite or half of it
    lies outside the sampled volumes.
    """
    if not np.isfinite(equivalence_volume_ml):
        return math.nan
    x, y = _prepare_xy(*curve_to_arrays(samples))
    v_half = 0.5 * float(equivalence_volume_ml)
    if len(x) == 0 or v_half < x[0] or v_half > x[-1]:
        return math.nan
    return float(np.interp(v_half, x, y))


def _buffer_reference(regime: ReactionRegime, veq: float) -> Tuple[float, float]:
    """Volume at which the buffer is 1:1, and the pH expected there."""
    if regime is ReactionRegime.WEAK_ACID_STRONG_BASE:
        return 0.5 * veq, -math.log10(KA_ETHANOIC)
    if regime is ReactionRegime.STRONG_ACID_WEAK_BASE:
        return 2.0 * veq, 14.0 + math.log10(KB_AMMONIA)
    return math.nan, math.nan


def summarize_session(session: TitrationSession) -> Dict[str, object]:
    """Compare a session's accumulated curve against theory.

    Returns:
        dict: Configuration, theoretical and observed equivalence volume, pH
        at the theoretical equivalence volume, buffer-point check (expected
        vs. interpolated pH) and the final state of the curve.
    """
    cfg = session.config
    samples = session.samples
    veq = session.equivalence_volume_ml
    observed = estimate_equivalence_volume(samples)

    eq_ph = math.nan
    if np.isfinite(veq) and veq <= cfg.max_volume_ml:
        eq_ph = compute_ph_at_volume(
            cfg.regime, cfg.acid_molarity, cfg.base_molarity, cfg.acid_volume_ml, veq
        )

    buffer_volume, expected_buffer_ph = _buffer_reference(cfg.regime, veq)
    buffer_ph = math.nan
    if np.isfinite(buffer_volume):
        interpolator = build_ph_interpolator(samples)
        buffer_ph = float(interpolator["func"](buffer_volume))

    eq_point = session.equivalence_point
    return {
        "regime": cfg.regime.value,
        "reagents": cfg.regime.description,
        "acid_molarity": cfg.acid_molarity,
        "base_molarity": cfg.base_molarity,
        "acid_volume_ml": cfg.acid_volume_ml,
        "max_volume_ml": cfg.max_volume_ml,
        "veq_theoretical_ml": veq,
        "veq_observed_ml": observed["eq_volume_ml"],
        "veq_method": observed["method"],
        "equivalence_reached": eq_point is not None,
        "eq_ph_theoretical": eq_ph,
        "buffer_volume_ml": buffer_volume,
        "buffer_ph_expected": expected_buffer_ph,
        "buffer_ph_observed": buffer_ph,
        "n_samples": len(samples),
        "final_volume_ml": session.current_base_volume_ml,
        "final_ph": session.current_ph,
        "status": session.status.value,
    }
