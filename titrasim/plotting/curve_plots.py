"""Render the titration curve of a session.

The figure mirrors the simulator display: the curve in blue, the latest
sample as a red point, a dashed red line at the equivalence point once it has
been reached, and a readout of the current pH tinted with the flask colour.
"""

from __future__ import annotations

import os
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from ..analysis import curve_to_arrays
from ..session import TitrationSession
from .style import (
    CURRENT_POINT_COLOR,
    CURVE_COLOR,
    EQUIVALENCE_COLOR,
    STYLE,
    apply_global_style,
    color_for_band,
    format_curve_axes,
    save_figure_bundle,
)


def ph_readout(session: TitrationSession) -> str:
    return (
        f"pH {session.current_ph:.2f}\n"
        f"{session.current_base_volume_ml:.1f} mL added"
    )


def draw_titration_curve(ax: Axes, session: TitrationSession) -> None:
    """Draw the session's curve, current point and equivalence guide on ``ax``."""
    volumes, ph = curve_to_arrays(session.samples)
    format_curve_axes(ax, session.config.max_volume_ml)
    ax.set_title(session.config.regime.description)

    if len(volumes) >= 2:
        ax.plot(volumes, ph, color=CURVE_COLOR, linewidth=STYLE.LINEWIDTH, label="pH")

    last = session.last_sample
    ax.plot(
        [last.base_volume_ml],
        [last.ph],
        marker="o",
        linestyle="none",
        color=CURRENT_POINT_COLOR,
        markersize=STYLE.MARKERSIZE,
    )

    eq_point = session.equivalence_point
    if eq_point is not None:
        ax.axvline(
            eq_point.base_volume_ml,
            color=EQUIVALENCE_COLOR,
            linestyle="--",
            linewidth=STYLE.LINEWIDTH_THIN,
            label=f"Equivalence point ({eq_point.base_volume_ml:.1f} mL)",
        )
        ax.legend(loc="lower right")

    ax.text(
        0.03,
        0.95,
        ph_readout(session),
        transform=ax.transAxes,
        va="top",
        ha="left",
        bbox={"boxstyle": "round", "facecolor": color_for_band(session.color_band)},
    )


def plot_titration_curve(
    session: TitrationSession,
    output_dir: str = "output",
    filename: Optional[str] = None,
) -> str:
    """Save the session's titration curve as a PNG/PDF/SVG bundle.

    Args:
        session: Session to plot.
        output_dir: Directory for the figure bundle.
        filename: PNG filename; defaults to ``<regime>_curve.png``.

    Returns:
        str: Path of the PNG file.
    """
    apply_global_style()
    os.makedirs(output_dir, exist_ok=True)
    name = filename or f"{session.config.regime.value}_curve.png"

    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    try:
        draw_titration_curve(ax, session)
        path = save_figure_bundle(fig, os.path.join(output_dir, name))
    finally:
        plt.close(fig)
    return path
