"""
Plotting for simulated titration curves.

A presentation collaborator of the session: plotting code receives samples,
status and ColorBand values and renders them. It performs no chemistry.

Modules:
    curve_plots:
        Static curve figure saved as a PNG/PDF/SVG bundle.

    live:
        LiveCurvePlot, a session listener that extends the curve on every
        step and shows the equivalence line once it is reached.

    style:
        rcParams, axis limits/ticks and the ColorBand to hex palette.
"""

from .curve_plots import draw_titration_curve, plot_titration_curve
from .live import LiveCurvePlot
from .style import COLOR_BAND_HEX, color_for_band

__all__ = [
    "plot_titration_curve",
    "draw_titration_curve",
    "LiveCurvePlot",
    "COLOR_BAND_HEX",
    "color_for_band",
]
