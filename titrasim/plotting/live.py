"""Live titration curve that follows a running session."""

from __future__ import annotations

import math
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from ..session import StepResult, TitrationSession
from .curve_plots import ph_readout
from .style import (
    CURRENT_POINT_COLOR,
    CURVE_COLOR,
    EQUIVALENCE_COLOR,
    STYLE,
    apply_global_style,
    color_for_band,
    format_curve_axes,
)


class LiveCurvePlot:
    """Redraw a titration curve from session events.

    Subscribes to step and reset events of ``session``. Each step extends the
    curve and moves the current-point marker; the equivalence guide appears on
    the step that reaches it. A reset clears the figure.

    Args:
        session: Session to follow.
        ax: Axes to draw on; a new figure is created when omitted.
    """

    def __init__(self, session: TitrationSession, ax: Optional[Axes] = None) -> None:
        apply_global_style()
        self.session = session
        self._owns_figure = ax is None
        if ax is None:
            fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
        self.ax = ax
        self.figure = ax.figure

        self.line = ax.plot([], [], color=CURVE_COLOR, linewidth=STYLE.LINEWIDTH)[0]
        self.marker = ax.plot(
            [], [], marker="o", linestyle="none", color=CURRENT_POINT_COLOR,
            markersize=STYLE.MARKERSIZE,
        )[0]
        self.guide = ax.axvline(
            0.0, color=EQUIVALENCE_COLOR, linestyle="--", linewidth=STYLE.LINEWIDTH_THIN
        )
        self.readout = ax.text(
            0.03, 0.95, "", transform=ax.transAxes, va="top", ha="left",
            bbox={"boxstyle": "round", "facecolor": "white"},
        )
        self.volumes: list[float] = []
        self.ph: list[float] = []

        self._detach = [
            session.add_listener(self.on_step),
            session.add_reset_listener(self.on_reset),
        ]
        self.on_reset(session)

    def on_reset(self, session: TitrationSession) -> None:
        format_curve_axes(self.ax, session.config.max_volume_ml)
        self.ax.set_title(session.config.regime.description)
        self.volumes = [s.base_volume_ml for s in session.samples]
        self.ph = [s.ph for s in session.samples]
        self.guide.set_visible(False)
        self._redraw()

    def on_step(self, result: StepResult) -> None:
        sample = result.sample
        self.volumes.append(sample.base_volume_ml)
        self.ph.append(sample.ph)
        if result.reached_equivalence:
            veq = self.session.equivalence_point.base_volume_ml
            self.guide.set_xdata([veq, veq])
            self.guide.set_visible(True)
        self._redraw()

    def _redraw(self) -> None:
        self.line.set_data(self.volumes, self.ph)
        if self.volumes and math.isfinite(self.ph[-1]):
            self.marker.set_data([self.volumes[-1]], [self.ph[-1]])
        self.readout.set_text(ph_readout(self.session))
        self.readout.get_bbox_patch().set_facecolor(color_for_band(self.session.color_band))
        self.figure.canvas.draw_idle()

    def close(self) -> None:
        """Stop following the session and release an owned figure."""
        for detach in self._detach:
            detach()
        self._detach = []
        if self._owns_figure:
            plt.close(self.figure)
