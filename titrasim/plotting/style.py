"""Centralized plotting style, colours, and save helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.ticker import MultipleLocator

from ..chemistry.indicator import ColorBand

OUTPUT_FORMATS: tuple[str, ...] = ("png", "pdf", "svg")
FIGURE_DPI = 300
_STYLE_STATE = {"initialized": False}

PH_MIN = 0.0
PH_MAX = 14.0
PH_TICK_STEP = 2.0
VOLUME_TICK_STEP = 10.0


@dataclass(frozen=True)
class StyleConfig:
    BASE_FONTSIZE: float = 12.0
    TITLE_FONTSIZE: float = 14.0
    LABEL_FONTSIZE: float = 12.0
    TICK_FONTSIZE: float = 11.0
    LEGEND_FONTSIZE: float = 10.0
    LINEWIDTH: float = 2.0
    LINEWIDTH_THIN: float = 1.2
    MARKERSIZE: float = 8.0
    GRID_ALPHA: float = 0.20
    FIGSIZE_SINGLE: tuple[float, float] = (7.0, 4.2)


STYLE = StyleConfig()

# Flask tint per pH band: red for acid, purple near neutral, blue for base.
COLOR_BAND_HEX: dict[ColorBand, str] = {
    ColorBand.STRONG_ACID: "#ff7f7f",
    ColorBand.WEAK_ACID: "#ffb997",
    ColorBand.NEUTRAL: "#da70d6",
    ColorBand.WEAK_BASE: "#a1caf1",
    ColorBand.STRONG_BASE: "#7fb3ff",
}

CURVE_COLOR = "blue"
CURRENT_POINT_COLOR = "red"
EQUIVALENCE_COLOR = "red"

LABEL_VOLUME = "Volume of Base Added (mL)"
LABEL_PH = "pH"


def apply_global_style() -> None:
    """Apply global Matplotlib style once per process."""
    if _STYLE_STATE["initialized"]:
        return
    plt.rcParams.update(
        {
            "font.size": STYLE.BASE_FONTSIZE,
            "axes.titlesize": STYLE.TITLE_FONTSIZE,
            "axes.labelsize": STYLE.LABEL_FONTSIZE,
            "xtick.labelsize": STYLE.TICK_FONTSIZE,
            "ytick.labelsize": STYLE.TICK_FONTSIZE,
            "legend.fontsize": STYLE.LEGEND_FONTSIZE,
            "axes.linewidth": STYLE.LINEWIDTH_THIN,
            "axes.spines.top": False,
            "axes.spines.right": False,
            "legend.frameon": False,
            "lines.linewidth": STYLE.LINEWIDTH,
            "savefig.dpi": FIGURE_DPI,
            "savefig.bbox": "tight",
        }
    )
    _STYLE_STATE["initialized"] = True


def color_for_band(band: ColorBand) -> str:
    return COLOR_BAND_HEX[band]


def format_curve_axes(ax: Axes, max_volume_ml: float) -> None:
    """Fix the axes to 0..max mL and pH 0..14 with the simulator's tick spacing."""
    ax.set_xlim(0.0, max_volume_ml)
    ax.set_ylim(PH_MIN, PH_MAX)
    ax.xaxis.set_major_locator(MultipleLocator(VOLUME_TICK_STEP))
    ax.yaxis.set_major_locator(MultipleLocator(PH_TICK_STEP))
    ax.set_xlabel(LABEL_VOLUME)
    ax.set_ylabel(LABEL_PH)
    ax.grid(True, axis="both", alpha=STYLE.GRID_ALPHA, linestyle=":", linewidth=0.7)


def save_figure(
    fig: Figure,
    savepath_base: str | Path,
    formats: Sequence[str] = OUTPUT_FORMATS,
    dpi: int = FIGURE_DPI,
) -> Path:
    """Save a figure to multiple formats using one extensionless base path."""
    base = Path(savepath_base)
    base.parent.mkdir(parents=True, exist_ok=True)
    for ext in formats:
        target = base.with_suffix(f".{ext}")
        fig.savefig(str(target), dpi=dpi if ext == "png" else None)
    return base.with_suffix(".png")


def save_figure_bundle(fig: Figure, png_path: str) -> str:
    """Save synchronized PNG, PDF, and SVG files for a figure."""
    base = Path(os.path.splitext(png_path)[0])
    return str(save_figure(fig, base))
