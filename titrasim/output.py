"""Write simulated curves and run summaries to CSV files.

This module is the boundary between the in-memory session and tabular
artifacts that can be opened in a spreadsheet or re-plotted.
"""

from __future__ import annotations

import logging
import os
from typing import Sequence, Tuple

import pandas as pd

from .analysis import summarize_session
from .schema import COLUMNS
from .session import CurveSample, TitrationSession

logger = logging.getLogger(__name__)

CURVE_FILENAME = "titration_curve.csv"
SUMMARY_FILENAME = "titration_summary.csv"


def curve_to_dataframe(samples: Sequence[CurveSample]) -> pd.DataFrame:
    """Tabulate curve samples in the order they were recorded.

    Args:
        samples: Samples from :attr:`TitrationSession.samples`.

    Returns:
        pandas.DataFrame: One row per sample with the volume, pH and colour
        band columns defined in :class:`titrasim.schema.CurveColumns`.
    """
    return pd.DataFrame(
        {
            COLUMNS.volume: [s.base_volume_ml for s in samples],
            COLUMNS.ph: [s.ph for s in samples],
            COLUMNS.band: [s.color_band.value for s in samples],
        },
        columns=[COLUMNS.volume, COLUMNS.ph, COLUMNS.band],
    )


def session_summary_frame(session: TitrationSession) -> pd.DataFrame:
    """Return :func:`titrasim.analysis.summarize_session` as a one-row table."""
    return pd.DataFrame([summarize_session(session)])


def save_session_to_csv(
    session: TitrationSession, output_dir: str = "output"
) -> Tuple[str, str]:
    """Save the curve and the run summary of a session.

    Args:
        session: Session to export.
        output_dir: Directory for the CSV files; created if missing.

    Returns:
        tuple[str, str]: Paths to ``titration_curve.csv`` and
        ``titration_summary.csv``.
    """
    os.makedirs(output_dir, exist_ok=True)

    curve_path = os.path.join(output_dir, CURVE_FILENAME)
    summary_path = os.path.join(output_dir, SUMMARY_FILENAME)

    curve_to_dataframe(session.samples).to_csv(curve_path, index=False)
    session_summary_frame(session).to_csv(summary_path, index=False)

    logger.info("Saved titration curve to %s", curve_path)
    logger.info("Saved titration summary to %s", summary_path)
    return curve_path, summary_path
