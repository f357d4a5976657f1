"""Command-line driver for a simulated titration."""

from __future__ import annotations

import argparse
import logging
import sys

from .analysis import summarize_session
from .chemistry.regimes import ReactionRegime
from .config import (
    DEFAULT_ACID_VOLUME_ML,
    DEFAULT_MAX_VOLUME_ML,
    DEFAULT_MOLARITY,
    DEFAULT_SPEED,
    LARGE_DOSE_ML,
    SMALL_DOSE_ML,
    SessionConfig,
)
from .errors import TitrationError
from .output import save_session_to_csv
from .scheduler import TitrationDriver
from .session import TitrationSession

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "output"


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for module execution."""
    parser = argparse.ArgumentParser(
        description="Simulate an acid-base titration and export its curve."
    )
    parser.add_argument(
        "--regime",
        default=ReactionRegime.STRONG_ACID_STRONG_BASE.value,
        help=(
            "Acid/base pairing: "
            + ", ".join(r.value for r in ReactionRegime)
            + "; camelCase keys such as weakAcidStrongBase are accepted "
            "(default: strong-acid-strong-base)."
        ),
    )
    parser.add_argument(
        "--acid-molarity", type=float, default=DEFAULT_MOLARITY,
        help=f"Acid concentration in mol/L (default: {DEFAULT_MOLARITY}).",
    )
    parser.add_argument(
        "--base-molarity", type=float, default=DEFAULT_MOLARITY,
        help=f"Base concentration in mol/L (default: {DEFAULT_MOLARITY}).",
    )
    parser.add_argument(
        "--acid-volume", type=float, default=DEFAULT_ACID_VOLUME_ML,
        help=f"Volume of acid in the flask in mL (default: {DEFAULT_ACID_VOLUME_ML}).",
    )
    parser.add_argument(
        "--max-volume", type=float, default=DEFAULT_MAX_VOLUME_ML,
        help=f"Burette capacity in mL (default: {DEFAULT_MAX_VOLUME_ML}).",
    )
    parser.add_argument(
        "--speed", type=float, default=DEFAULT_SPEED,
        help=f"Titrant added per tick, in units of 0.1 mL (default: {DEFAULT_SPEED}).",
    )
    parser.add_argument(
        "--interval", type=float, default=0.0,
        help="Seconds between ticks; 0 runs as fast as possible.",
    )
    parser.add_argument(
        "--dose", type=float, action="append", default=None, metavar="ML",
        help="Add a manual dose in mL instead of running; repeatable.",
    )
    parser.add_argument(
        "--small-dose", dest="dose", action="append_const", const=SMALL_DOSE_ML,
        help=f"Add a small manual dose of {SMALL_DOSE_ML} mL; repeatable.",
    )
    parser.add_argument(
        "--large-dose", dest="dose", action="append_const", const=LARGE_DOSE_ML,
        help=f"Add a large manual dose of {LARGE_DOSE_ML} mL; repeatable.",
    )
    parser.add_argument(
        "--output-dir", default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--no-plot", action="store_true", help="Skip writing the curve figure."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint: configure, titrate, and export one session."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    try:
        session = TitrationSession(
            SessionConfig(
                regime=args.regime,
                acid_molarity=args.acid_molarity,
                base_molarity=args.base_molarity,
                acid_volume_ml=args.acid_volume,
                max_volume_ml=args.max_volume,
            )
        )
        if args.dose:
            for amount in args.dose:
                session.add_discrete(amount)
        else:
            TitrationDriver(session, speed=args.speed).run(interval_s=args.interval)
    except TitrationError as exc:
        logger.error("Titration failed: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    summary = summarize_session(session)
    if session.equivalence_point is not None:
        logger.info(
            "Equivalence point reached at %.1f mL (pH %.2f)",
            session.equivalence_point.base_volume_ml,
            summary["eq_ph_theoretical"],
        )
    else:
        logger.info(
            "Equivalence point (%.1f mL) not reached; stopped at %.1f mL",
            session.equivalence_volume_ml,
            session.current_base_volume_ml,
        )
    logger.info(
        "Final pH %.2f after %.1f mL (%d samples)",
        session.current_ph,
        session.current_base_volume_ml,
        len(session.samples),
    )

    curve_csv, summary_csv = save_session_to_csv(session, args.output_dir)
    outputs = [curve_csv, summary_csv]
    if not args.no_plot:
        from .plotting import plot_titration_curve

        outputs.append(plot_titration_curve(session, args.output_dir))

    for path in outputs:
        logger.info("  - %s", path)
    return 0
