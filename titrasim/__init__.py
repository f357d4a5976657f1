"""
A Python package simulating acid-base titrations for teaching.

Computes solution pH as titrant is added for strong acid/strong base, weak
acid/strong base and strong acid/weak base titrations, and accumulates the
resulting titration curve.

Modules:
    - chemistry: Stateless pH equations, equivalence volume and colour bands.
    - session: Titration state machine (configure, step, start/stop, reset).
    - scheduler: Time-driven stepping of a running session.
    - analysis: Equivalence and buffer-point checks on a simulated curve.
    - output: CSV export of curves and summaries.
    - plotting: Static and live matplotlib rendering of the curve.
"""

__version__ = "1.0.0"

from .chemistry import (
    ColorBand,
    ReactionRegime,
    classify_solution_color,
    compute_equivalence_volume,
    compute_ph,
    compute_ph_at_volume,
)
from .config import SessionConfig
from .errors import DomainError, InvalidArgument, InvalidConfiguration, TitrationError
from .scheduler import TitrationDriver
from .session import (
    CurveSample,
    EquivalencePoint,
    SessionStatus,
    StepResult,
    TitrationSession,
)

__all__ = [
    # Chemistry
    "ReactionRegime",
    "ColorBand",
    "compute_ph",
    "compute_ph_at_volume",
    "compute_equivalence_volume",
    "classify_solution_color",
    # Session
    "SessionConfig",
    "TitrationSession",
    "SessionStatus",
    "CurveSample",
    "EquivalencePoint",
    "StepResult",
    "TitrationDriver",
    # Errors
    "TitrationError",
    "InvalidConfiguration",
    "InvalidArgument",
    "DomainError",
]
