"""Titration session: mutable simulation state driven by volume steps.

A session owns one titration: the fixed acid charge, the base volume added
so far, the accumulated curve samples, the latched equivalence point and the
run status. All mutation goes through :meth:`TitrationSession.step`; manual
dosing and the time-driven process are thin wrappers around it.

Status transitions::

    IDLE ----start----> RUNNING ----stop----> STOPPED
      ^                   |  ^                  |
      |                   |  +------start-------+
      |              (max volume reached by any step)
      |                   v
      +---reset/configure-- FINISHED

The session never owns a timer. An external scheduler calls :meth:`tick`
while the session is running; :meth:`stop` takes effect before the next
tick.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .chemistry.engine import (
    MOLE_TOLERANCE,
    compute_equivalence_volume,
    compute_ph_at_volume,
)
from .chemistry.indicator import ColorBand, classify_solution_color
from .chemistry.regimes import ReactionRegime
from .config import (
    DEFAULT_ACID_VOLUME_ML,
    DEFAULT_MAX_VOLUME_ML,
    SessionConfig,
)
from .errors import InvalidArgument

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"
    FINISHED = "finished"


@dataclass(frozen=True)
class CurveSample:
    """One point of the titration curve."""

    base_volume_ml: float
    ph: float

    @property
    def color_band(self) -> ColorBand:
        return classify_solution_color(self.ph)


@dataclass(frozen=True)
class EquivalencePoint:
    base_volume_ml: float


@dataclass(frozen=True)
class StepResult:
    """Outcome of a single step, also delivered to step listeners.

    Attributes:
        sample: The appended sample, or ``None`` when the step was a no-op.
        status: Session status after the step.
        reached_equivalence: ``True`` only on the step that latched the
            equivalence point.
        finished: ``True`` when the session is finished after this step.
    """

    sample: Optional[CurveSample]
    status: SessionStatus
    reached_equivalence: bool = False
    finished: bool = False

    @property
    def color_band(self) -> Optional[ColorBand]:
        return self.sample.color_band if self.sample is not None else None


StepListener = Callable[[StepResult], None]
ResetListener = Callable[["TitrationSession"], None]


class TitrationSession:
    """Stateful titration of one acid charge with one titrant.

    Args:
        config: Initial configuration. ``None`` uses the classroom default of
            25 mL 0.1 M HCl titrated with 0.1 M NaOH up to 50 mL.

    Raises:
        InvalidConfiguration: If ``config`` is invalid.
    """

    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        self._listeners: List[StepListener] = []
        self._reset_listeners: List[ResetListener] = []
        self._config: SessionConfig
        self._status = SessionStatus.IDLE
        self._base_volume_ml = 0.0
        self._samples: List[CurveSample] = []
        self._equivalence_volume_ml = math.nan
        self._equivalence_point: Optional[EquivalencePoint] = None

        cfg = config if config is not None else SessionConfig()
        self.configure(
            cfg.regime,
            cfg.acid_molarity,
            cfg.base_molarity,
            cfg.acid_volume_ml,
            cfg.max_volume_ml,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def configure(
        self,
        regime: ReactionRegime,
        acid_molarity: float,
        base_molarity: float,
        acid_volume_ml: float = DEFAULT_ACID_VOLUME_ML,
        max_volume_ml: float = DEFAULT_MAX_VOLUME_ML,
    ) -> CurveSample:
        """Start a fresh session and return its initial (0 mL) sample.

        Everything is validated before any state changes, so a failed call
        leaves the previous session intact.

        Raises:
            InvalidConfiguration: If the regime is unknown or any
                concentration or volume is not positive.
        """
        config = SessionConfig(
            regime=regime,
            acid_molarity=acid_molarity,
            base_molarity=base_molarity,
            acid_volume_ml=acid_volume_ml,
            max_volume_ml=max_volume_ml,
        ).validate()
        initial_ph = compute_ph_at_volume(
            config.regime,
            config.acid_molarity,
            config.base_molarity,
            config.acid_volume_ml,
            0.0,
        )
        initial = CurveSample(base_volume_ml=0.0, ph=initial_ph)

        self._config = config
        self._status = SessionStatus.IDLE
        self._base_volume_ml = 0.0
        self._samples = [initial]
        self._equivalence_point = None
        self._equivalence_volume_ml = compute_equivalence_volume(
            config.acid_volume_ml, config.acid_molarity, config.base_molarity
        )

        logger.info(
            "Configured %s: %.3g M acid (%.2f mL) vs %.3g M base, V_eq = %.2f mL, "
            "initial pH %.2f",
            config.regime.description,
            config.acid_molarity,
            config.acid_volume_ml,
            config.base_molarity,
            self._equivalence_volume_ml,
            initial_ph,
        )
        for listener in list(self._reset_listeners):
            listener(self)
        return initial

    def reset(self) -> CurveSample:
        """Reconfigure with the current configuration."""
        cfg = self._config
        return self.configure(
            cfg.regime,
            cfg.acid_molarity,
            cfg.base_molarity,
            cfg.acid_volume_ml,
            cfg.max_volume_ml,
        )

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def step(self, delta_ml: float) -> StepResult:
        """Add ``delta_ml`` of titrant, clamped to the burette capacity.

        Returns:
            StepResult: The appended sample and the equivalence/finished
            flags. When the session is finished (or the clamped volume does
            not change) nothing is appended and ``sample`` is ``None``.

        Raises:
            InvalidArgument: If ``delta_ml`` is not a positive finite number.
        """
        try:
            delta = float(delta_ml)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"Volume increment must be numeric, got {delta_ml!r}") from exc
        if not math.isfinite(delta) or delta <= 0:
            raise InvalidArgument(f"Volume increment must be positive, got {delta_ml!r} mL")

        if self._status is SessionStatus.FINISHED:
            return StepResult(sample=None, status=self._status, finished=True)

        max_volume = self._config.max_volume_ml
        new_volume = min(self._base_volume_ml + delta, max_volume)
        if new_volume == self._base_volume_ml:
            return StepResult(
                sample=None,
                status=self._status,
                finished=self._status is SessionStatus.FINISHED,
            )

        cfg = self._config
        ph = compute_ph_at_volume(
            cfg.regime, cfg.acid_molarity, cfg.base_molarity, cfg.acid_volume_ml, new_volume
        )
        sample = CurveSample(base_volume_ml=new_volume, ph=ph)
        self._base_volume_ml = new_volume
        self._samples.append(sample)
        logger.debug("Added base to %.2f mL, pH %.3f", new_volume, ph)

        reached = self._latch_equivalence(new_volume)
        finished = new_volume >= max_volume
        if finished:
            self._status = SessionStatus.FINISHED
            logger.info("Titration finished at %.2f mL (pH %.2f)", new_volume, ph)

        result = StepResult(
            sample=sample,
            status=self._status,
            reached_equivalence=reached,
            finished=finished,
        )
        for listener in list(self._listeners):
            listener(result)
        return result

    def _latch_equivalence(self, volume_ml: float) -> bool:
        if self._equivalence_point is not None:
            return False
        veq = self._equivalence_volume_ml
        if not math.isfinite(veq) or volume_ml < veq * (1.0 - MOLE_TOLERANCE):
            return False
        self._equivalence_point = EquivalencePoint(base_volume_ml=veq)
        logger.info("Equivalence point reached at %.2f mL", veq)
        return True

    def add_discrete(self, amount_ml: float) -> StepResult:
        """Manually dose ``amount_ml`` of titrant, whatever the run state."""
        return self.step(amount_ml)

    def tick(self, delta_ml: float) -> Optional[StepResult]:
        """Advance the time-driven process by one increment.

        Returns ``None`` without touching state unless the session is running.
        """
        if self._status is not SessionStatus.RUNNING:
            return None
        return self.step(delta_ml)

    def start(self) -> SessionStatus:
        if self._status in (SessionStatus.IDLE, SessionStatus.STOPPED):
            self._status = SessionStatus.RUNNING
            logger.info("Titration running from %.2f mL", self._base_volume_ml)
        return self._status

    def stop(self) -> SessionStatus:
        if self._status is SessionStatus.RUNNING:
            self._status = SessionStatus.STOPPED
            logger.info("Titration stopped at %.2f mL", self._base_volume_ml)
        return self._status

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: StepListener) -> Callable[[], None]:
        """Call ``listener`` with the :class:`StepResult` of every appended sample.

        Returns:
            A callable that unregisters the listener.
        """
        self._listeners.append(listener)
        return lambda: self._discard(self._listeners, listener)

    def add_reset_listener(self, listener: ResetListener) -> Callable[[], None]:
        """Call ``listener`` with this session after every configure/reset."""
        self._reset_listeners.append(listener)
        return lambda: self._discard(self._reset_listeners, listener)

    @staticmethod
    def _discard(listeners: list, listener) -> None:
        if listener in listeners:
            listeners.remove(listener)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status is SessionStatus.RUNNING

    @property
    def samples(self) -> Tuple[CurveSample, ...]:
        return tuple(self._samples)

    @property
    def last_sample(self) -> CurveSample:
        return self._samples[-1]

    @property
    def current_ph(self) -> float:
        return self._samples[-1].ph

    @property
    def current_base_volume_ml(self) -> float:
        return self._base_volume_ml

    @property
    def color_band(self) -> ColorBand:
        return self._samples[-1].color_band

    @property
    def equivalence_volume_ml(self) -> float:
        """Theoretical equivalence volume for the current configuration."""
        return self._equivalence_volume_ml

    @property
    def equivalence_point(self) -> Optional[EquivalencePoint]:
        """Equivalence point once the added volume has reached it, else ``None``."""
        return self._equivalence_point
