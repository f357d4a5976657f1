"""Time-driven stepping for a titration session.

The driver plays the role of the burette tap: each tick it lets
``increment_ml * speed`` mL of titrant into the flask by calling
:meth:`TitrationSession.tick`. It can be advanced one frame at a time by a
display loop (:meth:`TitrationDriver.advance`) or run on a fixed wall-clock
cadence (:meth:`TitrationDriver.run`).
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable, List, Optional

from .config import DEFAULT_SPEED, FRAME_INCREMENT_ML
from .errors import InvalidArgument
from .session import StepResult, TitrationSession

logger = logging.getLogger(__name__)


def _positive(value: float, name: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{name} must be numeric, got {value!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgument(f"{name} must be positive, got {value!r}")
    return value


class TitrationDriver:
    """Drive a session forward in fixed increments.

    Args:
        session: The session to advance.
        speed: Multiplier on ``increment_ml``; the titrant added per tick.
        increment_ml: Base volume added per tick at speed 1.

    Raises:
        InvalidArgument: If ``speed`` or ``increment_ml`` is not positive.
    """

    def __init__(
        self,
        session: TitrationSession,
        speed: float = DEFAULT_SPEED,
        increment_ml: float = FRAME_INCREMENT_ML,
    ) -> None:
        self.session = session
        self.speed = _positive(speed, "speed")
        self.increment_ml = _positive(increment_ml, "increment_ml")

    @property
    def delta_ml(self) -> float:
        """Titrant volume added per tick."""
        return self.increment_ml * self.speed

    def set_speed(self, speed: float) -> None:
        self.speed = _positive(speed, "speed")

    def advance(self, ticks: int = 1) -> List[StepResult]:
        """Tick the session up to ``ticks`` times.

        Stops early once the session is no longer running (stopped by a
        listener, or finished).
        """
        results: List[StepResult] = []
        for _ in range(int(ticks)):
            result = self.session.tick(self.delta_ml)
            if result is None:
                break
            results.append(result)
            if not self.session.is_running:
                break
        return results

    def run(
        self,
        interval_s: float = 0.0,
        max_ticks: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Start the session and tick it until it stops running.

        Args:
            interval_s: Delay between ticks in seconds; ``0`` runs as fast as
                possible.
            max_ticks: Optional cap on the number of ticks.
            sleep: Sleep function, injectable for tests.

        Returns:
            int: Number of steps that appended a sample.

        Note:
            Stopping on ``max_ticks`` leaves the session RUNNING, so a later
            :meth:`advance` or :meth:`run` continues the titration. Call
            :meth:`TitrationSession.stop` to pause it instead.
        """
        self.session.start()
        committed = 0
        ticks = 0
        started = time.monotonic()
        while self.session.is_running:
            if max_ticks is not None and ticks >= max_ticks:
                break
            result = self.session.tick(self.delta_ml)
            ticks += 1
            if result is not None and result.sample is not None:
                committed += 1
            if interval_s > 0 and self.session.is_running:
                sleep(interval_s)

        logger.info(
            "Driver committed %d steps of %.2f mL in %.2f seconds (status: %s)",
            committed,
            self.delta_ml,
            time.monotonic() - started,
            self.session.status.value,
        )
        return committed
