"""Stepped frame time source.

This module provides SteppedTime, a TimeSource advanced explicitly by the
application loop. It's useful for games, simulations and deterministic tests.
"""

import logging
import math
import time
from collections.abc import Callable

from typing_extensions import override

from ticktime.source import TimeSource

logger = logging.getLogger(__name__)


def _check_non_negative(name: str, value: float) -> float:
    if math.isnan(value) or value < 0:
        raise ValueError(f"{name} must be a non-negative number, got {value}")
    return value


class SteppedTime(TimeSource):
    """Frame clock driven by ``advance()`` or ``tick()``.

    Each step multiplies the real seconds by ``scale``, stores the result as
    ``delta`` and adds it to ``elapsed``.

    Attributes:
        _scale: Current time scale
        _delta: Scaled duration of the last step
        _elapsed: Scaled total since construction
        _source: Monotonic reading used by tick()
        _last: Source reading at the previous tick, None before the first
    """

    def __init__(
        self, scale: float = 1.0, source: Callable[[], float] = time.monotonic
    ) -> None:
        self._scale: float = _check_non_negative("scale", scale)
        self._delta: float = 0.0
        self._elapsed: float = 0.0
        self._source: Callable[[], float] = source
        self._last: float | None = None

    @property
    @override
    def scale(self) -> float:
        return self._scale

    @scale.setter
    @override
    def scale(self, value: float) -> None:
        self._scale = _check_non_negative("scale", value)
        logger.debug("Time scale set to %s", value)

    @property
    @override
    def delta(self) -> float:
        return self._delta

    @property
    @override
    def elapsed(self) -> float:
        return self._elapsed

    def advance(self, real_delta: float) -> float:
        """Step the clock by ``real_delta`` real seconds.

        Returns:
            The scaled delta of this step

        Raises:
            ValueError: If real_delta is negative or NaN
        """
        _check_non_negative("real_delta", real_delta)
        self._delta = real_delta * self._scale
        self._elapsed += self._delta
        return self._delta

    def tick(self) -> float:
        """Step the clock by the real time since the previous tick.

        The first tick only records the source reading and yields a zero delta.
        """
        now = self._source()
        previous, self._last = self._last, now
        if previous is None:
            return self.advance(0.0)
        # A reading that steps backwards counts as no time passing
        return self.advance(max(now - previous, 0.0))
