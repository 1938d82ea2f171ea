"""Frame time sources for an application loop.

This module provides the abstract base class for the scaled simulation clock
that a frame loop reads from, along with implementations for different
drivers. It is unrelated to wall-clock time: use ``Date.now()`` for that.
"""

from abc import ABC, abstractmethod


class TimeSource(ABC):
    """Abstract access to scaled frame time.

    Attributes:
        scale: Multiplier applied to real time (1.0 is real time, 0.0 pauses)
        delta: Scaled seconds covered by the last frame
        elapsed: Scaled seconds accumulated since start; never decreases
    """

    @property
    @abstractmethod
    def scale(self) -> float:
        pass

    @scale.setter
    @abstractmethod
    def scale(self, value: float) -> None:
        pass

    @property
    @abstractmethod
    def delta(self) -> float:
        pass

    @property
    @abstractmethod
    def elapsed(self) -> float:
        pass


__all__ = ["TimeSource"]
