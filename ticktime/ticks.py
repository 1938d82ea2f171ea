"""Tick-precision duration value type.

A Ticks value is a signed 64-bit count of 100-nanosecond ticks. Arithmetic
is checked: results that leave the signed 64-bit range raise
TicksOverflowError instead of wrapping.
"""

import math
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import ClassVar

from ticktime.util import (
    INT64_MAX,
    INT64_MIN,
    TICKS_PER_DAY,
    TICKS_PER_HOUR,
    TICKS_PER_MICROSECOND,
    TICKS_PER_MINUTE,
    TICKS_PER_SECOND,
    TicksOverflowError,
    TicksParseError,
)

# Accepted text forms, tried in order against the unsigned remainder:
#   d:hh:mm:ss[.fffffff]   (the form str() produces)
#   d.hh:mm[:ss[.fffffff]]
#   hh:mm[:ss[.fffffff]]
#   d
_DURATION_FORMS = (
    re.compile(
        r"(?P<days>\d+):(?P<hours>\d+):(?P<minutes>\d+):(?P<seconds>\d+)"
        r"(?:\.(?P<fraction>\d+))?"
    ),
    re.compile(
        r"(?P<days>\d+)\.(?P<hours>\d+):(?P<minutes>\d+)"
        r"(?::(?P<seconds>\d+)(?:\.(?P<fraction>\d+))?)?"
    ),
    re.compile(
        r"(?P<hours>\d+):(?P<minutes>\d+)"
        r"(?::(?P<seconds>\d+)(?:\.(?P<fraction>\d+))?)?"
    ),
    re.compile(r"(?P<days>\d+)"),
)

_FRACTION_DIGITS = 7


def _check_range(value: int, what: str) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise TicksOverflowError(
            f"{what} does not fit in a signed 64-bit tick count: {value}\n"
            f"Valid range: [{INT64_MIN}, {INT64_MAX}]"
        )
    return value


@dataclass(frozen=True, order=True)
class Ticks:
    """A duration measured in 100-nanosecond ticks.

    Ordering, equality and hashing follow the signed tick count. Instances
    are immutable; arithmetic returns new values.

    Example:
        >>> Ticks.from_seconds(1.5) + Ticks.from_ticks(5)
        Ticks(value=15000005)
    """

    value: int

    ZERO: ClassVar["Ticks"]
    MIN: ClassVar["Ticks"]
    MAX: ClassVar["Ticks"]

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(
                f"Ticks value must be an int, got {type(self.value).__name__!r}.\n"
                f"Hint: use Ticks.from_seconds() to convert float seconds."
            )
        _check_range(self.value, "Ticks value")

    @classmethod
    def from_ticks(cls, ticks: int) -> "Ticks":
        return cls(ticks)

    @classmethod
    def from_seconds(cls, seconds: float) -> "Ticks":
        """Convert seconds to ticks, truncating toward zero.

        Sub-tick fractions are dropped; round the input first if
        round-to-nearest is needed.
        """
        if math.isnan(seconds):
            raise ValueError("Cannot convert NaN seconds to Ticks")
        if math.isinf(seconds):
            raise TicksOverflowError(f"Cannot convert {seconds} seconds to Ticks")
        return cls(int(seconds * TICKS_PER_SECOND))

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Ticks":
        """Exact conversion from a timedelta (microsecond resolution)."""
        microseconds = (delta.days * 86400 + delta.seconds) * 1_000_000
        microseconds += delta.microseconds
        return cls(
            _check_range(microseconds * TICKS_PER_MICROSECOND, "timedelta in ticks")
        )

    def to_timedelta(self) -> timedelta:
        """Convert to a timedelta, truncating sub-microsecond ticks toward zero."""
        microseconds = abs(self.value) // TICKS_PER_MICROSECOND
        if self.value < 0:
            microseconds = -microseconds
        return timedelta(microseconds=microseconds)

    def total_seconds(self) -> float:
        return self.value / TICKS_PER_SECOND

    def negate(self) -> "Ticks":
        return Ticks(_check_range(-self.value, "Negated ticks"))

    def add(self, other: "Ticks | int") -> "Ticks":
        return Ticks(_check_range(self.value + _operand(other), "Sum of ticks"))

    def subtract(self, other: "Ticks | int") -> "Ticks":
        return Ticks(_check_range(self.value - _operand(other), "Difference of ticks"))

    def __neg__(self) -> "Ticks":
        return self.negate()

    def __pos__(self) -> "Ticks":
        return self

    def __add__(self, other: object) -> "Ticks":
        if not isinstance(other, (Ticks, int)) or isinstance(other, bool):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: object) -> "Ticks":
        if not isinstance(other, int) or isinstance(other, bool):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Ticks":
        if not isinstance(other, (Ticks, int)) or isinstance(other, bool):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: object) -> "Ticks":
        if not isinstance(other, int) or isinstance(other, bool):
            return NotImplemented
        return Ticks(
            _check_range(_operand(other) - self.value, "Difference of ticks")
        )

    def __str__(self) -> str:
        """Render as ``[-]d:hh:mm:ss.fffffff``."""
        sign = "-" if self.value < 0 else ""
        days, rest = divmod(abs(self.value), TICKS_PER_DAY)
        hours, rest = divmod(rest, TICKS_PER_HOUR)
        minutes, rest = divmod(rest, TICKS_PER_MINUTE)
        seconds, fraction = divmod(rest, TICKS_PER_SECOND)
        return f"{sign}{days}:{hours:02d}:{minutes:02d}:{seconds:02d}.{fraction:07d}"

    @classmethod
    def parse(cls, text: str) -> "Ticks":
        """Parse a duration written as ``[-]d:hh:mm:ss[.f]``, ``[-]d.hh:mm[:ss[.f]]``,
        ``[-]hh:mm[:ss[.f]]`` or ``[-]d``.

        Raises:
            TicksParseError: If the text matches none of the forms, a field
                is out of range, or the result overflows.
        """
        body = text.strip()
        negative = body.startswith("-")
        if negative:
            body = body[1:]

        for form in _DURATION_FORMS:
            match = form.fullmatch(body)
            if match is not None:
                break
        else:
            raise TicksParseError(
                f"Cannot parse {text!r} as a duration.\n"
                f"Expected one of:\n"
                f"  [-]d:hh:mm:ss[.fffffff]   e.g. 1:02:03:04.5000000\n"
                f"  [-]d.hh:mm[:ss[.fffffff]] e.g. 1.02:03:04\n"
                f"  [-]hh:mm[:ss[.fffffff]]   e.g. 02:03:04.25\n"
                f"  [-]d                      e.g. 3"
            )

        groups = match.groupdict()
        fraction = groups.pop("fraction", None)
        fields = {name: int(digits) for name, digits in groups.items() if digits}
        hours = fields.get("hours", 0)
        minutes = fields.get("minutes", 0)
        seconds = fields.get("seconds", 0)
        if hours > 23 or minutes > 59 or seconds > 59:
            raise TicksParseError(
                f"Cannot parse {text!r} as a duration: "
                f"hours must be 0-23, minutes and seconds 0-59"
            )

        if fraction and len(fraction) > _FRACTION_DIGITS:
            raise TicksParseError(
                f"Cannot parse {text!r} as a duration: "
                f"at most {_FRACTION_DIGITS} fractional digits are allowed"
            )

        total = (
            fields.get("days", 0) * TICKS_PER_DAY
            + hours * TICKS_PER_HOUR
            + minutes * TICKS_PER_MINUTE
            + seconds * TICKS_PER_SECOND
            + int((fraction or "").ljust(_FRACTION_DIGITS, "0"))
        )
        if negative:
            total = -total

        try:
            return cls(_check_range(total, "Parsed duration"))
        except TicksOverflowError as exc:
            raise TicksParseError(f"Cannot parse {text!r} as a duration: {exc}") from exc


def _operand(other: "Ticks | int") -> int:
    if isinstance(other, Ticks):
        return other.value
    if not isinstance(other, int) or isinstance(other, bool):
        raise TypeError(
            f"Tick operand must be Ticks or int, got {type(other).__name__!r}"
        )
    return _check_range(other, "Tick operand")


Ticks.ZERO = Ticks(0)
Ticks.MIN = Ticks(INT64_MIN)
Ticks.MAX = Ticks(INT64_MAX)
