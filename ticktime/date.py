"""Absolute date/time value type packed into an unsigned 64-bit integer.

The low 62 bits of the raw value count 100-nanosecond ticks since
0001-01-01T00:00:00 (proleptic Gregorian, the same epoch as
``datetime.min``). The upper 2 bits are reserved kind bits: they are carried
through unchanged, ignored by ``ticks``/``total_seconds`` and only read when
converting to and from ``datetime`` or text.

Equality and ordering compare the raw value, so two dates that differ only
in their kind bits are unequal. Use ``same_instant`` to compare ticks.
"""

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from enum import IntEnum
from typing import ClassVar

from dateutil import tz
from dateutil.parser import isoparse

from ticktime.util import (
    KIND_SHIFT,
    MAX_TICKS,
    MIN_TICKS,
    TICKS_MASK,
    TICKS_PER_DAY,
    TICKS_PER_MICROSECOND,
    TICKS_PER_SECOND,
    UINT64_MAX,
    DateParseError,
    DateRangeError,
)

Clock = Callable[[tzinfo], datetime]

# Sub-second digits following hh:mm:ss; parsed here because isoparse stops at
# microseconds and a tick is a tenth of one. Group 1 is the hour.
_FRACTION = re.compile(r"(\d\d):\d\d:\d\d([.,]\d+)")

_FRACTION_DIGITS = 7

# Nearest float to the last tick in seconds; from_seconds clamps up to it
_MAX_SECONDS = MAX_TICKS / TICKS_PER_SECOND


class DateKind(IntEnum):
    """Meaning of the two reserved bits when converting to a datetime."""

    UNSPECIFIED = 0
    UTC = 1
    LOCAL = 2


# Kind bits 0b11 mark an ambiguous local time in the host layout
_KINDS = {
    0: DateKind.UNSPECIFIED,
    1: DateKind.UTC,
    2: DateKind.LOCAL,
    3: DateKind.LOCAL,
}


@dataclass(frozen=True, order=True)
class Date:
    """An absolute point in time with tick precision.

    Example:
        >>> date = Date.from_seconds(1.5)
        >>> date.ticks
        15000000
        >>> Date.parse(str(date)) == date
        True
    """

    raw: int

    MIN: ClassVar["Date"]
    MAX: ClassVar["Date"]

    def __post_init__(self) -> None:
        if not isinstance(self.raw, int) or isinstance(self.raw, bool):
            raise TypeError(
                f"Date raw value must be an int, got {type(self.raw).__name__!r}.\n"
                f"Hint: use Date.from_seconds() or Date.from_datetime() instead."
            )
        if not 0 <= self.raw <= UINT64_MAX:
            raise DateRangeError(
                f"Date raw value must be an unsigned 64-bit integer, got {self.raw}"
            )

    @classmethod
    def from_raw(cls, raw: int) -> "Date":
        """Wrap a raw packed value as-is; reserved bits are not masked."""
        return cls(raw)

    @classmethod
    def from_ticks(cls, ticks: int) -> "Date":
        """Wrap a tick count since the epoch.

        Raises:
            DateRangeError: If ticks is outside [MIN_TICKS, MAX_TICKS]
        """
        if ticks < MIN_TICKS:
            raise DateRangeError(
                f"Date ticks can not be less than {MIN_TICKS}, got {ticks}"
            )
        if ticks > MAX_TICKS:
            raise DateRangeError(
                f"Date ticks can not be greater than {MAX_TICKS}, got {ticks}\n"
                f"Hint: the latest representable date is 9999-12-31T23:59:59.9999999"
            )
        return cls(ticks)

    @classmethod
    def from_seconds(cls, seconds: float) -> "Date":
        """Convert seconds since the epoch, truncating toward zero.

        Raises:
            DateRangeError: If seconds is negative, NaN, or beyond MAX_TICKS
        """
        if math.isnan(seconds):
            raise DateRangeError("Date seconds can not be NaN")
        if seconds < 0:
            raise DateRangeError(f"Date seconds can not be negative, got {seconds}")
        if math.isinf(seconds):
            raise DateRangeError(f"Date seconds must be finite, got {seconds}")
        if seconds > _MAX_SECONDS:
            raise DateRangeError(
                f"Date seconds can not be greater than {_MAX_SECONDS}, got {seconds}"
            )
        # The float nearest MAX_TICKS seconds rounds up past MAX_TICKS
        return cls.from_ticks(min(int(seconds * TICKS_PER_SECOND), MAX_TICKS))

    @classmethod
    def from_datetime(cls, value: datetime) -> "Date":
        """Convert a datetime, recording how it relates to UTC in the kind bits.

        Naive values are stored as UNSPECIFIED and UTC values as UTC. Any other
        aware value is converted to the local zone and stored as LOCAL.
        """
        return cls._from_datetime(value, 0)

    @classmethod
    def now(cls, clock: Clock = datetime.now) -> "Date":
        """Read the current local wall-clock time. Not cached."""
        return cls.from_datetime(clock(tz.tzlocal()))

    @classmethod
    def utc_now(cls, clock: Clock = datetime.now) -> "Date":
        """Read the current UTC time. Not cached."""
        return cls.from_datetime(clock(timezone.utc))

    @property
    def ticks(self) -> int:
        return self.raw & TICKS_MASK

    @property
    def kind(self) -> DateKind:
        return _KINDS[self.raw >> KIND_SHIFT]

    def total_seconds(self) -> float:
        return self.ticks / TICKS_PER_SECOND

    def same_instant(self, other: "Date") -> bool:
        """True if both dates carry the same ticks, ignoring kind bits."""
        return self.ticks == other.ticks

    def to_datetime(self) -> datetime:
        """Convert to a datetime, truncating sub-microsecond ticks.

        UTC dates come back with ``timezone.utc``, LOCAL dates with the
        local zone and UNSPECIFIED dates naive.

        Raises:
            DateRangeError: If the raw tick bits exceed MAX_TICKS
        """
        wall = self._wall()
        kind = self.kind
        if kind is DateKind.UTC:
            return wall.replace(tzinfo=timezone.utc)
        if kind is DateKind.LOCAL:
            return wall.replace(tzinfo=tz.tzlocal())
        return wall

    def __str__(self) -> str:
        """Render as ISO-8601 with seven fractional digits and a kind marker.

        Raises:
            DateRangeError: If the raw tick bits exceed MAX_TICKS
        """
        value = self._wall()
        text = (
            f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
            f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
            f".{self.ticks % TICKS_PER_SECOND:07d}"
        )
        kind = self.kind
        if kind is DateKind.UTC:
            return text + "Z"
        if kind is DateKind.LOCAL:
            return text + _format_offset(_local_offset(value))
        return text

    def _wall(self) -> datetime:
        ticks = self.ticks
        if ticks > MAX_TICKS:
            raise DateRangeError(
                f"Date ticks {ticks} are greater than {MAX_TICKS} and have no "
                f"calendar form.\n"
                f"Hint: the upper kind bits may have leaked into the tick bits; "
                f"use Date.from_ticks() to build dates from tick counts."
            )
        return datetime.min + timedelta(microseconds=ticks // TICKS_PER_MICROSECOND)

    @classmethod
    def parse(cls, text: str) -> "Date":
        """Parse an ISO-8601 date/time.

        Fractions longer than seven digits are truncated to whole ticks. A
        ``Z`` or zero offset yields a UTC date, other offsets a LOCAL date and
        no offset an UNSPECIFIED date.

        Raises:
            DateParseError: If the text is not ISO-8601 or out of range
        """
        body = text.strip()
        fraction_ticks = None
        match = _FRACTION.search(body)
        # Hour 24 is left to isoparse, which only accepts it as 24:00:00.000
        if match is not None and int(match.group(1)) < 24:
            digits = match.group(2)[1 : _FRACTION_DIGITS + 1]
            fraction_ticks = int(digits.ljust(_FRACTION_DIGITS, "0"))
            body = body[: match.start(2)] + body[match.end(2) :]

        try:
            parsed = isoparse(body)
        except (ValueError, OverflowError) as exc:
            raise DateParseError(
                f"Cannot parse {text!r} as a date.\n"
                f"Expected ISO-8601, e.g. 2024-03-01T12:30:00.1234567Z"
            ) from exc

        extra_ticks = 0
        if fraction_ticks is not None:
            parsed = parsed.replace(microsecond=fraction_ticks // TICKS_PER_MICROSECOND)
            extra_ticks = fraction_ticks % TICKS_PER_MICROSECOND

        try:
            return cls._from_datetime(parsed, extra_ticks)
        except DateRangeError as exc:
            raise DateParseError(f"Cannot parse {text!r} as a date: {exc}") from exc

    @classmethod
    def _from_datetime(cls, value: datetime, extra_ticks: int) -> "Date":
        offset = value.utcoffset()
        if offset is None:
            kind = DateKind.UNSPECIFIED
            wall = value
        elif offset == timedelta(0) and value.tzname() == "UTC":
            kind = DateKind.UTC
            wall = value
        elif offset == _local_offset(value.replace(tzinfo=None)):
            # Already local wall time. Keeps times in a DST gap and at the
            # ends of the range as written.
            kind = DateKind.LOCAL
            wall = value
        else:
            kind = DateKind.LOCAL
            try:
                wall = value.astimezone(tz.tzlocal())
            except OverflowError as exc:
                raise DateRangeError(
                    f"{value.isoformat()} falls outside the date range "
                    f"once converted to local time"
                ) from exc

        ticks = (
            (wall.toordinal() - 1) * TICKS_PER_DAY
            + (wall.hour * 3600 + wall.minute * 60 + wall.second) * TICKS_PER_SECOND
            + wall.microsecond * TICKS_PER_MICROSECOND
            + extra_ticks
        )
        return cls(cls.from_ticks(ticks).raw | (kind << KIND_SHIFT))


def _local_offset(wall: datetime) -> timedelta:
    """UTC offset of the local zone at a naive local wall time."""
    try:
        offset = wall.replace(tzinfo=tz.tzlocal()).utcoffset()
    except (OverflowError, ValueError, OSError):
        # Near 0001-01-01 or 9999-12-31 the DST lookup steps outside datetime
        # or time_t; fall back to the same day of year 2000.
        stand_in = wall.replace(year=2000, day=min(wall.day, 28))
        offset = stand_in.replace(tzinfo=tz.tzlocal()).utcoffset()
    return offset or timedelta(0)


def _format_offset(offset: timedelta) -> str:
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(offset) // timedelta(minutes=1)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


Date.MIN = Date(MIN_TICKS)
Date.MAX = Date(MAX_TICKS)
