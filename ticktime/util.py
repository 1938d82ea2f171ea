"""Utility constants and error types for ticktime.

Time unit constants represent durations in ticks (100 nanoseconds).
These are shared by Ticks and Date as the single source of truth for
float conversion.
"""

# Time unit constants (all values in ticks)
TICKS_PER_MICROSECOND = 10
TICKS_PER_MILLISECOND = 10_000
TICKS_PER_SECOND = 10_000_000
TICKS_PER_MINUTE = 600_000_000
TICKS_PER_HOUR = 36_000_000_000
TICKS_PER_DAY = 864_000_000_000

SECONDS_PER_TICK = 1.0 / TICKS_PER_SECOND

# Signed 64-bit range of a Ticks value
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Unsigned 64-bit range of a Date raw value
UINT64_MAX = 2**64 - 1

# Date tick range: 0001-01-01T00:00:00 through 9999-12-31T23:59:59.9999999
MIN_TICKS = 0
MAX_TICKS = 3_155_378_975_999_999_999

# Low 62 bits carry ticks, the upper 2 bits are reserved kind bits
TICKS_MASK = 0x3FFF_FFFF_FFFF_FFFF
KIND_SHIFT = 62


class DateRangeError(ValueError):
    """A Date was requested outside [MIN_TICKS, MAX_TICKS]."""


class TicksOverflowError(OverflowError):
    """A Ticks value or result does not fit in a signed 64-bit integer."""


class TicksParseError(ValueError):
    """Text could not be parsed as a Ticks duration."""


class DateParseError(ValueError):
    """Text could not be parsed as a Date."""
