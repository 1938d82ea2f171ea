from importlib.resources import files

from .date import Date, DateKind
from .inspector import apply_date_text, apply_ticks_text, date_text, ticks_text
from .source import TimeSource
from .source.stepped import SteppedTime
from .ticks import Ticks
from .util import (
    MAX_TICKS,
    MIN_TICKS,
    SECONDS_PER_TICK,
    TICKS_MASK,
    TICKS_PER_DAY,
    TICKS_PER_HOUR,
    TICKS_PER_MILLISECOND,
    TICKS_PER_MINUTE,
    TICKS_PER_SECOND,
    DateParseError,
    DateRangeError,
    TicksOverflowError,
    TicksParseError,
)

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    "Ticks",
    "Date",
    "DateKind",
    "TimeSource",
    "SteppedTime",
    "ticks_text",
    "apply_ticks_text",
    "date_text",
    "apply_date_text",
    "TICKS_PER_SECOND",
    "TICKS_PER_MILLISECOND",
    "TICKS_PER_MINUTE",
    "TICKS_PER_HOUR",
    "TICKS_PER_DAY",
    "SECONDS_PER_TICK",
    "MIN_TICKS",
    "MAX_TICKS",
    "TICKS_MASK",
    "DateRangeError",
    "TicksOverflowError",
    "TicksParseError",
    "DateParseError",
    "docs",
]
