"""Text round-tripping for raw persisted time fields.

Inspector-style editors persist a Ticks as its signed value and a Date as its
unsigned raw value. These helpers decode a raw field to editable text and
encode edited text back. A failed parse leaves the raw value untouched.

Example:
    >>> raw = 0
    >>> text = ticks_text(raw)
    >>> text
    '0:00:00:00.0000000'
    >>> apply_ticks_text(raw, "0:00:01:30.0000000")
    900000000
    >>> apply_ticks_text(raw, "not a duration")
    0
"""

import logging

from ticktime.date import Date
from ticktime.ticks import Ticks
from ticktime.util import (
    TICKS_MASK,
    DateParseError,
    DateRangeError,
    TicksParseError,
)

logger = logging.getLogger(__name__)


def ticks_text(raw: int) -> str:
    """Text shown for a raw Ticks field."""
    return str(Ticks.from_ticks(raw))


def apply_ticks_text(raw: int, text: str) -> int:
    """Return the raw Ticks value for edited text, or ``raw`` if it does not parse."""
    try:
        return Ticks.parse(text).value
    except TicksParseError as exc:
        logger.debug("Rejected ticks edit %r: %s", text, exc)
        return raw


def date_text(raw: int) -> str:
    """Text shown for a raw Date field.

    Only the tick bits are shown; the field is displayed as an unspecified
    date whatever its kind bits hold. Tick bits beyond the last calendar day
    are shown as the raw integer.
    """
    try:
        return str(Date.from_raw(raw & TICKS_MASK))
    except DateRangeError as exc:
        logger.debug("Raw date %d has no calendar form: %s", raw, exc)
        return str(raw)


def apply_date_text(raw: int, text: str) -> int:
    """Return the raw Date value for edited text, or ``raw`` if it does not parse.

    The parsed kind (UTC, local or unspecified) is stored in the reserved bits.
    """
    try:
        return Date.parse(text).raw
    except DateParseError as exc:
        logger.debug("Rejected date edit %r: %s", text, exc)
        return raw
