"""Tests for inspector text round-tripping of raw fields."""

import logging

from ticktime import (
    Date,
    DateKind,
    apply_date_text,
    apply_ticks_text,
    date_text,
    ticks_text,
)
from ticktime.util import INT64_MAX, INT64_MIN, MAX_TICKS, TICKS_MASK


def test_ticks_text_renders_raw_value():
    assert ticks_text(0) == "0:00:00:00.0000000"
    assert ticks_text(-15_000_000) == "-0:00:00:01.5000000"


def test_apply_ticks_text_encodes_edit():
    assert apply_ticks_text(5, "0:00:00:01.0000000") == 10_000_000
    assert apply_ticks_text(5, "00:01") == 600_000_000


def test_apply_ticks_text_keeps_raw_on_parse_failure(caplog):
    with caplog.at_level(logging.DEBUG, logger="ticktime.inspector"):
        assert apply_ticks_text(42, "five minutes") == 42

    assert "Rejected ticks edit" in caplog.text


def test_ticks_field_round_trip():
    for raw in (0, 1, -1, 123_456_789_012, INT64_MAX, INT64_MIN):
        assert apply_ticks_text(raw, ticks_text(raw)) == raw


def test_date_text_ignores_kind_bits():
    assert date_text(1) == "0001-01-01T00:00:00.0000001"
    assert date_text((1 << 62) | 1) == "0001-01-01T00:00:00.0000001"


def test_apply_date_text_encodes_edit():
    raw = apply_date_text(0, "2024-03-01T00:00:00.0000000Z")
    date = Date.from_raw(raw)

    assert date.kind is DateKind.UTC
    assert date.to_datetime().isoformat() == "2024-03-01T00:00:00+00:00"


def test_apply_date_text_keeps_raw_on_parse_failure(caplog):
    raw = (2 << 62) | 99

    with caplog.at_level(logging.DEBUG, logger="ticktime.inspector"):
        assert apply_date_text(raw, "yesterday") == raw

    assert "Rejected date edit" in caplog.text


def test_date_field_round_trip():
    for raw in (0, 1, 638_000_000_000_000_000, MAX_TICKS):
        assert apply_date_text(raw, date_text(raw)) == raw


def test_date_text_falls_back_to_raw_beyond_last_day(caplog):
    raw = TICKS_MASK | (1 << 62)

    with caplog.at_level(logging.DEBUG, logger="ticktime.inspector"):
        assert date_text(raw) == str(raw)

    assert "no calendar form" in caplog.text
    assert apply_date_text(raw, date_text(raw)) == raw
