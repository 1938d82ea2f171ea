"""Tests for SteppedTime."""

import logging

import pytest

from ticktime import SteppedTime, TimeSource


def test_create_stepped_time():
    """A fresh clock runs at real time and has not moved."""
    clock = SteppedTime()

    assert isinstance(clock, TimeSource)
    assert clock.scale == 1.0
    assert clock.delta == 0.0
    assert clock.elapsed == 0.0


def test_time_source_is_abstract():
    with pytest.raises(TypeError):
        TimeSource()  # type: ignore[abstract]


def test_advance_accumulates_scaled_time():
    clock = SteppedTime()

    assert clock.advance(0.5) == 0.5
    assert clock.delta == 0.5
    assert clock.elapsed == 0.5

    clock.scale = 2.0
    assert clock.advance(0.25) == 0.5
    assert clock.delta == 0.5
    assert clock.elapsed == 1.0


def test_zero_scale_pauses():
    clock = SteppedTime(scale=0.0)

    clock.advance(1.0)

    assert clock.delta == 0.0
    assert clock.elapsed == 0.0


def test_rejects_negative_scale():
    with pytest.raises(ValueError, match="scale"):
        SteppedTime(scale=-1.0)

    clock = SteppedTime()
    with pytest.raises(ValueError, match="scale"):
        clock.scale = -0.5
    assert clock.scale == 1.0


def test_rejects_negative_or_nan_delta():
    clock = SteppedTime()

    with pytest.raises(ValueError, match="real_delta"):
        clock.advance(-0.1)

    with pytest.raises(ValueError, match="real_delta"):
        clock.advance(float("nan"))

    assert clock.elapsed == 0.0


def test_tick_reads_source():
    readings = iter([10.0, 10.5, 10.25, 11.0])
    clock = SteppedTime(source=lambda: next(readings))

    assert clock.tick() == 0.0
    assert clock.tick() == 0.5
    assert clock.tick() == 0.0
    assert clock.tick() == 0.75
    assert clock.elapsed == 1.25


def test_elapsed_never_decreases():
    clock = SteppedTime()
    previous = clock.elapsed

    for step, scale in [(0.1, 1.0), (0.0, 3.0), (0.2, 0.0), (0.05, 0.5)]:
        clock.scale = scale
        clock.advance(step)
        assert clock.elapsed >= previous
        previous = clock.elapsed


def test_scale_change_is_logged(caplog):
    clock = SteppedTime()

    with caplog.at_level(logging.DEBUG, logger="ticktime.source.stepped"):
        clock.scale = 0.5

    assert "Time scale set to 0.5" in caplog.text
