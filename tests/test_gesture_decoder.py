#!/usr/bin/env python3
"""Unit tests for GestureDecoder drag-to-tick decoding."""

import math

import pytest

from vault.utilities.gesture_decoder import DEFAULT_TICK_ANGLE, GestureDecoder
from vault.utilities.vault_types import Direction

T = DEFAULT_TICK_ANGLE
R = 130.0


def test_default_tick_angle_is_sixty_degrees():
    assert DEFAULT_TICK_ANGLE == pytest.approx(math.pi / 3)


def test_invalid_tick_angle():
    with pytest.raises(ValueError):
        GestureDecoder(0)


def test_exact_threshold_emits_one_tick():
    """A displacement of exactly R rotates by T and emits one clockwise tick."""
    decoder = GestureDecoder()
    decoder.start(100.0)
    d_theta = decoder.move(100.0 + R, R)

    assert d_theta == pytest.approx(T)
    assert list(decoder.ticks()) == [Direction.CLOCKWISE]
    assert decoder.accumulated_angle == pytest.approx(0.0)


def test_carry_over_across_samples():
    """0.7T + 0.7T + 1.1T emits two ticks and leaves 0.5T in the accumulator."""
    decoder = GestureDecoder()
    decoder.start(0.0)
    emitted = []
    x = 0.0
    for fraction in (0.7, 0.7, 1.1):
        x += fraction * R
        decoder.move(x, R)
        emitted.extend(decoder.ticks())

    assert emitted == [Direction.CLOCKWISE, Direction.CLOCKWISE]
    assert decoder.accumulated_angle == pytest.approx(0.5 * T)


def test_below_threshold_emits_nothing():
    decoder = GestureDecoder()
    decoder.start(0.0)
    decoder.move(0.99 * R, R)
    assert list(decoder.ticks()) == []


def test_leftward_drag_is_counterclockwise():
    decoder = GestureDecoder()
    decoder.start(500.0)
    d_theta = decoder.move(500.0 - 2.2 * R, R)

    assert d_theta < 0
    assert list(decoder.ticks()) == [Direction.COUNTERCLOCKWISE] * 2
    assert decoder.accumulated_angle == pytest.approx(-0.2 * T)


def test_reversal_cancels_accumulated_rotation():
    decoder = GestureDecoder()
    decoder.start(0.0)
    decoder.move(0.8 * R, R)
    decoder.move(0.0, R)
    assert list(decoder.ticks()) == []
    assert decoder.accumulated_angle == pytest.approx(0.0)


def test_total_ticks_match_total_rotation():
    """Many small samples emit floor(total / T) ticks with no drift."""
    decoder = GestureDecoder()
    decoder.start(0.0)
    count = 0
    x = 0.0
    for _ in range(100):
        x += 0.13 * R
        decoder.move(x, R)
        count += len(list(decoder.ticks()))
    assert count == 13


def test_start_resets_accumulator():
    decoder = GestureDecoder()
    decoder.start(0.0)
    decoder.move(0.6 * R, R)
    decoder.stop()
    decoder.start(0.0)
    assert decoder.accumulated_angle == 0.0
    decoder.move(0.6 * R, R)
    assert list(decoder.ticks()) == []


def test_move_without_session_is_ignored():
    decoder = GestureDecoder()
    assert decoder.move(5 * R, R) == 0.0
    assert list(decoder.ticks()) == []
    assert not decoder.active


def test_resync_tracks_pointer_without_rotation():
    decoder = GestureDecoder()
    decoder.start(0.0)
    decoder.move(0.5 * R, R)
    decoder.resync(3 * R)
    assert decoder.accumulated_angle == 0.0

    # Next sample measures from the resynced position
    d_theta = decoder.move(3 * R + 0.25 * R, R)
    assert d_theta == pytest.approx(0.25 * T)


def test_feed_rejects_non_positive_radius():
    decoder = GestureDecoder()
    with pytest.raises(ValueError):
        decoder.feed(10.0, 0)
