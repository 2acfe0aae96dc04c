#!/usr/bin/env python3
"""Unit tests for EventSource subscriptions."""

import pytest

from vault.utilities.events import (
    KEY_DOWN,
    POINTER_MOVE,
    POINTER_UP,
    WHEEL,
    EventSource,
    InputEvent,
)


def test_handlers_called_in_order():
    source = EventSource()
    calls = []
    source.on(KEY_DOWN, lambda e: calls.append(("a", e.code)))
    source.on(KEY_DOWN, lambda e: calls.append(("b", e.code)))

    source.emit(InputEvent(KEY_DOWN, code="ArrowRight"))
    assert calls == [("a", "ArrowRight"), ("b", "ArrowRight")]


def test_dispose_detaches_handler():
    source = EventSource()
    calls = []
    sub = source.on(WHEEL, calls.append)
    sub.dispose()
    sub.dispose()

    source.emit(InputEvent(WHEEL, delta_y=1))
    assert calls == []
    assert source.listener_count(WHEEL) == 0


def test_once_fires_a_single_time():
    source = EventSource()
    calls = []
    sub = source.once(POINTER_UP, calls.append)

    source.emit(InputEvent(POINTER_UP))
    source.emit(InputEvent(POINTER_UP))
    assert len(calls) == 1
    assert sub.disposed


def test_handler_disposed_during_dispatch_is_skipped():
    source = EventSource()
    calls = []
    second = None

    def first(event):
        calls.append("first")
        second.dispose()

    source.on(POINTER_MOVE, first)
    second = source.on(POINTER_MOVE, lambda e: calls.append("second"))

    source.emit(InputEvent(POINTER_MOVE))
    assert calls == ["first"]


def test_prevent_default_is_visible_to_emitter():
    source = EventSource()
    source.on(WHEEL, lambda e: e.prevent_default())
    event = source.emit(InputEvent(WHEEL, delta_y=-3))
    assert event.default_prevented


def test_unknown_event_type():
    source = EventSource()
    with pytest.raises(ValueError):
        source.on("doubleclick", print)
    with pytest.raises(ValueError):
        source.emit(InputEvent("doubleclick"))


def test_dispose_all():
    source = EventSource()
    source.on(KEY_DOWN, print)
    source.once(POINTER_UP, print)
    assert source.listener_count() == 2
    source.dispose_all()
    assert source.listener_count() == 0
