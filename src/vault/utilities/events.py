# File: src/vault/utilities/events.py
"""Raw input event stream with lifecycle-scoped subscriptions."""

from .logger import VaultLogger

KEY_DOWN = "keydown"
WHEEL = "wheel"
POINTER_DOWN = "pointerdown"
POINTER_MOVE = "pointermove"
POINTER_UP = "pointerup"
POINTER_UP_OUTSIDE = "pointerupoutside"
POINTER_TAP = "pointertap"
CONTEXT_MENU = "contextmenu"

EVENT_TYPES = (
    KEY_DOWN, WHEEL, POINTER_DOWN, POINTER_MOVE,
    POINTER_UP, POINTER_UP_OUTSIDE, POINTER_TAP, CONTEXT_MENU,
)

PRIMARY_BUTTON = 0
SECONDARY_BUTTON = 2


class InputEvent:
    """A single raw input event in device coordinates."""
    __slots__ = ('type', 'code', 'delta_y', 'x', 'y', 'button', 'target', 'default_prevented')

    def __init__(self, event_type, code=None, delta_y=0.0, x=0.0, y=0.0, button=PRIMARY_BUTTON, target=None):
        self.type = event_type
        self.code = code
        self.delta_y = delta_y
        self.x = x
        self.y = y
        self.button = button
        self.target = target
        self.default_prevented = False

    def prevent_default(self):
        """Ask the platform to skip its default handling (scrolling, context menu)."""
        self.default_prevented = True

    def __repr__(self):
        return f"InputEvent({self.type!r}, code={self.code!r}, x={self.x}, y={self.y}, button={self.button})"


class Subscription:
    """Handle returned by EventSource.on(); dispose() detaches the handler."""
    __slots__ = ('_source', 'event_type', 'handler', 'once', 'disposed')

    def __init__(self, source, event_type, handler, once=False):
        self._source = source
        self.event_type = event_type
        self.handler = handler
        self.once = once
        self.disposed = False

    def dispose(self):
        """Safe to call more than once."""
        if self.disposed:
            return
        self.disposed = True
        self._source._remove(self)


class EventSource:
    """
    Dispatches InputEvents to subscribed handlers.

    Handlers are called in subscription order. A handler subscribed during
    a dispatch first runs on the next emit(); one disposed during a
    dispatch is skipped straight away.
    """

    def __init__(self):
        self._subscriptions = {event_type: [] for event_type in EVENT_TYPES}

    def on(self, event_type, handler):
        return self._add(event_type, handler, once=False)

    def once(self, event_type, handler):
        return self._add(event_type, handler, once=True)

    def _add(self, event_type, handler, once):
        if event_type not in self._subscriptions:
            raise ValueError(f"Unknown event type: {event_type!r}")
        sub = Subscription(self, event_type, handler, once)
        self._subscriptions[event_type].append(sub)
        return sub

    def _remove(self, sub):
        subs = self._subscriptions[sub.event_type]
        if sub in subs:
            subs.remove(sub)

    def listener_count(self, event_type=None):
        """Number of live subscriptions, for one event type or overall."""
        if event_type is not None:
            return len(self._subscriptions[event_type])
        return sum(len(subs) for subs in self._subscriptions.values())

    def emit(self, event):
        """Dispatch an event; returns the event so callers can read default_prevented."""
        subs = self._subscriptions.get(event.type)
        if subs is None:
            raise ValueError(f"Unknown event type: {event.type!r}")
        for sub in list(subs):
            if sub.disposed:
                continue
            if sub.once:
                sub.dispose()
            sub.handler(event)
        return event

    def dispose_all(self):
        """Detach every handler (teardown)."""
        count = self.listener_count()
        for subs in self._subscriptions.values():
            for sub in list(subs):
                sub.dispose()
        if count:
            VaultLogger.debug("EVNT", f"Disposed {count} subscriptions")
