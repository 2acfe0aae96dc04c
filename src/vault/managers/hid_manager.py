# File: src/vault/managers/hid_manager.py
"""Input gateway: turns raw key, wheel, tap and drag events into dial turns."""

from vault.utilities.events import (
    CONTEXT_MENU,
    KEY_DOWN,
    POINTER_DOWN,
    POINTER_MOVE,
    POINTER_TAP,
    POINTER_UP,
    POINTER_UP_OUTSIDE,
    PRIMARY_BUTTON,
    SECONDARY_BUTTON,
    WHEEL,
)
from vault.utilities.logger import VaultLogger
from vault.utilities.vault_types import Direction
from .scene_manager import HANDLE, HANDLE_SHADOW


class HIDManager:
    """
    Unified Input Manager.
    Handles: Keys, Wheel, Taps on the handle, Secondary-button drags.

    Keys
        - increase_key -> clockwise, decrease_key -> counterclockwise.
    Wheel
        - Positive delta -> clockwise, negative -> counterclockwise.
        - Default scrolling is suppressed while input is enabled.
    Taps (primary button, on the handle)
        - Right of the handle centre (local x >= 0) -> clockwise, left -> counterclockwise.
    Drags (drag_button, starting within the handle radius)
        - Routed through the GestureDecoder; the handle rotates live and each
          decoded tick is submitted without a scripted rotation.

    Every event is gated by is_enabled(); events arriving while disabled are
    dropped, never queued. Subscriptions are held as handles and disposed by
    detach(); drag-only subscriptions live exactly as long as the drag.
    """

    def __init__(self,
                 scene,
                 decoder,
                 submit_turn,
                 is_enabled,
                 increase_key="ArrowRight",
                 decrease_key="ArrowLeft",
                 drag_button=SECONDARY_BUTTON
                 ):
        """
        Args:
            scene: SceneManager providing the handle node and radius.
            decoder: GestureDecoder owning the drag session.
            submit_turn: Callable(direction, animate) receiving every turn.
            is_enabled: Callable returning the input-enabled flag.
        """
        VaultLogger.info("HIDM", f"[INIT] HIDManager - keys: {increase_key}/{decrease_key} drag_button: {drag_button}")
        if increase_key == decrease_key:
            raise ValueError(f"increase_key and decrease_key must differ, both are {increase_key!r}")
        self.scene = scene
        self.decoder = decoder
        self.submit_turn = submit_turn
        self.is_enabled = is_enabled
        self.increase_key = increase_key
        self.decrease_key = decrease_key
        self.drag_button = drag_button

        self._source = None
        self._subscriptions = []
        self._drag_subscriptions = []
        self.dropped_events = 0

    @property
    def attached(self):
        return self._source is not None

    @property
    def dragging(self):
        return self.decoder.active

    #region --- Lifecycle ---
    def attach(self, source):
        """Subscribe to a raw EventSource for the lifetime of the component."""
        if self._source is not None:
            self.detach()
        self._source = source
        self._subscriptions = [
            source.on(KEY_DOWN, self._on_key_down),
            source.on(WHEEL, self._on_wheel),
            source.on(POINTER_TAP, self._on_tap),
            source.on(POINTER_DOWN, self._on_pointer_down),
            source.on(CONTEXT_MENU, self._on_context_menu),
        ]
        VaultLogger.debug("HIDM", f"Attached {len(self._subscriptions)} input subscriptions")

    def detach(self):
        """Dispose every subscription, ending any drag in progress."""
        self._end_drag()
        for sub in self._subscriptions:
            sub.dispose()
        self._subscriptions = []
        self._source = None
    #endregion

    def _drop(self, event):
        self.dropped_events += 1
        VaultLogger.debug("HIDM", f"Input disabled, dropped {event.type}")

    #region --- Discrete Inputs ---
    def _on_key_down(self, event):
        if event.code == self.increase_key:
            direction = Direction.CLOCKWISE
        elif event.code == self.decrease_key:
            direction = Direction.COUNTERCLOCKWISE
        else:
            return
        if not self.is_enabled():
            self._drop(event)
            return
        self.submit_turn(direction, True)

    def _on_wheel(self, event):
        if not self.is_enabled():
            self._drop(event)
            return
        event.prevent_default()
        if event.delta_y == 0:
            return  # Horizontal-only scroll carries no dial direction
        self.submit_turn(Direction.from_sign(event.delta_y), True)

    def _on_tap(self, event):
        if event.button != PRIMARY_BUTTON:
            return
        handle = self.scene.node(HANDLE)
        if not handle.contains(event.x, event.y, self.scene.handle_radius()):
            return
        if not self.is_enabled():
            self._drop(event)
            return
        local_x, _ = handle.to_local(event.x, event.y)
        direction = Direction.CLOCKWISE if local_x >= 0 else Direction.COUNTERCLOCKWISE
        self.submit_turn(direction, True)

    def _on_context_menu(self, event):
        # The secondary button drives drags, never the platform menu
        event.prevent_default()
    #endregion

    #region --- Drag Handling ---
    def _on_pointer_down(self, event):
        if event.button != self.drag_button:
            return
        if not self.is_enabled():
            self._drop(event)
            return
        handle = self.scene.node(HANDLE)
        if not handle.contains(event.x, event.y, self.scene.handle_radius()):
            return

        self._end_drag()
        self.decoder.start(event.x)
        self.scene.set_cursor(HANDLE, "grabbing")
        source = self._source
        self._drag_subscriptions = [
            source.on(POINTER_MOVE, self._on_pointer_move),
            source.once(POINTER_UP, self._on_drag_end),
            source.once(POINTER_UP_OUTSIDE, self._on_drag_end),
        ]
        VaultLogger.debug("HIDM", f"Drag session started at x={event.x:.1f}")

    def _on_pointer_move(self, event):
        if not self.decoder.active:
            return
        if not self.is_enabled():
            self.decoder.resync(event.x)
            return

        d_theta = self.decoder.move(event.x, self.scene.handle_radius())
        if d_theta:
            for node in self.scene.nodes(HANDLE, HANDLE_SHADOW):
                node.rotation += d_theta

        for direction in self.decoder.ticks():
            self.submit_turn(direction, False)

    def _on_drag_end(self, event):
        VaultLogger.debug("HIDM", f"Drag session ended ({event.type})")
        self._end_drag()

    def _end_drag(self):
        for sub in self._drag_subscriptions:
            sub.dispose()
        self._drag_subscriptions = []
        if self.decoder.active:
            self.decoder.stop()
            self.scene.set_cursor(HANDLE, "grab")
    #endregion
