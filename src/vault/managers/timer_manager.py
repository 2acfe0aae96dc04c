# File: src/vault/managers/timer_manager.py
"""Elapsed-time counter for the active round."""

from adafruit_ticks import ticks_ms, ticks_diff

from vault.utilities.logger import VaultLogger
from .scene_manager import TIMER_TEXT


def format_elapsed(seconds):
    """One decimal of precision, e.g. '12.3s'."""
    return f"{seconds:.1f}s"


class RoundTimer:
    """
    Reports round elapsed time to the timer label once per frame.

    At most one frame subscription exists: start() always stops the previous
    one first. Reporting is skipped on frames where input is disabled.
    """

    def __init__(self, render, scene, is_enabled=None, clock=None):
        """
        Args:
            render: RenderManager providing add_frame_callback().
            scene: SceneManager holding the timer label.
            is_enabled: Optional callable; frames where it returns False are not reported.
            clock: Millisecond tick source; defaults to adafruit_ticks.ticks_ms.
        """
        self.render = render
        self.scene = scene
        self.is_enabled = is_enabled
        self._clock = clock or ticks_ms
        self._start_ms = None
        self._subscription = None

    @property
    def running(self):
        return self._subscription is not None

    def start(self):
        """Record a new start instant and attach to the frame scheduler."""
        self.stop()
        self._start_ms = self._clock()
        self._subscription = self.render.add_frame_callback(self._on_frame)
        self.scene.set_text(TIMER_TEXT, format_elapsed(0.0))
        VaultLogger.debug("TIMR", "Round timer started")

    def stop(self):
        """Detach from the frame scheduler. The label keeps its last value."""
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
            VaultLogger.debug("TIMR", f"Round timer stopped at {format_elapsed(self.elapsed())}")

    def elapsed(self):
        """Seconds since the last start(), 0.0 if never started."""
        if self._start_ms is None:
            return 0.0
        return ticks_diff(self._clock(), self._start_ms) / 1000.0

    def _on_frame(self):
        if self.is_enabled is not None and not self.is_enabled():
            return
        self.scene.set_text(TIMER_TEXT, format_elapsed(self.elapsed()))
