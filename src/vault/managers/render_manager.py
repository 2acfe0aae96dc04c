# File: src/vault/managers/render_manager.py
import asyncio

from adafruit_ticks import ticks_add, ticks_diff, ticks_ms

from vault.utilities.events import Subscription
from vault.utilities.logger import VaultLogger

class RenderManager:
    """
    Frame scheduler: runs the fixed-time-step frame loop (default 60Hz),
    steps registered animators with the frame's elapsed time and invokes
    per-frame callbacks.
    """
    DEFAULT_FRAME_RATE = 60  # Default frame rate in Hz
    MIN_SLEEP_DURATION = 0.005  # Minimum sleep to prevent event loop starvation
    MIN_FRAME_RATE = 10  # Minimum frame rate when backing off (Hz)
    BACKOFF_THRESHOLD = 5  # Number of consecutive lag frames before backing off
    BACKOFF_FACTOR = 0.9  # Reduce frame rate by 10% when backing off
    RECOVERY_THRESHOLD = 20  # Number of consecutive good frames before recovering
    RECOVERY_FACTOR = 1.05  # Increase frame rate by 5% when recovering
    MAX_FRAME_DT = 0.25  # Clamp for a single frame's elapsed time (seconds)

    def __init__(self, frame_rate=DEFAULT_FRAME_RATE):
        if frame_rate < self.MIN_FRAME_RATE:
            raise ValueError(f"frame_rate must be at least {self.MIN_FRAME_RATE}, got {frame_rate}")
        VaultLogger.info("REND", f"[INIT] RenderManager - frame_rate: {frame_rate}")
        self.default_frame_rate = frame_rate
        self.target_frame_rate = frame_rate

        # Managers stepped every frame (e.g., TweenManager)
        self._animators = []

        # Per-frame callbacks (e.g., the round timer)
        self._frame_callbacks = []

        self.frame_counter = 0
        self._running = False

        # Adaptive frame rate tracking
        self.consecutive_lag_frames = 0
        self.consecutive_good_frames = 0

    def add_animator(self, manager):
        """Register a manager whose .animate_loop(dt) is awaited every frame."""
        VaultLogger.debug("REND", f"Adding animator: {manager.__class__.__name__}")
        self._animators.append(manager)

    def add_frame_callback(self, callback):
        """Register callback() to run once per frame. Returns a disposable Subscription."""
        sub = Subscription(self, "frame", callback)
        self._frame_callbacks.append(sub)
        return sub

    def _remove(self, sub):
        if sub in self._frame_callbacks:
            self._frame_callbacks.remove(sub)

    @property
    def frame_callback_count(self):
        return len(self._frame_callbacks)

    async def step_frame(self, dt):
        """Run exactly one frame: animators first, then frame callbacks."""
        for mgr in self._animators:
            await mgr.animate_loop(dt)

        for sub in list(self._frame_callbacks):
            if not sub.disposed:
                sub.handler()

        self.frame_counter += 1

    def stop(self):
        self._running = False

    async def run(self):
        """The main frame loop (default 60Hz, configurable via target_frame_rate).

        Automatically adapts frame rate when unable to keep up with target timing.
        """
        self._running = True
        last_frame_ms = ticks_ms()
        next_frame_ms = last_frame_ms

        while self._running:
            now_ms = ticks_ms()
            dt = min(ticks_diff(now_ms, last_frame_ms) / 1000.0, self.MAX_FRAME_DT)
            last_frame_ms = now_ms

            await self.step_frame(dt)

            # Fixed Time Step Timing
            frame_ms = int(round(1000.0 / self.target_frame_rate))
            next_frame_ms = ticks_add(next_frame_ms, frame_ms)
            sleep_duration = ticks_diff(next_frame_ms, ticks_ms()) / 1000.0

            if sleep_duration > 0:
                await asyncio.sleep(sleep_duration)
                self.consecutive_good_frames += 1
                self.consecutive_lag_frames = 0

                # Gradually recover frame rate if consistently keeping up
                if self.consecutive_good_frames >= self.RECOVERY_THRESHOLD:
                    if self.target_frame_rate < self.default_frame_rate:
                        self.target_frame_rate = min(
                            self.target_frame_rate * self.RECOVERY_FACTOR,
                            self.default_frame_rate
                        )
                        self.consecutive_good_frames = 0
                        self.consecutive_lag_frames = 0
            else:
                # Lagging: Reset target and enforce minimum sleep to prevent event loop starvation
                next_frame_ms = ticks_ms()
                await asyncio.sleep(self.MIN_SLEEP_DURATION)

                self.consecutive_lag_frames += 1
                self.consecutive_good_frames = 0

                # Gradually reduce frame rate if consistently lagging
                if self.consecutive_lag_frames >= self.BACKOFF_THRESHOLD:
                    if self.target_frame_rate > self.MIN_FRAME_RATE:
                        self.target_frame_rate = max(
                            self.target_frame_rate * self.BACKOFF_FACTOR,
                            self.MIN_FRAME_RATE
                        )
                        VaultLogger.debug("REND", f"Backing off to {self.target_frame_rate:.1f} Hz")
                        self.consecutive_lag_frames = 0
                        self.consecutive_good_frames = 0
