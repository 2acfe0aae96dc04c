# File: src/vault/utilities/gesture_decoder.py
"""
Continuous drag to discrete tick decoding.

Horizontal pointer displacement over the dial handle is converted to an
angle, dx / R * T, where R is the handle radius and T the tick angle.
Angles accumulate across samples and every full T of accumulated rotation
emits one tick; the remainder carries over to the next sample, so a whole
drag session emits floor(total rotation / T) ticks with no drift.
"""

import math

from .vault_types import Direction

DEFAULT_TICK_ANGLE = math.radians(60)


class DragSession:
    """Pointer state for one drag, from drag-start to pointer release."""
    __slots__ = ('active', 'previous_x')

    def __init__(self):
        self.active = False
        self.previous_x = 0.0

    def begin(self, x):
        self.active = True
        self.previous_x = x

    def end(self):
        self.active = False


class GestureDecoder:
    """
    Owns the drag session and the carry-over angle accumulator.

    Usage:
        decoder.start(pointer_x)
        d_theta = decoder.move(pointer_x, radius)   # apply d_theta visually
        for direction in decoder.ticks():           # then forward each tick
            submit(direction)
        decoder.stop()
    """

    def __init__(self, tick_angle=DEFAULT_TICK_ANGLE):
        if tick_angle <= 0:
            raise ValueError(f"tick_angle must be positive, got {tick_angle}")
        self.tick_angle = tick_angle
        self.accumulated_angle = 0.0
        self.session = DragSession()

    @property
    def active(self):
        return self.session.active

    def start(self, x):
        """Begin a drag session at pointer x. The accumulator always restarts at zero."""
        self.session.begin(x)
        self.accumulated_angle = 0.0

    def stop(self):
        """End the drag session. Residual sub-tick rotation is discarded."""
        self.session.end()
        self.accumulated_angle = 0.0

    def move(self, x, radius):
        """
        Feed a new pointer x during the session.

        Returns:
            The raw rotation delta in radians for this sample (0.0 when no
            session is active), for continuous visual rotation.
        """
        if not self.session.active:
            return 0.0
        dx = x - self.session.previous_x
        self.session.previous_x = x
        return self.feed(dx, radius)

    def feed(self, dx, radius):
        """Add a horizontal displacement dx to the accumulator; returns d_theta."""
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        d_theta = (dx / radius) * self.tick_angle
        self.accumulated_angle += d_theta
        return d_theta

    def ticks(self):
        """
        Lazily yields one Direction per full tick angle in the accumulator.

        Each yielded tick moves the accumulator one tick angle back toward
        zero, leaving the fractional remainder in place.
        """
        while abs(self.accumulated_angle) >= self.tick_angle:
            if self.accumulated_angle > 0:
                self.accumulated_angle -= self.tick_angle
                yield Direction.CLOCKWISE
            else:
                self.accumulated_angle += self.tick_angle
                yield Direction.COUNTERCLOCKWISE

    def resync(self, x):
        """
        Track pointer x without producing rotation (samples dropped while
        input is disabled). Clears any residual so it cannot leak into the
        next round.
        """
        if self.session.active:
            self.session.previous_x = x
        self.accumulated_angle = 0.0
