# File: src/vault/utilities/vault_types.py
"""Shared value types for the vault combination game."""

from collections import namedtuple
from enum import Enum


class Direction(Enum):
    """Rotation direction of a single tick. There is no neutral value."""
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"

    @property
    def sign(self):
        """+1 for clockwise, -1 for counterclockwise."""
        return 1 if self is Direction.CLOCKWISE else -1

    @classmethod
    def from_sign(cls, value):
        """Positive values map to clockwise, everything else to counterclockwise."""
        return cls.CLOCKWISE if value > 0 else cls.COUNTERCLOCKWISE

    def __str__(self):
        return self.value


class Outcome(Enum):
    """Result of validating one tick against the round state."""
    PROGRESSED = "progressed"
    STEP_COMPLETE = "step_complete"
    ROUND_COMPLETE = "round_complete"
    MISMATCH = "mismatch"


class RoundPhase(Enum):
    """Top-level state of the round lifecycle."""
    ACTIVE = "active"
    UNLOCKING = "unlocking"
    FAILING = "failing"
    RECLOSING = "reclosing"


class Step(namedtuple("Step", ("ticks", "direction"))):
    """One (tick-count, direction) requirement of a combination."""
    __slots__ = ()

    MIN_TICKS = 1
    MAX_TICKS = 9

    def __new__(cls, ticks, direction):
        if not isinstance(ticks, int) or isinstance(ticks, bool):
            raise ValueError(f"Step ticks must be an integer, got {ticks!r}")
        if not cls.MIN_TICKS <= ticks <= cls.MAX_TICKS:
            raise ValueError(f"Step ticks must be in [{cls.MIN_TICKS}, {cls.MAX_TICKS}], got {ticks}")
        return super().__new__(cls, ticks, Direction(direction))

    def __str__(self):
        return f"{self.ticks} {self.direction}"
