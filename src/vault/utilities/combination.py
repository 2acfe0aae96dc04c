# File: src/vault/utilities/combination.py
"""Combination generation for the vault dial."""

from .vault_types import Direction, Step

COMBINATION_LENGTH = 3
MIN_TICKS = Step.MIN_TICKS
MAX_TICKS = Step.MAX_TICKS


def generate_combination(rng, length=COMBINATION_LENGTH, min_ticks=MIN_TICKS, max_ticks=MAX_TICKS):
    """
    Generates a fresh combination.

    Each step draws its tick count uniformly from [min_ticks, max_ticks] and
    its direction uniformly from the two Directions, independently per step.

    Args:
        rng: Random source exposing randint() and random() (e.g. random.Random).
            Pass a seeded instance for reproducible output.
        length: Number of steps in the combination.
        min_ticks: Smallest tick count (inclusive).
        max_ticks: Largest tick count (inclusive).

    Returns:
        A new tuple of Step objects.

    Raises:
        ValueError: If length < 1 or the tick range falls outside [1, 9].
    """
    if length < 1:
        raise ValueError(f"Combination length must be at least 1, got {length}")
    if not MIN_TICKS <= min_ticks <= max_ticks <= MAX_TICKS:
        raise ValueError(f"Invalid tick range: [{min_ticks}, {max_ticks}]")

    return tuple(
        Step(rng.randint(min_ticks, max_ticks), _random_direction(rng))
        for _ in range(length)
    )


def _random_direction(rng):
    return Direction.CLOCKWISE if rng.random() < 0.5 else Direction.COUNTERCLOCKWISE


def describe(combination):
    """Human readable form used in logs: '3 clockwise, 1 counterclockwise, ...'."""
    return ", ".join(str(step) for step in combination)
