# File: src/vault/utilities/turn_validator.py
"""Round progress tracking and per-tick validation."""

from .vault_types import Outcome


class RoundState:
    """
    Progress through the current combination.

    Created at round start with step_index=0 and remaining_ticks set to the
    first step's tick count. Only apply_turn() mutates it; a new instance
    replaces it at the next round start.
    """
    __slots__ = ('combination', 'step_index', 'remaining_ticks')

    def __init__(self, combination):
        if not combination:
            raise ValueError("RoundState requires a non-empty combination")
        self.combination = combination
        self.step_index = 0
        self.remaining_ticks = combination[0].ticks

    @property
    def is_complete(self):
        """True once every step has been matched (terminal win)."""
        return self.step_index == len(self.combination)

    @property
    def expected_step(self):
        """The step currently being entered, or None once complete."""
        if self.is_complete:
            return None
        return self.combination[self.step_index]

    def __repr__(self):
        return (f"RoundState(step_index={self.step_index}, "
                f"remaining_ticks={self.remaining_ticks}, steps={len(self.combination)})")


def apply_turn(state, direction):
    """
    Validates one tick against the round state.

    A tick in the expected direction consumes one remaining tick; finishing a
    step moves on to the next one, finishing the last step completes the
    round. Any tick in the other direction is a MISMATCH for the whole round,
    whatever the remaining tick count, and leaves the state untouched. A
    completed round accepts no further ticks and reports MISMATCH.

    Args:
        state: RoundState to advance.
        direction: Direction of the tick.

    Returns:
        Outcome.PROGRESSED, STEP_COMPLETE, ROUND_COMPLETE or MISMATCH.
    """
    step = state.expected_step
    if step is None or direction != step.direction:
        return Outcome.MISMATCH

    state.remaining_ticks -= 1
    if state.remaining_ticks > 0:
        return Outcome.PROGRESSED

    state.step_index += 1
    if state.is_complete:
        state.remaining_ticks = 0
        return Outcome.ROUND_COMPLETE

    state.remaining_ticks = state.combination[state.step_index].ticks
    return Outcome.STEP_COMPLETE
