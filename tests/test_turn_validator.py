#!/usr/bin/env python3
"""Unit tests for RoundState and apply_turn."""

import pytest

from vault.utilities.turn_validator import RoundState, apply_turn
from vault.utilities.vault_types import Direction, Outcome, Step

CW = Direction.CLOCKWISE
CCW = Direction.COUNTERCLOCKWISE

COMBINATION = (Step(3, CW), Step(1, CCW), Step(5, CW))


def test_round_state_initialization():
    state = RoundState(COMBINATION)
    assert state.step_index == 0
    assert state.remaining_ticks == 3
    assert state.expected_step == COMBINATION[0]
    assert not state.is_complete


def test_round_state_requires_steps():
    with pytest.raises(ValueError):
        RoundState(())


def test_full_combination_sequence():
    """Exact matching ticks progress step by step and end with ROUND_COMPLETE."""
    state = RoundState(COMBINATION)
    ticks = [CW, CW, CW, CCW, CW, CW, CW, CW, CW]
    outcomes = [apply_turn(state, d) for d in ticks]

    assert outcomes == [
        Outcome.PROGRESSED, Outcome.PROGRESSED, Outcome.STEP_COMPLETE,
        Outcome.STEP_COMPLETE,
        Outcome.PROGRESSED, Outcome.PROGRESSED, Outcome.PROGRESSED, Outcome.PROGRESSED,
        Outcome.ROUND_COMPLETE,
    ]
    assert state.step_index == len(COMBINATION)
    assert state.is_complete
    assert state.expected_step is None


def test_step_complete_loads_next_step_ticks():
    state = RoundState(COMBINATION)
    for _ in range(3):
        apply_turn(state, CW)
    assert state.step_index == 1
    assert state.remaining_ticks == 1


@pytest.mark.parametrize("consumed", [0, 1, 2])
def test_wrong_direction_is_mismatch_regardless_of_remaining(consumed):
    state = RoundState(COMBINATION)
    for _ in range(consumed):
        apply_turn(state, CW)
    remaining = state.remaining_ticks
    assert remaining == 3 - consumed

    assert apply_turn(state, CCW) is Outcome.MISMATCH
    # Mismatch reports only; the caller resets the round
    assert state.remaining_ticks == remaining
    assert state.step_index == 0


def test_mismatch_in_later_step():
    state = RoundState(COMBINATION)
    for d in (CW, CW, CW, CCW, CW):
        apply_turn(state, d)
    assert apply_turn(state, CCW) is Outcome.MISMATCH


def test_scenario_progress_then_mismatch():
    state = RoundState(COMBINATION)
    assert [apply_turn(state, d) for d in (CW, CCW)] == [Outcome.PROGRESSED, Outcome.MISMATCH]


def test_single_tick_steps():
    state = RoundState((Step(1, CCW), Step(1, CCW), Step(1, CW)))
    assert apply_turn(state, CCW) is Outcome.STEP_COMPLETE
    assert apply_turn(state, CCW) is Outcome.STEP_COMPLETE
    assert apply_turn(state, CW) is Outcome.ROUND_COMPLETE


def test_completed_round_accepts_no_more_ticks():
    state = RoundState((Step(1, CW),))
    assert apply_turn(state, CW) is Outcome.ROUND_COMPLETE
    assert apply_turn(state, CW) is Outcome.MISMATCH
    assert state.step_index == 1
