# File: src/vault/utilities/__init__.py
"""Utility modules for the vault game."""

from .choreography import Sequencer
from .combination import describe, generate_combination
from .context import GameContext
from .easing import get_easing
from .events import EventSource, InputEvent, Subscription
from .gesture_decoder import DragSession, GestureDecoder
from .logger import LogLevel, VaultLogger
from .turn_validator import RoundState, apply_turn
from .vault_types import Direction, Outcome, RoundPhase, Step

__all__ = [
    'Sequencer',
    'describe',
    'generate_combination',
    'GameContext',
    'get_easing',
    'EventSource',
    'InputEvent',
    'Subscription',
    'DragSession',
    'GestureDecoder',
    'LogLevel',
    'VaultLogger',
    'RoundState',
    'apply_turn',
    'Direction',
    'Outcome',
    'RoundPhase',
    'Step',
    ]
