# File: src/vault/modes/vault_cracker.py
"""Vault Cracker Game Mode."""

import asyncio
import math
import random

from vault.managers.hid_manager import HIDManager
from vault.managers.scene_manager import (
    BLINK,
    DOOR_CLOSED,
    DOOR_OPEN,
    DOOR_OPEN_SHADOW,
    HANDLE,
    HANDLE_SHADOW,
)
from vault.managers.timer_manager import RoundTimer
from vault.managers.tween_manager import Tween
from vault.utilities.choreography import Sequencer
from vault.utilities.combination import (
    COMBINATION_LENGTH,
    MAX_TICKS,
    MIN_TICKS,
    describe,
    generate_combination,
)
from vault.utilities.events import SECONDARY_BUTTON
from vault.utilities.gesture_decoder import GestureDecoder
from vault.utilities.logger import VaultLogger
from vault.utilities.turn_validator import RoundState, apply_turn
from vault.utilities.vault_types import Outcome, RoundPhase

from .base import BaseMode

# Phase transitions the lifecycle accepts; None is "no round started yet"
_TRANSITIONS = {
    None: (RoundPhase.ACTIVE,),
    RoundPhase.ACTIVE: (RoundPhase.UNLOCKING, RoundPhase.FAILING),
    RoundPhase.UNLOCKING: (RoundPhase.RECLOSING,),
    RoundPhase.RECLOSING: (RoundPhase.ACTIVE,),
    RoundPhase.FAILING: (RoundPhase.ACTIVE,),
}


class VaultCracker(BaseMode):
    """
    Round lifecycle controller.

    Owns the round state, the phase and the round timer. Turns submitted
    by the input gateway are queued and processed one at a time by a single
    worker task: animate the dial (key, wheel and tap turns only), validate,
    then run the unlock or fail choreography when the outcome calls for it.
    Input is enabled only while the phase is ACTIVE.
    """

    TICK_ANGLE_DEG = 60
    TURN_DURATION = 0.25
    SPIN_ANGLE = 8 * math.pi
    SPIN_DURATION = 1.2
    UNLOCK_DWELL = 5.0
    FAIL_DWELL = 0.3
    DOOR_FADE_DURATION = 0.3
    DOOR_SLIDE_DURATION = 0.4
    DOOR_SHIFT_RATIO = 0.2
    BLINK_PERIOD = 0.6

    def __init__(self, core, rng=None, settings=None):
        """
        Args:
            core: GameContext with scene, tweens, render and events.
            rng: Random source for combinations (random.Random). Seed it
                 for reproducible rounds.
            settings: Optional dict overriding the tunables (see code.DEFAULT_CONFIG).

        Raises:
            ValueError: If a setting is out of range.
        """
        super().__init__(core, "VAULT CRACKER", "Open the vault by turning the dial")
        settings = settings or {}
        self.rng = rng if rng is not None else random.Random()

        tick_angle_deg = settings.get("tick_angle_deg", self.TICK_ANGLE_DEG)
        if tick_angle_deg <= 0:
            raise ValueError(f"tick_angle_deg must be positive, got {tick_angle_deg}")
        self.tick_angle = math.radians(tick_angle_deg)

        self.combination_length = settings.get("combination_length", COMBINATION_LENGTH)
        self.min_ticks = settings.get("min_ticks", MIN_TICKS)
        self.max_ticks = settings.get("max_ticks", MAX_TICKS)
        if self.combination_length < 1:
            raise ValueError(f"combination_length must be at least 1, got {self.combination_length}")
        if not MIN_TICKS <= self.min_ticks <= self.max_ticks <= MAX_TICKS:
            raise ValueError(f"Invalid tick range: [{self.min_ticks}, {self.max_ticks}]")

        self.turn_duration = self._non_negative(settings, "turn_duration", self.TURN_DURATION)
        self.spin_duration = self._non_negative(settings, "spin_duration", self.SPIN_DURATION)
        self.unlock_dwell = self._non_negative(settings, "unlock_dwell", self.UNLOCK_DWELL)
        self.fail_dwell = self._non_negative(settings, "fail_dwell", self.FAIL_DWELL)
        self.door_shift_ratio = self._non_negative(settings, "door_shift_ratio", self.DOOR_SHIFT_RATIO)

        self.phase = None
        self.round = None
        self.round_count = 0
        self.last_outcome = None

        self.decoder = GestureDecoder(self.tick_angle)
        self.hid = HIDManager(
            core.scene,
            self.decoder,
            self.submit_turn,
            lambda: self.input_enabled,
            increase_key=settings.get("increase_key", "ArrowRight"),
            decrease_key=settings.get("decrease_key", "ArrowLeft"),
            drag_button=settings.get("drag_button", SECONDARY_BUTTON),
        )
        self.timer = RoundTimer(core.render, core.scene, is_enabled=lambda: self.input_enabled)
        self.sequencer = Sequencer(core.tweens)

        self._turns = None
        self._worker = None
        self._stopped = None

    @staticmethod
    def _non_negative(settings, key, default):
        value = settings.get(key, default)
        if value < 0:
            raise ValueError(f"{key} must be >= 0, got {value}")
        return value

    @property
    def input_enabled(self):
        return self.phase is RoundPhase.ACTIVE

    @property
    def combination(self):
        return self.round.combination if self.round else None

    #region --- Phase Control ---
    def _set_phase(self, phase):
        """The single place the phase (and with it the input flag) changes."""
        if phase not in _TRANSITIONS[self.phase]:
            raise RuntimeError(f"Illegal phase transition: {self.phase} -> {phase}")
        VaultLogger.debug("VALT", f"Phase {self.phase} -> {phase}")
        self.phase = phase
        enabled = phase is RoundPhase.ACTIVE
        self.core.scene.set_interactive(HANDLE, enabled)
        if not enabled:
            self._flush_turns()

    def _flush_turns(self):
        if self._turns is None:
            return
        while not self._turns.empty():
            self._turns.get_nowait()

    def _kill_blink(self):
        scene = self.core.scene
        self.core.tweens.kill_tweens_of(scene.node(BLINK))
        scene.set_visible(BLINK, False)
        scene.set_alpha(BLINK, 1.0)

    def _draw_combination(self):
        return generate_combination(
            self.rng, self.combination_length, self.min_ticks, self.max_ticks
        )

    def new_round(self):
        """
        Generate a fresh combination and reset the scene, timer and input.

        The new combination always differs from the previous round's in at
        least one step.
        """
        scene = self.core.scene
        self._kill_blink()

        previous = self.combination
        combination = self._draw_combination()
        while combination == previous:
            combination = self._draw_combination()
        self.round = RoundState(combination)
        self.round_count += 1
        self.last_outcome = None
        self._flush_turns()
        VaultLogger.info("VALT", f"combination: {describe(combination)}")

        self.timer.start()
        self._set_phase(RoundPhase.ACTIVE)

        for name in (HANDLE, HANDLE_SHADOW):
            scene.set_visible(name, True)
            scene.set_rotation(name, 0.0)
        scene.set_visible(DOOR_CLOSED, True)
        scene.set_alpha(DOOR_CLOSED, 1.0)
        scene.set_visible(DOOR_OPEN, False)
        scene.set_visible(DOOR_OPEN_SHADOW, False)
    #endregion

    #region --- Turn Processing ---
    def submit_turn(self, direction, animate=True):
        """
        Queue a turn for the worker. Returns False (turn dropped) when input
        is disabled.
        """
        if not self.input_enabled or self._turns is None:
            return False
        self._turns.put_nowait((direction, animate, self.round_count))
        return True

    async def _turn_worker(self):
        while True:
            direction, animate, round_id = await self._turns.get()
            if not self.input_enabled or round_id != self.round_count:
                continue  # Queued before the round ended
            await self.process_turn(direction, animate)

    async def process_turn(self, direction, animate=True):
        """
        Rotate (optionally animated), validate, and react to the outcome.

        Returns the Outcome, or None if input was disabled meanwhile.
        """
        if animate:
            nodes = self.core.scene.nodes(HANDLE, HANDLE_SHADOW)
            await self.sequencer.play([
                Tween(nodes, by={"rotation": direction.sign * self.tick_angle},
                      duration=self.turn_duration, ease="power2.inOut"),
            ])
        if not self.input_enabled:
            return None

        outcome = apply_turn(self.round, direction)
        self.last_outcome = outcome
        VaultLogger.debug("VALT", f"Turn {direction} -> {outcome.value} ({self.round!r})")

        if outcome is Outcome.ROUND_COMPLETE:
            await self.unlock()
        elif outcome is Outcome.MISMATCH:
            await self.fail()
        return outcome
    #endregion

    #region --- Choreography ---
    def _spin_tween(self):
        return Tween(self.core.scene.nodes(HANDLE, HANDLE_SHADOW), by={"rotation": self.SPIN_ANGLE},
                     duration=self.spin_duration, ease="power2.inOut")

    def _set_handle_visible(self, visible):
        self.core.scene.set_visible(HANDLE, visible)
        self.core.scene.set_visible(HANDLE_SHADOW, visible)

    def _show_open_door(self):
        scene = self.core.scene
        rotation = scene.node(DOOR_CLOSED).rotation
        for name in (DOOR_OPEN, DOOR_OPEN_SHADOW):
            scene.set_rotation(name, rotation)
            scene.set_visible(name, True)

    def _start_blink(self):
        blink = self.core.scene.node(BLINK)
        blink.visible = True
        # Runs until _kill_blink(); never awaited
        self.core.tweens.play(Tween(
            blink, to={"alpha": 0.0}, by={"rotation": math.pi / 2},
            duration=self.BLINK_PERIOD, ease="sine.inOut", repeat=-1, yoyo=True,
        ))

    def _unlock_script(self, shift):
        scene = self.core.scene
        door_closed = scene.node(DOOR_CLOSED)
        open_doors = scene.nodes(DOOR_OPEN, DOOR_OPEN_SHADOW)
        return [
            lambda: self._set_handle_visible(False),
            self._show_open_door,
            (
                Tween(door_closed, to={"alpha": 0.0}, duration=self.DOOR_FADE_DURATION),
                Tween(open_doors, start={"alpha": 0.0, "x": door_closed.x}, to={"alpha": 1.0},
                      duration=self.DOOR_FADE_DURATION),
            ),
            Tween(open_doors, by={"x": shift}, duration=self.DOOR_SLIDE_DURATION, ease="power2.inOut"),
            self._start_blink,
            Tween(duration=self.unlock_dwell),
        ]

    def _reclose_script(self, shift):
        scene = self.core.scene
        open_doors = scene.nodes(DOOR_OPEN, DOOR_OPEN_SHADOW)
        return [
            Tween(open_doors, by={"x": -shift}, duration=self.DOOR_SLIDE_DURATION, ease="power2.inOut"),
            (
                Tween(open_doors, to={"alpha": 0.0}, duration=self.DOOR_FADE_DURATION),
                Tween(scene.node(DOOR_CLOSED), to={"alpha": 1.0}, duration=self.DOOR_FADE_DURATION),
            ),
            lambda: self._set_handle_visible(True),
            self._spin_tween(),
        ]

    async def unlock(self):
        """UNLOCKING (door opens, blink, dwell) -> RECLOSING -> new round."""
        self._set_phase(RoundPhase.UNLOCKING)
        elapsed = self.timer.elapsed()
        self.timer.stop()
        VaultLogger.note("VALT", f"Vault opened in {elapsed:.1f}s")

        shift = self.core.scene.screen_width * self.door_shift_ratio
        await self.sequencer.play(self._unlock_script(shift))

        self._kill_blink()
        self._set_phase(RoundPhase.RECLOSING)
        await self.sequencer.play(self._reclose_script(shift))
        self.new_round()

    async def fail(self):
        """FAILING (spin, short dwell) -> new round."""
        self._set_phase(RoundPhase.FAILING)
        self.timer.stop()
        VaultLogger.info("VALT", "Wrong direction, resetting the vault")
        await self.sequencer.play([
            self._spin_tween(),
            Tween(duration=self.fail_dwell),
        ])
        self.new_round()
    #endregion

    #region --- Mode Lifecycle ---
    async def run(self):
        """Play rounds until stop() is called."""
        self._turns = asyncio.Queue()
        self._stopped = asyncio.Event()
        self.hid.attach(self.core.events)
        self.new_round()
        self._worker = asyncio.create_task(self._turn_worker())
        await self._stopped.wait()
        return "STOPPED"

    def stop(self):
        if self._stopped is not None:
            self._stopped.set()

    async def exit(self):
        """Tear down input, timer, worker and every running effect."""
        self.hid.detach()
        self.timer.stop()
        if self._worker is not None:
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
            self._worker = None
        self._kill_blink()
        await super().exit()
    #endregion
