# File: src/vault/managers/tween_manager.py
"""Timed property tweens advanced in logical time by the render loop."""

import asyncio

from vault.utilities.easing import DEFAULT_EASE, get_easing
from vault.utilities.logger import VaultLogger


class Tween:
    """
    Description of one timed effect.

    Args:
        targets: One object, a list/tuple of objects, or None for a pure
                 dwell (delay) with no targets.
        to: Dict of absolute end values, e.g. {"alpha": 0}.
        by: Dict of relative deltas, e.g. {"rotation": math.pi / 3}. Applied as
            per-frame increments, so other writes to the same property
            while the tween runs are kept.
        start: Dict of values applied to every target when the tween
               starts (from-values), e.g. {"alpha": 0, "x": 640}.
        duration: Seconds of logical time per cycle.
        ease: Easing name from utilities.easing or a callable.
        repeat: Extra cycles after the first; -1 repeats forever.
        yoyo: Every other cycle plays backwards.

    Raises:
        ValueError: On negative durations, bad repeat counts, a property
                    named in both ``to`` and ``by``, or an unknown ease.
    """
    __slots__ = ('targets', 'to', 'by', 'start', 'duration', 'ease', 'repeat', 'yoyo',
                 'elapsed', 'future', '_from_values', '_end_values', '_last_eased')

    def __init__(self, targets=None, to=None, by=None, start=None,
                 duration=0.0, ease=DEFAULT_EASE, repeat=0, yoyo=False):
        if targets is None:
            targets = ()
        elif not isinstance(targets, (list, tuple)):
            targets = (targets,)
        self.targets = tuple(targets)
        self.to = dict(to or {})
        self.by = dict(by or {})
        self.start = dict(start or {})

        overlap = set(self.to) & set(self.by)
        if overlap:
            raise ValueError(f"Properties set by both 'to' and 'by': {sorted(overlap)}")
        if duration < 0:
            raise ValueError(f"Tween duration must be >= 0, got {duration}")
        if repeat < -1:
            raise ValueError(f"Tween repeat must be >= -1, got {repeat}")
        if repeat != 0 and duration == 0:
            raise ValueError("A repeating tween needs a positive duration")

        self.duration = duration
        self.ease = get_easing(ease)
        self.repeat = repeat
        self.yoyo = yoyo

        self.elapsed = 0.0
        self.future = None
        self._from_values = []
        self._end_values = []
        self._last_eased = 0.0

    @property
    def infinite(self):
        return self.repeat == -1

    def touches(self, target):
        """True if this tween animates the given object (identity match)."""
        return any(t is target for t in self.targets)

    def _capture(self):
        """Apply start values and record from/end values of the 'to' properties."""
        self._from_values = []
        self._end_values = []
        self._last_eased = 0.0
        for target in self.targets:
            for key, value in self.start.items():
                setattr(target, key, value)
            self._from_values.append({key: getattr(target, key) for key in self.to})
            self._end_values.append(dict(self.to))

    def _render(self, progress):
        eased = self.ease(progress)
        step = eased - self._last_eased
        self._last_eased = eased
        for target, from_vals, end_vals in zip(self.targets, self._from_values, self._end_values):
            for key, start in from_vals.items():
                setattr(target, key, start + (end_vals[key] - start) * eased)
            # Relative properties move by the eased increment only
            for key, delta in self.by.items():
                setattr(target, key, getattr(target, key) + delta * step)

    def _advance(self, dt):
        """Move the playhead by dt and render. Returns True once finished."""
        self.elapsed += dt
        if self.duration == 0:
            self._render(1.0)
            return True

        cycle = int(self.elapsed // self.duration)
        if not self.infinite and cycle > self.repeat:
            # Land exactly on the final cycle's end state
            last_cycle = self.repeat
            backwards = self.yoyo and last_cycle % 2 == 1
            self._render(0.0 if backwards else 1.0)
            return True

        local = (self.elapsed - cycle * self.duration) / self.duration
        if self.yoyo and cycle % 2 == 1:
            local = 1.0 - local
        self._render(local)
        return False


class TweenManager:
    """
    Runs Tweens against plain attribute targets (scene nodes).

    The render loop calls animate_loop(dt) once per frame with the elapsed
    seconds; all tween timing is measured in this logical time, so tests
    can drive choreography deterministically by stepping it manually.

    Usage:
        tweens = TweenManager()
        render.add_animator(tweens)
        await tweens.play(Tween(handle, by={"rotation": math.pi}, duration=1.2))
        await tweens.delay(5)
    """

    def __init__(self):
        VaultLogger.info("TWEN", "[INIT] TweenManager")
        self._active = []
        self.time = 0.0

    @property
    def active_count(self):
        return len(self._active)

    def play(self, tween):
        """
        Start a tween and return a Future resolved when it completes.

        The Future is cancelled if the tween is killed before completing;
        an infinite tween only ever ends that way.
        """
        loop = asyncio.get_running_loop()
        tween.future = loop.create_future()
        tween.elapsed = 0.0
        tween._capture()
        self._active.append(tween)
        return tween.future

    def delay(self, seconds):
        """Target-less tween: resolves after `seconds` of logical time."""
        return self.play(Tween(duration=seconds))

    def is_tweening(self, target):
        return any(tween.touches(target) for tween in self._active)

    def kill_tweens_of(self, target):
        """Remove every tween animating target and cancel its Future. Returns the count."""
        killed = [tween for tween in self._active if tween.touches(target)]
        for tween in killed:
            self._active.remove(tween)
            if tween.future is not None and not tween.future.done():
                tween.future.cancel()
        if killed:
            VaultLogger.debug("TWEN", f"Killed {len(killed)} tween(s) of {target!r}")
        return len(killed)

    def kill_all(self):
        """Cancel every running tween, dwell delays included."""
        killed = self._active
        self._active = []
        for tween in killed:
            if tween.future is not None and not tween.future.done():
                tween.future.cancel()
        return len(killed)

    async def animate_loop(self, dt):
        """Advance all tweens by dt seconds (called by RenderManager each frame)."""
        self.step(dt)

    def step(self, dt):
        """Synchronous frame step; completes finished tweens' Futures."""
        self.time += dt
        for tween in list(self._active):
            if tween._advance(dt):
                self._active.remove(tween)
                if not tween.future.done():
                    tween.future.set_result(None)
