# File: src/vault/utilities/choreography.py
"""Ordered, awaited playback of scripted timed effects.

A script is a list of steps. Each step is one of:
    - a callable: an instant command (show/hide a node, set text, ...)
    - a Tween: started and awaited
    - a list/tuple of Tweens: started together and awaited together

A step never starts before the previous step's completion signal.
"""

import asyncio


class Sequencer:
    """Interprets choreography scripts against a TweenManager."""

    def __init__(self, tweens):
        self.tweens = tweens

    async def play(self, steps):
        """
        Run the steps strictly in order.

        Raises:
            asyncio.CancelledError: If an awaited tween is killed or the
                calling task is cancelled; later steps do not run.
        """
        for step in steps:
            if isinstance(step, (list, tuple)):
                await asyncio.gather(*(self.tweens.play(tween) for tween in step))
            elif callable(step):
                step()
            else:
                await self.tweens.play(step)
