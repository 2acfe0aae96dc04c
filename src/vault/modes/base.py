# File: src/vault/modes/base.py
"""Base class for all modes."""
import asyncio

class BaseMode:
    """
    Base class for all modes.

    A mode drives the collaborators held by its context (``core``):
    ``core.scene``, ``core.tweens``, ``core.render`` and ``core.events``.

    Lifecycle:
        execute() awaits enter(), then run(), and always awaits exit() in a
        finally block so subscriptions, timers and running effects are torn
        down on every exit path, including cancellation and errors.
    """

    def __init__(self, core, name="MODE", description=""):
        self.core = core
        self.name = name
        self.description = description

    async def enter(self):
        """Standard setup routine."""
        # Effects left over from a previous mode must not touch this one
        self.core.tweens.kill_all()
        self.core.scene.layout()
        await asyncio.sleep(0)

    async def exit(self):
        """Standard cleanup routine."""
        self.core.tweens.kill_all()

    async def run(self):
        """Override this method in subclasses."""
        raise NotImplementedError("Subclasses must implement the run() method.")

    async def execute(self):
        """The wrapper called by the bootstrap."""
        try:
            await self.enter()
            result = await self.run()
            return result
        finally:
            await self.exit()
