# File: src/vault/utilities/context.py

class GameContext:
    """
    Holds references to the collaborators a mode drives: the scene, the
    tween executor, the frame scheduler and the raw input event source.
    """
    def __init__(self, scene=None, tweens=None, render=None, events=None):
        self.scene = scene
        self.tweens = tweens
        self.render = render
        self.events = events
