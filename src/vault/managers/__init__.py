# File: src/vault/managers/__init__.py
"""Top-level package for manager classes."""

from .hid_manager import HIDManager
from .render_manager import RenderManager
from .scene_manager import SceneManager, SceneNode
from .timer_manager import RoundTimer
from .tween_manager import Tween, TweenManager

__all__ = [
    "HIDManager",
    "RenderManager",
    "SceneManager",
    "SceneNode",
    "RoundTimer",
    "Tween",
    "TweenManager",
]
