# File: src/vault/managers/scene_manager.py
"""Headless scene state for the vault's named visual elements.

The renderer reads these nodes every frame; the game only writes them
through the set_* commands or through tweens targeting a node. The one
piece of geometry the game reads back is the handle radius.
"""

import math

from vault.utilities.logger import VaultLogger

BACKGROUND = "background"
DOOR_CLOSED = "door_closed"
DOOR_OPEN = "door_open"
DOOR_OPEN_SHADOW = "door_open_shadow"
HANDLE = "handle"
HANDLE_SHADOW = "handle_shadow"
BLINK = "blink"
TIMER_TEXT = "timer_text"

ELEMENT_NAMES = (
    BACKGROUND, DOOR_CLOSED, DOOR_OPEN_SHADOW, DOOR_OPEN,
    HANDLE_SHADOW, HANDLE, BLINK, TIMER_TEXT,
)


class SceneNode:
    """One visual element. Tweens animate its numeric attributes directly."""
    __slots__ = ('name', 'x', 'y', 'rotation', 'alpha', 'visible', 'width', 'text', 'interactive', 'cursor')

    def __init__(self, name, width=0.0):
        self.name = name
        self.x = 0.0
        self.y = 0.0
        self.rotation = 0.0
        self.alpha = 1.0
        self.visible = True
        self.width = width
        self.text = ""
        self.interactive = False
        self.cursor = None

    def to_local(self, x, y):
        """Convert a device point into this node's rotated local frame."""
        dx = x - self.x
        dy = y - self.y
        cos_r = math.cos(-self.rotation)
        sin_r = math.sin(-self.rotation)
        return (dx * cos_r - dy * sin_r, dx * sin_r + dy * cos_r)

    def contains(self, x, y, radius):
        """True if the device point lies strictly within radius of the node centre."""
        return math.hypot(x - self.x, y - self.y) < radius

    def __repr__(self):
        return f"SceneNode({self.name!r})"


class SceneManager:
    """
    Owns the fixed set of named scene nodes and their placement.

    Placement offsets are named constants instead of values derived from
    renderer internals.
    """
    # Door, handle and blink share a pivot offset from the screen centre
    DOOR_OFFSET = (50.0, -10.0)
    HANDLE_OFFSET_FROM_PIVOT = -65.0
    SHADOW_OFFSET_FROM_HANDLE = 20.0
    BLINK_OFFSET = (0.0, 150.0)
    TIMER_OFFSET = (-295.0, -10.0)
    HANDLE_SHADOW_ALPHA = 0.3
    DEFAULT_HANDLE_WIDTH = 260.0

    def __init__(self, screen_width=1280, screen_height=720, handle_width=DEFAULT_HANDLE_WIDTH):
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError(f"Invalid screen size: {screen_width}x{screen_height}")
        if handle_width <= 0:
            raise ValueError(f"handle_width must be positive, got {handle_width}")
        VaultLogger.info("SCNE", f"[INIT] SceneManager - screen: {screen_width}x{screen_height}")
        self.screen_width = screen_width
        self.screen_height = screen_height

        self._nodes = {name: SceneNode(name) for name in ELEMENT_NAMES}
        self._nodes[HANDLE].width = handle_width
        self._nodes[HANDLE_SHADOW].width = handle_width

        self._nodes[HANDLE].interactive = True
        self._nodes[HANDLE].cursor = "grab"
        self._nodes[HANDLE_SHADOW].alpha = self.HANDLE_SHADOW_ALPHA
        self._nodes[DOOR_OPEN].visible = False
        self._nodes[DOOR_OPEN_SHADOW].visible = False
        self._nodes[BLINK].visible = False
        self._nodes[TIMER_TEXT].text = "0.0s"

        self.layout()

    def node(self, name):
        """Returns the named node (tween target). Raises KeyError for unknown names."""
        try:
            return self._nodes[name]
        except KeyError:
            raise KeyError(f"Unknown scene element: {name!r}") from None

    def nodes(self, *names):
        return [self.node(name) for name in names]

    def handle_radius(self):
        """Half the handle width, the drag decoder's radius."""
        return self._nodes[HANDLE].width / 2.0

    def layout(self):
        """Place every node around the screen centre."""
        cx = self.screen_width / 2.0
        cy = self.screen_height / 2.0
        self._nodes[BACKGROUND].x = 0.0
        self._nodes[BACKGROUND].y = 0.0
        self._nodes[BACKGROUND].width = float(self.screen_width)

        pivot_x = cx + self.DOOR_OFFSET[0]
        pivot_y = cy + self.DOOR_OFFSET[1]
        for name in (DOOR_CLOSED, DOOR_OPEN, DOOR_OPEN_SHADOW):
            self.set_position(name, pivot_x, pivot_y)

        handle_x = pivot_x + self.HANDLE_OFFSET_FROM_PIVOT
        self.set_position(HANDLE, handle_x, pivot_y)
        self.set_position(HANDLE_SHADOW, handle_x, pivot_y + self.SHADOW_OFFSET_FROM_HANDLE)
        self.set_position(BLINK, pivot_x + self.BLINK_OFFSET[0], pivot_y + self.BLINK_OFFSET[1])
        self.set_position(TIMER_TEXT, cx + self.TIMER_OFFSET[0], cy + self.TIMER_OFFSET[1])

    #region --- Commands ---
    def set_visible(self, name, visible):
        self.node(name).visible = bool(visible)

    def set_rotation(self, name, rotation):
        self.node(name).rotation = rotation

    def set_position(self, name, x, y):
        node = self.node(name)
        node.x = x
        node.y = y

    def set_alpha(self, name, alpha):
        self.node(name).alpha = max(0.0, min(1.0, alpha))

    def set_text(self, name, text):
        self.node(name).text = text

    def set_interactive(self, name, interactive):
        self.node(name).interactive = bool(interactive)

    def set_cursor(self, name, cursor):
        self.node(name).cursor = cursor
    #endregion
