"""Keyboard input mapped to movement and jump intents."""

from __future__ import annotations

import enum
import math
from typing import Callable

KeyQuery = Callable[["Key"], bool]


class Key(enum.Enum):
    """Keys the game reacts to."""

    W = "w"
    A = "a"
    S = "s"
    D = "d"
    SPACE = "space"


_NO_KEYS: frozenset[Key] = frozenset()


class InputSystem:
    """Translates key state queries into game input."""

    def __init__(
        self,
        is_key_down: KeyQuery | None = None,
        is_key_pressed: KeyQuery | None = None,
    ) -> None:
        self.is_key_down = is_key_down or _NO_KEYS.__contains__
        self.is_key_pressed = is_key_pressed or _NO_KEYS.__contains__

    def movement_axis(self) -> tuple[float, float]:
        """Return the (x, y) movement direction, at most unit length.

        Positive y is forward, positive x is right.
        """
        x = 0.0
        y = 0.0
        if self.is_key_down(Key.A):
            x -= 1.0
        if self.is_key_down(Key.D):
            x += 1.0
        if self.is_key_down(Key.W):
            y += 1.0
        if self.is_key_down(Key.S):
            y -= 1.0

        length = math.hypot(x, y)
        if length > 1.0:
            x /= length
            y /= length
        return x, y

    def is_jump_pressed(self) -> bool:
        """Return True if jump was pressed this frame."""
        return bool(self.is_key_pressed(Key.SPACE))