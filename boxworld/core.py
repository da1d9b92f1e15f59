"""Geometry primitives, colours and physics tuning constants."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

EPSILON: Final = 1e-6


@dataclass(frozen=True)
class Vector3:
    """An immutable point or direction in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> Vector3:
        """Return the vector multiplied by ``factor``."""
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def length(self) -> float:
        """Return the Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def minimum(self, other: Vector3) -> Vector3:
        """Return the component-wise minimum of two vectors."""
        return Vector3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def maximum(self, other: Vector3) -> Vector3:
        """Return the component-wise maximum of two vectors."""
        return Vector3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned box given by its two opposite corners."""

    min: Vector3
    max: Vector3

    def intersects(self, other: BoundingBox) -> bool:
        """Return True if the boxes overlap or touch."""
        return (
            self.max.x >= other.min.x
            and self.min.x <= other.max.x
            and self.max.y >= other.min.y
            and self.min.y <= other.max.y
            and self.max.z >= other.min.z
            and self.min.z <= other.max.z
        )

    def translated(self, offset: Vector3) -> BoundingBox:
        """Return the box moved by ``offset``."""
        return BoundingBox(self.min + offset, self.max + offset)

    def union(self, other: BoundingBox) -> BoundingBox:
        """Return the smallest box enclosing both boxes."""
        return BoundingBox(self.min.minimum(other.min), self.max.maximum(other.max))


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255


RED: Final = Color(230, 41, 55)
GREEN: Final = Color(0, 228, 48)
BLUE: Final = Color(0, 121, 241)
YELLOW: Final = Color(253, 249, 0)
ORANGE: Final = Color(255, 161, 0)
PINK: Final = Color(255, 109, 194)
SKYBLUE: Final = Color(102, 191, 255)
WHITE: Final = Color(255, 255, 255)
RAYWHITE: Final = Color(245, 245, 245)


class PhysicsSettings:
    """Tuning constants of the physics simulation."""

    GRAVITY_ACCELERATION: Final = -78.4
    JUMP_VELOCITY: Final = 18.0
    TIME_SCALE: Final = 1.0
    MAX_FALL_SPEED: Final = -70.0

    MIN_DELTA_TIME: Final = 0.001
    MAX_DELTA_TIME: Final = 0.033

    MAX_PHYSICS_ITERATIONS: Final = 10

    GROUND_ADJUST_EPSILON: Final = 0.1
    COLLISION_SWEEP_EPSILON: Final = 0.001

    MIN_Y_OVERLAP_FOR_HORIZONTAL_COLLISION: Final = 0.2

    GROUND_CHECK_Y_ALIGN_MAX_PENETRATION: Final = 0.05
    GROUND_CHECK_Y_ALIGN_MAX_SEPARATION: Final = 0.2

    GROUND_STICK_DETACH_THRESHOLD: Final = 0.01


def box_around(center: Vector3, size: Vector3) -> BoundingBox:
    """Return the box of the given size centred on ``center``."""
    half = size.scale(0.5)
    return BoundingBox(center - half, center + half)


def lerp(start: float, end: float, amount: float) -> float:
    """Linearly interpolate between ``start`` and ``end``."""
    return start + amount * (end - start)