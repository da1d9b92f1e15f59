"""World objects: the abstract game object and its concrete shapes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, Protocol

from .core import EPSILON, RED, WHITE, BoundingBox, Color, Vector3, box_around

_log = logging.getLogger(__name__)

_DEFAULT_AXIS = Vector3(0.0, 1.0, 0.0)
_WALL_DRAW_SIZE = Vector3(20.0, 20.0, 20.0)


class _Renderer(Protocol):
    def draw_box(
        self,
        box: BoundingBox,
        color: Color,
        rotation_axis: Vector3,
        rotation_angle: float,
    ) -> Any: ...


class _World(Protocol):
    objects: Iterable[GameObject]


def _texture_available(texture_path: str | None) -> bool:
    if not texture_path:
        return False
    if Path(texture_path).is_file():
        return True
    _log.warning("Failed to load texture: %s", texture_path)
    return False


class GameObject(ABC):
    """Base for everything that lives in the world."""

    # Objects that resolve their own grounded state after physics set this.
    tracks_own_ground = False

    def __init__(
        self,
        position: Vector3,
        has_collision: bool = True,
        affected_by_gravity: bool = True,
        is_static: bool = False,
    ) -> None:
        self.position = position
        self.velocity = Vector3()
        self.is_on_ground = False
        self.affected_by_gravity = affected_by_gravity
        self.is_static = is_static
        self.has_collision = has_collision

    @abstractmethod
    def bounding_box(self) -> BoundingBox:
        """Return the object's axis-aligned bounds."""

    @abstractmethod
    def draw(self, renderer: _Renderer) -> None:
        """Draw the object with ``renderer``."""

    def update(self, delta_time: float) -> None:
        """Advance the object's own logic; nothing by default."""

    def interact(self) -> None:
        """React to an interaction; nothing by default."""

    def check_collision_with(self, other_box: BoundingBox) -> bool:
        """Return True if this object collides with ``other_box``."""
        if not self.has_collision:
            return False
        return self.bounding_box().intersects(other_box)

    def check_collision(self, other: GameObject) -> bool:
        """Return True if both objects collide and their boxes overlap."""
        if not self.has_collision or not other.has_collision:
            return False
        return self.bounding_box().intersects(other.bounding_box())

    def distance_to(self, other: GameObject) -> float:
        """Return the distance between the two objects' positions."""
        return (other.position - self.position).length()

    def vertical_contact_time(
        self, movement: Vector3, world: _World | None, max_iterations: int
    ) -> float:
        """Return the fraction of ``movement`` that can be taken before contact.

        Only objects whose static flag differs from this one's are considered.
        """
        if world is None or movement == Vector3():
            return 1.0

        def collides_at(displacement: Vector3) -> bool:
            test_box = self.bounding_box().translated(displacement)
            return any(
                test_box.intersects(other.bounding_box())
                for other in world.objects
                if other is not None
                and other is not self
                and other.has_collision
                and other.is_static != self.is_static
            )

        if not collides_at(movement):
            return 1.0

        t0, t1 = 0.0, 1.0
        for _ in range(max_iterations):
            if t1 - t0 < EPSILON:
                break
            mid = (t0 + t1) / 2.0
            if collides_at(movement.scale(mid)):
                t1 = mid
            else:
                t0 = mid
        return t0


class StaticWorldObject(GameObject):
    """An immovable piece of scenery unaffected by gravity."""

    def __init__(self, position: Vector3, has_collision: bool = True) -> None:
        super().__init__(position, has_collision, False, True)


class Wall(StaticWorldObject):
    """A wall placeholder: drawn as a large red cube, bounds fixed at the origin."""

    def __init__(
        self,
        position: Vector3,
        dimensions: Vector3,
        color: Color,
        has_collision: bool = True,
    ) -> None:
        super().__init__(position, has_collision)
        self.dimensions = dimensions
        self.color = color

    def bounding_box(self) -> BoundingBox:
        return BoundingBox(Vector3(), Vector3())

    def draw(self, renderer: _Renderer) -> None:
        renderer.draw_box(
            box_around(self.position, _WALL_DRAW_SIZE),
            RED,
            rotation_axis=_DEFAULT_AXIS,
            rotation_angle=0.0,
        )


class Floor(StaticWorldObject):
    """A flat static slab, plain or textured.

    A textured floor always has collision enabled.
    """

    def __init__(
        self,
        position: Vector3,
        dimensions: Vector3,
        color: Color = WHITE,
        has_collision: bool = True,
        texture_path: str | None = None,
    ) -> None:
        if texture_path is not None:
            has_collision = True
        super().__init__(position, has_collision)
        self.dimensions = dimensions
        self.color = color
        self.texture_path = texture_path
        self.has_texture = _texture_available(texture_path)

    def bounding_box(self) -> BoundingBox:
        return box_around(self.position, self.dimensions)

    def draw(self, renderer: _Renderer) -> None:
        renderer.draw_box(
            self.bounding_box(),
            WHITE if self.has_texture else self.color,
            rotation_axis=_DEFAULT_AXIS,
            rotation_angle=0.0,
        )


class CubeObject(GameObject):
    """A box-shaped object, optionally textured and dynamic."""

    def __init__(
        self,
        position: Vector3,
        size: Vector3,
        color: Color,
        has_collision: bool = True,
        texture_path: str = "",
        affected_by_gravity: bool = False,
        is_static: bool = True,
    ) -> None:
        super().__init__(position, has_collision, affected_by_gravity, is_static)
        self.size = size
        self.color = color
        self.texture_path = texture_path
        self.has_texture = _texture_available(texture_path)

    def bounding_box(self) -> BoundingBox:
        return box_around(self.position, self.size)

    def draw(self, renderer: _Renderer) -> None:
        renderer.draw_box(
            self.bounding_box(),
            WHITE if self.has_texture else self.color,
            rotation_axis=_DEFAULT_AXIS,
            rotation_angle=0.0,
        )

    def copy(self) -> CubeObject:
        """Return a fresh cube with the same shape, look and flags."""
        return CubeObject(
            self.position,
            self.size,
            self.color,
            self.has_collision,
            self.texture_path,
            self.affected_by_gravity,
            self.is_static,
        )

    def interact(self) -> None:
        print("Test")


class BodyPart(GameObject):
    """One rotatable box of a character's body."""

    def __init__(
        self,
        position: Vector3,
        size: Vector3,
        color: Color,
        has_collision: bool = True,
    ) -> None:
        super().__init__(position, has_collision, False, False)
        self.size = size
        self.color = color
        self.rotation_axis = _DEFAULT_AXIS
        self.rotation_angle = 0.0

    def set_rotation(self, axis: Vector3, angle: float) -> None:
        """Set the rotation axis and angle in degrees together."""
        self.rotation_axis = axis
        self.rotation_angle = angle

    def bounding_box(self) -> BoundingBox:
        return box_around(self.position, self.size)

    def draw(self, renderer: _Renderer) -> None:
        renderer.draw_box(
            self.bounding_box(),
            self.color,
            rotation_axis=self.rotation_axis,
            rotation_angle=self.rotation_angle,
        )