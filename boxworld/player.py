"""The player character: a body built from boxes, driven by keyboard input."""

from __future__ import annotations

import enum
import math
from dataclasses import replace
from functools import reduce
from typing import Iterator

from .controls import InputSystem
from .core import (
    BLUE,
    GREEN,
    RED,
    YELLOW,
    BoundingBox,
    PhysicsSettings,
    Vector3,
    lerp,
)
from .objects import BodyPart, GameObject

MOVEMENT_SPEED = 5.0
ANIMATION_SPEED = 10.0
SWING_ANGLE_DEGREES = 20.0
RETURN_TO_NEUTRAL_SPEED = 7.0

_SWING_AXIS = Vector3(1.0, 0.0, 0.0)
_NEUTRAL_ANGLE = 0.0
_ANGLE_THRESHOLD = 0.1
_SLIDE_ITERATIONS = 10

_TORSO_SIZE = Vector3(0.5, 1.5, 0.3)
_HEAD_SIZE = Vector3(0.5, 0.5, 0.5)
_LIMB_SIZE = Vector3(0.3, 1.0, 0.3)


class Direction(enum.Enum):
    """Horizontal movement directions."""

    FORWARD = enum.auto()
    BACKWARD = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()


# Axis moved along and the sign of the step for each direction.
_STEPS = {
    Direction.FORWARD: ("z", -1.0),
    Direction.BACKWARD: ("z", 1.0),
    Direction.LEFT: ("x", -1.0),
    Direction.RIGHT: ("x", 1.0),
}


def _xz_overlap(a: BoundingBox, b: BoundingBox) -> bool:
    return (
        a.max.x > b.min.x
        and a.min.x < b.max.x
        and a.max.z > b.min.z
        and a.min.z < b.max.z
    )


class Player(GameObject):
    """A walking, jumping character assembled from six body parts."""

    tracks_own_ground = True

    def __init__(
        self,
        position: Vector3 = Vector3(),
        input_system: InputSystem | None = None,
    ) -> None:
        super().__init__(position, True, True, False)
        origin = Vector3()
        self.torso = BodyPart(position, _TORSO_SIZE, BLUE)
        self.head = BodyPart(origin, _HEAD_SIZE, RED)
        self.left_arm = BodyPart(origin, _LIMB_SIZE, GREEN)
        self.right_arm = BodyPart(origin, _LIMB_SIZE, GREEN)
        self.left_leg = BodyPart(origin, _LIMB_SIZE, YELLOW)
        self.right_leg = BodyPart(origin, _LIMB_SIZE, YELLOW)
        self.world = None
        self.input_system = input_system or InputSystem()
        self._update_anim_time = 0.0
        self._post_anim_time = 0.0

    @property
    def _parts(self) -> tuple[BodyPart, ...]:
        return (
            self.torso,
            self.head,
            self.left_arm,
            self.right_arm,
            self.left_leg,
            self.right_leg,
        )

    @property
    def _limbs(self) -> tuple[BodyPart, ...]:
        return (self.left_arm, self.right_arm, self.left_leg, self.right_leg)

    def update_body_part_positions(self) -> None:
        """Lay the body parts out around the player's position."""
        self.torso.position = self.position
        torso_pos = self.torso.position
        torso_size = self.torso.size

        self.head.position = Vector3(
            torso_pos.x,
            torso_pos.y + torso_size.y / 2.0 + self.head.size.y / 2.0,
            torso_pos.z,
        )

        arm_offset_x = torso_size.x / 2.0 + self.left_arm.size.x / 2.0
        self.left_arm.position = Vector3(torso_pos.x - arm_offset_x, torso_pos.y, torso_pos.z)
        self.right_arm.position = Vector3(torso_pos.x + arm_offset_x, torso_pos.y, torso_pos.z)

        leg_offset_y = torso_size.y / 2.0 + self.left_leg.size.y / 2.0
        leg_offset_x = torso_size.x / 4.0
        self.left_leg.position = Vector3(
            torso_pos.x - leg_offset_x, torso_pos.y - leg_offset_y, torso_pos.z
        )
        self.right_leg.position = Vector3(
            torso_pos.x + leg_offset_x, torso_pos.y - leg_offset_y, torso_pos.z
        )

    def handle_input(self, movement_speed: float, frame_time: float) -> None:
        """Move and jump according to the current input."""
        x, y = self.input_system.movement_axis()
        step = movement_speed * frame_time
        if y > 0.0:
            self._move(Direction.FORWARD, step)
        if y < 0.0:
            self._move(Direction.BACKWARD, step)
        if x < 0.0:
            self._move(Direction.LEFT, step)
        if x > 0.0:
            self._move(Direction.RIGHT, step)
        if self.input_system.is_jump_pressed():
            self._jump()

    def _move(self, direction: Direction, by_value: float) -> None:
        if self.world is None:
            return
        axis, sign = _STEPS[direction]
        start = getattr(self.position, axis)
        end = start + sign * by_value
        if end != start:
            self._move_with_sliding(axis, start, end)

    def _jump(self) -> None:
        if not self.is_on_ground:
            return
        self.velocity = replace(self.velocity, y=PhysicsSettings.JUMP_VELOCITY)
        self.is_on_ground = False

    def _set_axis(self, axis: str, value: float) -> None:
        self.position = replace(self.position, **{axis: value})
        self.update_body_part_positions()

    def _move_with_sliding(self, axis: str, start: float, end: float) -> None:
        original = getattr(self.position, axis)
        self._set_axis(axis, end)
        if not self._collides_horizontally():
            return

        self._set_axis(axis, original)
        t0, t1 = 0.0, 1.0
        for _ in range(_SLIDE_ITERATIONS):
            if t1 - t0 <= PhysicsSettings.COLLISION_SWEEP_EPSILON:
                break
            mid = (t0 + t1) / 2.0
            self._set_axis(axis, start + (end - start) * mid)
            if self._collides_horizontally():
                t1 = mid
            else:
                t0 = mid
        self._set_axis(axis, start + (end - start) * t0)

    def _obstacles(self, world=None) -> Iterator[GameObject]:
        world = self.world if world is None else world
        for other in world.objects:
            if other is None or other is self or not other.has_collision:
                continue
            yield other

    def _collides_horizontally(self) -> bool:
        if self.world is None:
            return False
        part_boxes = [
            part.bounding_box()
            for part in (
                self.torso,
                self.left_arm,
                self.right_arm,
                self.left_leg,
                self.right_leg,
                self.head,
            )
        ]
        for other in self._obstacles():
            other_box = other.bounding_box()
            for part_box in part_boxes:
                if not _xz_overlap(part_box, other_box):
                    continue
                y_overlap = max(
                    0.0,
                    min(part_box.max.y, other_box.max.y)
                    - max(part_box.min.y, other_box.min.y),
                )
                if (
                    y_overlap >= PhysicsSettings.MIN_Y_OVERLAP_FOR_HORIZONTAL_COLLISION
                    and part_box.intersects(other_box)
                ):
                    return True
        return False

    def perform_detailed_ground_check(self) -> None:
        """Stand the player on the highest surface under either leg, if any."""
        if self.world is None:
            self.is_on_ground = False
            return

        leg_boxes = (self.left_leg.bounding_box(), self.right_leg.bounding_box())
        found_support = False
        highest = -math.inf
        origin_y = self.position.y

        for other in self._obstacles():
            other_box = other.bounding_box()
            for leg_box in leg_boxes:
                y_align = (
                    other_box.max.y - PhysicsSettings.GROUND_CHECK_Y_ALIGN_MAX_PENETRATION
                    <= leg_box.min.y
                    <= other_box.max.y + PhysicsSettings.GROUND_CHECK_Y_ALIGN_MAX_SEPARATION
                )
                if y_align and _xz_overlap(leg_box, other_box):
                    found_support = True
                    highest = max(highest, other_box.max.y + (origin_y - leg_box.min.y))

        if not found_support:
            self.is_on_ground = False
            return

        self.is_on_ground = True
        self.position = replace(
            self.position, y=highest + PhysicsSettings.GROUND_ADJUST_EPSILON
        )
        if self.velocity.y < 0:
            self.velocity = replace(self.velocity, y=0.0)

    def _animate(self, delta_time: float, anim_time: float) -> float:
        x, y = self.input_system.movement_axis()
        if x != 0.0 or y != 0.0:
            anim_time += delta_time * ANIMATION_SPEED
            angle = math.sin(anim_time) * SWING_ANGLE_DEGREES
            self.left_arm.set_rotation(_SWING_AXIS, angle)
            self.right_arm.set_rotation(_SWING_AXIS, -angle)
            self.left_leg.set_rotation(_SWING_AXIS, -angle)
            self.right_leg.set_rotation(_SWING_AXIS, angle)
            return anim_time

        for limb in self._limbs:
            current = limb.rotation_angle
            if abs(current - _NEUTRAL_ANGLE) > _ANGLE_THRESHOLD:
                new_angle = lerp(
                    current, _NEUTRAL_ANGLE, RETURN_TO_NEUTRAL_SPEED * delta_time
                )
            else:
                new_angle = _NEUTRAL_ANGLE
            limb.set_rotation(_SWING_AXIS, new_angle)
        return anim_time

    def update(self, delta_time: float) -> None:
        """Check ground, apply input and animate the limbs."""
        if self.world is None:
            return
        self.perform_detailed_ground_check()
        self.handle_input(MOVEMENT_SPEED, delta_time)
        self.update_body_part_positions()
        self._update_anim_time = self._animate(delta_time, self._update_anim_time)

    def post_physics_update(self, delta_time: float) -> None:
        """Re-check ground after physics has moved the player, then animate."""
        if self.world is None:
            return
        self.perform_detailed_ground_check()
        self.update_body_part_positions()
        self._post_anim_time = self._animate(delta_time, self._post_anim_time)

    def draw(self, renderer) -> None:
        for part in self._parts:
            part.draw(renderer)

    def vertical_contact_time(self, movement: Vector3, world, max_iterations: int) -> float:
        """Return the fraction of ``movement`` possible before legs or head touch."""
        if world is None or movement == Vector3():
            return 1.0

        if movement.y < 0.0:
            probes = [self.left_leg.bounding_box(), self.right_leg.bounding_box()]
        elif movement.y > 0.0:
            probes = [self.head.bounding_box()]
        else:
            probes = []
        obstacles = [other.bounding_box() for other in self._obstacles(world)]

        def collides_at(t: float) -> bool:
            if not probes:
                return False
            displacement = movement.scale(t)
            return any(
                probe.translated(displacement).intersects(obstacle)
                for obstacle in obstacles
                for probe in probes
            )

        if not collides_at(1.0):
            return 1.0

        t0, t1 = 0.0, 1.0
        for _ in range(max_iterations):
            if t1 - t0 < PhysicsSettings.COLLISION_SWEEP_EPSILON:
                break
            mid = (t0 + t1) / 2.0
            if collides_at(mid):
                t1 = mid
            else:
                t0 = mid
        return t0

    def bounding_box(self) -> BoundingBox:
        return reduce(
            BoundingBox.union, (part.bounding_box() for part in self._parts)
        )