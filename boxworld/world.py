"""The game world and the gravity simulation that runs inside it."""

from __future__ import annotations

from typing import ClassVar

from .core import EPSILON, PhysicsSettings, Vector3
from .objects import GameObject


class PhysicsSystem:
    """Applies gravity with swept vertical collision to dynamic objects."""

    def __init__(self, world: GameWorld | None) -> None:
        self.world = world
        self.objects: list[GameObject] = []

    def add_object(self, obj: GameObject | None) -> None:
        """Register ``obj`` if it is dynamic and affected by gravity."""
        if obj is not None and not obj.is_static and obj.affected_by_gravity:
            self.objects.append(obj)

    def remove_object(self, obj: GameObject) -> None:
        """Unregister every occurrence of ``obj``."""
        self.objects = [o for o in self.objects if o is not obj]

    def update(self, delta_time: float) -> None:
        """Advance every registered object by ``delta_time`` seconds."""
        for obj in self.objects:
            self._apply_gravity(obj, delta_time)

    def _apply_gravity(self, obj: GameObject, delta_time: float) -> None:
        if obj.is_static or not obj.affected_by_gravity:
            return

        velocity = obj.velocity
        velocity_y = velocity.y + PhysicsSettings.GRAVITY_ACCELERATION * delta_time
        velocity_y = max(velocity_y, PhysicsSettings.MAX_FALL_SPEED)

        vertical_delta = velocity_y * delta_time
        movement = Vector3(0.0, vertical_delta, 0.0)

        contact_time = 1.0
        if abs(vertical_delta) > EPSILON:
            contact_time = obj.vertical_contact_time(
                movement, self.world, PhysicsSettings.MAX_PHYSICS_ITERATIONS
            )

        obj.position = obj.position + movement.scale(contact_time)

        resolved_y = velocity_y
        if contact_time < 1.0 - EPSILON:
            on_ground = velocity_y <= 0
            resolved_y = 0.0
        elif (
            obj.is_on_ground
            and velocity_y <= 0.0
            and abs(vertical_delta) < PhysicsSettings.GROUND_STICK_DETACH_THRESHOLD
        ):
            on_ground = True
            resolved_y = 0.0
        else:
            on_ground = False

        if not obj.tracks_own_ground:
            obj.is_on_ground = on_ground
        obj.velocity = Vector3(velocity.x, resolved_y, velocity.z)


class GameWorld:
    """Holds the scene's objects, the player and the physics system."""

    _instance: ClassVar[GameWorld | None] = None

    def __init__(self, player: GameObject | None = None) -> None:
        self.objects: list[GameObject] = []
        self.player = player
        self.physics_system = PhysicsSystem(self)
        if player is not None:
            self.physics_system.add_object(player)

    @classmethod
    def get_instance(cls, player: GameObject | None = None) -> GameWorld:
        """Return the shared world, creating it with ``player`` on first use."""
        if cls._instance is None:
            cls._instance = cls(player)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the shared world so the next call creates a new one."""
        cls._instance = None

    def add_object(self, obj: GameObject | None) -> None:
        """Add ``obj`` to the scene and to physics if it qualifies."""
        if obj is None:
            return
        self.objects.append(obj)
        self.physics_system.add_object(obj)

    def remove_object(self, obj: GameObject | None) -> None:
        """Remove every occurrence of ``obj`` from the scene and physics."""
        if obj is None:
            return
        self.physics_system.remove_object(obj)
        self.objects = [o for o in self.objects if o is not obj]

    def update(self, delta_time: float) -> None:
        """Run one frame: player, other objects, physics, then player fix-up."""
        player = self.player
        if player is not None:
            player.update(delta_time)
        for obj in self.objects:
            if obj is not player:
                obj.update(delta_time)
        self.physics_system.update(delta_time)
        if player is not None:
            player.post_physics_update(delta_time)

    def draw(self, renderer) -> None:
        """Draw every object in the scene."""
        for obj in self.objects:
            obj.draw(renderer)