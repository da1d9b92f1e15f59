import pytest

from boxworld.core import ORANGE, PhysicsSettings, Vector3
from boxworld.objects import CubeObject, Floor
from boxworld.world import GameWorld, PhysicsSystem


@pytest.fixture(autouse=True)
def fresh_singleton():
    GameWorld.reset_instance()
    yield
    GameWorld.reset_instance()


class LoggedCube(CubeObject):
    def __init__(self, log, name, **kwargs):
        kwargs.setdefault("affected_by_gravity", False)
        kwargs.setdefault("is_static", True)
        super().__init__(Vector3(0, 10, 0), Vector3(1, 1, 1), ORANGE, **kwargs)
        self.log = log
        self.name = name

    def update(self, delta_time):
        self.log.append(f"{self.name}.update")


class FakePlayer(LoggedCube):
    tracks_own_ground = True

    def __init__(self, log):
        super().__init__(log, "player", affected_by_gravity=True, is_static=False)
        self.velocity_after_physics = None

    def post_physics_update(self, delta_time):
        self.log.append("player.post")
        self.velocity_after_physics = self.velocity


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def draw_box(self, box, color, rotation_axis, rotation_angle):
        self.calls.append(box)


def dynamic_cube(position):
    return CubeObject(position, Vector3(1, 1, 1), ORANGE, affected_by_gravity=True, is_static=False)


def test_get_instance_is_shared_until_reset():
    first = GameWorld.get_instance(None)
    assert GameWorld.get_instance(None) is first
    GameWorld.reset_instance()
    assert GameWorld.get_instance(None) is not first


def test_player_is_registered_with_physics():
    player = FakePlayer([])
    world = GameWorld.get_instance(player)
    assert world.physics_system.objects == [player]
    assert world.objects == []


def test_add_object_registers_only_dynamic_gravity_objects():
    world = GameWorld()
    static_cube = CubeObject(Vector3(), Vector3(1, 1, 1), ORANGE)
    falling = dynamic_cube(Vector3(0, 5, 0))
    world.add_object(static_cube)
    world.add_object(falling)
    world.add_object(None)
    assert world.objects == [static_cube, falling]
    assert world.physics_system.objects == [falling]


def test_remove_object_removes_everywhere():
    world = GameWorld()
    falling = dynamic_cube(Vector3(0, 5, 0))
    world.add_object(falling)
    world.add_object(falling)
    world.remove_object(falling)
    assert world.objects == []
    assert world.physics_system.objects == []


def test_update_order_and_player_not_updated_twice():
    log = []
    player = FakePlayer(log)
    world = GameWorld(player)
    world.add_object(player)
    world.add_object(LoggedCube(log, "cube"))
    world.update(0.016)
    assert log == ["player.update", "cube.update", "player.post"]
    assert player.velocity_after_physics.y < 0


def test_draw_draws_every_object():
    world = GameWorld()
    cubes = [CubeObject(Vector3(i, 0, 0), Vector3(1, 1, 1), ORANGE) for i in range(3)]
    for cube in cubes:
        world.add_object(cube)
    renderer = RecordingRenderer()
    world.draw(renderer)
    assert renderer.calls == [cube.bounding_box() for cube in cubes]


def test_free_fall_accelerates_and_moves_down():
    world = GameWorld()
    cube = dynamic_cube(Vector3(0, 5, 0))
    world.add_object(cube)
    world.update(0.016)
    assert cube.velocity.y == pytest.approx(PhysicsSettings.GRAVITY_ACCELERATION * 0.016)
    assert cube.position.y == pytest.approx(5 + cube.velocity.y * 0.016)
    assert cube.is_on_ground is False


def test_fall_speed_is_clamped():
    physics = PhysicsSystem(None)
    cube = dynamic_cube(Vector3(0, 100, 0))
    cube.velocity = Vector3(1, -100, 2)
    physics.add_object(cube)
    physics.update(0.01)
    assert cube.velocity == Vector3(1, PhysicsSettings.MAX_FALL_SPEED, 2)


def test_landing_on_floor_stops_and_grounds():
    world = GameWorld()
    floor = Floor(Vector3(0, 0, 0), Vector3(10, 1, 10))
    cube = dynamic_cube(Vector3(0, 1.6, 0))
    cube.velocity = Vector3(0, -20, 0)
    world.add_object(floor)
    world.add_object(cube)
    world.update(0.033)
    floor_top = floor.bounding_box().max.y
    assert cube.velocity.y == 0
    assert cube.is_on_ground is True
    assert floor_top < cube.bounding_box().min.y < floor_top + 0.01


def test_resting_object_sticks_to_ground_on_tiny_steps():
    physics = PhysicsSystem(None)
    cube = dynamic_cube(Vector3(0, 1, 0))
    cube.is_on_ground = True
    physics.add_object(cube)
    physics.update(0.001)
    assert cube.is_on_ground is True
    assert cube.velocity.y == 0


def test_self_grounding_objects_keep_their_flag():
    physics = PhysicsSystem(None)
    player = FakePlayer([])
    player.is_on_ground = True
    physics.add_object(player)
    physics.update(0.033)
    assert player.is_on_ground is True
    assert player.velocity.y < 0


def test_physics_ignores_static_objects():
    physics = PhysicsSystem(None)
    static_cube = CubeObject(Vector3(0, 3, 0), Vector3(1, 1, 1), ORANGE, affected_by_gravity=True)
    physics.add_object(static_cube)
    physics.update(0.033)
    assert physics.objects == []
    assert static_cube.position == Vector3(0, 3, 0)