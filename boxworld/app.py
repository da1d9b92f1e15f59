"""Window, camera and main loop of the demo scene."""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from typing import Sequence

import pygame

from .controls import InputSystem, Key
from .core import ORANGE, PINK, RAYWHITE, SKYBLUE, BoundingBox, Color, Vector3
from .objects import CubeObject, Floor
from .player import Player
from .world import GameWorld

WINDOW_TITLE = "Joc 3D"
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
TARGET_FPS = 120
FLOOR_TEXTURE = "../resources/forrest_ground_01_diff_4k.jpg"

_CAMERA_OFFSET = Vector3(0.0, 5.0, 10.0)
_NEAR_PLANE = 0.01
_EDGE_SHADE = 0.6
_FPS_COLOR = (0, 158, 47)

_KEYMAP = {
    Key.W: pygame.K_w,
    Key.A: pygame.K_a,
    Key.S: pygame.K_s,
    Key.D: pygame.K_d,
    Key.SPACE: pygame.K_SPACE,
}
_KEY_BY_CODE = {code: key for key, code in _KEYMAP.items()}

# Corner index bits: 1 = max x, 2 = max y, 4 = max z. Each face is cyclic.
_FACES = (
    (0, 2, 6, 4),
    (1, 3, 7, 5),
    (0, 1, 5, 4),
    (2, 3, 7, 6),
    (0, 1, 3, 2),
    (4, 5, 7, 6),
)


def _dot(a: Vector3, b: Vector3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def _cross(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def _normalized(v: Vector3) -> Vector3:
    length = v.length()
    return v.scale(1.0 / length) if length else v


def _rotate(v: Vector3, axis: Vector3, angle_degrees: float) -> Vector3:
    k = _normalized(axis)
    if k == Vector3():
        return v
    theta = math.radians(angle_degrees)
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    return (
        v.scale(cos_t)
        + _cross(k, v).scale(sin_t)
        + k.scale(_dot(k, v) * (1.0 - cos_t))
    )


def _centroid(points: Sequence[Vector3]) -> Vector3:
    n = len(points)
    return Vector3(
        sum(p.x for p in points) / n,
        sum(p.y for p in points) / n,
        sum(p.z for p in points) / n,
    )


@dataclass
class Camera:
    """A perspective camera looking from ``position`` towards ``target``."""

    position: Vector3 = Vector3(0.0, 5.0, 10.0)
    target: Vector3 = Vector3(0.0, 1.0, 0.0)
    up: Vector3 = Vector3(0.0, 1.0, 0.0)
    fovy: float = 45.0

    def follow(self, target: Vector3) -> None:
        """Aim at ``target`` from a fixed offset above and behind it."""
        self.target = target
        self.position = target + _CAMERA_OFFSET

    def project(
        self, point: Vector3, width: int, height: int
    ) -> tuple[float, float] | None:
        """Return the screen position of ``point``, or None if it is behind."""
        forward = _normalized(self.target - self.position)
        right = _normalized(_cross(forward, self.up))
        true_up = _cross(right, forward)
        relative = point - self.position
        depth = _dot(relative, forward)
        if depth <= _NEAR_PLANE:
            return None
        focal = (height / 2.0) / math.tan(math.radians(self.fovy) / 2.0)
        return (
            width / 2.0 + _dot(relative, right) / depth * focal,
            height / 2.0 - _dot(relative, true_up) / depth * focal,
        )


class PygameRenderer:
    """Draws boxes onto a pygame surface through a camera."""

    def __init__(self, surface: pygame.Surface, camera: Camera) -> None:
        self.surface = surface
        self.camera = camera

    def draw_box(
        self,
        box: BoundingBox,
        color: Color,
        rotation_axis: Vector3 = Vector3(0.0, 1.0, 0.0),
        rotation_angle: float = 0.0,
    ) -> list[tuple[float, float] | None]:
        """Draw the box's visible faces; return the projected corners."""
        center = (box.min + box.max).scale(0.5)
        corners = [
            Vector3(
                box.max.x if i & 1 else box.min.x,
                box.max.y if i & 2 else box.min.y,
                box.max.z if i & 4 else box.min.z,
            )
            for i in range(8)
        ]
        if rotation_angle:
            corners = [
                center + _rotate(c - center, rotation_axis, rotation_angle)
                for c in corners
            ]

        width, height = self.surface.get_size()
        projected = [self.camera.project(c, width, height) for c in corners]

        visible = []
        for face in _FACES:
            face_center = _centroid([corners[i] for i in face])
            to_camera = self.camera.position - face_center
            if _dot(face_center - center, to_camera) <= 0.0:
                continue
            points = [projected[i] for i in face]
            if any(p is None for p in points):
                continue
            visible.append((to_camera.length(), points))

        fill = (color.r, color.g, color.b)
        edge = tuple(int(channel * _EDGE_SHADE) for channel in fill)
        for _, points in sorted(visible, key=lambda item: item[0], reverse=True):
            pygame.draw.polygon(self.surface, fill, points)
            pygame.draw.polygon(self.surface, edge, points, 1)
        return projected


def build_world(input_system: InputSystem | None = None) -> tuple[GameWorld, Player]:
    """Create a fresh shared world holding the player, three cubes and a floor."""
    GameWorld.reset_instance()
    player = Player(Vector3(0.0, 2.0, 0.0), input_system)
    world = GameWorld.get_instance(player)
    player.world = world

    world.add_object(
        CubeObject(Vector3(2.0, 0.5, 0.0), Vector3(1.0, 2.0, 1.0), PINK, True, "", True, False)
    )
    world.add_object(
        CubeObject(Vector3(-2.0, 0.5, 0.0), Vector3(1.0, 1.0, 1.0), SKYBLUE, True, "", True, False)
    )
    world.add_object(
        CubeObject(Vector3(0.0, 0.5, 2.0), Vector3(1.0, 1.0, 1.0), ORANGE, True, "", True, False)
    )
    world.add_object(
        Floor(
            Vector3(0.0, -5.05, 0.0),
            Vector3(10.0, 0.1, 10.0),
            has_collision=True,
            texture_path=FLOOR_TEXTURE,
        )
    )
    return world, player


def main(argv: Sequence[str] | None = None) -> int:
    """Open the window and run the game until it is closed."""
    parser = argparse.ArgumentParser(prog="boxworld", description="Walk around a small box world.")
    parser.add_argument("--width", type=int, default=SCREEN_WIDTH)
    parser.add_argument("--height", type=int, default=SCREEN_HEIGHT)
    parser.add_argument("--fps", type=int, default=TARGET_FPS)
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption(WINDOW_TITLE)
        pygame.mouse.set_visible(False)
        pygame.event.set_grab(True)

        pressed: set[Key] = set()

        def key_down(key: Key) -> bool:
            return bool(pygame.key.get_pressed()[_KEYMAP[key]])

        input_system = InputSystem(key_down, lambda key: key in pressed)
        world, player = build_world(input_system)
        camera = Camera()
        renderer = PygameRenderer(screen, camera)
        font = pygame.font.Font(None, 20)
        clock = pygame.time.Clock()

        running = True
        while running:
            pressed.clear()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in _KEY_BY_CODE:
                        pressed.add(_KEY_BY_CODE[event.key])
            if not running:
                break

            delta_time = clock.tick(args.fps) / 1000.0
            world.update(delta_time)
            camera.follow(player.position)

            screen.fill((RAYWHITE.r, RAYWHITE.g, RAYWHITE.b))
            player.draw(renderer)
            world.draw(renderer)
            fps_text = font.render(f"{clock.get_fps():.0f} FPS", True, _FPS_COLOR)
            screen.blit(fps_text, (10, 40))
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0