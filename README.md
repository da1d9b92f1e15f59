# boxworld

A small 3D sandbox made of boxes. You control a blocky figure that walks,
jumps and lands on cubes and a floor. Gravity, a terminal fall speed and
swept vertical collision keep it from falling through surfaces. Horizontal
collision makes it slide along obstacles. The scene is drawn with pygame
through a simple perspective camera that follows the player.

## Installation

```
pip install .
```

## Running

```
boxworld
```

Options:

- `--width N`, `--height N`: window size (default 1280 x 720)
- `--fps N`: frame-rate cap (default 120)

Controls:

- `W` / `S`: move forward and backward
- `A` / `D`: move left and right
- `Space`: jump, when standing on something
- `Escape` or closing the window: quit

## Using it as a library

The simulation does not depend on the window, so you can drive it yourself:

```python
from boxworld.app import build_world
from boxworld.controls import InputSystem

keys_down = set()
controls = InputSystem(lambda key: key in keys_down, lambda key: False)
world, player = build_world(controls)

for _ in range(120):
    world.update(1 / 120)

print(player.position, player.is_on_ground)
```

`InputSystem` takes two callables that receive a `Key` (`W`, `A`, `S`, `D`,
`SPACE`) and say whether it is held down or was pressed this frame. Without
them, no key is ever reported.

Building blocks:

- `boxworld.core`: `Vector3`, `BoundingBox`, `Color`, `PhysicsSettings`,
  `box_around`, `lerp`
- `boxworld.objects`: `GameObject`, `StaticWorldObject`, `Wall`, `Floor`,
  `CubeObject`, `BodyPart`
- `boxworld.controls`: `Key`, `InputSystem`
- `boxworld.world`: `GameWorld`, `PhysicsSystem`
- `boxworld.player`: `Player`, `Direction`
- `boxworld.app`: `Camera`, `PygameRenderer`, `build_world`, `main`

`GameWorld.get_instance(player)` returns the single shared world, creating it
on first use. `GameWorld.reset_instance()` discards it; `build_world` does
this before building a fresh scene.

Objects draw themselves through any renderer with a
`draw_box(box, color, rotation_axis, rotation_angle)` method;
`PygameRenderer` is the one used by the game window.

## Limitations

- Textures are not drawn. A `Floor` or `CubeObject` given a texture path
  whose file exists is drawn plain white; if the file is missing, a warning
  is logged and its own colour is used.
- `Wall` is a placeholder: it is always drawn as a large red cube, and its
  bounding box is a zero-size box at the origin.
- Only the player moves horizontally; other objects move only under gravity.

## Tests

```
pip install .[test]
pytest
```