# kgsnake

A snake game played inside a cube of grid cells. The snake moves along the
three axes, eats apples that appear at random whole-number cells and grows
with each one. It starts over when its head leaves the cube or runs into its
own body.

Around the game sits a small engine: an orbit camera driven by mouse events,
a point light that can be dragged across the scene, input events queued and
replayed once per frame, and a reader for Wavefront OBJ models.

The package has no third-party dependencies.

## Modules

- `kgsnake.events`: `Event`, a thread-safe list of reactions called in order
  by `emit(sender, arg)`; `reaction(func)` adds one and returns it,
  `remove_reaction(func)` and `remove_all_reactions()` take them away, and
  `len()` counts them. The argument types are `MouseWheelEventArg`,
  `MouseEventArg` and `KeyEventArg`.
- `kgsnake.vector3`: `Vector3`, an immutable three-component vector with `+`,
  `-`, scaling by `*` and `/`, `^` (cross product) and `&` (dot product), plus
  `length()`, `normalize()`, `cross()`, `dot()`, iteration over its
  components and the unit vectors `unit_x()`, `unit_y()`, `unit_z()`.
- `kgsnake.camera`: `Camera`, orbiting the origin by two angles (`fi1`,
  `fi2`) and a distance. `zoom` changes the distance by 0.01 per wheel step
  and stops at 1 and 100; `mouse_move` rotates while a drag started by
  `start_drag` is active and does nothing while `G` is held on the sender;
  `look_at()` returns eye, centre and up vector.
- `kgsnake.light`: `Light`. `start_drag` / `stop_drag` react to the `G` and
  `F` keys. While `G` is held, `move_light` puts the light where the view ray
  under the mouse meets its current height (staying within 50 units of the
  Z axis), or, with the left mouse button held, changes only its height,
  clamped to [-20, 20]. `F` only sets the `from_camera` flag.
  `unproject` and `look_ray` map window points back into the scene from
  column-major matrices and a viewport.
- `kgsnake.objmodel`: `parse_obj` reads `v`, `vt`, `vn` and `f` records into
  `ObjFace` objects holding `ObjVertex`, `ObjTexCoord` and `ObjNormal`
  values; an index out of range raises `ValueError`. `ObjModel.load(filename)`
  appends the faces of a file and returns how many were read;
  `take_faces()` hands them out once and forgets them.
- `kgsnake.engine`: `Engine` turns input calls (`key_down`, `mouse_move`,
  `wheel_event`, ...) into events that fire at the start of the next
  `render(delta)`, before its `scene` callable is called; it also tracks held
  keys for `is_key_pressed` and applies a resize requested by
  `try_to_resize`. `MessagePump` queues `Message` values of a `MessageKind`
  and, on `dispatch()`, translates them into engine calls; after a `CLOSE`
  message it returns `False`. `perspective` and `look_at_matrix` build
  column-major matrices.
- `kgsnake.snake`: `SnakeGame`, `Direction`, `SnakeSegment`, `Apple`,
  `RenderModes` (toggled by `L`, `T`, `A` and Tab), `segment_color`,
  `grid_lines` and `format_hud`, which builds the status text with the
  current modes, light and camera coordinates, frame times and score.

## Examples

Vectors:

```python
from kgsnake.vector3 import Vector3

a = Vector3(1, 0, 0)
b = Vector3(0, 1, 0)
print((a ^ b).z)      # 1.0, the cross product points along z
print(a & b)          # 0.0, the dot product
```

Events:

```python
from kgsnake.events import Event, KeyEventArg

pressed = Event()
pressed.reaction(lambda sender, arg: print("key", arg.key))
pressed.emit(None, KeyEventArg(0x47))
```

Reading a model:

```python
from kgsnake.objmodel import parse_obj

faces = parse_obj([
    "v 0 0 0",
    "v 1 0 0",
    "v 0 1 0",
    "f 1 2 3",
])
print(faces[0].vertex_count)   # 3
```

Playing the game on its own:

```python
from kgsnake.snake import SnakeGame

game = SnakeGame()
for _ in range(100):
    game.update(1 / 60)
print(game.head(), len(game.segments()), game.score)
```

Wiring the game to the engine:

```python
from kgsnake.engine import Engine, Message, MessageKind, MessagePump
from kgsnake.snake import SnakeGame

game = SnakeGame()
engine = Engine(scene=game.update)
engine.on_key_down.reaction(game.control)

pump = MessagePump(engine)
pump.add_message(Message(MessageKind.KEY_DOWN, w_param=0x25))  # left arrow
pump.dispatch()
engine.render(1 / 60)   # fires the key event, then advances the game
print(game.next_direction)
```

## Controls

These are the keys the reactions respond to when they are connected to the
engine's events:

- `SnakeGame.control`: arrow keys for left, right, up, down; `W` and `S`
  along the depth axis.
- `Camera`: drag to rotate, wheel to zoom.
- `Light`: `G` to drag the light over its current height; `G` with the left
  button held to move it up and down.
- `RenderModes.switch_modes`: `L`, `T`, `A` and Tab switch the lighting,
  texturing, alpha and grid flags.

## What the package does not do

There is no window, no drawing and no command to start a game. The package
keeps the game, camera and light state and computes geometry (grid lines,
matrices, segment positions and colours), but displaying them, delivering
real window messages to `MessagePump` and feeding the camera's view into
`Engine.modelview_matrix` are left to the program that uses it. The render
flags in `RenderModes` are only flags, and the `from_camera` flag of `Light`
does not move the light by itself.