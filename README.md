# raycube

raycube is a small first-person raycasting engine for grid maps. It keeps
the game state (map cells, player position and orientation, held keys,
textures), moves the player with wall sliding, opens and closes doors,
animates textures, casts rays through the grid and draws complete frames
into an in-memory pixel buffer.

## Installing

```
pip install .
```

Textures are loaded with Pillow, which is the only dependency.

## Modules

- `raycube.world`: `Cell` (a tile type character and whether it is solid),
  `Texture` (per-side frames and animation state, with `advance` and
  `advance_door`), `Keys` (which movement keys are held) and `Game`, with
  `does_collide`, `move_forward`, `move_backward`, `move_left`,
  `move_right`, `handle_keys`, `handle_action` (open the closed door `X`
  one tile ahead, or close the open door `O` there), `handle_doors`,
  `animate` and `prepare` (turn the player start `N`/`S`/`E`/`W` into floor
  and set every cell's solidity from its texture's `type`).
- `raycube.raycast`: `cast_ray(game, angle)` returns a `Casting` with the
  hit point, distance and struck face (`Facing.NORTH`, `SOUTH`, `WEST`,
  `EAST`); `distance` is `None` when nothing is hit. `horizontal_hit` and
  `vertical_hit` give the two partial results as `(x, y, distance)`.
- `raycube.frame`: `Frame`, a buffer of 32-bit `0xAARRGGBB` pixels with
  `put_pixel`, `get_pixel`, `put_rect` and `put_line`; `new_frame(width,
  height)`; and `load_texture(path)`, which reads any image Pillow can open
  and returns `None` if it cannot be read.
- `raycube.render`: `render(game, frame)` draws floor, ceiling and walls
  (`RAYS` rays over a field of view of `FOV` radians), the minimap when
  `game.minimap` is set, and the black info panel background when
  `game.info` is set. The pieces are also available on their own:
  `render_floor`, `render_ceiling`, `render_walls`, `render_chunk`,
  `render_minimap`, and `info_lines`, which returns the panel's text as
  `((x, y), text)` pairs.
- `raycube.numfmt`: fixed-width number formatting used by the info panel:
  `lli_to_str`, `numlen`, `ftoa`.

## Example

```python
from raycube.frame import load_texture, new_frame
from raycube.render import render
from raycube.world import Cell, Game, Texture

rows = [
    "11111",
    "10001",
    "10N01",
    "11111",
]
wall = Texture(empty=False, type=1, map_color=0x808080)
image = load_texture("textures/wall.png")
if image is not None:
    for side in ("no", "so", "we", "ea"):
        wall.frames[side] = [image]

game = Game(
    cells=[[Cell(c) for c in row] for row in rows],
    pos_x=2.5,
    pos_y=2.5,
    textures={"1": wall},
    floor_color=0x404040,
    ceiling_color=0x87CEEB,
)
game.prepare()

game.keys.forward = True
game.handle_keys()

frame = new_frame(640, 480)
castings = render(game, frame)
```

Walls are only textured where a tile's texture has an image for the struck
face; black texture pixels are left transparent.

## What this package does not do

raycube is an engine, not a finished game. It does not read map
description files, does not check that a map is closed by walls, opens no
window, handles no keyboard or mouse events itself and has no command to
run. Building the `Game`, feeding it input (by setting `game.keys` and
calling `handle_keys`, `handle_action`, `animate` and `handle_doors` once
per tick) and showing the `Frame` pixels on screen, including drawing the
text of `info_lines`, is left to the caller.