"""Drawing a game frame: floor, ceiling, textured walls, minimap and info panel."""

from __future__ import annotations

import dataclasses
import math
from array import array
from typing import Any, List, Optional, Sequence, Tuple

from raycube.frame import Frame
from raycube.numfmt import ftoa, lli_to_str
from raycube.raycast import Casting, Facing, cast_ray
from raycube.world import Game

__all__ = [
    "RAYS",
    "FOV",
    "TILE",
    "PLAYER",
    "INFO_W",
    "INFO_H",
    "PADDING",
    "MIN_DISTANCE",
    "render_ceiling",
    "render_floor",
    "render_chunk",
    "render_walls",
    "render_minimap",
    "info_lines",
    "render",
]

RAYS = 320
FOV = math.pi / 3
MIN_DISTANCE = 0.2
WALL_SCALE = 1.5

TILE = 15
PLAYER = 8
RAY_EVERY = 20
RAY_COLOR = 0x0000FFFF
VIEW_COLOR = 0x00FF00FF
HEADING_COLOR = 0x00FF0000
PLAYER_COLOR = 0x0000FF00

INFO_W = 155
INFO_H = 320
PADDING = 10
INFO_DIGITS = 13

Point = Tuple[int, int]
InfoLine = Tuple[Point, str]


def _c_mod(a: int, b: int) -> int:
    """Remainder with the sign of the dividend, as C's ``%`` gives it."""
    rest = abs(a) % b
    return rest if a >= 0 else -rest


def render_ceiling(game: Game, frame: Frame) -> None:
    """Fill the top half of the frame with the ceiling colour."""
    frame.put_rect((0, 0), (frame.width, frame.height // 2), game.ceiling_color)


def render_floor(game: Game, frame: Frame) -> None:
    """Fill the bottom half of the frame (from one row above the middle) with the floor colour."""
    top = frame.height // 2 - 1
    frame.put_rect((0, top), (frame.width, frame.height - top), game.floor_color)


def _pick_texture(game: Game, casting: Casting) -> Optional[Tuple[Any, int]]:
    """Return the wall image struck by ``casting`` and the texture column to sample."""
    hit_x, hit_y = int(casting.x), int(casting.y)
    if casting.facing is Facing.NORTH:
        row, col, side, along, mirrored = hit_y, hit_x, "no", casting.x, True
    elif casting.facing is Facing.SOUTH:
        row, col, side, along, mirrored = hit_y - 1, hit_x, "so", casting.x, False
    elif casting.facing is Facing.WEST:
        row, col, side, along, mirrored = hit_y, hit_x, "we", casting.y, False
    elif casting.facing is Facing.EAST:
        row, col, side, along, mirrored = hit_y, hit_x - 1, "ea", casting.y, True
    else:
        return None
    if not (0 <= row < game.size_y and 0 <= col < game.size_x):
        return None
    texture = game.textures.get(game.cells[row][col].type)
    if texture is None:
        return None
    images = texture.frames.get(side, [])
    index = texture.anim_num.get(side, 0)
    if not 0 <= index < len(images) or images[index] is None:
        return None
    image = images[index]
    column = _c_mod(int(along * image.width), image.width)
    if mirrored:
        column = image.width - 1 - column
    return image, column


def render_chunk(
    game: Game, frame: Frame, x: int, size: Point, casting: Casting
) -> None:
    """Draw one vertical slice of wall, ``size`` = (width, height) px, centred vertically.

    Black texture pixels are left transparent. Nothing is drawn when the
    struck tile has no image for that face.
    """
    picked = _pick_texture(game, casting)
    if picked is None:
        return
    image, column = picked
    if not 0 <= column < image.width:
        return
    width, height = int(size[0]), int(size[1])
    if width <= 0 or height <= 0:
        return
    offset = int((frame.height - height) / 2)
    left = max(0, -x)
    right = min(width, frame.width - x)
    if left >= right:
        return
    first_row = max(0, -offset)
    last_row = min(height, frame.height - offset)
    for win_y in range(first_row, last_row):
        tex_y = int(image.height * win_y / height)
        color = image.get_pixel(column, tex_y)
        if color == 0:
            continue
        start = (win_y + offset) * frame.width + x
        count = right - left
        frame.data[start + left:start + right] = array("I", [color & 0xFFFFFFFF]) * count


def render_walls(game: Game, frame: Frame) -> List[Casting]:
    """Cast ``RAYS`` rays across the field of view and draw the walls they hit.

    Returns the castings, with hit distances corrected for fish-eye.
    """
    angle = game.orientation - FOV / 2
    if angle < 0:
        angle += 2 * math.pi
    column_width = frame.width / RAYS
    castings: List[Casting] = []
    for ray in range(RAYS):
        casting = cast_ray(game, angle + (FOV / RAYS) * ray)
        if casting.hit:
            distance = casting.distance * math.cos(game.orientation - casting.angle)
            distance = max(distance, MIN_DISTANCE)
            casting = dataclasses.replace(casting, distance=distance)
            height = int(frame.height / distance * WALL_SCALE)
            render_chunk(
                game,
                frame,
                int(ray * column_width),
                (int(column_width + 1), height),
                casting,
            )
        castings.append(casting)
    return castings


def _to_map(value: float) -> int:
    return int(value * TILE + TILE)


def render_minimap(game: Game, frame: Frame, castings: Sequence[Casting]) -> None:
    """Draw the tiles, every twentieth ray, the view ray and the player."""
    for y, row in enumerate(game.cells):
        for x, cell in enumerate(row):
            texture = game.textures.get(cell.type)
            if texture is None or not texture.map_color:
                continue
            outer = game.border_color or texture.map_color
            frame.put_rect((x * TILE + TILE, y * TILE + TILE), (TILE, TILE), outer)
            if game.border_color:
                frame.put_rect(
                    (x * TILE + TILE + 1, y * TILE + TILE + 1),
                    (TILE - 2, TILE - 2),
                    texture.map_color,
                )
    origin = (_to_map(game.pos_x), _to_map(game.pos_y))
    for casting in castings[::RAY_EVERY]:
        if casting.hit:
            frame.put_line(origin, (_to_map(casting.x), _to_map(casting.y)), RAY_COLOR)
    view = cast_ray(game, game.orientation)
    if view.hit:
        frame.put_line(origin, (_to_map(view.x), _to_map(view.y)), VIEW_COLOR)
    heading = (
        int(game.pos_x * TILE + TILE + math.cos(game.orientation) * TILE),
        int(game.pos_y * TILE + TILE + math.sin(game.orientation) * TILE),
    )
    frame.put_line(origin, heading, HEADING_COLOR)
    frame.put_rect(
        (int(game.pos_x * TILE + TILE - PLAYER / 2), int(game.pos_y * TILE + TILE - PLAYER / 2)),
        (PLAYER, PLAYER),
        PLAYER_COLOR,
    )


def info_lines(game: Game) -> List[InfoLine]:
    """Text of the info panel as ``((x, y), text)`` pairs.

    Positions are relative to the panel: on screen a line goes at
    ``(width - INFO_W + x, height - INFO_H + PADDING + y)``.
    """

    def number(value: float) -> str:
        return ftoa(value, INFO_DIGITS)

    keys = game.keys
    lines: List[InfoLine] = [
        ((0, 0), "Player X:"),
        ((55, 15), number(game.pos_x)),
        ((0, 30), "Player Y:"),
        ((55, 45), number(game.pos_y)),
        ((0, 60), "Player Angle (rad):"),
        ((55, 75), number(game.orientation)),
        ((0, 90), "Player Angle (deg):"),
        ((55, 105), number(game.orientation * 180 / math.pi)),
        ((0, 130), "Walk Speed:"),
        ((55, 145), number(game.walk_speed)),
        ((0, 160), "Rotation Speed:"),
        ((55, 175), number(game.rot_speed)),
        ((0, 190), "Rotation Speed (Mouse):"),
        ((55, 205), number(game.rot_speed_mouse)),
        ((0, 220), "Rays:"),
        ((55, 235), lli_to_str(RAYS, INFO_DIGITS)),
        ((0, 250), "FOV (deg):"),
        ((55, 265), number(FOV * 180 / math.pi)),
        ((26, 280), "<  W  A  S  D  >"),
    ]
    held = (
        keys.rot_left,
        keys.forward,
        keys.left,
        keys.backward,
        keys.right,
        keys.rot_right,
    )
    for column, pressed in zip(range(26, 117, 18), held):
        lines.append(((column, 295), lli_to_str(int(pressed), 1)))
    return lines


def render(game: Game, frame: Frame) -> List[Casting]:
    """Draw a whole frame and count it; returns the castings of this frame."""
    render_floor(game, frame)
    render_ceiling(game, frame)
    castings = render_walls(game, frame)
    if game.minimap:
        render_minimap(game, frame, castings)
    if game.info:
        frame.put_rect(
            (frame.width - INFO_W - PADDING, frame.height - INFO_H - PADDING),
            (INFO_W, INFO_H),
            0x000000,
        )
    game.frames += 1
    return castings