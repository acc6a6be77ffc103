"""Grid ray casting: find the nearest wall along a direction."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, Tuple

__all__ = ["PI", "PI_2", "Facing", "Casting", "horizontal_hit", "vertical_hit", "cast_ray"]

PI = math.pi
PI_2 = math.pi / 2

Hit = Tuple[float, float, float]


class _Scene(Protocol):
    pos_x: float
    pos_y: float
    size_x: int
    size_y: int
    cells: Sequence[Sequence[Any]]


class Facing(enum.Enum):
    """Which face of a wall block a ray struck."""

    NORTH = "north"
    SOUTH = "south"
    WEST = "west"
    EAST = "east"


@dataclass(frozen=True)
class Casting:
    """Result of one ray: hit point, distance and wall face; ``distance`` is None on a miss."""

    angle: float
    x: float = 0.0
    y: float = 0.0
    distance: Optional[float] = None
    facing: Optional[Facing] = None

    @property
    def hit(self) -> bool:
        return self.distance is not None


def _faces_right(angle: float) -> bool:
    return angle < PI_2 or angle > 3 * PI_2


def _distance(game: _Scene, x: float, y: float) -> float:
    return math.hypot(game.pos_x - x, game.pos_y - y)


def horizontal_hit(game: _Scene, angle: float) -> Optional[Hit]:
    """Follow the ray across horizontal grid lines; ``(x, y, distance)`` or None."""
    tangent = math.tan(angle)
    if tangent == 0:
        return None
    down = angle < PI
    y = float(int(game.pos_y) + (1 if down else 0))
    x = game.pos_x - (game.pos_y - y) / tangent
    step_y = 1.0 if down else -1.0
    step_x = 1 / tangent if down else -1 / tangent
    off = 0 if down else 1

    def inside() -> bool:
        return y - off >= 0 and y < game.size_y and 0 <= x < game.size_x

    while inside() and not game.cells[int(y) - off][int(x)].is_solid:
        x += step_x
        y += step_y
    if not inside() or not game.cells[int(y) - off][int(x)].is_solid:
        return None
    return x, y, _distance(game, x, y)


def vertical_hit(game: _Scene, angle: float) -> Optional[Hit]:
    """Follow the ray across vertical grid lines; ``(x, y, distance)`` or None."""
    right = _faces_right(angle)
    tangent = math.tan(angle)
    x = float(int(game.pos_x) + (1 if right else 0))
    y = game.pos_y - (game.pos_x - x) * tangent
    step_x = 1.0 if right else -1.0
    step_y = tangent if right else -tangent
    off = 0 if right else 1

    def inside() -> bool:
        return 0 <= y < game.size_y and x - off >= 0 and x < game.size_x

    while inside() and not game.cells[int(y)][int(x) - off].is_solid:
        x += step_x
        y += step_y
    if not inside() or not game.cells[int(y)][int(x) - off].is_solid:
        return None
    return x, y, _distance(game, x, y)


def cast_ray(game: _Scene, angle: float) -> Casting:
    """Cast a ray at ``angle`` (radians) and keep the nearer of both hits."""
    while angle >= 2 * PI:
        angle -= 2 * PI
    hor = horizontal_hit(game, angle)
    ver = vertical_hit(game, angle)
    if hor is not None and (ver is None or hor[2] <= ver[2]):
        facing = Facing.NORTH if angle < PI else Facing.SOUTH
        return Casting(angle, hor[0], hor[1], hor[2], facing)
    if ver is not None:
        facing = Facing.WEST if _faces_right(angle) else Facing.EAST
        return Casting(angle, ver[0], ver[1], ver[2], facing)
    return Casting(angle)