"""Game state: the grid, the player, movement, doors and texture animation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List

__all__ = [
    "SIDES",
    "DOOR_CLOSED",
    "DOOR_OPEN",
    "DOOR_OPENING",
    "WALK_SPEED",
    "TRANSL_SPEED",
    "ROT_SPEED",
    "ROT_SPEED_MOUSE",
    "Cell",
    "Texture",
    "Keys",
    "Game",
]

SIDES = ("no", "so", "we", "ea")
PLAYER_CHARS = "NSWE"
FLOOR = "0"
DOOR_CLOSED = "X"
DOOR_OPEN = "O"
DOOR_OPENING = "-"

WALK_SPEED = 0.05
TRANSL_SPEED = 0.03
ROT_SPEED = 0.03
ROT_SPEED_MOUSE = 0.002

_TWO_PI = 2 * math.pi


@dataclass
class Cell:
    """One map tile: its type character and whether it blocks movement and rays."""

    type: str
    is_solid: bool = False


def _side_dict(value: Any) -> Dict[str, Any]:
    return {side: value for side in SIDES}


@dataclass
class Texture:
    """Frames and animation state of one tile type.

    ``type`` is truthy for tiles that are solid. ``frames`` holds the images
    of each side; ``anim`` tells whether a side is animating and
    ``anim_num`` which of its frames is shown.
    """

    empty: bool = True
    type: int = 0
    map_color: int = 0
    anim_delay: int = 0
    anim_counter: int = 0
    frames: Dict[str, List[Any]] = field(default_factory=lambda: {s: [] for s in SIDES})
    anim: Dict[str, bool] = field(default_factory=lambda: _side_dict(False))
    anim_num: Dict[str, int] = field(default_factory=lambda: _side_dict(0))

    def _count(self, side: str) -> int:
        return len(self.frames.get(side, ()))

    def _tick(self) -> bool:
        """Count one tick of delay; True when the frames should advance."""
        if self.anim_counter < self.anim_delay:
            self.anim_counter += 1
            return False
        self.anim_counter = 0
        return True

    def advance(self) -> None:
        """Step looping animations, honouring the delay between frames."""
        if not self._tick():
            return
        for side in SIDES:
            count = self._count(side)
            if self.anim[side] and count > 1:
                self.anim_num[side] += 1
                if self.anim_num[side] >= count:
                    self.anim_num[side] = 0

    def advance_door(self) -> None:
        """Step a one-shot door animation; mark the texture empty once it ends."""
        for side in SIDES:
            if self.anim[side] and self._count(side) <= 1:
                self.anim[side] = False
        if not self._tick():
            return
        for side in SIDES:
            count = self._count(side)
            if self.anim[side] and count > 1:
                self.anim_num[side] += 1
                if self.anim_num[side] >= count:
                    self.anim[side] = False
        if not any(self.anim.values()):
            self.empty = True


@dataclass
class Keys:
    """Which movement keys are currently held."""

    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False
    rot_left: bool = False
    rot_right: bool = False


@dataclass
class Game:
    """The running game: map cells, player pose, textures and input state."""

    cells: List[List[Cell]]
    pos_x: float
    pos_y: float
    orientation: float = 0.0
    textures: Dict[str, Texture] = field(default_factory=dict)
    keys: Keys = field(default_factory=Keys)
    bonus: bool = False
    minimap: bool = False
    info: bool = False
    frames: int = 0
    floor_color: int = 0
    ceiling_color: int = 0
    border_color: int = 0
    walk_speed: float = WALK_SPEED
    transl_speed: float = TRANSL_SPEED
    rot_speed: float = ROT_SPEED
    rot_speed_mouse: float = ROT_SPEED_MOUSE

    @property
    def size_y(self) -> int:
        return len(self.cells)

    @property
    def size_x(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def texture(self, tex_id: str) -> Texture:
        """Return the texture of a tile type, creating an empty one if absent."""
        return self.textures.setdefault(tex_id, Texture())

    def does_collide(self, x: float, y: float) -> bool:
        """True if the player may not stand at ``(x, y)``."""
        if x < 0 or x >= self.size_x or y < 0 or y >= self.size_y:
            return True
        if not self.bonus:
            return False
        return self.cells[int(y)][int(x)].is_solid

    def _step(self, angle: float, speed: float) -> None:
        """Move along ``angle``, one axis at a time so walls can be slid along."""
        rollback_x, rollback_y = self.pos_x, self.pos_y
        dx = math.cos(angle) * speed
        self.pos_x += dx
        if self.does_collide(self.pos_x + dx + dx, self.pos_y):
            self.pos_x = rollback_x
        dy = math.sin(angle) * speed
        self.pos_y += dy
        if self.does_collide(self.pos_x, self.pos_y + dy + dy):
            self.pos_y = rollback_y

    def move_forward(self) -> None:
        self._step(self.orientation, self.walk_speed)

    def move_backward(self) -> None:
        self._step(self.orientation, -self.walk_speed)

    def move_left(self) -> None:
        self._step(self.orientation - math.pi / 2, self.transl_speed)

    def move_right(self) -> None:
        self._step(self.orientation + math.pi / 2, self.transl_speed)

    def handle_keys(self) -> None:
        """Apply the held keys: move, strafe, turn, then wrap the orientation."""
        if self.keys.forward:
            self.move_forward()
        if self.keys.backward:
            self.move_backward()
        if self.keys.left:
            self.move_left()
        if self.keys.right:
            self.move_right()
        if self.keys.rot_left:
            self.orientation -= self.rot_speed
        if self.keys.rot_right:
            self.orientation += self.rot_speed
        if self.orientation > _TWO_PI:
            self.orientation -= _TWO_PI
        elif self.orientation < 0:
            self.orientation += _TWO_PI

    def handle_action(self) -> None:
        """Open the closed door one tile ahead, or close the open one there."""
        x = self.pos_x + math.cos(self.orientation)
        y = self.pos_y + math.sin(self.orientation)
        if not (0 <= x < self.size_x and 0 <= y < self.size_y):
            return
        cell = self.cells[int(y)][int(x)]
        if cell.type == DOOR_CLOSED:
            self._open_door(cell)
        elif (
            cell.type == DOOR_OPEN
            and self.cells[int(self.pos_y)][int(self.pos_x)].type != DOOR_OPEN
        ):
            cell.type = DOOR_CLOSED
            cell.is_solid = True

    def _open_door(self, cell: Cell) -> None:
        cell.type = DOOR_OPENING
        cell.is_solid = True
        door = self.texture(DOOR_OPENING)
        door.empty = False
        for side in SIDES:
            door.anim[side] = True
            door.anim_num[side] = 0
        door.anim_counter = 0

    def handle_doors(self) -> None:
        """Turn opening doors into open ones once their animation has finished."""
        door = self.textures.get(DOOR_OPENING)
        if door is None or not door.empty:
            return
        for row in self.cells:
            for cell in row:
                if cell.type == DOOR_OPENING:
                    cell.type = DOOR_OPEN
                    cell.is_solid = False

    def animate(self) -> None:
        """Advance every non-empty texture, the door one with its own rules."""
        for tex_id in sorted(self.textures, key=ord):
            texture = self.textures[tex_id]
            if texture.empty:
                continue
            if tex_id == DOOR_OPENING:
                texture.advance_door()
            else:
                texture.advance()

    def prepare(self) -> None:
        """Replace the player start by floor and set each cell's solidity."""
        for row in self.cells:
            for cell in row:
                if cell.type in PLAYER_CHARS:
                    cell.type = FLOOR
                cell.is_solid = bool(self.texture(cell.type).type)