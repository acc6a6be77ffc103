"""In-memory pixel frames: drawing primitives and texture loading."""

from __future__ import annotations

from array import array
from dataclasses import dataclass, field
from typing import Optional, Tuple

from PIL import Image

__all__ = ["Frame", "new_frame", "load_texture"]

Point = Tuple[int, int]


@dataclass
class Frame:
    """A ``width`` x ``height`` image of 32-bit ``0xAARRGGBB`` pixels, row major."""

    width: int
    height: int
    data: array = field(default=None, repr=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid frame size {self.width}x{self.height}")
        size = self.width * self.height
        if self.data is None:
            self.data = array("I", [0]) * size
        elif len(self.data) != size:
            raise ValueError("pixel data does not match the frame size")

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return y * self.width + x

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; raises :class:`IndexError` outside the frame."""
        self.data[self._index(int(x), int(y))] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour of one pixel."""
        return self.data[self._index(int(x), int(y))]

    def put_rect(self, pos: Point, size: Point, color: int) -> None:
        """Fill a rectangle, clipped to the frame."""
        x0, y0 = int(pos[0]), int(pos[1])
        left, top = max(x0, 0), max(y0, 0)
        right = min(x0 + int(size[0]), self.width)
        bottom = min(y0 + int(size[1]), self.height)
        value = color & 0xFFFFFFFF
        for y in range(top, bottom):
            row = y * self.width
            for x in range(left, right):
                self.data[row + x] = value

    def put_line(self, start: Point, end: Point, color: int) -> None:
        """Draw a line from ``start`` up to, but not including, ``end``; clipped."""
        sx, sy = int(start[0]), int(start[1])
        dx, dy = int(end[0]) - sx, int(end[1]) - sy
        steps = max(abs(dx), abs(dy))
        if steps == 0:
            return
        step_x, step_y = dx / steps, dy / steps
        for i in range(steps):
            px, py = sx + step_x * i, sy + step_y * i
            if 0 <= px < self.width and 0 <= py < self.height:
                self.put_pixel(int(px), int(py), color)


def new_frame(width: int, height: int) -> Frame:
    """Create a black frame of the given size."""
    return Frame(width, height)


def load_texture(path: str) -> Optional[Frame]:
    """Load an image file as a frame; ``None`` if it cannot be read."""
    try:
        with Image.open(path) as image:
            rgb = image.convert("RGB")
    except (OSError, ValueError):
        return None
    if rgb.width <= 0 or rgb.height <= 0:
        return None
    raw = rgb.tobytes()
    channels = iter(raw)
    pixels = array("I", ((r << 16) | (g << 8) | b for r, g, b in zip(channels, channels, channels)))
    return Frame(rgb.width, rgb.height, pixels)