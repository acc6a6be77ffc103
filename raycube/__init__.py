"""A grid raycasting engine: game state, ray casting and frame rendering."""

__version__ = "0.1.0"