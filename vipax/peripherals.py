"""CHIP-8 peripherals: countdown timers, keypad and display."""

from typing import Optional, Tuple

import jax.numpy as jnp
from flax.struct import PyTreeNode

from vipax.constants import NUM_KEYS, SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH


class Timer(PyTreeNode):
    """8-bit countdown counter, decremented once per tick while nonzero."""
    counter: jnp.ndarray

    @classmethod
    def create(cls, value: int = 0) -> "Timer":
        return cls(counter=jnp.uint8(value & 0xFF))

    def value(self) -> int:
        return int(self.counter)

    def reload(self, value: int) -> "Timer":
        return self.replace(counter=jnp.uint8(int(value) & 0xFF))

    def is_active(self) -> bool:
        return self.value() != 0

    def tick(self) -> "Timer":
        if not self.is_active():
            return self
        return self.replace(counter=jnp.uint8(self.value() - 1))


def _check_key(key: int) -> int:
    key = int(key)
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key must be in 0x0-0x{NUM_KEYS - 1:X}, got {key}")
    return key


class Keypad(PyTreeNode):
    """Sixteen key states plus a flag raised by any press or release."""
    keys: jnp.ndarray
    dirty: jnp.ndarray

    @classmethod
    def create(cls) -> "Keypad":
        return cls(keys=jnp.zeros(NUM_KEYS, dtype=jnp.bool_), dirty=jnp.bool_(False))

    def set_state(self, key: int, pressed: bool) -> "Keypad":
        key = _check_key(key)
        pressed = bool(pressed)
        if self.get_state(key) == pressed:
            return self
        return self.replace(keys=self.keys.at[key].set(pressed), dirty=jnp.bool_(True))

    def get_state(self, key: int) -> bool:
        return bool(self.keys[_check_key(key)])

    def has_changed(self) -> Tuple["Keypad", bool]:
        """Consume the change flag.

        Returns the keypad with the flag cleared and whether any key changed
        since the previous call.
        """
        return self.replace(dirty=jnp.bool_(False)), bool(self.dirty)

    def first_pressed(self) -> Optional[int]:
        """Lowest-indexed pressed key, or None."""
        if not jnp.any(self.keys):
            return None
        return int(jnp.argmax(self.keys))


class Display(PyTreeNode):
    """Monochrome framebuffer indexed as pixels[x, y]."""
    pixels: jnp.ndarray

    @classmethod
    def create(cls, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> "Display":
        return cls(pixels=jnp.zeros((width, height), dtype=jnp.bool_))

    def size(self) -> Tuple[int, int]:
        width, height = self.pixels.shape
        return width, height

    def clear(self) -> "Display":
        return self.replace(pixels=jnp.zeros_like(self.pixels))

    def _wrap(self, x: int, y: int) -> Tuple[int, int]:
        width, height = self.size()
        return int(x) % width, int(y) % height

    def read(self, x: int, y: int) -> bool:
        return bool(self.pixels[self._wrap(x, y)])

    def write(self, x: int, y: int, bit: bool) -> Tuple["Display", bool]:
        """XOR `bit` into the pixel at (x, y), wrapping both coordinates.

        Returns the new display and whether a lit pixel was turned off.
        """
        position = self._wrap(x, y)
        lit = bool(self.pixels[position])
        if not bit:
            return self, False
        return self.replace(pixels=self.pixels.at[position].set(not lit)), lit

    def draw_sprite(self, x: int, y: int, rows: jnp.ndarray) -> Tuple["Display", bool]:
        """XOR an 8-pixel-wide sprite with its top-left corner at (x, y).

        Only the origin wraps around the screen; sprite pixels that fall past
        the right or bottom edge are clipped.
        """
        rows = jnp.asarray(rows, dtype=jnp.uint8)
        height = rows.shape[0]
        if height == 0:
            return self, False

        origin_x, origin_y = self._wrap(x, y)
        width, screen_height = self.size()
        xx, yy = jnp.meshgrid(jnp.arange(width), jnp.arange(screen_height), indexing='ij')

        col_offset = xx - origin_x
        row_offset = yy - origin_y
        in_sprite = (col_offset >= 0) & (col_offset < SPRITE_WIDTH) & (row_offset >= 0) & (row_offset < height)

        sprite_bytes = rows[jnp.clip(row_offset, 0, height - 1)].astype(jnp.int32)
        bits = (sprite_bytes >> (7 - jnp.clip(col_offset, 0, SPRITE_WIDTH - 1))) & 1
        sprite = (bits == 1) & in_sprite

        collided = bool(jnp.any(self.pixels & sprite))
        return self.replace(pixels=self.pixels ^ sprite), collided
