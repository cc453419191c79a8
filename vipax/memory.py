"""CHIP-8 addressable memory."""

from typing import Sequence, Union

import jax.numpy as jnp
from flax.struct import PyTreeNode

from vipax.constants import MEMORY_SIZE, FONT_START, FONT_DATA
from vipax.errors import AddressError


def _as_bytes(data: Union[bytes, Sequence[int], jnp.ndarray]) -> jnp.ndarray:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return jnp.array(list(bytes(data)), dtype=jnp.uint8)
    return jnp.asarray(data, dtype=jnp.uint8)


class Memory(PyTreeNode):
    """Flat byte store. Single-byte and block addressing wraps modulo the memory size."""
    data: jnp.ndarray

    @classmethod
    def create(cls) -> "Memory":
        """Zeroed memory with the hex digit font installed."""
        return cls(data=jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)).load(FONT_START, FONT_DATA)

    @property
    def size(self) -> int:
        return self.data.shape[0]

    def read(self, address: int) -> int:
        return int(self.data[int(address) % self.size])

    def write(self, address: int, value: int) -> "Memory":
        return self.replace(data=self.data.at[int(address) % self.size].set(int(value) & 0xFF))

    def read_block(self, address: int, length: int) -> jnp.ndarray:
        """Read `length` consecutive bytes, wrapping past the last cell."""
        indices = (int(address) + jnp.arange(length)) % self.size
        return self.data[indices]

    def write_block(self, address: int, values) -> "Memory":
        """Write consecutive bytes, wrapping past the last cell."""
        values = _as_bytes(values)
        indices = (int(address) + jnp.arange(values.shape[0])) % self.size
        return self.replace(data=self.data.at[indices].set(values))

    def load(self, offset: int, data) -> "Memory":
        """Copy a byte sequence verbatim starting at `offset`.

        Unlike `write_block` this never wraps: an image that would run past
        the end of memory raises `AddressError`.
        """
        block = _as_bytes(data)
        end = offset + block.shape[0]
        if offset < 0 or end > self.size:
            raise AddressError(
                f"cannot load {block.shape[0]} bytes at 0x{offset:03X}: memory ends at 0x{self.size:03X}"
            )
        if block.shape[0] == 0:
            return self
        return self.replace(data=self.data.at[offset:end].set(block))
