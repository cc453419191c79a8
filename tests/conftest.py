"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from vipax import create_state, Quirks


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state with the default (original interpreter) quirks."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state with SUPER-CHIP style quirks."""
    return create_state(quirks=Quirks.modern())


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(memory=state.memory.load(address, sprite_bytes))


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. set_registers(state, V1=0x42, VF=1)."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def rom(*words):
    """Assemble 16-bit instruction words into big-endian ROM bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
