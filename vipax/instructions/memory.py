"""CHIP-8 register load and arithmetic instructions."""

import jax
import jax.numpy as jnp
from vipax.state import EmulatorState
from vipax.decode import DecodedInstruction


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.kk))


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - Add NN to VX. Wraps, never touches VF."""
    total = (int(state.V[instruction.x]) + instruction.kk) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(total))


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.uint16(instruction.nnn))


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = int(jax.random.randint(subkey, shape=(), minval=0, maxval=256))
    return state.replace(V=state.V.at[instruction.x].set(random_value & instruction.kk), rng=key)
