"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from vipax.state import EmulatorState
from vipax.decode import DecodedInstruction
from vipax.constants import ADDRESS_MASK
from vipax.instructions.system import unsupported
from vipax.stack import push


def skip_next(state: EmulatorState) -> EmulatorState:
    """Step the PC over the following instruction."""
    return state.replace(pc=jnp.uint16((int(state.pc) + 2) & 0xFFFF))


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.uint16(instruction.nnn))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, int(state.pc)))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn, strict_low_nibble=False):
    """Factory for skip instructions.

    With `strict_low_nibble` the instruction only exists with N == 0 (5XY0, 9XY0).
    """
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if strict_low_nibble and instruction.n != 0:
            return unsupported(state, instruction)
        if condition_fn(state, instruction):
            return skip_next(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.kk
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.kk
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y]),
    strict_low_nibble=True,
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y]),
    strict_low_nibble=True,
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0 (BXNN: NNN + VX with the jump quirk)."""
    offset_register = instruction.x if state.quirks.jump_uses_vx else 0
    jump_address = (instruction.nnn + int(state.V[offset_register])) & ADDRESS_MASK
    return state.replace(pc=jnp.uint16(jump_address))


def execute_skip_if_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """EX9E/EXA1 - Skip if key VX pressed/not pressed."""
    if instruction.kk not in (0x9E, 0xA1):
        return unsupported(state, instruction)

    key_pressed = state.keypad.get_state(int(state.V[instruction.x]) & 0xF)
    if key_pressed != (instruction.kk == 0xA1):
        return skip_next(state)
    return state
