"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from vipax.state import EmulatorState
from vipax.decode import DecodedInstruction
from vipax.errors import UnsupportedInstructionError
from vipax.stack import pop


def unsupported(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Reject a word outside the instruction set.

    The PC has already moved past the word, so the reported address is PC - 2.
    """
    raise UnsupportedInstructionError(instruction.raw, (int(state.pc) - 2) & 0xFFFF)


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=state.display.clear())


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=jnp.uint16(address))


SYSTEM_INSTRUCTIONS = {
    0x00E0: execute_clear_screen,
    0x00EE: execute_return,
}


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions. 0NNN machine-code calls are not supported."""
    handler = SYSTEM_INSTRUCTIONS.get(instruction.raw, unsupported)
    return handler(state, instruction)
