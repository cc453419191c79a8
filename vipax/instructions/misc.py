"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from vipax.state import EmulatorState
from vipax.decode import DecodedInstruction
from vipax.constants import ADDRESS_MASK, FLAG_REGISTER, FONT_START, FONT_GLYPH_SIZE
from vipax.instructions.system import unsupported


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer.value()))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Only records the destination register; `step` polls the keypad until a
    key event arrives with some key held down.
    """
    return state.replace(waiting_register=instruction.x)


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.delay_timer.reload(int(state.V[instruction.x])))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.sound_timer.reload(int(state.V[instruction.x])))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register, VF = overflow past 0xFFF."""
    new_i = int(state.I) + int(state.V[instruction.x])
    return state.replace(
        I=jnp.uint16(new_i & ADDRESS_MASK),
        V=state.V.at[FLAG_REGISTER].set(int(new_i > ADDRESS_MASK)),
    )


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + int(state.V[instruction.x]) * FONT_GLYPH_SIZE
    return state.replace(I=jnp.uint16(font_address))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=state.memory.write_block(int(state.I), digits))


def _advance_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    if not state.quirks.memory_increments_index:
        return state
    return state.replace(I=jnp.uint16((int(state.I) + instruction.x + 1) & 0xFFFF))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    memory = state.memory.write_block(int(state.I), state.V[:instruction.x + 1])
    return _advance_index(state.replace(memory=memory), instruction)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    values = state.memory.read_block(int(state.I), instruction.x + 1)
    new_V = state.V.at[:instruction.x + 1].set(values)
    return _advance_index(state.replace(V=new_V), instruction)


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.kk, unsupported)
    return handler(state, instruction)
