"""Main CHIP-8 emulator execution engine."""

from typing import Tuple, Union

import jax.numpy as jnp
from vipax.state import EmulatorState
from vipax.decode import decode
from vipax.constants import PROGRAM_START, MAX_ROM_SIZE, NOT_WAITING
from vipax.errors import RomTooLargeError
from vipax.instructions.system import execute_system_instruction
from vipax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key
)
from vipax.instructions.alu import execute_alu_operation
from vipax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from vipax.instructions.display import execute_display
from vipax.instructions.misc import execute_misc_instruction

# Indexed by the top nibble of the instruction word
INSTRUCTION_FAMILIES = (
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Raises:
        UnsupportedInstructionError: the word is not part of the instruction set.
    """
    decoded_instruction = decode(instruction)
    return INSTRUCTION_FAMILIES[decoded_instruction.opcode](state, decoded_instruction)


def fetch(state: EmulatorState) -> Tuple[EmulatorState, int]:
    """Fetch the big-endian instruction word at PC and advance PC past it."""
    pc = int(state.pc)
    instruction = (state.memory.read(pc) << 8) | state.memory.read(pc + 1)
    return state.replace(pc=jnp.uint16((pc + 2) & 0xFFFF)), instruction


def is_waiting_for_key(state: EmulatorState) -> bool:
    return state.waiting_register != NOT_WAITING


def _poll_keypad(state: EmulatorState) -> EmulatorState:
    keypad, changed = state.keypad.has_changed()
    state = state.replace(keypad=keypad)
    if not changed:
        return state

    key = keypad.first_pressed()
    if key is None:
        return state

    return state.replace(
        V=state.V.at[state.waiting_register].set(key),
        waiting_register=NOT_WAITING,
    )


def step(state: EmulatorState) -> EmulatorState:
    """Run one instruction, or poll the keypad while FX0A is pending.

    While blocked the PC does not move; the machine resumes on the first
    keypad change that leaves some key held down.
    """
    if is_waiting_for_key(state):
        return _poll_keypad(state)
    state, instruction = fetch(state)
    return execute(state, instruction)


def tick(state: EmulatorState) -> EmulatorState:
    """Advance both timers by one 60 Hz tick."""
    return state.replace(
        delay_timer=state.delay_timer.tick(),
        sound_timer=state.sound_timer.tick(),
    )


def set_key(state: EmulatorState, key: int, pressed: bool) -> EmulatorState:
    """Report a key transition from the input source."""
    return state.replace(keypad=state.keypad.set_state(key, pressed))


def sound_active(state: EmulatorState) -> bool:
    """True while the sound timer is running and the host should play its tone."""
    return state.sound_timer.is_active()


def load_rom(state: EmulatorState, rom: Union[bytes, bytearray]) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    rom = bytes(rom)
    if len(rom) > MAX_ROM_SIZE:
        raise RomTooLargeError(len(rom), MAX_ROM_SIZE)
    return state.replace(memory=state.memory.load(PROGRAM_START, rom))


def load_rom_file(state: EmulatorState, filename: str) -> EmulatorState:
    """Read a ROM image from disk and load it at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_rom(state, rom_data)
