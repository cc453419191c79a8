"""CHIP-8 virtual machine package."""

from vipax.state import EmulatorState, Quirks, create_state
from vipax.emulator import (
    execute, fetch, step, tick, set_key, load_rom, load_rom_file,
    is_waiting_for_key, sound_active,
)
from vipax.decode import DecodedInstruction, decode
from vipax.errors import (
    MachineError, UnsupportedInstructionError, RomTooLargeError, AddressError, StackFault,
)
from vipax.constants import *
from vipax.rendering import display_to_rgb, create_color_scheme, save_frame

__all__ = [
    "EmulatorState",
    "Quirks",
    "create_state",
    "fetch",
    "execute",
    "step",
    "tick",
    "set_key",
    "load_rom",
    "load_rom_file",
    "is_waiting_for_key",
    "sound_active",
    "DecodedInstruction",
    "decode",
    "MachineError",
    "UnsupportedInstructionError",
    "RomTooLargeError",
    "AddressError",
    "StackFault",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "MAX_ROM_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "display_to_rgb",
    "create_color_scheme",
    "save_frame",
]
