"""CHIP-8 instruction decoding."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Instruction word split into its operand fields."""
    raw: int
    opcode: int  # Top nibble, selects the instruction family
    x: int       # Bits 8-11 (VX register)
    y: int       # Bits 4-7 (VY register)
    n: int       # Bits 0-3 (4-bit immediate)
    kk: int      # Bits 0-7 (8-bit immediate)
    nnn: int     # Bits 0-11 (12-bit address)


def decode(instruction: int) -> DecodedInstruction:
    """Decode a 16-bit instruction word. Every word decodes; validity is checked at dispatch."""
    instruction = int(instruction)
    if not 0 <= instruction <= 0xFFFF:
        raise ValueError(f"Instruction must be a 16-bit word, got {instruction:#x}")
    return DecodedInstruction(
        raw=instruction,
        opcode=instruction >> 12,
        x=(instruction >> 8) & 0xF,
        y=(instruction >> 4) & 0xF,
        n=instruction & 0x000F,
        kk=instruction & 0x00FF,
        nnn=instruction & 0x0FFF,
    )
