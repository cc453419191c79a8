"""CHIP-8 ALU operations (8xxx).

Each operation maps (VX, VY) to (result, VF). A VF of None leaves the flag
register untouched.
"""

from typing import Optional, Tuple

from vipax.state import EmulatorState
from vipax.decode import DecodedInstruction
from vipax.constants import FLAG_REGISTER
from vipax.instructions.system import unsupported

AluResult = Tuple[int, Optional[int]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, 0


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, 0


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, 0


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, result >> 8


def alu_sub_xy(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> AluResult:
    """8XY6 - Shift right, VF = bit shifted out."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> AluResult:
    """8XYE - Shift left, VF = bit shifted out."""
    return (vx << 1) & 0xFF, vx >> 7


ALU_OPERATIONS = {
    0x0: alu_set,
    0x1: alu_or,
    0x2: alu_and,
    0x3: alu_xor,
    0x4: alu_add,
    0x5: alu_sub_xy,
    0x6: alu_shift_right,
    0x7: alu_sub_yx,
    0xE: alu_shift_left,
}

LOGIC_OPERATIONS = (0x1, 0x2, 0x3)
SHIFT_OPERATIONS = (0x6, 0xE)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    operation = ALU_OPERATIONS.get(instruction.n)
    if operation is None:
        return unsupported(state, instruction)

    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    # The original interpreter shifted VY into VX
    if instruction.n in SHIFT_OPERATIONS and state.quirks.shift_uses_vy:
        vx = vy

    result, vf = operation(vx, vy)
    if instruction.n in LOGIC_OPERATIONS and not state.quirks.logic_resets_vf:
        vf = None

    # VF is written last so the flag wins when X is F
    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)
