"""CHIP-8 display operations."""

from vipax.state import EmulatorState
from vipax.decode import DecodedInstruction
from vipax.constants import FLAG_REGISTER


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw the N-byte sprite at I to (VX, VY), VF = collision."""
    rows = state.memory.read_block(int(state.I), instruction.n)
    display, collided = state.display.draw_sprite(
        int(state.V[instruction.x]), int(state.V[instruction.y]), rows
    )
    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(int(collided)),
    )
