"""CHIP-8 emulator state structures."""

from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from vipax.constants import PROGRAM_START, NUM_REGISTERS, STACK_SIZE, NOT_WAITING
from vipax.memory import Memory
from vipax.peripherals import Display, Keypad, Timer


@dataclass(frozen=True)
class Quirks:
    """Behaviour switches for instructions whose semantics changed across CHIP-8 revisions.

    The defaults reproduce the original COSMAC VIP interpreter.
    """
    shift_uses_vy: bool = field(pytree_node=False, default=True)  # 8XY6/8XYE shift VY into VX
    logic_resets_vf: bool = field(pytree_node=False, default=True)  # 8XY1/8XY2/8XY3 clear VF
    memory_increments_index: bool = field(pytree_node=False, default=True)  # FX55/FX65 advance I
    jump_uses_vx: bool = field(pytree_node=False, default=False)  # BXNN adds VX instead of V0

    @classmethod
    def modern(cls) -> "Quirks":
        """Later CHIP-48/SUPER-CHIP behaviour."""
        return cls(
            shift_uses_vy=False,
            logic_resets_vf=False,
            memory_increments_index=False,
            jump_uses_vx=True,
        )


@dataclass(frozen=True)
class StackState:
    """Return address stack. Slot 0 is never written; pointer 0 means empty."""
    data: jnp.ndarray
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    `waiting_register` is NOT_WAITING while the machine is running and holds
    the destination register while FX0A blocks on the keypad.
    """
    rng: jax.random.PRNGKey
    memory: Memory
    display: Display
    keypad: Keypad
    delay_timer: Timer
    sound_timer: Timer
    stack: StackState
    V: jnp.ndarray
    I: jnp.ndarray
    pc: jnp.ndarray
    waiting_register: int = NOT_WAITING
    quirks: Quirks = field(pytree_node=False, default=Quirks())


def create_state(
    rng: jax.random.PRNGKey = jax.random.PRNGKey(0),
    quirks: Optional[Quirks] = None,
) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    return EmulatorState(
        rng=rng,
        memory=Memory.create(),
        display=Display.create(),
        keypad=Keypad.create(),
        delay_timer=Timer.create(),
        sound_timer=Timer.create(),
        stack=StackState(data=jnp.zeros(STACK_SIZE, dtype=jnp.uint16)),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.uint16(0),
        pc=jnp.uint16(PROGRAM_START),
        quirks=quirks if quirks is not None else Quirks(),
    )
