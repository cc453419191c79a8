"""CHIP-8 stack operations."""

from typing import Tuple

from vipax.constants import STACK_SIZE
from vipax.errors import StackFault
from vipax.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push address onto stack. The pointer is incremented before the store."""
    pointer = stack.pointer + 1
    if pointer >= STACK_SIZE:
        raise StackFault(f"call stack overflow: more than {STACK_SIZE - 1} nested calls")
    new_data = stack.data.at[pointer].set(int(address) & 0xFFFF)
    return stack.replace(data=new_data, pointer=pointer)


def pop(stack: StackState) -> Tuple[StackState, int]:
    """Pop address from stack."""
    if stack.pointer == 0:
        raise StackFault("return with an empty call stack")
    popped_address = int(stack.data[stack.pointer])
    new_data = stack.data.at[stack.pointer].set(0)
    return stack.replace(data=new_data, pointer=stack.pointer - 1), popped_address
