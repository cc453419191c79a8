"""Errors raised by the CHIP-8 machine."""


class MachineError(Exception):
    """Base class for all machine faults."""


class UnsupportedInstructionError(MachineError):
    """Instruction word is not part of the CHIP-8 instruction set."""

    def __init__(self, instruction: int, address: int):
        self.instruction = instruction
        self.address = address
        super().__init__(f"unsupported instruction {instruction:04X} at 0x{address:03X}")


class RomTooLargeError(MachineError):
    """ROM image does not fit in program memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"ROM is {size} bytes but only {capacity} bytes of program memory are available")


class AddressError(MachineError):
    """Block transfer runs past the end of memory."""


class StackFault(MachineError):
    """Call stack overflow or underflow."""
