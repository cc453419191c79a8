"""Tests for ALU operations (8xxx)."""

import pytest
from vipax import execute, UnsupportedInstructionError
from vipax.instructions.alu import alu_add, alu_sub_xy, alu_sub_yx
from conftest import set_registers


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = set_registers(fresh_state, V1=0x42, V2=0x99)

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_set_leaves_flag(self, fresh_state):
        """8XY0 - VF is not touched."""
        state = set_registers(fresh_state, V2=0x10, VF=0x77)

        state = execute(state, 0x8120)

        assert state.V[15] == 0x77

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0x0F, VF=1)

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF
        assert state.V[15] == 0

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0xF1, VF=1)

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0
        assert state.V[15] == 0

    def test_alu_xor_basic(self, fresh_state):
        """8XY3 - XOR operation."""
        state = set_registers(fresh_state, V1=0xFF, V2=0xF0, VF=1)

        state = execute(state, 0x8123)  # V1 ^= V2

        assert state.V[1] == 0x0F
        assert state.V[15] == 0

    def test_logic_keeps_flag_in_modern_mode(self, modern_state):
        """8XY1/2/3 - VF untouched without the logic quirk."""
        state = set_registers(modern_state, V1=0xF0, V2=0x0F, VF=0x55)

        for instruction in (0x8121, 0x8122, 0x8123):
            state = execute(state, instruction)
            assert state.V[15] == 0x55


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_no_carry(self, fresh_state):
        """8XY4 - Add without carry."""
        state = set_registers(fresh_state, V1=0x10, V2=0x20)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x30
        assert state.V[15] == 0

    def test_alu_add_with_carry(self, fresh_state):
        """8XY4 - Add with carry."""
        state = set_registers(fresh_state, V1=0xFF, V2=0x01)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x00  # 256 wraps to 0
        assert state.V[15] == 1  # Carry set

    def test_alu_sub_xy_no_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, no borrow."""
        state = set_registers(fresh_state, V1=0x30, V2=0x10)

        state = execute(state, 0x8125)  # V1 -= V2

        assert state.V[1] == 0x20
        assert state.V[15] == 1  # No borrow (VX >= VY)

    def test_alu_sub_xy_equal(self, fresh_state):
        """8XY5 - Equal operands count as no borrow."""
        state = set_registers(fresh_state, V1=0x30, V2=0x30)

        state = execute(state, 0x8125)

        assert state.V[1] == 0x00
        assert state.V[15] == 1

    def test_alu_sub_xy_with_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, with borrow."""
        state = set_registers(fresh_state, V3=0x10, V4=0x30)

        state = execute(state, 0x8345)  # V3 -= V4

        assert state.V[3] == 0xE0  # 16 - 48 = -32 → 224
        assert state.V[15] == 0  # Borrow (VX < VY)

    def test_alu_sub_yx_no_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, no borrow."""
        state = set_registers(fresh_state, V1=0x10, V2=0x30)

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0x20  # 48 - 16 = 32
        assert state.V[15] == 1  # No borrow (VY >= VX)

    def test_alu_sub_yx_with_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, with borrow."""
        state = set_registers(fresh_state, V1=0x30, V2=0x10)

        state = execute(state, 0x8127)

        assert state.V[1] == 0xE0
        assert state.V[15] == 0

    def test_add_flag_matches_carry_for_all_bytes(self):
        """8XY4 - VF = 1 iff a + b > 255, result = (a + b) mod 256."""
        for a in range(256):
            for b in range(256):
                assert alu_add(a, b) == ((a + b) % 256, int(a + b > 255))

    def test_sub_flag_matches_borrow_for_all_bytes(self):
        """8XY5/8XY7 - VF = 1 iff minuend >= subtrahend."""
        for a in range(256):
            for b in range(256):
                assert alu_sub_xy(a, b) == ((a - b) % 256, int(a >= b))
                assert alu_sub_yx(a, b) == ((b - a) % 256, int(b >= a))

    @pytest.mark.parametrize("a, b", [(0x00, 0x00), (0x7F, 0x81), (0xC8, 0x64), (0x01, 0xFF)])
    def test_add_and_sub_through_execute(self, fresh_state, a, b):
        """8XY4/8XY5 - Dispatch agrees with the pure operations."""
        state = set_registers(fresh_state, V1=a, V2=b)
        added = execute(state, 0x8124)
        subtracted = execute(state, 0x8125)

        assert (int(added.V[1]), int(added.V[15])) == alu_add(a, b)
        assert (int(subtracted.V[1]), int(subtracted.V[15])) == alu_sub_xy(a, b)


class TestALUShifts:
    """Test shift operations with quirk differences."""

    def test_shift_right_uses_vy(self, fresh_state):
        """8XY6 - VX = VY >> 1, VF = low bit of VY."""
        state = set_registers(fresh_state, V5=0x08, V6=0x03)

        state = execute(state, 0x8566)  # V5 = V6 >> 1

        assert state.V[5] == 0x01
        assert state.V[6] == 0x03
        assert state.V[15] == 1

    def test_shift_left_uses_vy(self, fresh_state):
        """8XYE - VX = VY << 1, VF = high bit of VY."""
        state = set_registers(fresh_state, V3=0x01, V4=0x81)

        state = execute(state, 0x834E)  # V3 = V4 << 1

        assert state.V[3] == 0x02
        assert state.V[15] == 1

    def test_shift_right_modern_odd(self, modern_state):
        """8XY6 - Shift VX in place without the shift quirk."""
        state = set_registers(modern_state, V3=0x05, V4=0xFF)

        state = execute(state, 0x8346)  # V3 >>= 1

        assert state.V[3] == 0x02
        assert state.V[15] == 1

    def test_shift_left_modern_overflow(self, modern_state):
        """8XYE - Shift VX in place, with overflow."""
        state = set_registers(modern_state, V3=0x81, V4=0x00)

        state = execute(state, 0x834E)  # V3 <<= 1

        assert state.V[3] == 0x02  # 129 << 1 = 258 → 2
        assert state.V[15] == 1  # MSB was 1


class TestALUEdgeCases:
    """Test edge cases and comprehensive scenarios."""

    @pytest.mark.parametrize("op", [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF])
    def test_alu_undefined_operations(self, fresh_state, op):
        """Undefined 8XYN operations are rejected."""
        with pytest.raises(UnsupportedInstructionError) as excinfo:
            execute(fresh_state, 0x8120 | op)
        assert excinfo.value.instruction == 0x8120 | op

    def test_alu_self_operations(self, fresh_state):
        """Test operations where VX and VY are the same register."""
        state = set_registers(fresh_state, V5=0xAA)

        state = execute(state, 0x8553)
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        state = set_registers(state, V5=0x80)
        state = execute(state, 0x8554)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_register_operations(self, fresh_state):
        """Flag output overwrites VF even when VF is an operand."""
        state = set_registers(fresh_state, VF=0x42, V1=0x10)

        state = execute(state, 0x81F4)  # V1 += VF
        assert state.V[1] == 0x52
        assert state.V[15] == 0

    def test_flag_wins_when_destination_is_vf(self, fresh_state):
        """8FY4 - The carry replaces the sum in VF."""
        state = set_registers(fresh_state, VF=0xFF, V1=0x02)

        state = execute(state, 0x8F14)

        assert state.V[15] == 1
