"""Tests for frame pacing and the headless runner."""

import pytest
from vipax import load_rom, UnsupportedInstructionError
from vipax.runner import run_frame, run_headless
from vipax.logging import MachineLogger
from conftest import rom

# Count V0 up forever: 0x200 V0 += 1, 0x202 jump 0x200
COUNTER_ROM = rom(0x7001, 0x1200)


def test_run_frame_steps_then_ticks(fresh_state):
    state = load_rom(fresh_state, COUNTER_ROM)
    state = state.replace(delay_timer=state.delay_timer.reload(10))

    state = run_frame(state, instructions_per_frame=10)

    assert state.V[0] == 5
    assert state.delay_timer.value() == 9


def test_run_headless(fresh_state):
    state = load_rom(fresh_state, COUNTER_ROM)
    state = state.replace(delay_timer=state.delay_timer.reload(60))

    state = run_headless(state, frames=6, instructions_per_frame=4)

    assert state.V[0] == 12
    assert state.delay_timer.value() == 54


def test_run_headless_reports_faults(fresh_state, capsys):
    state = load_rom(fresh_state, rom(0x6042, 0x5121))
    logger = MachineLogger(log_level="ERROR", use_colors=False, show_timestamps=False)

    with pytest.raises(UnsupportedInstructionError):
        run_headless(state, frames=1, logger=logger)

    output = capsys.readouterr().out
    assert "UnsupportedInstructionError" in output
    assert "V0=42" in output
