"""Frame pacing for driving the machine without a window."""

from typing import Optional

from vipax.state import EmulatorState
from vipax.emulator import step, tick
from vipax.errors import MachineError
from vipax.logging import MachineLogger, build_progress_bar


def run_frame(state: EmulatorState, instructions_per_frame: int = 9) -> EmulatorState:
    """Run one 60 Hz frame: N instruction steps, then one timer tick."""
    for _ in range(instructions_per_frame):
        state = step(state)
    return tick(state)


def run_headless(
    state: EmulatorState,
    frames: int,
    instructions_per_frame: int = 9,
    show_progress: bool = False,
    logger: Optional[MachineLogger] = None,
) -> EmulatorState:
    """Run a number of frames as fast as possible.

    Machine faults are logged with the registers as they were before the
    faulting instruction, then re-raised.
    """
    logger = logger or MachineLogger(log_level="WARNING")
    logger.debug(f"Running {frames} frames at {instructions_per_frame} instructions per frame")

    with build_progress_bar(frames, disable=not show_progress) as progress:
        for _ in range(frames):
            for _ in range(instructions_per_frame):
                try:
                    state = step(state)
                except MachineError as e:
                    logger.log_machine_error(e, state)
                    raise
            state = tick(state)
            progress.update(1)
    return state
