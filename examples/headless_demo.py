"""Run a ROM without a window and save the final frame.

Usage: python examples/headless_demo.py path/to/game.ch8 [frames]
"""

import sys
import time

from vipax import create_state, load_rom_file, save_frame
from vipax.logging import MachineLogger
from vipax.runner import run_headless

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("USAGE: headless_demo.py ROM-FILE [FRAMES]")
        sys.exit(1)

    rom_path = sys.argv[1]
    frames = int(sys.argv[2]) if len(sys.argv) > 2 else 300
    logger = MachineLogger(log_level="DEBUG")

    state = load_rom_file(create_state(), rom_path)

    start = time.time()
    state = run_headless(state, frames, show_progress=True, logger=logger)
    logger.info(f"Ran {frames} frames in {time.time() - start:.2f}s")
    logger.log_registers(state, level="INFO")

    save_frame(state.display, "final_frame.png")
    logger.info("Saved final_frame.png")
