"""Console logging utilities for vipax hosts.

A small leveled logger that prints to stdout with optional colours and
elapsed-time stamps, plus helpers for reporting machine state and a tqdm
progress bar for headless runs.
"""

import time
import sys
from typing import Optional

from tqdm import tqdm

from vipax.state import EmulatorState


class ConsoleLogger:
    """Flexible console logger with level filtering and formatters."""

    def __init__(
        self,
        name: str = "vipax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }
        if self.log_level not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order.keys())}"
            )

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class MachineLogger(ConsoleLogger):
    """Logger that knows how to dump emulator registers."""

    def __init__(self, name: str = "vipax", **kwargs):
        super().__init__(name, **kwargs)

    def log_registers(self, state: EmulatorState, level: str = "DEBUG"):
        """Log PC, I, timers and all 16 registers, four per line."""
        self.log(
            level,
            f"PC=0x{int(state.pc):03X} I=0x{int(state.I):03X} SP={state.stack.pointer} "
            f"DT={state.delay_timer.value()} ST={state.sound_timer.value()}",
        )
        for row in range(0, 16, 4):
            registers = " ".join(f"V{i:X}={int(state.V[i]):02X}" for i in range(row, row + 4))
            self.log(level, f"  {registers}")

    def log_machine_error(self, error: Exception, state: Optional[EmulatorState] = None):
        """Report a machine fault, with a register dump when the state is known."""
        self.error(f"{type(error).__name__}: {error}")
        if state is not None:
            self.log_registers(state, level="ERROR")


def build_progress_bar(total: int, desc: Optional[str] = None, disable: bool = False, **kwargs) -> tqdm:
    """Build a tqdm progress bar counting emulated frames."""
    return tqdm(total=total, desc=desc or "Emulating", unit="frame", disable=disable, **kwargs)
