"""Rich console logger for analysis runs."""

import inspect
import time
from collections.abc import Iterable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

# Level name -> style of the level tag
LEVEL_STYLES = {
    "DEBUG": "magenta",
    "INFO": "blue",
    "STEP": "cyan",
    "SUCCESS": "green",
    "WARNING": "yellow",
    "ERROR": "red",
}


def format_duration(elapsed: float) -> str:
    """Format seconds as a compact duration such as ``350ms``, ``4.2s`` or ``1h2m3.0s``."""
    if elapsed < 1:
        return f"{elapsed * 1000:.0f}ms"
    minutes, seconds = divmod(elapsed, 60)
    if minutes == 0:
        return f"{seconds:.1f}s"
    hours, minutes = divmod(int(minutes), 60)
    if hours == 0:
        return f"{minutes}m{seconds:.1f}s"
    return f"{hours}h{minutes}m{seconds:.1f}s"


class StatsLogger:
    """
    Console logger with timestamps, elapsed time and the calling module.

    Each line reads ``[HH:MM:SS] (elapsed) {origin} LEVEL: message``.

    Args:
        console: Rich Console to print to (a new one if None)
        verbose: Also print DEBUG messages
        quiet: Print ERROR messages only
    """

    def __init__(self, console: Optional[Console] = None, verbose: bool = False, quiet: bool = False):
        self.console = console or Console()
        self.verbose = verbose
        self.quiet = quiet
        self.start_time = time.time()

    def _origin(self) -> str:
        """Source file of the first caller outside this module."""
        frame = inspect.currentframe()
        try:
            while frame is not None and frame.f_code.co_filename == __file__:
                frame = frame.f_back
            if frame is None:
                return "unknown"
            parts = Path(frame.f_code.co_filename).parts
            if "struct_stats" in parts:
                return str(Path(*parts[parts.index("struct_stats") :]))
            return parts[-1]
        finally:
            del frame

    def enabled(self, level: str) -> bool:
        if self.quiet:
            return level == "ERROR"
        return level != "DEBUG" or self.verbose

    def log(self, level: str, message: str) -> None:
        """Print ``message`` at ``level`` (one of LEVEL_STYLES) if it is enabled."""
        if not self.enabled(level):
            return

        text = Text()
        text.append(f"[{datetime.now():%H:%M:%S}] ", style="dim blue")
        text.append(f"({format_duration(time.time() - self.start_time)}) ", style="dim green")
        text.append(f"{{{self._origin()}}} ", style="dim yellow")
        text.append(f"{level}: ", style=f"bold {LEVEL_STYLES[level]}")
        text.append(message, style="white")
        self.console.print(text)

    def info(self, message: str) -> None:
        self.log("INFO", message)

    def debug(self, message: str) -> None:
        self.log("DEBUG", message)

    def warning(self, message: str) -> None:
        self.log("WARNING", message)

    def error(self, message: str) -> None:
        self.log("ERROR", message)

    def success(self, message: str) -> None:
        self.log("SUCCESS", message)

    def step(self, message: str) -> None:
        self.log("STEP", message)

    def table(self, title: str, columns: Sequence[str], rows: Iterable[Sequence[object]]) -> None:
        """Print a summary table (suppressed in quiet mode)."""
        if self.quiet:
            return
        table = Table(title=title, title_justify="left")
        for name in columns:
            table.add_column(name, justify="right" if name != columns[0] else "left")
        for row in rows:
            table.add_row(*(f"{value:.3f}" if isinstance(value, float) else str(value) for value in row))
        self.console.print(table)


_global_logger: Optional[StatsLogger] = None


def get_logger() -> StatsLogger:
    """Shared logger, created on first use."""
    global _global_logger
    if _global_logger is None:
        _global_logger = StatsLogger()
    return _global_logger


def set_logger(logger: StatsLogger) -> None:
    """Replace the shared logger (the CLI installs one honouring --verbose/--quiet)."""
    global _global_logger
    _global_logger = logger
