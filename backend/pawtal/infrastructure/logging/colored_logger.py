"""Colored task logger — ANSI-colored console logging for scheduler ticks.

Provides a TaskLogger with color-coded output per maintenance step,
making it easy to see in the terminal what each background tick did.

Color scheme:
    🟢 Green   — Scheduled publishing
    🟡 Yellow  — Trash sweep
    🔵 Blue    — Session sweep
    ⚪ White   — Tick boundaries
    🔴 Red     — Errors
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


# ── Step Definitions ─────────────────────────────────────────────────

class TaskStage:
    """Predefined scheduler steps with colors and icons."""

    PUBLISH = ("PUBLISH", _Colors.GREEN, "📰")
    TRASH_SWEEP = ("TRASH", _Colors.YELLOW, "🗑️")
    SESSION_SWEEP = ("SESSIONS", _Colors.BLUE, "🔑")
    TICK = ("TICK", _Colors.WHITE, "⏱️")
    ERROR = ("ERROR", _Colors.RED, "❌")


def _format_details(kwargs: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v}" for k, v in kwargs.items())


# ── TaskLogger ───────────────────────────────────────────────────────

class TaskLogger:
    """Color-coded logger for background maintenance work.

    Usage:
        log = TaskLogger("ContentScheduler")
        log.step_complete(TaskStage.PUBLISH, "Promoted scheduled pages", count=3)
        log.step_error(TaskStage.TRASH_SWEEP, "Sweep failed", error=exc)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log a finished step. Quiet (DEBUG) when nothing was changed."""
        label, color, icon = stage
        formatted = f"{color}{icon} [{label}]{_Colors.RESET} {_Colors.GREEN}✓ {message}{_Colors.RESET}"
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        level = logging.INFO if any(kwargs.values()) else logging.DEBUG
        self._logger.log(level, formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: BaseException | None = None) -> None:
        """Log a failed step in red, with the traceback when an error is given."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted, exc_info=error)

    def stats(self, **kwargs: Any) -> None:
        """Log per-tick statistics."""
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.debug(f"   {_Colors.GRAY}📈 {' | '.join(parts)}{_Colors.RESET}")

    @contextmanager
    def timed_tick(self):
        """Context manager that logs the elapsed time of one scheduler tick."""
        start = time.perf_counter()
        try:
            yield
        finally:
            label, color, icon = TaskStage.TICK
            elapsed = time.perf_counter() - start
            self._logger.debug(f"{color}{icon} [{label}]{_Colors.RESET} {_Colors.GRAY}{elapsed:.3f}s{_Colors.RESET}")
