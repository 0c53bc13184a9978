"""Colored sync logger — ANSI-colored console logging for optimistic mutations.

Provides a SyncLogger with color-coded output per mutation stage, making it
easy to follow one edit from local patch to reconciliation in the terminal.

Color scheme:
    🟡 Yellow  — Optimistic local patch
    🔵 Blue    — Network request
    🟢 Green   — Reconciliation / fetch
    🟣 Magenta — Delete
    🔴 Red     — Rollback / rejected edits
    ⚪ Gray    — Discarded responses, details
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
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Mutation Stage Definitions ───────────────────────────────────────

class SyncStage:
    """Predefined sync stages with colors and icons."""

    VALIDATE = ("VALIDATE", _Colors.RED, "🚫")
    OPTIMISTIC = ("OPTIMISTIC", _Colors.YELLOW, "⚡")
    REQUEST = ("REQUEST", _Colors.BLUE, "🌐")
    RECONCILE = ("RECONCILE", _Colors.GREEN, "🔗")
    ROLLBACK = ("ROLLBACK", _Colors.RED, "↩️")
    DISCARD = ("DISCARD", _Colors.GRAY, "🗑️")
    DELETE = ("DELETE", _Colors.MAGENTA, "✂️")
    FETCH = ("FETCH", _Colors.CYAN, "📥")


def _format_details(kwargs: dict[str, Any]) -> str:
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"


# ── SyncLogger ───────────────────────────────────────────────────────

class SyncLogger:
    """Color-coded logger for the record synchronization core.

    Usage:
        log = SyncLogger("care_sync.vital-signs")
        log.step(SyncStage.OPTIMISTIC, "Patched locally", id="v-1")
        log.step_complete(SyncStage.RECONCILE, "Merged server response", id="v-1")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    def step(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log a mutation step with its stage color (debug level)."""
        if not self._logger.isEnabledFor(logging.DEBUG):
            return
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += _format_details(kwargs)
        self._logger.debug(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the successful end of a mutation."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += _format_details(kwargs)
        self._logger.info(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a failed step in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.warning(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail (gray/dimmed)."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        if kwargs:
            formatted += _format_details(kwargs)
        self._logger.debug(formatted)

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Usage:
            with log.timed_step(SyncStage.FETCH, "Loading vital signs"):
                payloads = await gateway.list(scope)
        """
        self.step(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.2f}s", **kwargs)
