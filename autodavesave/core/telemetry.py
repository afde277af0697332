"""Text rendering for the debug window. Everything here is a pure function."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from ..config import DEFAULTS
from .state import FireResult, SchedulerState


def format_mmss(total_seconds: int) -> str:
    minutes, seconds = divmod(max(0, int(total_seconds)), 60)
    return f"{minutes}m {seconds}s"


def format_hhmmss(when: datetime) -> str:
    return when.strftime("%H:%M:%S")


def describe_result(result: Optional[FireResult]) -> str:
    if result is None:
        return "none"
    if result.ok and result.saved_at is not None:
        return f"saved at {format_hhmmss(result.saved_at)}"
    return f"error {result.error_code}"


def render_debug_text(state: SchedulerState, now_ms: int) -> str:
    lines: List[str] = [
        f"Enabled: {'Yes' if state.enabled else 'No'}",
        f"Interval: {state.interval_minutes} minute(s)",
    ]

    remaining = state.remaining_ms(now_ms)
    if remaining is None:
        lines.append("Next autosave: paused")
    else:
        lines.append(f"Next autosave in: {format_mmss(remaining // 1000)}")

    last = state.last_fire_result
    lines.append(f"Last result: {describe_result(last)}")
    saved_at = state.last_success_at
    lines.append(f"Last autosave at: {format_hhmmss(saved_at) if saved_at else 'n/a'}")
    error = last.error_code if last is not None and not last.ok else None
    lines.append(f"Last dispatch error: {error if error is not None else 'none'}")

    lines.extend(
        [
            "",
            "Notes:",
            "- Untitled tabs can trigger Save As dialogs.",
            f"- Debug refresh interval: {DEFAULTS.debug_refresh_ms // 1000} second.",
        ]
    )
    return "\n".join(lines)
