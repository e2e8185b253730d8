"""In-memory capture of promptline's log records.

Anything written to the terminal while the shell draws ``PS1`` becomes part
of the prompt, so records are held in a bounded buffer and only printed when
asked for (``promptline render --debug`` or ``PROMPTLINE_DEBUG=1``) or exported
with ``--export-log``.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from promptline.constants import MAX_LOG_LINES, MAX_LOG_MESSAGE_LENGTH

if TYPE_CHECKING:
    from pathlib import Path

TRUNCATION_SUFFIX = "... [truncated]"


@dataclass(slots=True)
class LogEntry:
    level: str
    name: str
    message: str
    timestamp: float


# Oldest entries fall off once MAX_LOG_LINES is reached.
log_buffer: deque[LogEntry] = deque(maxlen=MAX_LOG_LINES)


class DebugLogHandler(logging.Handler):
    """Appends formatted records to ``log_buffer`` instead of a stream."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if len(message) > MAX_LOG_MESSAGE_LENGTH:
                message = message[:MAX_LOG_MESSAGE_LENGTH] + TRUNCATION_SUFFIX
            log_buffer.append(LogEntry(record.levelname, record.name, message, record.created))
        except Exception:
            self.handleError(record)


_handler: DebugLogHandler | None = None


def setup_debug_logging(level: int = logging.DEBUG) -> None:
    """Route the ``promptline`` logger tree into the buffer.

    Propagation to the root logger is switched off so a host application's
    handlers never print into the prompt. Safe to call more than once.
    """
    global _handler

    if _handler is not None:
        return

    _handler = DebugLogHandler()
    _handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("promptline")
    logger.addHandler(_handler)
    logger.setLevel(level)
    logger.propagate = False


def clear_log_buffer() -> None:
    log_buffer.clear()


def format_log_entries() -> list[str]:
    """Render buffered entries as ``HH:MM:SS.mmm [LEVEL] logger: message`` lines."""
    lines = []
    for entry in log_buffer:
        clock = datetime.fromtimestamp(entry.timestamp).strftime("%H:%M:%S.%f")[:-3]
        lines.append(f"{clock} [{entry.level}] {entry.name}: {entry.message}")
    return lines


def export_logs_to_file(file_path: Path) -> int:
    """Write the buffer to ``file_path``, replacing any previous export.

    Returns:
        How many entries were written.
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    lines = format_log_entries()

    with file_path.open("w", encoding="utf-8") as f:
        f.write("# promptline debug log\n")
        f.write(f"# Total entries: {len(lines)}\n\n")
        for line in lines:
            f.write(line + "\n")

    return len(lines)
