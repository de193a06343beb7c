from __future__ import annotations

import sys
from typing import Any

from .base import Reporter, TaskRecord, completion_line, get_verbosity

_COLORS = {"INFO": "32", "WARN": "33", "ERROR": "31", "VERB": "36"}


class PlainReporter(Reporter):
    """Line-oriented reporter for terminals and logs.

    A line per parsed file is only written from ``-v`` on; failed files are
    marked so they stand out in a long scan.
    """

    def __init__(self, stream=None, use_color: bool | None = None):
        super().__init__()
        self.stream = stream or sys.stderr
        if use_color is None:
            use_color = getattr(self.stream, "isatty", lambda: False)()
        self.use_color = use_color

    def _line(self, label: str, message: str, color: str | None = None) -> None:
        code = color or _COLORS.get(label)
        if self.use_color and code:
            label = f"\x1b[{code}m{label}\x1b[0m"
        self.stream.write(f"{label}: {message}\n")

    def _on_advance(self, rec: TaskRecord, ok: bool) -> None:
        if get_verbosity() < 1:
            return
        total = rec.total if rec.total is not None else "?"
        mark = "" if ok else " FAILED"
        self.stream.write(
            f"   · {rec.name}: {rec.last_item or rec.completed}"
            f" ({rec.completed}/{total}){mark}\n"
        )

    def _on_end(self, rec: TaskRecord) -> None:
        self.stream.write(f" {completion_line(rec)}\n")

    def status(self, message: str, **fields: Any) -> None:
        self._line("INFO", message)

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() >= level:
            self._line(f"VERB{level}", message, _COLORS["VERB"])

    def error(self, message: str, **fields: Any) -> None:
        self._line("ERROR", message)

    def warning(self, message: str, **fields: Any) -> None:
        self._line("WARN", message)

    def section(self, title: str) -> None:
        self.stream.write(f"\n[{title}]\n")
