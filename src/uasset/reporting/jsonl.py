from __future__ import annotations

import json
import sys
from typing import Any, Dict

from .base import Reporter, TaskRecord, get_verbosity

# "<Kind> summary: k=v ..." status lines are also emitted as summary events.
SUMMARY_KINDS = ("scan", "validate", "benchmark", "imports", "dump")


def parse_summary(message: str) -> Dict[str, str] | None:
    head, sep, tail = message.partition(":")
    words = head.strip().lower().split()
    if not sep or len(words) != 2 or words[1] != "summary":
        return None
    if words[0] not in SUMMARY_KINDS:
        return None
    pairs = dict(t.split("=", 1) for t in tail.split() if "=" in t)
    return {"summary_type": words[0], **pairs}


class JsonLinesReporter(Reporter):
    """One JSON object per line, on stdout unless another stream is given.

    Task events carry the file tally; every message is a ``status`` event and
    summary lines are additionally emitted as ``summary`` events.
    """

    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream or sys.stdout

    def _emit(self, event: str, **payload: Any) -> None:
        payload["event"] = event
        self.stream.write(json.dumps(payload, sort_keys=True, default=str) + "\n")

    def _on_start(self, rec: TaskRecord) -> None:
        self._emit("task_start", id=rec.task_id, name=rec.name, total=rec.total)

    def _on_advance(self, rec: TaskRecord, ok: bool) -> None:
        self._emit(
            "task_progress",
            id=rec.task_id,
            completed=rec.completed,
            item=rec.last_item,
            ok=ok,
        )

    def _on_end(self, rec: TaskRecord) -> None:
        self._emit(
            "task_end",
            id=rec.task_id,
            status=rec.status.name.lower(),
            completed=rec.completed,
            total=rec.total,
            duration_seconds=rec.duration,
            **rec.tally.as_dict(),
        )

    def _message(self, level: str, message: str, fields: Dict[str, Any]) -> None:
        self._emit("status", message=message, level=level, **fields)

    def status(self, message: str, **fields: Any) -> None:
        summary = parse_summary(message)
        if summary is not None:
            self._emit("summary", level="info", raw=message, **summary, **fields)
        self._message("info", message, fields)

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() >= level:
            self._message(f"verbose{level}", message, {"vlevel": level, **fields})

    def error(self, message: str, **fields: Any) -> None:
        self._message("error", message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._message("warning", message, fields)

    def section(self, title: str) -> None:
        self._emit("section", title=title)
