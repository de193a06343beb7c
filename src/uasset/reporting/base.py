"""Reporter interface for batch parsing.

A batch of asset files is reported as a task: ``start_task`` with the file
count, one ``advance`` per parsed file carrying its outcome, then ``end_task``.
Backends only render; the per-file tally is kept by :class:`TaskBook` so every
backend prints the same totals.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterator, Optional

__all__ = [
    "TaskStatus",
    "FileTally",
    "TaskRecord",
    "TaskBook",
    "Reporter",
    "STATUS_ICONS",
    "completion_line",
    "set_reporter",
    "get_reporter",
    "set_verbosity",
    "get_verbosity",
    "section",
    "task",
]


class TaskStatus(Enum):
    RUNNING = auto()
    SUCCESS = auto()
    FAILED = auto()
    SKIPPED = auto()


STATUS_ICONS = {
    TaskStatus.SUCCESS: "✔",
    TaskStatus.FAILED: "✖",
    TaskStatus.SKIPPED: "→",
}


@dataclass(slots=True)
class FileTally:
    files: int = 0
    failed: int = 0
    bytes: int = 0

    def add(self, ok: bool, size: int) -> None:
        self.files += 1
        self.bytes += size
        if not ok:
            self.failed += 1

    def as_dict(self) -> Dict[str, int]:
        return {"files": self.files, "failed": self.failed, "bytes": self.bytes}


@dataclass(slots=True)
class TaskRecord:
    task_id: str
    name: str
    total: Optional[int] = None
    tally: FileTally = field(default_factory=FileTally)
    status: TaskStatus = TaskStatus.RUNNING
    last_item: str = ""
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    @property
    def completed(self) -> int:
        return self.tally.files

    @property
    def duration(self) -> float:
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time

    def settle(self) -> TaskStatus:
        """Status implied by the tally: failed if any file failed."""
        return TaskStatus.FAILED if self.tally.failed else TaskStatus.SUCCESS


def completion_line(rec: TaskRecord) -> str:
    icon = STATUS_ICONS.get(rec.status, "?")
    of_total = f" {rec.completed}/{rec.total}" if rec.total is not None else ""
    stats = " ".join(f"{k}={v}" for k, v in rec.tally.as_dict().items())
    return f"{icon} {rec.name}{of_total} ({rec.duration:.2f}s) [{stats}]"


class TaskBook:
    """Open task records keyed by task id."""

    def __init__(self) -> None:
        self._records: Dict[str, TaskRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def open(self, task_id: str, name: str, total: int | None) -> TaskRecord:
        rec = TaskRecord(task_id, name, total)
        self._records[task_id] = rec
        return rec

    def step(
        self, task_id: str, item: str, ok: bool, size: int
    ) -> TaskRecord | None:
        rec = self._records.get(task_id)
        if rec is not None:
            rec.tally.add(ok, size)
            rec.last_item = item
        return rec

    def close(
        self, task_id: str, status: TaskStatus | None
    ) -> TaskRecord | None:
        rec = self._records.pop(task_id, None)
        if rec is not None:
            rec.end_time = time.perf_counter()
            rec.status = status if status is not None else rec.settle()
        return rec


_VERBOSITY: int = 0  # set by the CLI (-v repeats)


def set_verbosity(level: int) -> None:
    global _VERBOSITY
    _VERBOSITY = max(0, level)


def get_verbosity() -> int:
    return _VERBOSITY


class Reporter:
    """Base reporter.

    Subclasses render task events through the ``_on_*`` hooks and implement
    the message methods. Unknown task ids are ignored.
    """

    supports_progress: bool = False

    def __init__(self) -> None:
        self.tasks = TaskBook()

    def start_task(self, task_id: str, name: str, total: int | None = None) -> None:
        self._on_start(self.tasks.open(task_id, name, total))

    def advance(
        self, task_id: str, item: str = "", *, ok: bool = True, size: int = 0
    ) -> None:
        rec = self.tasks.step(task_id, item, ok, size)
        if rec is not None:
            self._on_advance(rec, ok)

    def end_task(self, task_id: str, status: TaskStatus | None = None) -> None:
        """Close a task; without ``status`` it is derived from the tally."""
        rec = self.tasks.close(task_id, status)
        if rec is not None:
            self._on_end(rec)

    def _on_start(self, rec: TaskRecord) -> None:
        pass

    def _on_advance(self, rec: TaskRecord, ok: bool) -> None:
        pass

    def _on_end(self, rec: TaskRecord) -> None:
        pass

    def status(self, message: str, **fields: Any) -> None:
        raise NotImplementedError

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        pass

    def error(self, message: str, **fields: Any) -> None:
        raise NotImplementedError

    def warning(self, message: str, **fields: Any) -> None:
        self.status(message, **fields)

    def section(self, title: str) -> None:
        pass

    def flush(self) -> None:
        pass


_ACTIVE_REPORTER: Reporter | None = None


def set_reporter(rep: Reporter) -> None:
    global _ACTIVE_REPORTER
    _ACTIVE_REPORTER = rep


def get_reporter() -> Reporter:
    global _ACTIVE_REPORTER
    if _ACTIVE_REPORTER is None:
        from .plain import PlainReporter  # local import to avoid cycle

        _ACTIVE_REPORTER = PlainReporter(stream=sys.stderr)
    return _ACTIVE_REPORTER


@contextmanager
def task(task_id: str, name: str, total: int | None = None) -> Iterator[Reporter]:
    rep = get_reporter()
    rep.start_task(task_id, name, total)
    try:
        yield rep
    except Exception:
        rep.end_task(task_id, TaskStatus.FAILED)
        raise
    else:
        rep.end_task(task_id)


@contextmanager
def section(title: str) -> Iterator[Reporter]:
    rep = get_reporter()
    rep.section(title)
    yield rep
