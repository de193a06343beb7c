from __future__ import annotations

import os
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from .base import Reporter, TaskRecord, completion_line, get_verbosity

TRANSIENT_ENV = "UASSET_PROGRESS_TRANSIENT"


def _transient_from_env() -> bool:
    return os.getenv(TRANSIENT_ENV, "0").lower() in ("1", "true", "yes")


class RichReporter(Reporter):
    """Progress bars on stderr via ``rich``.

    The bar shows the file being parsed and a running failure count. With
    ``UASSET_PROGRESS_TRANSIENT`` set, bars disappear when the last task ends
    and the completion lines are printed together afterwards.
    """

    supports_progress = True

    def __init__(self, console: Console | None = None):
        super().__init__()
        self.console = console or Console(
            stderr=True, highlight=False, soft_wrap=False
        )
        self._transient = _transient_from_env()
        self.progress: Progress | None = None
        self._bars: Dict[str, TaskID] = {}
        self._deferred: List[str] = []

    def _ensure_progress(self) -> Progress:
        if self.progress is None:
            self.progress = Progress(
                SpinnerColumn(spinner_name="dots"),
                TextColumn("{task.fields[name]}"),
                BarColumn(bar_width=None),
                MofNCompleteColumn(),
                TextColumn("{task.fields[failed]}"),
                TimeElapsedColumn(),
                TextColumn("[dim]{task.fields[item]}"),
                transient=self._transient,
                console=self.console,
                expand=True,
            )
            self.progress.start()
        return self.progress

    def _stop_progress(self) -> None:
        if self.progress is None:
            return
        try:
            self.progress.stop()
        finally:
            self.progress = None
            self._bars.clear()
        if self._deferred:
            self.console.print("\n".join(self._deferred), markup=False)
            self._deferred.clear()

    def _on_start(self, rec: TaskRecord) -> None:
        if rec.total is None:
            self.console.rule(escape(rec.name))
            return
        self._bars[rec.task_id] = self._ensure_progress().add_task(
            "", total=rec.total, name=escape(rec.name), item="", failed=""
        )

    def _on_advance(self, rec: TaskRecord, ok: bool) -> None:
        bar = self._bars.get(rec.task_id)
        if bar is None or self.progress is None:
            return
        failed = rec.tally.failed
        self.progress.update(
            bar,
            completed=rec.completed,
            item=escape(rec.last_item),
            failed=f"[red]{failed} failed[/]" if failed else "",
        )

    def _on_end(self, rec: TaskRecord) -> None:
        line = completion_line(rec)
        bar = self._bars.pop(rec.task_id, None)
        if bar is not None and self.progress is not None:
            self.progress.update(bar, completed=rec.completed, item="")
            if self._transient:
                self._deferred.append(line)
            else:
                self.progress.remove_task(bar)
                self.console.print(line, markup=False)
        else:
            self.console.print(line, markup=False)
        if not self._bars:
            self._stop_progress()

    def status(self, message: str, **fields: Any) -> None:
        self.console.print(f"[green]INFO[/]: {escape(message)}")

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() >= level:
            self.console.print(f"[cyan]VERB{level}[/]: {escape(message)}")

    def error(self, message: str, **fields: Any) -> None:
        self.console.print(f"[bold red]ERROR[/]: {escape(message)}")

    def warning(self, message: str, **fields: Any) -> None:
        self.console.print(f"[yellow]WARN[/]: {escape(message)}")

    def section(self, title: str) -> None:
        self.console.rule(escape(title))

    def flush(self) -> None:
        self._stop_progress()
