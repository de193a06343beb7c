"""Batch parsing of asset files found under a set of paths.

One file failing never stops the batch: its error is captured in the
``FileResult`` and the scan moves on.
"""

from __future__ import annotations

import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence

from .api import AssetPackage, open_bytes
from .config import ScanOptions
from .logging import get_logger
from .parsing.constants import ASSET_EXTENSIONS
from .parsing.errors import AssetError
from .reporting import get_reporter

__all__ = [
    "E_IO",
    "FileResult",
    "ScanReport",
    "walk_assets",
    "load_asset",
    "scan_assets",
]

E_IO = "E_IO"


@dataclass(slots=True)
class FileResult:
    path: Path
    size: int = 0
    seconds: float = 0.0
    package: Optional[AssetPackage] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def code(self) -> Optional[str]:
        return self.error["code"] if self.error else None

    @property
    def raw_version(self) -> Optional[int]:
        """Raw version integer of an unsupported-version failure."""
        if not self.error:
            return None
        return (self.error.get("context") or {}).get("raw")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "path": str(self.path),
            "ok": self.ok,
            "size": self.size,
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass(slots=True)
class ScanReport:
    results: List[FileResult] = field(default_factory=list)
    walk_seconds: float = 0.0
    parse_seconds: float = 0.0

    @property
    def failed(self) -> List[FileResult]:
        return [r for r in self.results if not r.ok]

    @property
    def succeeded(self) -> List[FileResult]:
        return [r for r in self.results if r.ok]

    @property
    def total_bytes(self) -> int:
        return sum(r.size for r in self.results)

    def summary_line(self, kind: str = "Scan") -> str:
        return (
            f"{kind} summary: files={len(self.results)} ok={len(self.succeeded)} "
            f"failed={len(self.failed)} bytes={self.total_bytes} "
            f"walk_seconds={self.walk_seconds:.3f} "
            f"parse_seconds={self.parse_seconds:.3f}"
        )


def _hidden(name: str) -> bool:
    return name.startswith(".")


def walk_assets(
    paths: Iterable[str | Path],
    extensions: Sequence[str] = ASSET_EXTENSIONS,
    *,
    include_hidden: bool = False,
    follow_links: bool = False,
) -> List[Path]:
    """Expand files and directories into a sorted list of asset files.

    Files named explicitly are kept whatever their extension; directories are
    searched recursively for ``extensions``.
    """
    exts = tuple(e.lower() for e in extensions)
    found: List[Path] = []
    for raw in paths:
        p = Path(raw)
        if p.is_file():
            found.append(p)
            continue
        if not p.is_dir():
            raise FileNotFoundError(p)
        for root, dirs, files in os.walk(p, followlinks=follow_links):
            if not include_hidden:
                dirs[:] = [d for d in dirs if not _hidden(d)]
            dirs.sort()
            for name in sorted(files):
                if not include_hidden and _hidden(name):
                    continue
                if name.lower().endswith(exts):
                    found.append(Path(root) / name)
    return found


def load_asset(path: Path) -> FileResult:
    start = time.perf_counter()
    try:
        data = path.read_bytes()
    except OSError as exc:
        return FileResult(
            path,
            seconds=time.perf_counter() - start,
            error={"code": E_IO, "message": str(exc), "context": {}},
        )
    try:
        package = open_bytes(data, path)
    except AssetError as exc:
        return FileResult(
            path,
            size=len(data),
            seconds=time.perf_counter() - start,
            error=exc.to_dict(),
        )
    return FileResult(
        path,
        size=len(data),
        seconds=time.perf_counter() - start,
        package=package,
    )


def _run(
    files: List[Path], jobs: int, work: Callable[[Path], FileResult]
) -> Iterator[FileResult]:
    if jobs <= 1 or len(files) <= 1:
        for path in files:
            yield work(path)
        return
    with ThreadPoolExecutor(max_workers=jobs) as executor:
        yield from executor.map(work, files)


def scan_assets(
    options: ScanOptions,
    *,
    task_id: str = "scan.parse",
    work: Callable[[Path], FileResult] = load_asset,
) -> ScanReport:
    logger = get_logger()
    rep = get_reporter()
    start = time.perf_counter()
    files = walk_assets(
        options.paths,
        options.extensions,
        include_hidden=options.include_hidden,
        follow_links=options.follow_links,
    )
    report = ScanReport(walk_seconds=time.perf_counter() - start)
    logger.debug("found %d asset files in %.3fs", len(files), report.walk_seconds)

    start = time.perf_counter()
    rep.start_task(task_id, "Parse assets", total=len(files))
    for result in _run(files, options.jobs, work):
        report.results.append(result)
        if not result.ok:
            logger.debug("%s: %s", result.path, result.error)
        rep.advance(task_id, result.path.name, ok=result.ok, size=result.size)
    report.parse_seconds = time.perf_counter() - start
    rep.end_task(task_id)
    return report
