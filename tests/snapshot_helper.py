from __future__ import annotations

"""JSON snapshot comparison for uasset tests.

Snapshots live in tests/_snapshots/. A missing snapshot is written on first
run; set UASSET_UPDATE_SNAPSHOTS to a truthy value ("1", "true", "yes") to
rewrite existing ones.
"""
import difflib
import json
import os
from pathlib import Path
from typing import Any

_SNAPSHOT_DIR = Path(__file__).parent / "_snapshots"


def _is_truthy(val: str | None) -> bool:
    if val is None:
        return False
    return val.lower() in {"1", "true", "yes", "on", "update"}


def _dump(obj: Any) -> str:
    return json.dumps(obj, indent=2, sort_keys=True)


def assert_matches_snapshot(actual: Any, snapshot_name: str) -> None:
    snapshot_path = _SNAPSHOT_DIR / snapshot_name
    if _is_truthy(os.getenv("UASSET_UPDATE_SNAPSHOTS")) or not snapshot_path.exists():
        _SNAPSHOT_DIR.mkdir(parents=True, exist_ok=True)
        snapshot_path.write_text(_dump(actual), encoding="utf-8")
        return
    # Round-trip through JSON so tuples compare equal to stored lists.
    actual = json.loads(_dump(actual))
    expected = json.loads(snapshot_path.read_text(encoding="utf-8"))
    if actual != expected:
        diff = "\n".join(
            difflib.unified_diff(
                _dump(expected).splitlines(),
                _dump(actual).splitlines(),
                fromfile="expected",
                tofile="actual",
                lineterm="",
            )
        )
        raise AssertionError(f"Snapshot mismatch for {snapshot_name}\n{diff}")
