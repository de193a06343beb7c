"""Scan options and config file loading (JSON/YAML)."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from .parsing.constants import ASSET_EXTENSIONS

__all__ = ["ScanOptions", "load_config", "load_scan_options"]


@dataclass(slots=True)
class ScanOptions:
    paths: Tuple[Path, ...] = ()
    extensions: Tuple[str, ...] = ASSET_EXTENSIONS
    follow_links: bool = False
    include_hidden: bool = False
    # Worker threads for batch parsing; 1 parses on the calling thread.
    jobs: int = 1
    skip_code_imports: bool = False


_KEYS = {f.name for f in fields(ScanOptions)}


def load_config(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        try:
            data: Any = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {p}: {exc}") from exc
    else:
        data = json.loads(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Root of config file must be a mapping")
    unknown = sorted(set(data) - _KEYS)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    return data


def _coerce(data: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "paths":
            if isinstance(value, (str, Path)):
                value = [value]
            out[key] = tuple(Path(v) for v in value)
        elif key == "extensions":
            if isinstance(value, str):
                value = [value]
            out[key] = tuple(
                v.lower() if v.startswith(".") else f".{v.lower()}" for v in value
            )
        elif key == "jobs":
            jobs = int(value)
            if jobs < 1:
                raise ValueError(f"jobs must be at least 1, got {jobs}")
            out[key] = jobs
        else:
            out[key] = bool(value)
    return out


def load_scan_options(
    path: str | Path | None = None, **overrides: Any
) -> ScanOptions:
    """Build ``ScanOptions`` from an optional config file.

    Keyword overrides win over file values; ``None`` overrides are ignored so
    unset command-line flags fall through to the file.
    """
    options = ScanOptions()
    if path is not None:
        options = replace(options, **_coerce(load_config(path)))
    given = {k: v for k, v in overrides.items() if v is not None}
    unknown = sorted(set(given) - _KEYS)
    if unknown:
        raise ValueError(f"Unknown options: {', '.join(unknown)}")
    return replace(options, **_coerce(given))
