"""Command line interface for uasset."""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List

from .config import ScanOptions, load_scan_options
from .logging import configure_logging, get_logger, section, step
from .parsing.errors import AssetError
from .parsing.versions import (
    CUSTOM_VERSION_SUBSYSTEMS,
    FIELD_GATES,
    LegacyFileVersion,
    ObjectVersion,
    threshold,
)
from .reporting import (
    REPORTERS,
    JsonLinesReporter,
    PlainReporter,
    get_reporter,
    get_verbosity,
    set_reporter,
    set_verbosity,
)
from .scan import FileResult, ScanReport, load_asset, scan_assets

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _options(args: argparse.Namespace) -> ScanOptions:
    options = load_scan_options(
        args.config,
        paths=args.paths or None,
        jobs=args.jobs,
        include_hidden=args.include_hidden or None,
        follow_links=args.follow_links or None,
        skip_code_imports=getattr(args, "skip_code_imports", False) or None,
    )
    if not options.paths:
        raise ValueError("no input paths given (on the command line or in --config)")
    step(f"scanning {len(options.paths)} path(s) with {options.jobs} job(s)")
    return options


def _describe_failure(result: FileResult) -> str:
    assert result.error is not None
    text = f"{result.path}: {result.code} {result.error['message']}"
    if result.raw_version is not None:
        text += f" (raw version {result.raw_version})"
    return text


def _report_failures(report: ScanReport) -> None:
    rep = get_reporter()
    for result in report.failed:
        rep.error(_describe_failure(result))


def _table_dump(result: FileResult) -> Dict[str, Any]:
    package = result.package
    assert package is not None
    return {
        "names": [n.name for n in package.names],
        "imports": [
            {
                "class_package": package.resolve_name(i.class_package),
                "class_name": package.resolve_name(i.class_name),
                "outer_index": i.outer_index,
                "object_name": package.resolve_name(i.object_name),
            }
            for i in package.imports
        ],
        "exports": [
            {
                "object_name": package.resolve_name(e.object_name),
                "class_index": e.class_index,
                "serial_size": e.serial_size,
                "serial_offset": e.serial_offset,
            }
            for e in package.exports
        ],
    }


def _dump_cmd(args: argparse.Namespace) -> int:
    report = scan_assets(_options(args), task_id="dump.parse")
    entries: List[Dict[str, Any]] = []
    for result in report.results:
        if not result.ok:
            entries.append(result.to_dict())
            continue
        assert result.package is not None
        entry = result.package.to_dict()
        if args.tables:
            try:
                entry["tables"] = _table_dump(result)
            except AssetError as exc:
                entry["table_error"] = exc.to_dict()
        entries.append(entry)
    get_reporter().flush()
    print(json.dumps(entries, indent=2, sort_keys=False))
    _report_failures(report)
    get_reporter().status(report.summary_line("Dump"))
    return EXIT_FAILED if report.failed else EXIT_OK


def _list_imports_cmd(args: argparse.Namespace) -> int:
    options = _options(args)
    report = scan_assets(options, task_id="imports.parse")
    get_reporter().flush()
    failed = len(report.failed)
    for result in report.succeeded:
        assert result.package is not None
        try:
            imports = list(
                result.package.package_imports(options.skip_code_imports)
            )
        except AssetError as exc:
            get_reporter().error(f"{result.path}: {exc}")
            failed += 1
            continue
        print(f"{result.path}:")
        for name in imports:
            print(f"  {name}")
    _report_failures(report)
    get_reporter().status(
        f"Imports summary: files={len(report.results)} failed={failed}"
    )
    return EXIT_FAILED if failed else EXIT_OK


def _benchmark_work(path: Path) -> FileResult:
    # Parse plus the table decoding a dependency walk needs.
    result = load_asset(path)
    if result.package is not None:
        start = time.perf_counter()
        try:
            for _ in result.package.package_imports():
                pass
        except AssetError as exc:
            result.error = exc.to_dict()
        result.seconds += time.perf_counter() - start
        result.package = None
    return result


def _benchmark_cmd(args: argparse.Namespace) -> int:
    report = scan_assets(
        _options(args), task_id="benchmark.parse", work=_benchmark_work
    )
    slowest = sorted(report.results, key=lambda r: r.seconds, reverse=True)
    rep = get_reporter()
    if slowest and args.top and get_verbosity() >= 1:
        with section("Slowest files"):
            for result in slowest[: args.top]:
                rep.verbose(f"{result.seconds * 1000:.3f} ms  {result.path}")
    files = len(report.results)
    per_file = (report.parse_seconds / files * 1000) if files else 0.0
    rep.status(report.summary_line("Benchmark") + f" ms_per_file={per_file:.3f}")
    return EXIT_OK


def _validate_cmd(args: argparse.Namespace) -> int:
    report = scan_assets(_options(args), task_id="validate.parse")
    get_reporter().flush()
    if args.json:
        print(
            json.dumps([r.to_dict() for r in report.results], indent=2)
        )
    _report_failures(report)
    get_reporter().status(report.summary_line("Validate"))
    return EXIT_FAILED if report.failed else EXIT_OK


def _versions_cmd(args: argparse.Namespace) -> int:
    data = {
        "legacy": {m.name: int(m) for m in LegacyFileVersion},
        "object": {m.name: int(m) for m in ObjectVersion},
        "custom": {
            s.name: {
                "key": str(key),
                "versions": {m.name: int(m) for m in s.versions},
            }
            for key, s in CUSTOM_VERSION_SUBSYSTEMS.items()
        },
        "gates": [
            {
                "field": g.field,
                "namespace": g.namespace.value,
                "since": int(threshold(g.field)),
                "removed_in": None if g.removed_in is None else int(g.removed_in),
                "editor_only": g.editor_only,
            }
            for g in FIELD_GATES
        ],
    }
    if args.json:
        print(json.dumps(data, indent=2))
        return EXIT_OK
    for section in ("legacy", "object"):
        print(f"[{section}]")
        for name, value in data[section].items():
            print(f"  {value:>5}  {name}")
    for name, sub in data["custom"].items():
        print(f"[custom {name} {sub['key']}]")
        for vname, value in sub["versions"].items():
            print(f"  {value:>5}  {vname}")
    print("[gates]")
    for g in data["gates"]:
        removed = "" if g["removed_in"] is None else f" < {g['removed_in']}"
        editor = " (editor-only)" if g["editor_only"] else ""
        print(
            f"  {g['field']:<42} {g['namespace']:<6} >= {g['since']}{removed}{editor}"
        )
    return EXIT_OK


def _add_scan_args(sp: argparse.ArgumentParser) -> None:
    sp.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Asset files or directories (searched recursively)",
    )
    sp.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Parse files on this many threads",
    )
    sp.add_argument(
        "--include-hidden",
        action="store_true",
        help="Also visit files and directories whose names start with '.'",
    )
    sp.add_argument(
        "--follow-links",
        action="store_true",
        help="Follow symbolic links to directories",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="uasset", description="Inspect packaged .uasset/.umap headers"
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=sorted(REPORTERS),
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    p.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="YAML or JSON file with default scan options",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    d = sub.add_parser("dump", help="Dump parsed headers as JSON")
    _add_scan_args(d)
    d.add_argument(
        "--tables",
        action="store_true",
        help="Also decode the name, import and export tables",
    )
    d.set_defaults(func=_dump_cmd)

    li = sub.add_parser("list-imports", help="List the packages each asset imports")
    _add_scan_args(li)
    li.add_argument(
        "--skip-code-imports",
        action="store_true",
        help="Skip imports of code packages (names starting with /Script/)",
    )
    li.set_defaults(func=_list_imports_cmd)

    b = sub.add_parser("benchmark", help="Time header parsing over many assets")
    _add_scan_args(b)
    b.add_argument(
        "--top",
        type=int,
        default=10,
        help="With -v, list this many of the slowest files",
    )
    b.set_defaults(func=_benchmark_cmd)

    v = sub.add_parser("validate", help="Check that every asset parses")
    _add_scan_args(v)
    v.add_argument("--json", action="store_true", help="Emit per-file results")
    v.set_defaults(func=_validate_cmd)

    ver = sub.add_parser("versions", help="Show known versions and field gates")
    ver.add_argument("--json", action="store_true", help="Emit JSON")
    ver.set_defaults(func=_versions_cmd)

    return p


def _prints_document(args: argparse.Namespace) -> bool:
    if args.func in (_dump_cmd, _list_imports_cmd, _versions_cmd):
        return True
    return bool(getattr(args, "json", False))


def _select_reporter(args: argparse.Namespace) -> None:
    name = args.reporter
    if name == "rich" and not sys.stderr.isatty():
        # No terminal for progress bars.
        set_reporter(PlainReporter())
        return
    if name == "json" and _prints_document(args):
        # stdout carries the command's own output.
        set_reporter(JsonLinesReporter(stream=sys.stderr))
        return
    set_reporter(REPORTERS[name]())


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    _select_reporter(args)
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    except (FileNotFoundError, ValueError) as exc:
        get_logger().error("%s", exc)
        return EXIT_USAGE


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
