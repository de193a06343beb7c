from __future__ import annotations

"""Snapshot of the JSON header dump for a 4.26 editor package.

Guards the summary layout and the dump format together: any change to field
order, gate thresholds or defaults shows up as a diff against
_snapshots/header_4_26.json.
"""
from uasset.api import open_bytes

from asset_builder import load_releases, release_builder
from snapshot_helper import assert_matches_snapshot


def test_header_dump_snapshot():  # noqa: N802
    release = next(r for r in load_releases() if r["name"] == "4.26")
    builder = release_builder(release)
    package = open_bytes(builder.build())
    assert builder.summary_size == package.header.names.offset
    assert_matches_snapshot(package.to_dict(), "header_4_26.json")
