from __future__ import annotations

"""Truncation behaviour of the summary parser.

The summary carries no length of its own, so the parser must consume exactly
the bytes the versions call for: the full summary parses on its own, and any
shorter prefix fails with TruncatedData rather than a partial header.
"""
import pytest

from uasset.parsing.errors import TruncatedData
from uasset.parsing.summary import parse_header

from asset_builder import load_releases, release_builder

RELEASES = load_releases()


@pytest.mark.parametrize("release", RELEASES, ids=[r["name"] for r in RELEASES])
def test_summary_prefix_is_sufficient(release):  # noqa: N802
    builder = release_builder(release)
    data = builder.build()
    summary = data[: builder.summary_size]
    header = parse_header(summary)
    assert header == parse_header(data)
    assert parse_header(summary + b"\xff" * 32) == header


@pytest.mark.parametrize("release", RELEASES, ids=[r["name"] for r in RELEASES])
def test_every_shorter_prefix_is_truncated(release):  # noqa: N802
    builder = release_builder(release)
    data = builder.build()
    for size in range(builder.summary_size):
        with pytest.raises(TruncatedData):
            parse_header(data[:size])


@pytest.mark.parametrize("release", RELEASES, ids=[r["name"] for r in RELEASES])
def test_cut_inside_each_field(release):  # noqa: N802
    builder = release_builder(release)
    data = builder.build()
    for name, offset in builder.marks.items():
        if name == "end":
            continue
        with pytest.raises(TruncatedData) as exc:
            parse_header(data[: offset + 1])
        assert exc.value.context["position"] <= offset
