from __future__ import annotations

"""High-level package API: file loading, table caching, custom decoders."""
from pathlib import Path

import pytest

from uasset import AssetHeader, open_bytes, open_package, parse_file
from uasset.parsing.cursor import BinaryCursor
from uasset.parsing.summary import decode_table, parse_header

from asset_builder import AssetBuilder, ExportSpec

# Export element size at object version 522.
EXPORT_SIZE = 104


def _data() -> bytes:
    return AssetBuilder(
        names=["Extra"],
        exports=[ExportSpec("A"), ExportSpec("B", serial_size=32)],
        depends=[[-1], [1, -1]],
    ).build()


def test_parse_file_and_open_package(tmp_path: Path):  # noqa: N802
    path = tmp_path / "Pkg.uasset"
    path.write_bytes(_data())
    header = parse_file(path)
    assert isinstance(header, AssetHeader)
    package = open_package(path)
    assert package.header == header
    assert package.display_name == str(path)
    assert package.to_dict()["path"] == str(path)


def test_tables_are_cached():  # noqa: N802
    package = open_bytes(_data())
    first = package.table("exports")
    assert package.table("exports") is first
    assert [package.resolve_name(e.object_name) for e in first] == ["A", "B"]
    assert [e.serial_size for e in first] == [16, 32]
    assert package.table("depends_map") == [[-1], [1, -1]]
    assert package.names[0].name == "Extra"


def test_custom_element_decoder():  # noqa: N802
    package = open_bytes(_data())

    def class_index_only(cursor: BinaryCursor) -> int:
        value = cursor.read_i32()
        cursor.skip(EXPORT_SIZE - 4)
        return value

    assert package.decode("exports", class_index_only) == [-1, -1]


def test_unknown_field_names():  # noqa: N802
    data = _data()
    header = parse_header(data)
    with pytest.raises(KeyError):
        decode_table(data, header, "folder_name")
    with pytest.raises(KeyError):
        header.field("not_a_field")
    with pytest.raises(KeyError):
        header.is_present("not_a_field")


def test_gatherable_text_needs_a_decoder():  # noqa: N802
    data = AssetBuilder(gatherable_text_data=(1, 0)).build()
    header = parse_header(data)
    assert header.gatherable_text_data.count == 1
    with pytest.raises(ValueError):
        decode_table(data, header, "gatherable_text_data")
    assert decode_table(
        data, header, "gatherable_text_data", BinaryCursor.read_u32
    ) == [0x9E2A83C1]
