from __future__ import annotations

"""Indirect table decoding: descriptors, cursor restoration, element decoders."""
import struct
from uuid import UUID

import pytest

from uasset.parsing.cursor import BinaryCursor
from uasset.parsing.errors import (
    MalformedHeader,
    OffsetOutOfRange,
    TruncatedData,
)
from uasset.parsing.tables import (
    NameEntry,
    NameReference,
    TableDescriptor,
    decode,
    default_decoder,
    depends_decoder,
    export_decoder,
    import_decoder,
    name_entry_decoder,
    read_name_reference,
    soft_package_reference_decoder,
)
from uasset.parsing.versions import (
    FileVersions,
    LegacyFileVersion,
    ObjectVersion,
)


def _versions(object_version: int, filter_editor_only: bool = False) -> FileVersions:
    return FileVersions(
        legacy=LegacyFileVersion.REMOVED_TEXTURE_ALLOCATION_INFO,
        object=ObjectVersion(object_version),
        filter_editor_only=filter_editor_only,
    )


def _read_i32(cursor: BinaryCursor) -> int:
    return cursor.read_i32()


def test_decode_reads_elements_and_restores_cursor():  # noqa: N802
    data = struct.pack("<iiii", 99, 10, 20, 30)
    c = BinaryCursor(data, position=2)
    assert decode(c, TableDescriptor(3, 4), _read_i32) == [10, 20, 30]
    assert c.position == 2


def test_empty_table_does_not_validate_offset():  # noqa: N802
    c = BinaryCursor(b"\x00" * 4)
    assert decode(c, TableDescriptor(0, 1_000_000), _read_i32) == []
    assert c.position == 0


def test_negative_count_is_malformed():  # noqa: N802
    c = BinaryCursor(b"\x00" * 4)
    with pytest.raises(MalformedHeader):
        decode(c, TableDescriptor(-1, 0), _read_i32)


def test_offset_outside_source():  # noqa: N802
    c = BinaryCursor(b"\x00" * 8, position=3)
    with pytest.raises(OffsetOutOfRange):
        decode(c, TableDescriptor(1, 9), _read_i32)
    assert c.position == 3


def test_cursor_restored_when_element_fails():  # noqa: N802
    c = BinaryCursor(struct.pack("<ii", 1, 2), position=1)
    with pytest.raises(TruncatedData):
        decode(c, TableDescriptor(3, 0), _read_i32)
    assert c.position == 1


def test_descriptor_to_dict():  # noqa: N802
    assert TableDescriptor(2, 64).to_dict() == {"count": 2, "offset": 64}


def test_name_entries_with_and_without_hashes():  # noqa: N802
    plain = struct.pack("<i", 5) + b"None\x00"
    assert name_entry_decoder(_versions(503))(BinaryCursor(plain)) == NameEntry(
        "None"
    )
    hashed = plain + struct.pack("<HH", 0x1234, 0x5678)
    c = BinaryCursor(hashed)
    assert name_entry_decoder(_versions(504))(c) == NameEntry("None", 0x1234, 0x5678)
    assert c.remaining == 0


def test_name_reference():  # noqa: N802
    c = BinaryCursor(struct.pack("<ii", 7, 2))
    assert read_name_reference(c) == NameReference(7, 2)


def test_import_package_name_only_in_editor_data():  # noqa: N802
    body = struct.pack("<iiiiiii", 1, 0, 2, 0, 0, 3, 0)
    with_pkg = body + struct.pack("<ii", 4, 0)

    c = BinaryCursor(with_pkg)
    imp = import_decoder(_versions(520))(c)
    assert imp.package_name == NameReference(4, 0)
    assert c.remaining == 0

    c = BinaryCursor(body)
    imp = import_decoder(_versions(520, filter_editor_only=True))(c)
    assert imp.package_name is None
    assert imp.object_name == NameReference(3, 0)
    assert c.remaining == 0

    imp = import_decoder(_versions(519))(BinaryCursor(body))
    assert imp.package_name is None


def _export_bytes(object_version: int) -> bytes:
    out = struct.pack("<ii", -1, 0)
    if object_version >= 508:
        out += struct.pack("<i", 0)
    out += struct.pack("<iiiI", 0, 5, 0, 1)
    if object_version >= 511:
        out += struct.pack("<qq", 2**33, 4096)
    else:
        out += struct.pack("<ii", 256, 4096)
    out += struct.pack("<III", 0, 1, 0)
    out += struct.pack("<IIII", 0, 0, 0, 0) + struct.pack("<I", 0)
    if object_version >= 365:
        out += struct.pack("<I", 0)
    if object_version >= 485:
        out += struct.pack("<I", 1)
    if object_version >= 507:
        out += struct.pack("<iiiii", 3, 1, 0, 2, 0)
    return out


@pytest.mark.parametrize("object_version", [364, 484, 506, 507, 510, 511, 522])
def test_export_layout_follows_object_version(object_version: int):  # noqa: N802
    c = BinaryCursor(_export_bytes(object_version))
    exp = export_decoder(_versions(object_version))(c)
    assert c.remaining == 0
    assert exp.class_index == -1
    assert exp.object_name == NameReference(5, 0)
    assert exp.serial_offset == 4096
    assert exp.serial_size == (2**33 if object_version >= 511 else 256)
    assert exp.not_for_client is True
    assert exp.package_guid == UUID(int=0)
    assert exp.not_always_loaded_for_editor_game is (object_version < 365)
    assert exp.is_asset is (object_version >= 485)
    if object_version >= 507:
        assert exp.first_export_dependency == 3
        assert exp.serialization_before_create_dependencies == 2
    else:
        assert exp.first_export_dependency == -1


def test_soft_package_references_switch_to_names():  # noqa: N802
    c = BinaryCursor(struct.pack("<ii", 3, 0))
    assert soft_package_reference_decoder(_versions(484))(c) == NameReference(3, 0)
    c = BinaryCursor(struct.pack("<i", 6) + b"/Game\x00")
    assert soft_package_reference_decoder(_versions(483))(c) == "/Game"


def test_depends_entries():  # noqa: N802
    read = depends_decoder(_versions(522))
    c = BinaryCursor(struct.pack("<iiii", 2, -1, 1, 0))
    assert read(c) == [-1, 1]
    assert read(c) == []
    with pytest.raises(MalformedHeader):
        read(BinaryCursor(struct.pack("<i", -3)))


def test_default_decoder_lookup():  # noqa: N802
    versions = _versions(522)
    assert default_decoder("names", versions) is not None
    with pytest.raises(ValueError):
        default_decoder("gatherable_text_data", versions)
