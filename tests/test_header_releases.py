from __future__ import annotations

"""Summary parsing for every supported engine release.

Each entry in _fixtures/releases.yaml describes which gated fields an editor
save of that release stores. A synthetic package is written for each release
and the parser must agree on field presence, defaults and table layout.
"""
from uuid import UUID

import pytest

from uasset.api import open_bytes
from uasset.parsing.summary import parse_header
from uasset.parsing.tables import NameReference, TableDescriptor
from uasset.parsing.versions import FIELD_GATES, custom_version_of

from asset_builder import load_releases, names_of, release_builder

RELEASES = load_releases()
MEMBER_GATES = (
    "name_hashes",
    "import_package_name",
    "export_template_index",
    "export_64bit_serial_sizes",
    "export_not_always_loaded_for_editor_game",
    "export_is_asset",
    "export_preload_dependencies",
    "soft_package_reference_names",
)
HEADER_GATES = sorted(
    g.field for g in FIELD_GATES if g.field not in MEMBER_GATES
)


@pytest.fixture(params=RELEASES, ids=[r["name"] for r in RELEASES])
def release(request):
    return request.param


@pytest.fixture
def built(release):
    builder = release_builder(release)
    data = builder.build()
    return builder, data


def test_versions_resolve(release, built):  # noqa: N802
    _, data = built
    header = parse_header(data)
    assert int(header.object_version) == release["object_version"]
    assert header.object_version.name == release["object_version_name"]
    assert int(header.legacy_version) == release["legacy_version"]
    assert header.licensee_version == 0
    assert header.filter_editor_only is False


def test_present_fields_match_release(release, built):  # noqa: N802
    _, data = built
    header = parse_header(data)
    assert header.present == frozenset(release["present"])
    for name in release["present"]:
        assert header.is_present(name), name
        assert header.field(name).present


def test_element_members_match_release(release, built):  # noqa: N802
    _, data = built
    header = parse_header(data)
    members = set(release["members"])
    for name in MEMBER_GATES:
        assert header.is_present(name) is (name in members), name


def test_absent_fields_hold_defaults(release, built):  # noqa: N802
    builder, data = built
    header = parse_header(data)
    present = set(release["present"])
    defaults = {
        "localization_id": None,
        "gatherable_text_data": TableDescriptor(0, 0),
        "soft_package_references": TableDescriptor(0, 0),
        "searchable_names_offset": 0,
        "owner_persistent_guid": UUID(int=0),
        "texture_allocations": 0,
        "world_tile_info_data_offset": 0,
        "preload_dependencies": TableDescriptor(0, 0),
    }
    for name, default in defaults.items():
        if name in present:
            continue
        value = header.field(name)
        assert value.present is False, name
        assert value.value == default, name
    if "persistent_guid" not in present:
        assert header.persistent_guid == builder.package_guid
    assert header.is_present("engine_changelist") is False
    assert header.engine_changelist == release["changelist"]
    assert sorted(header.to_dict()["absent_fields"]) == sorted(
        n for n in HEADER_GATES if n not in present
    )


def test_unconditional_fields(release, built):  # noqa: N802
    builder, data = built
    header = parse_header(data)
    assert header.is_present("folder_name")
    assert header.folder_name == "None"
    assert header.total_header_size == len(data)
    assert header.package_guid == builder.package_guid
    assert [(g.export_count, g.name_count) for g in header.generations] == [(1, 9)]
    assert header.package_source == builder.package_source
    assert header.bulk_data_start_offset == -1
    assert header.compressed_chunks == ()
    assert header.chunk_ids == (0,)
    assert header.chunk_id == 0


def test_engine_versions(release, built):  # noqa: N802
    _, data = built
    header = parse_header(data)
    minor = release["name"].split(".")[1]
    expected = f"4.{minor}.0-{release['changelist']}+++UE4+Release-4.{minor}"
    assert str(header.saved_by_engine_version) == expected
    assert header.compatible_with_engine_version == header.saved_by_engine_version


def test_custom_versions(release, built):  # noqa: N802
    _, data = built
    header = parse_header(data)
    custom = release.get("custom", {})
    assert len(header.custom_versions) == len(custom)
    for key, version in custom.items():
        assert int(custom_version_of(header, UUID(key))) == version


def test_tables_decode(release, built):  # noqa: N802
    builder, data = built
    package = open_bytes(data)
    names = names_of(package.names)
    assert names[:3] == ["/Script/CoreUObject", "Package", "/Game/Textures/T_Hero"]
    assert len(names) == package.header.names.count

    assert len(package.imports) == 4
    texture = package.imports[3]
    assert package.resolve_name(texture.class_name) == "Texture2D"
    assert package.resolve_name(texture.object_name) == "T_Hero"
    assert texture.outer_index == -1

    (export,) = package.exports
    assert package.resolve_name(export.object_name) == "M_Hero"
    assert export.class_index == -4
    assert export.serial_size == 16

    assert list(package.package_imports()) == [
        "/Game/Textures/T_Hero",
        "/Script/Engine",
    ]
    assert list(package.package_imports(skip_code_imports=True)) == [
        "/Game/Textures/T_Hero"
    ]
    assert package.table("depends_map") == [[]]


def test_soft_references_and_preload(release, built):  # noqa: N802
    _, data = built
    package = open_bytes(data)
    (ref,) = package.table("soft_package_references")
    if isinstance(ref, NameReference):
        assert release["object_version"] >= 484
        ref = package.resolve_name(ref)
    assert ref == "/Game/Maps/Arena"
    preload = package.table("preload_dependencies")
    if "preload_dependencies" in release["present"]:
        assert preload == [-1, -2]
    else:
        assert preload == []
