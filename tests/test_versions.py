from __future__ import annotations

"""Version resolution, field gates and threshold lookups."""
from enum import IntEnum
from uuid import UUID

import pytest

from uasset.parsing.errors import UnsupportedVersion
from uasset.parsing.versions import (
    CUSTOM_VERSION_SUBSYSTEMS,
    ENGINE_RELEASES,
    FIELD_GATES,
    CoreObjectVersion,
    CustomVersionEntry,
    CustomVersionSubsystem,
    EditorObjectVersion,
    FieldGate,
    FileVersions,
    FrameworkObjectVersion,
    LegacyFileVersion,
    Namespace,
    ObjectVersion,
    custom_version_of,
    evaluate,
    gate_for,
    is_present,
    iter_gates,
    resolve,
    resolve_custom,
    threshold,
)

from asset_builder import CORE_KEY, EDITOR_KEY, FRAMEWORK_KEY

UNKNOWN_KEY = UUID("11111111-2222-3333-4444-555555555555")


def _versions(
    object_version: int = 522,
    legacy: int = -7,
    custom=(),
    filter_editor_only: bool = False,
) -> FileVersions:
    return FileVersions(
        legacy=LegacyFileVersion(legacy),
        object=ObjectVersion(object_version),
        custom=tuple(custom),
        filter_editor_only=filter_editor_only,
    )


# -- resolve ---------------------------------------------------------------


def test_object_versions_resolve_exactly():  # noqa: N802
    assert resolve(214, Namespace.OBJECT) is ObjectVersion.VER_UE4_OLDEST_LOADABLE_PACKAGE
    assert resolve(522, Namespace.OBJECT) is ObjectVersion.VER_UE4_CORRECT_LICENSEE_FLAG
    assert resolve(504, Namespace.OBJECT).name == "VER_UE4_NAME_HASHES_SERIALIZED"


@pytest.mark.parametrize("raw", [523, 1000, 213, 0, -1])
def test_unknown_object_versions_are_unsupported(raw: int):  # noqa: N802
    with pytest.raises(UnsupportedVersion) as exc:
        resolve(raw, Namespace.OBJECT)
    assert exc.value.raw == raw
    assert exc.value.namespace == "object"


def test_newer_object_version_message_names_newest():  # noqa: N802
    with pytest.raises(UnsupportedVersion) as exc:
        resolve(600, Namespace.OBJECT)
    assert "522" in exc.value.message


def test_legacy_versions():  # noqa: N802
    assert resolve(-6, Namespace.LEGACY) is LegacyFileVersion.OPTIMIZED_CUSTOM_VERSIONS
    assert resolve(-7, Namespace.LEGACY) is LegacyFileVersion.REMOVED_TEXTURE_ALLOCATION_INFO
    for raw in (-5, -8, 0, 3):
        with pytest.raises(UnsupportedVersion) as exc:
            resolve(raw, Namespace.LEGACY)
        assert exc.value.raw == raw
        assert exc.value.namespace == "legacy"


def test_custom_versions_resolve_per_subsystem():  # noqa: N802
    assert resolve(3, Namespace.CUSTOM, CORE_KEY) is CoreObjectVersion.SKELETAL_MATERIAL_EDITOR_DATA_STRIPPING
    assert resolve_custom(40, EDITOR_KEY) is max(EditorObjectVersion)
    assert resolve_custom(0, FRAMEWORK_KEY) is FrameworkObjectVersion.BEFORE_CUSTOM_VERSION_WAS_ADDED


def test_custom_version_out_of_range():  # noqa: N802
    with pytest.raises(UnsupportedVersion) as exc:
        resolve(5, Namespace.CUSTOM, CORE_KEY)
    assert exc.value.raw == 5
    assert exc.value.namespace == "custom"
    assert exc.value.context["subsystem"] == "FCoreObjectVersion"
    with pytest.raises(UnsupportedVersion):
        resolve(-1, Namespace.CUSTOM, EDITOR_KEY)


class _SparseVersion(IntEnum):
    FIRST = 0
    SECOND = 5
    THIRD = 10


SPARSE_KEY = UUID("0badc0de-0000-4000-8000-000000000005")


def test_custom_version_between_constants_rounds_down(monkeypatch):  # noqa: N802
    monkeypatch.setitem(
        CUSTOM_VERSION_SUBSYSTEMS,
        SPARSE_KEY,
        CustomVersionSubsystem("FSparseVersion", SPARSE_KEY, _SparseVersion),
    )
    assert resolve_custom(4, SPARSE_KEY) is _SparseVersion.FIRST
    assert resolve_custom(5, SPARSE_KEY) is _SparseVersion.SECOND
    assert resolve_custom(7, SPARSE_KEY) is _SparseVersion.SECOND
    assert resolve(9, Namespace.CUSTOM, SPARSE_KEY) is _SparseVersion.SECOND
    assert resolve_custom(10, SPARSE_KEY) is _SparseVersion.THIRD
    with pytest.raises(UnsupportedVersion):
        resolve_custom(11, SPARSE_KEY)
    with pytest.raises(UnsupportedVersion):
        resolve_custom(-1, SPARSE_KEY)


def test_custom_version_needs_known_subsystem():  # noqa: N802
    with pytest.raises(ValueError):
        resolve(1, Namespace.CUSTOM)
    with pytest.raises(ValueError):
        resolve_custom(1, UNKNOWN_KEY)


def test_subsystem_latest():  # noqa: N802
    assert CUSTOM_VERSION_SUBSYSTEMS[CORE_KEY].latest is CoreObjectVersion.FPROPERTIES
    assert int(CUSTOM_VERSION_SUBSYSTEMS[FRAMEWORK_KEY].latest) == 37


# -- gates -----------------------------------------------------------------


def test_every_gate_is_unique_and_known():  # noqa: N802
    fields = [g.field for g in FIELD_GATES]
    assert len(fields) == len(set(fields))
    for g in FIELD_GATES:
        assert gate_for(g.field) is g
    with pytest.raises(KeyError):
        gate_for("folder_name")


@pytest.mark.parametrize(
    "field,expected",
    [
        ("localization_id", 516),
        ("gatherable_text_data", 459),
        ("soft_package_references", 384),
        ("searchable_names_offset", 510),
        ("persistent_guid", 518),
        ("owner_persistent_guid", 518),
        ("saved_by_engine_version", 336),
        ("compatible_with_engine_version", 444),
        ("world_tile_info_data_offset", 224),
        ("chunk_id", 278),
        ("chunk_ids", 326),
        ("preload_dependencies", 507),
        ("name_hashes", 504),
        ("import_package_name", 520),
        ("export_64bit_serial_sizes", 511),
        ("engine_changelist", 214),
    ],
)
def test_thresholds(field: str, expected: int):  # noqa: N802
    assert int(threshold(field)) == expected


def test_legacy_threshold():  # noqa: N802
    assert threshold("texture_allocations") is LegacyFileVersion.OPTIMIZED_CUSTOM_VERSIONS


def test_threshold_unknown_field():  # noqa: N802
    with pytest.raises(KeyError):
        threshold("not_a_field")


def test_presence_boundaries():  # noqa: N802
    assert not is_present("localization_id", _versions(515))
    assert is_present("localization_id", _versions(516))
    assert is_present("owner_persistent_guid", _versions(519))
    assert not is_present("owner_persistent_guid", _versions(520))
    assert is_present("engine_changelist", _versions(335))
    assert not is_present("engine_changelist", _versions(336))
    assert is_present("chunk_id", _versions(325))
    assert not is_present("chunk_id", _versions(326))
    assert not is_present("chunk_id", _versions(277))


def test_editor_only_gates_close_for_cooked_files():  # noqa: N802
    cooked = _versions(522, filter_editor_only=True)
    assert not is_present("localization_id", cooked)
    assert not is_present("persistent_guid", cooked)
    assert not is_present("import_package_name", cooked)
    assert is_present("gatherable_text_data", cooked)


def test_texture_allocations_follow_legacy_version():  # noqa: N802
    assert is_present("texture_allocations", _versions(legacy=-6))
    assert not is_present("texture_allocations", _versions(legacy=-7))


def test_custom_gate_uses_subsystem_version():  # noqa: N802
    gate = FieldGate(
        "widget_templates",
        Namespace.CUSTOM,
        since=EditorObjectVersion.FAST_WIDGET_TEMPLATES,
        subsystem=EDITOR_KEY,
    )
    fast = int(EditorObjectVersion.FAST_WIDGET_TEMPLATES)

    def with_editor(version: int) -> FileVersions:
        entry = CustomVersionEntry(
            EDITOR_KEY, version, resolve_custom(version, EDITOR_KEY)
        )
        return _versions(custom=[entry])

    assert evaluate(gate, with_editor(fast))
    assert evaluate(gate, with_editor(fast + 1))
    assert not evaluate(gate, with_editor(fast - 1))
    # Subsystem not recorded in the file.
    assert not evaluate(gate, _versions())


def test_iter_gates_by_namespace():  # noqa: N802
    legacy = [g.field for g in iter_gates(Namespace.LEGACY)]
    assert legacy == ["texture_allocations"]
    assert len(list(iter_gates())) == len(FIELD_GATES)


# -- custom version lookup -------------------------------------------------


def test_custom_version_of_known_unknown_and_missing():  # noqa: N802
    versions = _versions(
        custom=[
            CustomVersionEntry(CORE_KEY, 3, CoreObjectVersion(3)),
            CustomVersionEntry(UNKNOWN_KEY, 7),
        ]
    )
    assert custom_version_of(versions, CORE_KEY) is CoreObjectVersion(3)
    assert custom_version_of(versions, UNKNOWN_KEY) == 7
    assert custom_version_of(versions, EDITOR_KEY) is None
    assert CustomVersionEntry(UNKNOWN_KEY, 7).subsystem_name is None
    assert CustomVersionEntry(CORE_KEY, 3).subsystem_name == "FCoreObjectVersion"


def test_engine_releases_are_known_object_versions():  # noqa: N802
    assert ENGINE_RELEASES["4.26"] == 522
    values = list(ENGINE_RELEASES.values())
    assert values == sorted(values)
