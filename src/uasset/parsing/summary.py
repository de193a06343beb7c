"""Package file summary parsing.

Public functions:
- parse_header(source) -> AssetHeader
- decode_table(source, header, field, element_decoder=None) -> list

The summary has no overall length prefix. Fields are read strictly in
on-disk order and every version-gated field goes through ``is_present``.
When a gate is closed the field is not read and its default is stored.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Set, Tuple
from uuid import UUID

from ..logging import get_logger
from .constants import (
    CHUNK_ID_NONE,
    COMPRESSED_CHUNK_SIZE,
    CUSTOM_VERSION_SIZE,
    GENERATION_INFO_SIZE,
    PACKAGE_FILE_TAG,
    PACKAGE_FILE_TAG_BYTES,
    PACKAGE_FILE_TAG_SWAPPED,
    PRELOAD_DEPENDENCIES_NOT_RECORDED,
    PackageFlags,
)
from .cursor import BinaryCursor, ByteSource
from .errors import malformed, not_a_package, truncated, unversioned_asset
from .tables import (
    EMPTY_TABLE,
    ElementDecoder,
    TableDescriptor,
    decode,
    default_decoder,
)
from .versions import (
    CUSTOM_VERSION_SUBSYSTEMS,
    CustomVersionEntry,
    FileVersions,
    LegacyFileVersion,
    Namespace,
    ObjectVersion,
    gate_for,
    is_present,
    iter_gates,
    resolve,
)

__all__ = [
    "EngineVersion",
    "GenerationInfo",
    "CompressedChunk",
    "FieldValue",
    "AssetHeader",
    "TABLE_FIELDS",
    "parse_header",
    "decode_table",
]

_NIL_GUID = UUID(int=0)

# ``depends_map`` is not stored; it pairs the export count with the depends
# offset.
TABLE_FIELDS = (
    "names",
    "gatherable_text_data",
    "exports",
    "imports",
    "depends_map",
    "soft_package_references",
    "preload_dependencies",
)


@dataclass(slots=True, frozen=True)
class EngineVersion:
    major: int
    minor: int
    patch: int
    changelist: int
    branch: str = ""

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}-{self.changelist}"
        return f"{text}+{self.branch}" if self.branch else text

    @classmethod
    def from_changelist(cls, changelist: int) -> "EngineVersion":
        return cls(4, 0, 0, changelist, "")


@dataclass(slots=True, frozen=True)
class GenerationInfo:
    export_count: int
    name_count: int


@dataclass(slots=True, frozen=True)
class CompressedChunk:
    uncompressed_offset: int
    uncompressed_size: int
    compressed_offset: int
    compressed_size: int


@dataclass(slots=True, frozen=True)
class FieldValue:
    """A header field together with whether the file actually stored it."""

    name: str
    value: Any
    present: bool


@dataclass(frozen=True)
class AssetHeader:
    """Immutable package file summary.

    Gated fields the file did not store hold their default:

    ========================================  =================================
    field                                     default
    ========================================  =================================
    localization_id                           ``None``
    gatherable_text_data                      empty table
    soft_package_references                   empty table
    searchable_names_offset                   ``0``
    persistent_guid                           ``package_guid``
    owner_persistent_guid                     nil GUID
    engine_changelist                         saved-by changelist
    saved_by_engine_version                   ``4.0.0-<engine_changelist>``
    compatible_with_engine_version            ``saved_by_engine_version``
    texture_allocations                       ``0``
    world_tile_info_data_offset               ``0``
    chunk_ids / chunk_id                      ``()`` / ``-1``
    preload_dependencies                      empty table
    ========================================  =================================
    """

    versions: FileVersions
    legacy_ue3_version: int
    total_header_size: int
    folder_name: str
    package_flags: int
    names: TableDescriptor
    exports: TableDescriptor
    imports: TableDescriptor
    depends_offset: int
    thumbnail_table_offset: int
    package_guid: UUID
    generations: Tuple[GenerationInfo, ...]
    saved_by_engine_version: EngineVersion
    compatible_with_engine_version: EngineVersion
    compression_flags: int
    compressed_chunks: Tuple[CompressedChunk, ...]
    package_source: int
    additional_packages_to_cook: Tuple[str, ...]
    asset_registry_data_offset: int
    bulk_data_start_offset: int
    localization_id: Optional[str] = None
    gatherable_text_data: TableDescriptor = EMPTY_TABLE
    soft_package_references: TableDescriptor = EMPTY_TABLE
    searchable_names_offset: int = 0
    persistent_guid: UUID = _NIL_GUID
    owner_persistent_guid: UUID = _NIL_GUID
    engine_changelist: int = 0
    texture_allocations: int = 0
    world_tile_info_data_offset: int = 0
    chunk_ids: Tuple[int, ...] = ()
    preload_dependencies: TableDescriptor = EMPTY_TABLE
    present: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def legacy_version(self) -> LegacyFileVersion:
        return self.versions.legacy

    @property
    def object_version(self) -> ObjectVersion:
        return self.versions.object

    @property
    def licensee_version(self) -> int:
        return self.versions.licensee

    @property
    def custom_versions(self) -> Tuple[CustomVersionEntry, ...]:
        return self.versions.custom

    @property
    def filter_editor_only(self) -> bool:
        return self.versions.filter_editor_only

    @property
    def depends_map(self) -> TableDescriptor:
        return TableDescriptor(self.exports.count, self.depends_offset)

    @property
    def chunk_id(self) -> int:
        return self.chunk_ids[0] if self.chunk_ids else CHUNK_ID_NONE

    def is_present(self, name: str) -> bool:
        """True when ``name`` was read from this file.

        Unconditional fields are always present. Gated members of table
        elements are answered from the file's versions.
        """
        if name in _GATED_HEADER_FIELDS:
            return name in self.present
        if name in _HEADER_FIELDS:
            return True
        try:
            gate_for(name)
        except KeyError:
            raise KeyError(f"unknown header field {name!r}") from None
        return is_present(name, self.versions)

    def field(self, name: str) -> FieldValue:
        present = self.is_present(name)
        if name not in _HEADER_FIELDS and name not in _GATED_HEADER_FIELDS:
            raise KeyError(f"{name!r} is not a header field")
        return FieldValue(name, getattr(self, name), present)

    def table(self, name: str) -> TableDescriptor:
        if name not in TABLE_FIELDS:
            raise KeyError(f"{name!r} is not a table field")
        return getattr(self, name)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "legacy_version": int(self.legacy_version),
            "legacy_ue3_version": self.legacy_ue3_version,
            "object_version": int(self.object_version),
            "object_version_name": self.object_version.name,
            "licensee_version": self.licensee_version,
            "custom_versions": [
                {
                    "key": str(e.key),
                    "subsystem": e.subsystem_name,
                    "version": e.version,
                }
                for e in self.custom_versions
            ],
            "filter_editor_only": self.filter_editor_only,
        }
        for name in _DUMP_ORDER:
            data[name] = _jsonable(getattr(self, name))
        data["absent_fields"] = sorted(
            n for n in _GATED_HEADER_FIELDS if n not in self.present
        )
        return data


_HEADER_FIELDS = frozenset(
    n for n in AssetHeader.__dataclass_fields__ if n != "present"
) | {"depends_map", "legacy_version", "object_version", "licensee_version"}
_GATED_HEADER_FIELDS = frozenset(
    g.field for g in iter_gates() if g.field in _HEADER_FIELDS or g.field == "chunk_id"
)
_DUMP_ORDER = (
    "total_header_size",
    "folder_name",
    "package_flags",
    "names",
    "localization_id",
    "gatherable_text_data",
    "exports",
    "imports",
    "depends_offset",
    "soft_package_references",
    "searchable_names_offset",
    "thumbnail_table_offset",
    "package_guid",
    "persistent_guid",
    "owner_persistent_guid",
    "generations",
    "engine_changelist",
    "saved_by_engine_version",
    "compatible_with_engine_version",
    "compression_flags",
    "compressed_chunks",
    "package_source",
    "additional_packages_to_cook",
    "texture_allocations",
    "asset_registry_data_offset",
    "bulk_data_start_offset",
    "world_tile_info_data_offset",
    "chunk_ids",
    "preload_dependencies",
)


def _jsonable(value: Any) -> Any:
    if isinstance(value, TableDescriptor):
        return value.to_dict()
    if isinstance(value, (UUID, EngineVersion)):
        return str(value)
    if isinstance(value, tuple):
        return [
            asdict(v) if hasattr(v, "__dataclass_fields__") else v for v in value
        ]
    return value


class _SummaryReader:
    """Reads the summary one field group at a time."""

    def __init__(self, cursor: BinaryCursor):
        self.cursor = cursor
        self.versions: Optional[FileVersions] = None
        self.values: Dict[str, Any] = {}
        self.present: Set[str] = set()
        self._log = get_logger()

    # -- helpers -----------------------------------------------------------
    def _gated(self, name: str) -> bool:
        assert self.versions is not None
        if is_present(name, self.versions):
            self.present.add(name)
            return True
        return False

    def _read_descriptor(self) -> TableDescriptor:
        count = self.cursor.read_i32()
        offset = self.cursor.read_i32()
        return TableDescriptor(count, offset)

    def _read_inline(
        self,
        label: str,
        read_element: Callable[[BinaryCursor], Any],
        element_size: Optional[int] = None,
    ) -> List[Any]:
        start = self.cursor.position
        count = self.cursor.read_i32()
        if count < 0:
            self.cursor.restore_position(start)
            raise malformed(f"negative {label} count {count}", position=start)
        if element_size is not None and count * element_size > self.cursor.remaining:
            needed, available = count * element_size, self.cursor.remaining
            self.cursor.restore_position(start)
            raise truncated(start + 4, needed, available, label)
        return [read_element(self.cursor) for _ in range(count)]

    # -- field groups ------------------------------------------------------
    def read_tag(self) -> None:
        cursor = self.cursor
        head = cursor.peek_bytes(4)
        if len(head) < 4:
            if PACKAGE_FILE_TAG_BYTES.startswith(head):
                raise truncated(0, 4, len(head), "package file tag")
            raise not_a_package(
                "file is too short to hold a package file tag", length=len(head)
            )
        tag = cursor.read_u32()
        if tag == PACKAGE_FILE_TAG_SWAPPED:
            raise not_a_package(
                "package was written big-endian, which is not supported",
                tag=f"0x{tag:08X}",
            )
        if tag != PACKAGE_FILE_TAG:
            raise not_a_package(
                f"bad package file tag 0x{tag:08X}", tag=f"0x{tag:08X}"
            )

    def read_versions(self) -> None:
        cursor = self.cursor
        legacy = resolve(cursor.read_i32(), Namespace.LEGACY)
        self.values["legacy_ue3_version"] = cursor.read_i32()
        raw_object = cursor.read_i32()
        licensee = cursor.read_i32()
        if raw_object == 0 and licensee == 0:
            raise unversioned_asset(licensee)
        obj = resolve(raw_object, Namespace.OBJECT)
        self.versions = FileVersions(legacy=legacy, object=obj, licensee=licensee)
        self._log.debug(
            "versions: legacy=%d object=%d (%s) licensee=%d",
            legacy,
            obj,
            obj.name,
            licensee,
        )

    def read_custom_versions(self) -> None:
        assert self.versions is not None
        seen: Set[UUID] = set()

        def read_entry(cursor: BinaryCursor) -> CustomVersionEntry:
            key = cursor.read_guid()
            version = cursor.read_i32()
            if key in seen:
                raise malformed(
                    f"duplicate custom version key {key}", key=str(key)
                )
            seen.add(key)
            resolved = None
            if key in CUSTOM_VERSION_SUBSYSTEMS:
                resolved = resolve(version, Namespace.CUSTOM, key)
            return CustomVersionEntry(key, version, resolved)

        entries = self._read_inline(
            "custom version", read_entry, CUSTOM_VERSION_SIZE
        )
        self.versions = replace(self.versions, custom=tuple(entries))
        self._log.debug("custom versions: %d", len(entries))

    def read_package(self) -> None:
        assert self.versions is not None
        cursor = self.cursor
        self.values["total_header_size"] = cursor.read_i32()
        self.values["folder_name"] = cursor.read_length_prefixed_string()
        flags = cursor.read_u32()
        self.values["package_flags"] = flags
        self.versions = replace(
            self.versions,
            filter_editor_only=bool(flags & PackageFlags.FILTER_EDITOR_ONLY),
        )

    def read_names(self) -> None:
        self.values["names"] = self._read_descriptor()
        if self._gated("localization_id"):
            self.values["localization_id"] = (
                self.cursor.read_length_prefixed_string()
            )

    def read_text(self) -> None:
        if self._gated("gatherable_text_data"):
            self.values["gatherable_text_data"] = self._read_descriptor()

    def read_objects(self) -> None:
        self.values["exports"] = self._read_descriptor()
        self.values["imports"] = self._read_descriptor()
        self.values["depends_offset"] = self.cursor.read_i32()

    def read_references(self) -> None:
        cursor = self.cursor
        if self._gated("soft_package_references"):
            self.values["soft_package_references"] = self._read_descriptor()
        if self._gated("searchable_names_offset"):
            self.values["searchable_names_offset"] = cursor.read_i32()
        self.values["thumbnail_table_offset"] = cursor.read_i32()

    def read_guids(self) -> None:
        cursor = self.cursor
        package_guid = cursor.read_guid()
        self.values["package_guid"] = package_guid
        if self._gated("persistent_guid"):
            self.values["persistent_guid"] = cursor.read_guid()
        else:
            self.values["persistent_guid"] = package_guid
        if self._gated("owner_persistent_guid"):
            self.values["owner_persistent_guid"] = cursor.read_guid()

    def read_generations(self) -> None:
        def read_generation(cursor: BinaryCursor) -> GenerationInfo:
            return GenerationInfo(cursor.read_i32(), cursor.read_i32())

        self.values["generations"] = tuple(
            self._read_inline("generation", read_generation, GENERATION_INFO_SIZE)
        )

    def _read_engine_version(self) -> EngineVersion:
        cursor = self.cursor
        major = cursor.read_u16()
        minor = cursor.read_u16()
        patch = cursor.read_u16()
        changelist = cursor.read_u32()
        branch = cursor.read_length_prefixed_string()
        return EngineVersion(major, minor, patch, changelist, branch)

    def read_engine_versions(self) -> None:
        if self._gated("saved_by_engine_version"):
            saved_by = self._read_engine_version()
        elif self._gated("engine_changelist"):
            saved_by = EngineVersion.from_changelist(self.cursor.read_u32())
        else:
            raise malformed("no engine version field for this object version")
        self.values["engine_changelist"] = saved_by.changelist
        self.values["saved_by_engine_version"] = saved_by
        if self._gated("compatible_with_engine_version"):
            self.values["compatible_with_engine_version"] = (
                self._read_engine_version()
            )
        else:
            self.values["compatible_with_engine_version"] = saved_by

    def read_compression(self) -> None:
        self.values["compression_flags"] = self.cursor.read_u32()

        def read_chunk(cursor: BinaryCursor) -> CompressedChunk:
            return CompressedChunk(
                cursor.read_i32(),
                cursor.read_i32(),
                cursor.read_i32(),
                cursor.read_i32(),
            )

        chunks = self._read_inline(
            "compressed chunk", read_chunk, COMPRESSED_CHUNK_SIZE
        )
        if chunks:
            self._log.debug("compressed chunks: %d (metadata only)", len(chunks))
        self.values["compressed_chunks"] = tuple(chunks)

    def read_cooking(self) -> None:
        cursor = self.cursor
        self.values["package_source"] = cursor.read_u32()
        self.values["additional_packages_to_cook"] = tuple(
            self._read_inline(
                "additional package", BinaryCursor.read_length_prefixed_string
            )
        )
        if self._gated("texture_allocations"):
            self.values["texture_allocations"] = cursor.read_i32()

    def read_trailer(self) -> None:
        cursor = self.cursor
        self.values["asset_registry_data_offset"] = cursor.read_i32()
        self.values["bulk_data_start_offset"] = cursor.read_i64()
        if self._gated("world_tile_info_data_offset"):
            self.values["world_tile_info_data_offset"] = cursor.read_i32()
        if self._gated("chunk_ids"):
            self.values["chunk_ids"] = tuple(
                self._read_inline("chunk id", BinaryCursor.read_i32, 4)
            )
        elif self._gated("chunk_id"):
            chunk_id = cursor.read_i32()
            if chunk_id != CHUNK_ID_NONE:
                self.values["chunk_ids"] = (chunk_id,)
        if self._gated("preload_dependencies"):
            descriptor = self._read_descriptor()
            if descriptor.count == PRELOAD_DEPENDENCIES_NOT_RECORDED:
                descriptor = TableDescriptor(0, descriptor.offset)
            self.values["preload_dependencies"] = descriptor

    GROUPS = (
        "read_tag",
        "read_versions",
        "read_custom_versions",
        "read_package",
        "read_names",
        "read_text",
        "read_objects",
        "read_references",
        "read_guids",
        "read_generations",
        "read_engine_versions",
        "read_compression",
        "read_cooking",
        "read_trailer",
    )

    def run(self) -> AssetHeader:
        for group in self.GROUPS:
            getattr(self, group)()
        assert self.versions is not None
        header = AssetHeader(
            versions=self.versions,
            present=frozenset(self.present),
            **self.values,
        )
        self._log.debug(
            "parsed summary: %d names, %d imports, %d exports, ends at %d",
            header.names.count,
            header.imports.count,
            header.exports.count,
            self.cursor.position,
        )
        return header


def parse_header(source: ByteSource) -> AssetHeader:
    """Parse the package file summary at the start of ``source``.

    Raises one of the ``AssetError`` kinds; a partial header is never
    returned.
    """
    return _SummaryReader(BinaryCursor(source)).run()


def decode_table(
    source: ByteSource,
    header: AssetHeader,
    field: str,
    element_decoder: Optional[ElementDecoder] = None,
) -> List[Any]:
    """Decode the elements of one of ``TABLE_FIELDS``.

    Without ``element_decoder`` the built-in decoder for ``field`` is chosen
    from the header's versions. ``source`` must be the bytes ``header`` was
    parsed from.
    """
    descriptor = header.table(field)
    if element_decoder is None:
        element_decoder = default_decoder(field, header.versions)
    return decode(BinaryCursor(source), descriptor, element_decoder)
