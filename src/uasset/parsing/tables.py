"""Out-of-line tables referenced from the summary by ``(count, offset)``.

The summary only stores descriptors; elements are decoded on request with
``decode``. Element layouts depend on the file's versions, so the built-in
decoders are produced per file by the factories in ``DEFAULT_DECODERS``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, TypeVar, Union
from uuid import UUID

from .cursor import BinaryCursor
from .errors import malformed
from .versions import FileVersions, is_present

__all__ = [
    "TableDescriptor",
    "ElementDecoder",
    "NameEntry",
    "NameReference",
    "ObjectImport",
    "ObjectExport",
    "decode",
    "read_name_reference",
    "name_entry_decoder",
    "import_decoder",
    "export_decoder",
    "soft_package_reference_decoder",
    "depends_decoder",
    "preload_dependency_decoder",
    "DEFAULT_DECODERS",
    "default_decoder",
]

T = TypeVar("T")
ElementDecoder = Callable[[BinaryCursor], T]


@dataclass(slots=True, frozen=True)
class TableDescriptor:
    count: int
    offset: int

    def to_dict(self) -> Dict[str, int]:
        return {"count": self.count, "offset": self.offset}


EMPTY_TABLE = TableDescriptor(0, 0)


def decode(
    cursor: BinaryCursor,
    descriptor: TableDescriptor,
    element_decoder: ElementDecoder,
) -> List[T]:
    """Decode ``descriptor.count`` elements starting at ``descriptor.offset``.

    The cursor is back at its original position when this returns or raises.
    An empty table is returned without touching the cursor, so its offset is
    never validated.
    """
    if descriptor.count < 0:
        raise malformed(
            f"negative table count {descriptor.count}",
            count=descriptor.count,
            offset=descriptor.offset,
        )
    if descriptor.count == 0:
        return []
    mark = cursor.save_position()
    try:
        cursor.seek(descriptor.offset)
        return [element_decoder(cursor) for _ in range(descriptor.count)]
    finally:
        cursor.restore_position(mark)


@dataclass(slots=True, frozen=True)
class NameEntry:
    name: str
    non_case_preserving_hash: Optional[int] = None
    case_preserving_hash: Optional[int] = None


@dataclass(slots=True, frozen=True)
class NameReference:
    """Index into the name table plus an instance number.

    A number of zero means the plain name; ``n > 0`` means ``name_{n-1}``.
    """

    index: int
    number: int = 0


@dataclass(slots=True, frozen=True)
class ObjectImport:
    class_package: NameReference
    class_name: NameReference
    outer_index: int
    object_name: NameReference
    package_name: Optional[NameReference] = None


@dataclass(slots=True, frozen=True)
class ObjectExport:
    class_index: int
    super_index: int
    template_index: int
    outer_index: int
    object_name: NameReference
    object_flags: int
    serial_size: int
    serial_offset: int
    forced_export: bool
    not_for_client: bool
    not_for_server: bool
    package_guid: UUID
    package_flags: int
    not_always_loaded_for_editor_game: bool = True
    is_asset: bool = False
    first_export_dependency: int = -1
    serialization_before_serialization_dependencies: int = 0
    create_before_serialization_dependencies: int = 0
    serialization_before_create_dependencies: int = 0
    create_before_create_dependencies: int = 0


def read_name_reference(cursor: BinaryCursor) -> NameReference:
    index = cursor.read_i32()
    number = cursor.read_i32()
    return NameReference(index, number)


def name_entry_decoder(versions: FileVersions) -> ElementDecoder:
    with_hashes = is_present("name_hashes", versions)

    def read(cursor: BinaryCursor) -> NameEntry:
        name = cursor.read_length_prefixed_string()
        if not with_hashes:
            return NameEntry(name)
        non_case = cursor.read_u16()
        case = cursor.read_u16()
        return NameEntry(name, non_case, case)

    return read


def import_decoder(versions: FileVersions) -> ElementDecoder:
    with_package_name = is_present("import_package_name", versions)

    def read(cursor: BinaryCursor) -> ObjectImport:
        class_package = read_name_reference(cursor)
        class_name = read_name_reference(cursor)
        outer_index = cursor.read_i32()
        object_name = read_name_reference(cursor)
        package_name = read_name_reference(cursor) if with_package_name else None
        return ObjectImport(
            class_package, class_name, outer_index, object_name, package_name
        )

    return read


def export_decoder(versions: FileVersions) -> ElementDecoder:
    with_template = is_present("export_template_index", versions)
    wide_serial = is_present("export_64bit_serial_sizes", versions)
    with_editor_game = is_present(
        "export_not_always_loaded_for_editor_game", versions
    )
    with_is_asset = is_present("export_is_asset", versions)
    with_preload = is_present("export_preload_dependencies", versions)

    def read(cursor: BinaryCursor) -> ObjectExport:
        class_index = cursor.read_i32()
        super_index = cursor.read_i32()
        template_index = cursor.read_i32() if with_template else 0
        outer_index = cursor.read_i32()
        object_name = read_name_reference(cursor)
        object_flags = cursor.read_u32()
        if wide_serial:
            serial_size = cursor.read_i64()
            serial_offset = cursor.read_i64()
        else:
            serial_size = cursor.read_i32()
            serial_offset = cursor.read_i32()
        forced_export = cursor.read_bool()
        not_for_client = cursor.read_bool()
        not_for_server = cursor.read_bool()
        package_guid = cursor.read_guid()
        package_flags = cursor.read_u32()
        extra = {}
        if with_editor_game:
            extra["not_always_loaded_for_editor_game"] = cursor.read_bool()
        if with_is_asset:
            extra["is_asset"] = cursor.read_bool()
        if with_preload:
            extra["first_export_dependency"] = cursor.read_i32()
            extra["serialization_before_serialization_dependencies"] = (
                cursor.read_i32()
            )
            extra["create_before_serialization_dependencies"] = cursor.read_i32()
            extra["serialization_before_create_dependencies"] = cursor.read_i32()
            extra["create_before_create_dependencies"] = cursor.read_i32()
        return ObjectExport(
            class_index=class_index,
            super_index=super_index,
            template_index=template_index,
            outer_index=outer_index,
            object_name=object_name,
            object_flags=object_flags,
            serial_size=serial_size,
            serial_offset=serial_offset,
            forced_export=forced_export,
            not_for_client=not_for_client,
            not_for_server=not_for_server,
            package_guid=package_guid,
            package_flags=package_flags,
            **extra,
        )

    return read


def soft_package_reference_decoder(versions: FileVersions) -> ElementDecoder:
    """Older files store full object paths, newer ones only package names."""
    if is_present("soft_package_reference_names", versions):
        return read_name_reference

    def read(cursor: BinaryCursor) -> Union[str, NameReference]:
        return cursor.read_length_prefixed_string()

    return read


def depends_decoder(versions: FileVersions) -> ElementDecoder:
    def read(cursor: BinaryCursor) -> List[int]:
        count = cursor.read_i32()
        if count < 0:
            raise malformed(
                f"negative dependency count {count}", position=cursor.position
            )
        return [cursor.read_i32() for _ in range(count)]

    return read


def preload_dependency_decoder(versions: FileVersions) -> ElementDecoder:
    def read(cursor: BinaryCursor) -> int:
        return cursor.read_i32()

    return read


DEFAULT_DECODERS: Dict[str, Callable[[FileVersions], ElementDecoder]] = {
    "names": name_entry_decoder,
    "imports": import_decoder,
    "exports": export_decoder,
    "soft_package_references": soft_package_reference_decoder,
    "depends_map": depends_decoder,
    "preload_dependencies": preload_dependency_decoder,
}


def default_decoder(field: str, versions: FileVersions) -> ElementDecoder:
    factory = DEFAULT_DECODERS.get(field)
    if factory is None:
        raise ValueError(f"no built-in element decoder for table {field!r}")
    return factory(versions)
