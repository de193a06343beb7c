"""Binary layout constants for the package file summary."""

from __future__ import annotations

from enum import IntFlag

PACKAGE_FILE_TAG = 0x9E2A83C1
# The tag as it reads on a little-endian host when the file was written
# big-endian.
PACKAGE_FILE_TAG_SWAPPED = 0xC1832A9E
PACKAGE_FILE_TAG_BYTES = PACKAGE_FILE_TAG.to_bytes(4, "little")

GUID_SIZE = 16
CUSTOM_VERSION_SIZE = GUID_SIZE + 4
GENERATION_INFO_SIZE = 8
COMPRESSED_CHUNK_SIZE = 16

# Written in place of a preload dependency count by editor saves.
PRELOAD_DEPENDENCIES_NOT_RECORDED = -1
# Written in place of a single chunk id when the package was not chunked.
CHUNK_ID_NONE = -1

CORE_UOBJECT_PACKAGE = "/Script/CoreUObject"
PACKAGE_CLASS_NAME = "Package"
SCRIPT_PACKAGE_PREFIX = "/Script/"

ASSET_EXTENSIONS = (".uasset", ".umap")


class PackageFlags(IntFlag):
    """Package flags stored in the summary (``EPackageFlags``)."""

    NONE = 0x00000000
    NEWLY_CREATED = 0x00000001
    CLIENT_OPTIONAL = 0x00000002
    SERVER_SIDE_ONLY = 0x00000004
    COMPILED_IN = 0x00000010
    FOR_DIFFING = 0x00000020
    EDITOR_ONLY = 0x00000040
    DEVELOPER = 0x00000080
    UNCOOKED_ONLY = 0x00000100
    COOKED = 0x00000200
    CONTAINS_NO_ASSET = 0x00000400
    UNVERSIONED_PROPERTIES = 0x00002000
    CONTAINS_MAP_DATA = 0x00004000
    COMPILING = 0x00010000
    CONTAINS_MAP = 0x00020000
    REQUIRES_LOCALIZATION_GATHER = 0x00040000
    PLAY_IN_EDITOR = 0x00100000
    CONTAINS_SCRIPT = 0x00200000
    DISALLOW_EXPORT = 0x00400000
    DYNAMIC_IMPORTS = 0x10000000
    RUNTIME_GENERATED = 0x20000000
    RELOADING_FOR_COOKER = 0x40000000
    FILTER_EDITOR_ONLY = 0x80000000


__all__ = [
    "PACKAGE_FILE_TAG",
    "PACKAGE_FILE_TAG_SWAPPED",
    "PACKAGE_FILE_TAG_BYTES",
    "GUID_SIZE",
    "CUSTOM_VERSION_SIZE",
    "GENERATION_INFO_SIZE",
    "COMPRESSED_CHUNK_SIZE",
    "PRELOAD_DEPENDENCIES_NOT_RECORDED",
    "CHUNK_ID_NONE",
    "CORE_UOBJECT_PACKAGE",
    "PACKAGE_CLASS_NAME",
    "SCRIPT_PACKAGE_PREFIX",
    "ASSET_EXTENSIONS",
    "PackageFlags",
]
