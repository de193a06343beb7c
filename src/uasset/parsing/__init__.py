from .constants import PACKAGE_FILE_TAG, PackageFlags
from .cursor import BinaryCursor
from .errors import (
    AssetError,
    MalformedHeader,
    NotAPackageFile,
    OffsetOutOfRange,
    TruncatedData,
    UnsupportedVersion,
    UnversionedAsset,
)
from .names import find_name, package_imports, resolve_name
from .summary import AssetHeader, EngineVersion, decode_table, parse_header
from .tables import NameEntry, NameReference, ObjectExport, ObjectImport, TableDescriptor, decode
from .versions import (
    FileVersions,
    Namespace,
    ObjectVersion,
    custom_version_of,
    is_present,
    resolve,
    threshold,
)

__all__ = [
    "PACKAGE_FILE_TAG",
    "PackageFlags",
    "BinaryCursor",
    "AssetError",
    "MalformedHeader",
    "NotAPackageFile",
    "OffsetOutOfRange",
    "TruncatedData",
    "UnsupportedVersion",
    "UnversionedAsset",
    "find_name",
    "package_imports",
    "resolve_name",
    "AssetHeader",
    "EngineVersion",
    "decode_table",
    "parse_header",
    "NameEntry",
    "NameReference",
    "ObjectExport",
    "ObjectImport",
    "TableDescriptor",
    "decode",
    "FileVersions",
    "Namespace",
    "ObjectVersion",
    "custom_version_of",
    "is_present",
    "resolve",
    "threshold",
]
