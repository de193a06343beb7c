"""Version-aware reader for packaged .uasset/.umap file summaries."""

from .api import AssetPackage, open_bytes, open_package, parse_file
from .parsing import (
    AssetError,
    AssetHeader,
    BinaryCursor,
    MalformedHeader,
    NotAPackageFile,
    OffsetOutOfRange,
    TruncatedData,
    UnsupportedVersion,
    UnversionedAsset,
    decode_table,
    parse_header,
)

__version__ = "0.1.0"

__all__ = [
    "AssetPackage",
    "open_bytes",
    "open_package",
    "parse_file",
    "AssetError",
    "AssetHeader",
    "BinaryCursor",
    "MalformedHeader",
    "NotAPackageFile",
    "OffsetOutOfRange",
    "TruncatedData",
    "UnsupportedVersion",
    "UnversionedAsset",
    "decode_table",
    "parse_header",
    "__version__",
]
