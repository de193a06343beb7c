"""Error definitions for uasset parsing.

Every failure surfaced by the cursor, the table decoder, the version model and
the header parser is one of the kinds below. None of them is fatal to the
process: batch callers report the error and continue with the next file.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_NOT_A_PACKAGE = "E_NOT_A_PACKAGE"
E_UNSUPPORTED_VERSION = "E_UNSUPPORTED_VERSION"
E_UNVERSIONED = "E_UNVERSIONED"
E_TRUNCATED = "E_TRUNCATED"
E_OFFSET_RANGE = "E_OFFSET_RANGE"
E_MALFORMED = "E_MALFORMED"


@dataclass
class AssetError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class NotAPackageFile(AssetError):
    pass


class UnsupportedVersion(AssetError):
    @property
    def raw(self) -> int:
        """The version integer exactly as it was read from the file."""
        return (self.context or {}).get("raw", 0)

    @property
    def namespace(self) -> str:
        return (self.context or {}).get("namespace", "")


class UnversionedAsset(UnsupportedVersion):
    pass


class TruncatedData(AssetError):
    pass


class OffsetOutOfRange(AssetError):
    pass


class MalformedHeader(AssetError):
    pass


def not_a_package(message: str, **context: Any) -> NotAPackageFile:
    return NotAPackageFile(
        code=E_NOT_A_PACKAGE, message=message, context=context or None
    )


def unsupported_version(
    raw: int, namespace: str, message: str, **context: Any
) -> UnsupportedVersion:
    return UnsupportedVersion(
        code=E_UNSUPPORTED_VERSION,
        message=message,
        context={"raw": raw, "namespace": namespace, **context},
    )


def unversioned_asset(licensee_version: int) -> UnversionedAsset:
    return UnversionedAsset(
        code=E_UNVERSIONED,
        message="asset saved without asset version information",
        context={
            "raw": 0,
            "namespace": "object",
            "licensee_version": licensee_version,
        },
    )


def truncated(
    position: int, needed: int, available: int, label: str = ""
) -> TruncatedData:
    what = f" for {label}" if label else ""
    return TruncatedData(
        code=E_TRUNCATED,
        message=f"need {needed} bytes{what} at {position}, {available} left",
        context={"position": position, "needed": needed, "available": available},
    )


def offset_out_of_range(offset: int, length: int) -> OffsetOutOfRange:
    return OffsetOutOfRange(
        code=E_OFFSET_RANGE,
        message=f"offset {offset} outside source of {length} bytes",
        context={"offset": offset, "length": length},
    )


def malformed(message: str, **context: Any) -> MalformedHeader:
    return MalformedHeader(
        code=E_MALFORMED, message=message, context=context or None
    )


__all__ = [
    "AssetError",
    "NotAPackageFile",
    "UnsupportedVersion",
    "UnversionedAsset",
    "TruncatedData",
    "OffsetOutOfRange",
    "MalformedHeader",
    "not_a_package",
    "unsupported_version",
    "unversioned_asset",
    "truncated",
    "offset_out_of_range",
    "malformed",
    "E_NOT_A_PACKAGE",
    "E_UNSUPPORTED_VERSION",
    "E_UNVERSIONED",
    "E_TRUNCATED",
    "E_OFFSET_RANGE",
    "E_MALFORMED",
]
