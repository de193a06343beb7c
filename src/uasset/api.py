"""High-level API over the package summary parser.

``parse_file`` returns just the summary. ``open_package`` keeps the file's
bytes alongside it so tables can be decoded later; each table is decoded at
most once per package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .logging import get_logger
from .parsing.cursor import ByteSource
from .parsing.names import find_name, is_code_package, package_imports, resolve_name
from .parsing.summary import AssetHeader, decode_table, parse_header
from .parsing.tables import (
    ElementDecoder,
    NameEntry,
    NameReference,
    ObjectExport,
    ObjectImport,
)

__all__ = [
    "AssetPackage",
    "parse_file",
    "open_package",
    "open_bytes",
]


@dataclass(slots=True)
class AssetPackage:
    header: AssetHeader
    data: ByteSource
    path: Optional[Path] = None
    _tables: Dict[str, List[Any]] = field(default_factory=dict, repr=False)

    def table(self, name: str) -> List[Any]:
        """Elements of a table, decoded with the built-in decoder."""
        if name not in self._tables:
            get_logger().debug("decoding %s table of %s", name, self.display_name)
            self._tables[name] = decode_table(self.data, self.header, name)
        return self._tables[name]

    def decode(self, name: str, element_decoder: ElementDecoder) -> List[Any]:
        """Decode a table with a caller-supplied element decoder (uncached)."""
        return decode_table(self.data, self.header, name, element_decoder)

    @property
    def display_name(self) -> str:
        return str(self.path) if self.path is not None else "<memory>"

    @property
    def names(self) -> List[NameEntry]:
        return self.table("names")

    @property
    def imports(self) -> List[ObjectImport]:
        return self.table("imports")

    @property
    def exports(self) -> List[ObjectExport]:
        return self.table("exports")

    def find_name(self, name: str) -> Optional[NameReference]:
        return find_name(self.names, name)

    def resolve_name(self, ref: NameReference) -> str:
        return resolve_name(self.names, ref)

    def package_imports(self, skip_code_imports: bool = False) -> Iterator[str]:
        for package in package_imports(self.names, self.imports):
            if skip_code_imports and is_code_package(package):
                continue
            yield package

    def to_dict(self) -> Dict[str, Any]:
        data = self.header.to_dict()
        if self.path is not None:
            data = {"path": str(self.path), **data}
        return data


def parse_file(path: str | Path) -> AssetHeader:
    return parse_header(Path(path).read_bytes())


def open_bytes(data: ByteSource, path: Optional[Path] = None) -> AssetPackage:
    return AssetPackage(header=parse_header(data), data=data, path=path)


def open_package(path: str | Path) -> AssetPackage:
    p = Path(path)
    return open_bytes(p.read_bytes(), p)
