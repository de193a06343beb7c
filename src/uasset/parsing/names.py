"""Name table lookups and import iteration."""

from __future__ import annotations

from typing import Iterator, Optional, Sequence, Union

from .constants import CORE_UOBJECT_PACKAGE, PACKAGE_CLASS_NAME, SCRIPT_PACKAGE_PREFIX
from .errors import malformed
from .tables import NameEntry, NameReference, ObjectImport

__all__ = [
    "find_name",
    "resolve_name",
    "package_imports",
    "is_code_package",
]

NameSource = Sequence[Union[NameEntry, str]]


def _text(entry: Union[NameEntry, str]) -> str:
    return entry.name if isinstance(entry, NameEntry) else entry


def find_name(names: NameSource, name: str) -> Optional[NameReference]:
    """Return a reference to ``name`` in the name table, ignoring case."""
    wanted = name.lower()
    for index, entry in enumerate(names):
        text = _text(entry)
        if text == name or text.lower() == wanted:
            return NameReference(index, 0)
    return None


def resolve_name(names: NameSource, ref: NameReference) -> str:
    if ref.index < 0 or ref.index >= len(names):
        raise malformed(
            f"name index {ref.index} outside name table of {len(names)}",
            index=ref.index,
            count=len(names),
        )
    text = _text(names[ref.index])
    if ref.number > 0:
        return f"{text}_{ref.number - 1}"
    return text


def is_code_package(package_name: str) -> bool:
    return package_name.startswith(SCRIPT_PACKAGE_PREFIX)


def package_imports(
    names: NameSource, imports: Sequence[ObjectImport]
) -> Iterator[str]:
    """Yield the packages an asset depends on, in import table order."""
    for imp in imports:
        if resolve_name(names, imp.class_name) != PACKAGE_CLASS_NAME:
            continue
        package = resolve_name(names, imp.object_name)
        if package == CORE_UOBJECT_PACKAGE:
            continue
        yield package
