from __future__ import annotations

"""Name table lookups and package import listing."""
import pytest

from uasset.api import open_bytes
from uasset.parsing.errors import MalformedHeader
from uasset.parsing.names import (
    find_name,
    is_code_package,
    package_imports,
    resolve_name,
)
from uasset.parsing.tables import NameEntry, NameReference, ObjectImport

from asset_builder import AssetBuilder, ImportSpec, package_import

NAMES = [
    NameEntry("/Script/CoreUObject"),
    NameEntry("Package"),
    NameEntry("/Game/Props/SM_Crate"),
    NameEntry("StaticMesh"),
    NameEntry("SM_Crate"),
    NameEntry("/Script/CoreUObject"),
]


def _ref(index: int, number: int = 0) -> NameReference:
    return NameReference(index, number)


def test_find_name_ignores_case():  # noqa: N802
    assert find_name(NAMES, "staticmesh") == _ref(3)
    assert find_name(NAMES, "SM_CRATE") == _ref(4)
    assert find_name(NAMES, "Missing") is None


def test_find_name_returns_first_match():  # noqa: N802
    assert find_name(NAMES, "/script/coreuobject") == _ref(0)


def test_find_name_accepts_plain_strings():  # noqa: N802
    assert find_name(["None", "Foo"], "foo") == _ref(1)


def test_resolve_name_instance_numbers():  # noqa: N802
    assert resolve_name(NAMES, _ref(4)) == "SM_Crate"
    assert resolve_name(NAMES, _ref(4, 1)) == "SM_Crate_0"
    assert resolve_name(NAMES, _ref(4, 12)) == "SM_Crate_11"


@pytest.mark.parametrize("index", [-1, 6, 100])
def test_resolve_name_out_of_range(index: int):  # noqa: N802
    with pytest.raises(MalformedHeader) as exc:
        resolve_name(NAMES, _ref(index))
    assert exc.value.context["count"] == len(NAMES)


def test_is_code_package():  # noqa: N802
    assert is_code_package("/Script/Engine")
    assert not is_code_package("/Game/Script/Engine")


def test_package_imports_filters_class_and_core():  # noqa: N802
    imports = [
        ObjectImport(_ref(0), _ref(1), 0, _ref(2)),
        ObjectImport(_ref(0), _ref(1), 0, _ref(5)),
        ObjectImport(_ref(0), _ref(3), -1, _ref(4)),
    ]
    assert list(package_imports(NAMES, imports)) == ["/Game/Props/SM_Crate"]


def test_package_imports_resolve_instance_numbers():  # noqa: N802
    imports = [ObjectImport(_ref(0), _ref(1), 0, _ref(2, 3))]
    assert list(package_imports(NAMES, imports)) == ["/Game/Props/SM_Crate_2"]


def test_package_lookup_helpers():  # noqa: N802
    data = AssetBuilder(
        imports=[
            package_import("/Game/Props/SM_Crate"),
            package_import("/Script/Engine"),
            package_import("/Script/CoreUObject"),
            ImportSpec("/Script/Engine", "StaticMesh", -1, "SM_Crate"),
        ]
    ).build()
    package = open_bytes(data)
    ref = package.find_name("staticmesh")
    assert ref is not None
    assert package.resolve_name(ref) == "StaticMesh"
    assert list(package.package_imports(skip_code_imports=True)) == [
        "/Game/Props/SM_Crate"
    ]
    assert package.display_name == "<memory>"
