from __future__ import annotations

import inspect
from typing import Any

import pytest

import factory_di


def _undocumented_public_methods(cls: type[Any]) -> list[str]:
    return sorted(
        name
        for name, member in vars(cls).items()
        if not name.startswith("_") and inspect.isfunction(member) and not inspect.getdoc(member)
    )


@pytest.mark.parametrize("export_name", sorted(factory_di.__all__))
def test_exported_objects_and_their_methods_have_docstrings(export_name: str) -> None:
    exported = getattr(factory_di, export_name)

    assert inspect.getdoc(exported), f"{export_name} has no docstring"
    if inspect.isclass(exported):
        assert _undocumented_public_methods(exported) == [], f"{export_name} has undocumented methods"
