from __future__ import annotations

from inspect import Parameter
from typing import Any

import pytest

from factory_di._internal.declarations import PlaceholderArgument
from factory_di._internal.history import ResolutionRecord
from factory_di._internal.resolved import AbsentFactory, BoundFactory, BoundSlot, SingletonFactory
from factory_di._internal.runner import run_factory
from factory_di.exceptions import FactoryDIPlaceholderMissingError

HISTORY = (ResolutionRecord(name="greeter"),)


def _greeter() -> BoundFactory:
    def greet(greeting, name="stranger"):  # type: ignore[no-untyped-def]
        return f"{greeting}, {name}"

    return BoundFactory(
        factory=greet,
        slots=(
            BoundSlot(parameter=Parameter("greeting", Parameter.POSITIONAL_OR_KEYWORD), is_placeholder=True),
            BoundSlot(
                parameter=Parameter("name", Parameter.POSITIONAL_OR_KEYWORD, default="stranger"),
                is_placeholder=True,
            ),
        ),
        placeholders=(
            PlaceholderArgument(name="greeting"),
            PlaceholderArgument(name="name", is_optional=True),
        ),
    )


def test_factory_without_placeholders_is_called_directly() -> None:
    assert run_factory(SingletonFactory(value=42), None, "answer", ()) == 42
    assert run_factory(AbsentFactory(), {"common": {"x": 1}}, "missing", ()) is None


def test_item_args_fill_placeholders() -> None:
    result = run_factory(_greeter(), {"greeter": {"greeting": "hi", "name": "bob"}}, "greeter", HISTORY)

    assert result == "hi, bob"


def test_common_args_fill_placeholders() -> None:
    result = run_factory(_greeter(), {"common": {"greeting": "hey"}}, "greeter", HISTORY)

    assert result == "hey, stranger"


def test_item_args_win_over_common_args() -> None:
    resolve_args = {
        "common": {"greeting": "hey", "name": "common"},
        "greeter": {"name": "specific"},
    }

    assert run_factory(_greeter(), resolve_args, "greeter", HISTORY) == "hey, specific"


def test_args_for_other_items_are_ignored() -> None:
    with pytest.raises(FactoryDIPlaceholderMissingError) as exc_info:
        run_factory(_greeter(), {"other": {"greeting": "hi"}}, "greeter", HISTORY)

    assert exc_info.value.message == (
        "FactoryDI Run Error: Could not resolve instance of 'greeter' because "
        "it requires a value for the non-injected 'greeting' argument."
    )
    assert exc_info.value.history == HISTORY


@pytest.mark.parametrize("resolve_args", [None, "not-a-mapping", {"common": 42}, {"greeter": None}])
def test_malformed_args_are_treated_as_empty(resolve_args: Any) -> None:
    with pytest.raises(FactoryDIPlaceholderMissingError):
        run_factory(_greeter(), resolve_args, "greeter", HISTORY)


def test_explicit_none_counts_as_supplied() -> None:
    result = run_factory(_greeter(), {"greeter": {"greeting": None, "name": None}}, "greeter", HISTORY)

    assert result == "None, None"
