from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from factory_di._internal.history import ResolutionHistory
from factory_di._internal.resolved import ABSENT, ResolvedFactory
from factory_di.exceptions import FactoryDIPlaceholderMissingError

COMMON_ARGS_KEY: Final = "common"
"""Resolve-args key whose values are offered to every factory."""


def run_factory(
    factory: ResolvedFactory,
    resolve_args: Mapping[str, Mapping[str, Any]] | None,
    item_name: str,
    history: ResolutionHistory,
) -> Any:
    """Invoke a resolved factory, filling its placeholders from resolve args.

    Placeholder values are looked up in ``resolve_args[item_name]`` first and
    then in ``resolve_args["common"]``.

    Args:
        factory: Resolved factory to invoke.
        resolve_args: Placeholder values keyed by item name or ``"common"``.
        item_name: Name the factory was resolved under.
        history: Resolution history reported with a missing placeholder.

    Raises:
        FactoryDIPlaceholderMissingError: A required placeholder has no value.

    """
    placeholder_args = factory.placeholder_args
    if not placeholder_args:
        return factory()

    usable_args = {
        **_args_bag(resolve_args, COMMON_ARGS_KEY),
        **_args_bag(resolve_args, item_name),
    }

    placeholder_values: list[Any] = []
    for placeholder in placeholder_args:
        if placeholder.name in usable_args:
            placeholder_values.append(usable_args[placeholder.name])
        elif placeholder.is_optional:
            placeholder_values.append(ABSENT)
        else:
            msg = (
                f"FactoryDI Run Error: Could not resolve instance of '{item_name}' because "
                f"it requires a value for the non-injected '{placeholder.name}' argument."
            )
            raise FactoryDIPlaceholderMissingError(msg, history)

    return factory(*placeholder_values)


def _args_bag(resolve_args: Any, key: str) -> Mapping[str, Any]:
    if not isinstance(resolve_args, Mapping):
        return {}
    bag = resolve_args.get(key)
    if not isinstance(bag, Mapping):
        return {}
    return bag
