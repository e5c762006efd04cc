from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from factory_di._internal.history import ResolutionHistory, add_to_history
from factory_di._internal.resolved import (
    ABSENT,
    AbsentFactory,
    BoundFactory,
    BoundSlot,
    ResolvedFactory,
    SingletonFactory,
)
from factory_di._internal.runner import run_factory
from factory_di._internal.state import DecoratedFactory, InjectorState
from factory_di.exceptions import FactoryDICyclicDependencyError, FactoryDINotRegisteredError

logger = logging.getLogger(__name__)

ResolveArgs = Mapping[str, Mapping[str, Any]]


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of resolving one item.

    ``state`` is the snapshot callers must adopt afterwards; it carries any
    singletons produced along the way.
    """

    resolved_factory: ResolvedFactory
    history: ResolutionHistory
    state: InjectorState


def resolve_factory(
    state: InjectorState,
    item_name: str,
    resolve_args: ResolveArgs | None = None,
    history: ResolutionHistory = (),
    *,
    is_optional: bool = False,
) -> Resolution:
    """Resolve ``item_name`` into a factory with all dependencies bound.

    Args:
        state: Snapshot to resolve against. Never modified.
        item_name: Registry name to resolve.
        resolve_args: Placeholder values keyed by item name or ``"common"``.
            Used when dependencies or singletons have to be invoked during
            resolution.
        history: Records of the ancestors on the current resolution path.
        is_optional: Return an absent factory instead of raising when the item
            is not registered.

    Raises:
        FactoryDINotRegisteredError: A required item is not registered.
        FactoryDICyclicDependencyError: A dependency is already on the path.
        FactoryDIPlaceholderMissingError: A dependency or singleton that had to
            be invoked is missing a required placeholder value.

    """
    if item_name in state.singletons:
        resolved_factory = _singleton_factory(state, item_name)
        return Resolution(
            resolved_factory=resolved_factory,
            history=add_to_history(history, item_name, resolved_factory),
            state=state,
        )

    registered_factory = state.registered.get(item_name)
    if registered_factory is None:
        if is_optional:
            absent_factory = AbsentFactory()
            return Resolution(
                resolved_factory=absent_factory,
                history=add_to_history(history, item_name, absent_factory),
                state=state,
            )

        msg = f"FactoryDI Resolve Error: The item '{item_name}' has not been registered."
        raise FactoryDINotRegisteredError(msg, add_to_history(history, item_name))

    resolve_history = add_to_history(history, item_name, registered_factory)
    bound_factory, updated_state = _bind_dependencies(
        state,
        registered_factory,
        item_name,
        resolve_args,
        resolve_history,
    )

    if bound_factory.is_singleton:
        singleton_value = run_factory(bound_factory, resolve_args, item_name, resolve_history)
        logger.debug("Materialized singleton '%s'", item_name)
        singleton_state = updated_state.with_singleton(item_name, singleton_value)
        return Resolution(
            resolved_factory=_singleton_factory(singleton_state, item_name),
            history=resolve_history,
            state=singleton_state,
        )

    return Resolution(
        resolved_factory=bound_factory,
        history=resolve_history,
        state=updated_state,
    )


def _bind_dependencies(
    state: InjectorState,
    registered_factory: DecoratedFactory,
    item_name: str,
    resolve_args: ResolveArgs | None,
    resolve_history: ResolutionHistory,
) -> tuple[BoundFactory, InjectorState]:
    """Resolve every non-placeholder request and bind the results in order."""
    updated_state = state
    slots: list[BoundSlot] = []

    for request, parameter in zip(
        registered_factory.injection_requests,
        registered_factory.parameters,
        strict=True,
    ):
        if request.is_placeholder:
            slots.append(BoundSlot(parameter=parameter, is_placeholder=True))
            continue

        dependency_name = request.name
        is_cyclic = dependency_name == item_name or any(
            ancestor.name == dependency_name for ancestor in resolve_history
        )
        if is_cyclic and dependency_name not in updated_state.singletons:
            msg = (
                f"FactoryDI Resolve Error: Cyclic dependency '{dependency_name}' "
                "found while resolving dependency path."
            )
            raise FactoryDICyclicDependencyError(msg, add_to_history(resolve_history, dependency_name))

        dependency = resolve_factory(
            updated_state,
            dependency_name,
            resolve_args,
            resolve_history,
            is_optional=request.is_optional,
        )
        updated_state = dependency.state
        resolved_dependency = dependency.resolved_factory

        if request.resolve_as_factory:
            value = resolved_dependency.as_callable()
        elif resolved_dependency.is_not_found:
            value = ABSENT
        else:
            value = run_factory(resolved_dependency, resolve_args, dependency_name, resolve_history)

        slots.append(BoundSlot(parameter=parameter, value=value))

    bound_factory = BoundFactory(
        factory=registered_factory.factory,
        slots=tuple(slots),
        placeholders=registered_factory.placeholder_args,
        filename=registered_factory.filename,
        register_source=registered_factory.register_source,
        is_singleton=registered_factory.is_singleton,
    )
    return bound_factory, updated_state


def _singleton_factory(state: InjectorState, item_name: str) -> SingletonFactory:
    registered_factory = state.registered.get(item_name)
    return SingletonFactory(
        value=state.singletons[item_name],
        filename=getattr(registered_factory, "filename", None),
        register_source=getattr(registered_factory, "register_source", None),
    )
