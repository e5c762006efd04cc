from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from factory_di._internal.declarations import get_declaration
from factory_di._internal.history import ResolutionHistory, add_to_history
from factory_di._internal.injection import parse_factory_inject
from factory_di._internal.state import DecoratedFactory, InjectorState
from factory_di.exceptions import FactoryDIInvalidItemNameError, FactoryDIMissingRegisterSourceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegisterOptions:
    """Per-registration overrides.

    ``inject`` and ``placeholders`` replace the factory's own declaration when
    given; ``filename`` replaces its origin file.
    """

    inject: Any = None
    placeholders: Any = None
    force_singleton: bool = False
    filename: str | None = None
    register_source_file: str | None = None
    skip_trace_errors: bool = False


def validate_item_name(item_name: object, operation: str = "Register") -> None:
    """Reject empty and non-string item names.

    Args:
        item_name: Candidate registry key.
        operation: Operation name used in the error message.

    """
    if not item_name:
        msg = f"FactoryDI {operation} Error: No item name given."
        raise FactoryDIInvalidItemNameError(msg)
    if not isinstance(item_name, str):
        msg = f"FactoryDI {operation} Error: The given item name is not a string."
        raise FactoryDIInvalidItemNameError(msg)


def register_factory(
    state: InjectorState,
    item_name: str,
    factory: Callable[..., Any],
    options: RegisterOptions | None = None,
) -> InjectorState:
    """Parse a factory's declaration and add it to a new registry snapshot.

    Args:
        state: Current snapshot. Never modified.
        item_name: Registry key.
        factory: Callable producing the item.
        options: Registration overrides.

    Returns:
        A snapshot containing the decorated factory under ``item_name``.

    Raises:
        FactoryDIInvalidItemNameError: ``item_name`` is empty or not a string.
        FactoryDIMissingRegisterSourceError: No register source can be found
            and trace errors are not skipped.
        FactoryDIInvalidInjectError: The dependency declaration is invalid.

    """
    validate_item_name(item_name)
    options = options or RegisterOptions()

    declaration = get_declaration(factory)
    if options.inject is not None:
        declaration = replace(declaration, inject=options.inject)
    if options.placeholders is not None:
        declaration = replace(declaration, placeholders=options.placeholders)

    register_source = options.register_source_file or state.meta.register_source_file
    decorated_factory = DecoratedFactory(
        factory=factory,
        is_singleton=options.force_singleton or declaration.singleton,
        filename=options.filename or declaration.filename,
        register_source=register_source,
    )
    register_history = add_to_history((), item_name, decorated_factory)

    if not options.skip_trace_errors and not state.meta.skip_trace_errors:
        _validate_trace_metadata(decorated_factory, item_name, register_history)

    injection_requests, parameters = parse_factory_inject(
        factory,
        declaration,
        item_name,
        register_history,
    )
    decorated_factory = replace(
        decorated_factory,
        injection_requests=injection_requests,
        parameters=parameters,
    )

    if item_name in state.registered:
        logger.warning("FactoryDI Register: Replacing the existing registration for '%s'.", item_name)

    updated_state = state.with_registered(item_name, decorated_factory)
    if item_name in updated_state.singletons:
        updated_state = updated_state.without_singleton(item_name)
    return updated_state


def _validate_trace_metadata(
    decorated_factory: DecoratedFactory,
    item_name: str,
    register_history: ResolutionHistory,
) -> None:
    if not decorated_factory.filename:
        logger.warning(
            "FactoryDI Register Error: Warning: No filename found for item '%s' when being registered. "
            "Please declare a filename for this item's factory.",
            item_name,
        )

    if not decorated_factory.register_source:
        msg = (
            f"FactoryDI Register Error: Attempting to register '{item_name}' but no register source is defined. "
            "Please use Container.set_register_source() to set this value "
            "or pass register_source_file=... to Container.register()."
        )
        raise FactoryDIMissingRegisterSourceError(msg, register_history)
