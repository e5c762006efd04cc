from __future__ import annotations

import inspect
import re
from collections.abc import Callable, Mapping
from enum import Enum, auto
from inspect import Parameter
from typing import Any

from factory_di._internal.declarations import (
    FACTORY_MARKER,
    INFER,
    OPTIONAL_SUFFIX,
    PLACEHOLDER_MARKER,
    FactoryDeclaration,
    InjectionRequest,
    PlaceholderArgument,
)
from factory_di._internal.history import ResolutionHistory
from factory_di.exceptions import (
    FactoryDIError,
    FactoryDIInvalidInjectError,
    FactoryDIParameterCountError,
)

_UNSAFE_NAME_CHARACTERS = re.compile(r"[^A-Za-z0-9_$]")
_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)
_ITEM_NAME_SLOT = "%s"


class _InferMode(Enum):
    ALL_PLACEHOLDERS = auto()
    LISTED_PLACEHOLDERS = auto()


class _DeclarationError(Exception):
    """Declaration failure whose message still has an item-name slot."""

    def __init__(self, template: str, error_type: type[FactoryDIError] = FactoryDIInvalidInjectError) -> None:
        super().__init__(template)
        self.template = template
        self.error_type = error_type


def parse_factory_inject(
    factory: Callable[..., Any],
    declaration: FactoryDeclaration,
    item_name: str,
    register_history: ResolutionHistory,
) -> tuple[tuple[InjectionRequest, ...], tuple[Parameter, ...]]:
    """Turn a factory declaration into injection requests.

    Args:
        factory: The callable being registered.
        declaration: Dependency declaration for the factory.
        item_name: Registry name, substituted into declaration errors.
        register_history: History reported with any error.

    Returns:
        The ordered injection requests and the signature parameter each one
        binds to.

    Raises:
        FactoryDIInvalidInjectError: The declaration is malformed or the
            signature cannot be read.
        FactoryDIParameterCountError: An explicit list does not match the
            number of parameters.

    """
    try:
        if declaration.inject is None:
            return _parse_inferred_requests(
                factory,
                declaration,
                item_name,
                register_history,
                mode=_InferMode.ALL_PLACEHOLDERS,
            )
        if isinstance(declaration.inject, str) and declaration.inject == INFER:
            return _parse_inferred_requests(
                factory,
                declaration,
                item_name,
                register_history,
                mode=_InferMode.LISTED_PLACEHOLDERS,
            )

        injection_requests = _parse_injection_requests(declaration.inject)
        parameters = _signature_parameters(factory, item_name, register_history)
        _validate_parameter_count(item_name, len(injection_requests), len(parameters), register_history)
        return injection_requests, parameters
    except _DeclarationError as error:
        message = error.template.replace(_ITEM_NAME_SLOT, item_name)
        raise error.error_type(message, register_history) from error


def _parse_injection_requests(inject: Any) -> tuple[InjectionRequest, ...]:
    if not isinstance(inject, (list, tuple)):
        msg = f"FactoryDI Inject Error: Invalid non-list inject declaration found for '{_ITEM_NAME_SLOT}'."
        raise _DeclarationError(msg)

    invalid_indexes: list[int] = []
    injection_requests: list[InjectionRequest] = []

    for index, specifier in enumerate(inject):
        if isinstance(specifier, InjectionRequest) and specifier.name:
            injection_requests.append(specifier)
            continue
        if isinstance(specifier, Mapping) and specifier.get("name"):
            injection_requests.append(
                InjectionRequest(
                    name=str(specifier["name"]),
                    is_optional=bool(specifier.get("is_optional")),
                    resolve_as_factory=bool(specifier.get("resolve_as_factory")),
                    is_placeholder=bool(specifier.get("is_placeholder")),
                ),
            )
            continue
        if not isinstance(specifier, str):
            invalid_indexes.append(index)
            continue

        name = _sanitize_name(specifier)
        if not name:
            invalid_indexes.append(index)
            continue

        injection_requests.append(
            InjectionRequest(
                name=name,
                is_optional=specifier.endswith(OPTIONAL_SUFFIX),
                resolve_as_factory=FACTORY_MARKER in specifier,
                is_placeholder=PLACEHOLDER_MARKER in specifier,
            ),
        )

    if invalid_indexes:
        indexes = ", ".join(str(index) for index in invalid_indexes)
        msg = f"FactoryDI Inject Error: Invalid inject declaration found for '{_ITEM_NAME_SLOT}' on indexes: {indexes}."
        raise _DeclarationError(msg)

    return tuple(injection_requests)


def _parse_inferred_requests(
    factory: Callable[..., Any],
    declaration: FactoryDeclaration,
    item_name: str,
    register_history: ResolutionHistory,
    *,
    mode: _InferMode,
) -> tuple[tuple[InjectionRequest, ...], tuple[Parameter, ...]]:
    placeholder_options: dict[str, PlaceholderArgument] = {}
    if mode is _InferMode.LISTED_PLACEHOLDERS:
        placeholder_options = _parse_placeholder_options(declaration.placeholders)

    parameters = _signature_parameters(factory, item_name, register_history)
    injection_requests: list[InjectionRequest] = []
    for parameter in parameters:
        is_optional = parameter.default is not Parameter.empty
        is_placeholder = mode is _InferMode.ALL_PLACEHOLDERS

        placeholder_option = placeholder_options.get(parameter.name)
        if placeholder_option is not None:
            is_placeholder = True
            is_optional = placeholder_option.is_optional

        injection_requests.append(
            InjectionRequest(
                name=parameter.name,
                is_optional=is_optional,
                is_placeholder=is_placeholder,
            ),
        )

    return tuple(injection_requests), parameters


def _parse_placeholder_options(placeholders: Any) -> dict[str, PlaceholderArgument]:
    """Parse ``INFER``-mode placeholder names keyed by parameter name."""
    if placeholders is None:
        return {}
    if not isinstance(placeholders, (list, tuple)):
        msg = f"FactoryDI Inject Error: Non-list value of placeholders found for '{_ITEM_NAME_SLOT}'."
        raise _DeclarationError(msg)

    invalid_indexes: list[int] = []
    placeholder_options: dict[str, PlaceholderArgument] = {}
    for index, placeholder in enumerate(placeholders):
        if not isinstance(placeholder, str):
            invalid_indexes.append(index)
            continue

        name = _sanitize_name(placeholder)
        if not name:
            invalid_indexes.append(index)
            continue

        placeholder_options[name] = PlaceholderArgument(
            name=name,
            is_optional=placeholder.endswith(OPTIONAL_SUFFIX),
        )

    if invalid_indexes:
        indexes = ", ".join(str(index) for index in invalid_indexes)
        msg = f"FactoryDI Inject Error: Invalid placeholders found for '{_ITEM_NAME_SLOT}' on indexes: {indexes}."
        raise _DeclarationError(msg)

    return placeholder_options


def _signature_parameters(
    factory: Callable[..., Any],
    item_name: str,
    register_history: ResolutionHistory,
) -> tuple[Parameter, ...]:
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError) as error:
        if isinstance(error, ValueError) and _is_builtin_factory(factory):
            return ()
        msg = f"FactoryDI Inject Error: Could not parse function arguments for '{item_name}'."
        raise FactoryDIInvalidInjectError(msg, register_history) from error

    return tuple(
        parameter for parameter in signature.parameters.values() if parameter.kind not in _VARIADIC_KINDS
    )


def _validate_parameter_count(
    item_name: str,
    injected_count: int,
    expected_count: int,
    register_history: ResolutionHistory,
) -> None:
    if injected_count != expected_count:
        msg = (
            f"FactoryDI Inject Error: Found {injected_count} injected params for '{item_name}', "
            f"but expected {expected_count}. "
            "Make sure all the function parameters are represented in the inject declaration."
        )
        raise FactoryDIParameterCountError(msg, register_history)


def _sanitize_name(specifier: str) -> str:
    return _UNSAFE_NAME_CHARACTERS.sub("", specifier)


def _is_builtin_factory(factory: Callable[..., Any]) -> bool:
    """Builtins without signature metadata, such as ``dict`` or ``object``."""
    if inspect.isbuiltin(factory):
        return True
    return isinstance(factory, type) and factory.__module__ == "builtins"
