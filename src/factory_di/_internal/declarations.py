from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Final, Literal, TypeAlias, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

INFER: Final = "infer"
"""Dependency-list marker: read registry names from the factory's parameters."""

DECLARATION_ATTR: Final = "__factory_di_declaration__"

OPTIONAL_SUFFIX: Final = "?"
FACTORY_MARKER: Final = "()"
PLACEHOLDER_MARKER: Final = "*"


@dataclass(frozen=True, slots=True)
class InjectionRequest:
    """One formal dependency of a factory.

    Placeholder requests are never resolved from the registry; they stay open
    until the bound factory is invoked with caller-supplied values.
    """

    name: str
    is_optional: bool = False
    resolve_as_factory: bool = False
    is_placeholder: bool = False


@dataclass(frozen=True, slots=True)
class PlaceholderArgument:
    """A parameter left unbound until invocation."""

    name: str
    is_optional: bool = False


InjectSpecifier: TypeAlias = "str | InjectionRequest | dict[str, Any]"
InjectDeclaration: TypeAlias = "Sequence[InjectSpecifier] | Literal['infer'] | None"


@dataclass(frozen=True, slots=True)
class FactoryDeclaration:
    """Dependency metadata attached to a factory by ``declare``.

    ``inject`` selects the declaration style: ``None`` infers every parameter
    as a placeholder, ``INFER`` infers registry names from parameter names
    (with ``placeholders`` overriding matching parameters), and a list gives
    one specifier per parameter in signature order.
    """

    inject: Any = None
    placeholders: Any = None
    singleton: bool = False
    filename: str | None = None


def declare(
    *,
    inject: InjectDeclaration = None,
    placeholders: Sequence[str] | None = None,
    singleton: bool = False,
    filename: str | None = None,
) -> Callable[[F], F]:
    """Attach a dependency declaration to a factory.

    Specifier strings use suffix markers: ``"name?"`` is optional,
    ``"name()"`` injects the bound factory instead of its value, and
    ``"name*"`` leaves the parameter as a placeholder.

    Args:
        inject: Explicit specifier list, ``INFER``, or ``None``.
        placeholders: Parameter names to keep as placeholders in ``INFER``
            mode; a trailing ``?`` marks one optional.
        singleton: Produce the value once and cache it in the container.
        filename: Origin file reported in error traces, usually ``__file__``.

    Returns:
        A decorator returning the factory unchanged apart from the attached
        declaration.

    """

    def decorator(factory: F) -> F:
        setattr(
            factory,
            DECLARATION_ATTR,
            FactoryDeclaration(
                inject=inject,
                placeholders=placeholders,
                singleton=singleton,
                filename=filename,
            ),
        )
        return factory

    return decorator


def get_declaration(factory_or_value: object) -> FactoryDeclaration:
    """Return the attached declaration, or an empty one.

    Classes only use a declaration from their own namespace, so an undeclared
    subclass does not inherit its parent's dependency list.
    """
    if isinstance(factory_or_value, type):
        declaration = vars(factory_or_value).get(DECLARATION_ATTR)
    else:
        declaration = getattr(factory_or_value, DECLARATION_ATTR, None)
    if isinstance(declaration, FactoryDeclaration):
        return declaration
    return FactoryDeclaration()
