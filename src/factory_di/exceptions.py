from __future__ import annotations

from collections.abc import Iterable

from factory_di._internal.history import ResolutionRecord, render_history_trace


class FactoryDIError(Exception):
    """Represent a base class for all factory-di failures.

    Every error carries the resolution history that led to it. ``str(error)``
    renders the message followed by that history, newest record first, so the
    logical dependency path stays readable regardless of call-stack depth.

    Args:
        message: Human readable description of the failure.
        history: Resolution records visited before the failure.

    """

    def __init__(self, message: str, history: Iterable[ResolutionRecord] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.history: tuple[ResolutionRecord, ...] = tuple(history)

    @property
    def trace(self) -> str:
        """Return the rendered resolution history."""
        return render_history_trace(self.history)

    def __str__(self) -> str:
        return f"{self.message}{self.trace}"


class FactoryDIInvalidItemNameError(FactoryDIError):
    """Signal a missing or non-string item name.

    Raised by ``Container.register`` and ``Container.resolve``.
    """


class FactoryDIInvalidRegistrationError(FactoryDIError):
    """Signal registration metadata that cannot be accepted."""


class FactoryDIMissingRegisterSourceError(FactoryDIInvalidRegistrationError):
    """Signal a registration without a resolvable register source.

    Typical fixes are calling ``Container.set_register_source(__file__)``
    before registering, passing ``register_source_file=...`` to
    ``Container.register``, or disabling trace errors.
    """


class FactoryDIInvalidInjectError(FactoryDIError):
    """Signal an invalid dependency declaration.

    Raised at registration time for non-list ``inject``/``placeholders``
    declarations, for invalid specifiers (all offending indexes are reported
    together), and for signatures that cannot be inspected.
    """


class FactoryDIParameterCountError(FactoryDIInvalidInjectError):
    """Signal an explicit dependency list that does not cover the signature."""


class FactoryDIResolveError(FactoryDIError):
    """Signal a failure while walking the dependency graph."""


class FactoryDINotRegisteredError(FactoryDIResolveError):
    """Signal a required item that has no registration."""


class FactoryDICyclicDependencyError(FactoryDIResolveError):
    """Signal a dependency that is already on the current resolution path.

    Singletons that are already cached break cycles and never raise this.
    """


class FactoryDIPlaceholderMissingError(FactoryDIError):
    """Signal a required placeholder argument without a value at call time.

    Supply the value under the item name or under ``common`` in the resolve
    arguments, or declare the placeholder optional with a trailing ``?``.
    """
