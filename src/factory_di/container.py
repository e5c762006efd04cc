from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from factory_di._internal.declarations import InjectDeclaration, declare, get_declaration
from factory_di._internal.registration import RegisterOptions, register_factory, validate_item_name
from factory_di._internal.resolver import resolve_factory
from factory_di._internal.runner import run_factory
from factory_di._internal.state import InjectorMeta, InjectorState
from factory_di.settings import FactoryDISettings

logger = logging.getLogger(__name__)


class Container:
    """Register named factories and resolve them into fully wired values.

    The container holds the current immutable ``InjectorState`` and swaps it
    after every operation. Snapshots returned by ``state`` are never modified
    afterwards.

    Factories declare dependencies with ``declare`` or with the ``inject`` /
    ``placeholders`` keyword arguments of ``register``. Non-callable values are
    registered as singletons that always return the value itself.

    The container registers itself under ``settings.container_item_name``
    (``"factory_di"`` by default), so factories can depend on it and resolve
    other items at runtime.
    """

    def __init__(
        self,
        *,
        register_source: str | None = None,
        skip_trace_errors: bool | None = None,
        settings: FactoryDISettings | None = None,
    ) -> None:
        """Initialize an empty container.

        Args:
            register_source: Register source label applied to registrations
                that do not pass ``register_source_file``.
            skip_trace_errors: Skip register-source errors and missing-filename
                warnings for every registration.
            settings: Defaults for the arguments above, read from
                ``FACTORY_DI_*`` environment variables when omitted.

        """
        self._settings = settings or FactoryDISettings()
        if skip_trace_errors is None:
            skip_trace_errors = self._settings.skip_trace_errors

        self._state = InjectorState(
            meta=InjectorMeta(
                register_source_file=register_source or self._settings.register_source,
                skip_trace_errors=skip_trace_errors,
            ),
        )

        self.register(
            self._settings.container_item_name,
            self,
            filename=__file__,
            register_source_file=__file__,
        )

    @property
    def state(self) -> InjectorState:
        """Return the current state snapshot."""
        return self._state

    def register(
        self,
        item_name: str,
        factory_or_value: Any,
        *,
        inject: InjectDeclaration = None,
        placeholders: Sequence[str] | None = None,
        force_singleton: bool = False,
        filename: str | None = None,
        register_source_file: str | None = None,
        skip_trace_errors: bool = False,
    ) -> None:
        """Register a factory or a plain value under ``item_name``.

        Registering an existing name replaces the previous entry and drops its
        cached singleton.

        Args:
            item_name: Registry key.
            factory_or_value: A callable factory, or any other value to be
                returned as-is.
            inject: Dependency declaration overriding the factory's own:
                an explicit specifier list or ``INFER``.
            placeholders: Placeholder names for ``INFER`` declarations.
            force_singleton: Cache the produced value regardless of the
                factory's declaration.
            filename: Origin file overriding the factory's declared one.
            register_source_file: Register source for this registration only.
            skip_trace_errors: Skip register-source and filename checks for
                this registration.

        Raises:
            FactoryDIInvalidItemNameError: ``item_name`` is empty or not a
                string.
            FactoryDIMissingRegisterSourceError: No register source is known
                and trace errors are not skipped.
            FactoryDIInvalidInjectError: The dependency declaration is invalid.

        """
        validate_item_name(item_name)

        factory = factory_or_value
        if not callable(factory_or_value):
            factory = _value_factory(factory_or_value)

        self._state = register_factory(
            self._state,
            item_name,
            factory,
            RegisterOptions(
                inject=inject,
                placeholders=placeholders,
                force_singleton=force_singleton,
                filename=filename,
                register_source_file=register_source_file,
                skip_trace_errors=skip_trace_errors,
            ),
        )

    def resolve(
        self,
        item_name: str,
        resolve_args: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        as_factory: bool = False,
    ) -> Any:
        """Resolve ``item_name`` with all of its dependencies.

        Args:
            item_name: Registry key to resolve.
            resolve_args: Placeholder values keyed by item name, or by
                ``"common"`` for values offered to every factory. Item-keyed
                values win over common ones.
            as_factory: Return the bound factory instead of invoking it. Leaf
                factories are returned exactly as registered.

        Returns:
            The produced value, or the bound factory when ``as_factory`` is set.

        Raises:
            FactoryDIInvalidItemNameError: ``item_name`` is empty or not a
                string.
            FactoryDINotRegisteredError: The item or a required dependency is
                not registered.
            FactoryDICyclicDependencyError: The dependency graph has a cycle.
            FactoryDIPlaceholderMissingError: A required placeholder argument
                has no value.

        """
        validate_item_name(item_name, operation="Resolve")

        resolution = resolve_factory(self._state, item_name, resolve_args)
        self._state = resolution.state

        if as_factory:
            return resolution.resolved_factory.as_callable()

        return run_factory(resolution.resolved_factory, resolve_args, item_name, resolution.history)

    def set_register_source(self, register_source: str | None) -> str | None:
        """Set the register source label for subsequent registrations.

        Args:
            register_source: Label identifying where the next ``register``
                calls happen, usually ``__file__``.

        Returns:
            The previous label, or ``None``.

        """
        previous_source = self._state.meta.register_source_file
        self._state = self._state.with_meta(register_source_file=register_source)
        return previous_source or None

    def set_skip_trace_errors(self, skip_trace_errors: bool) -> None:
        """Enable or disable register-source errors and filename warnings."""
        self._state = self._state.with_meta(skip_trace_errors=bool(skip_trace_errors))

    def clear_singletons(self) -> None:
        """Drop every cached singleton; registrations are kept."""
        logger.debug("Clearing %d cached singletons", len(self._state.singletons))
        self._state = self._state.without_singletons()


def _value_factory(value: Any) -> Callable[[], Any]:
    filename = get_declaration(value).filename or getattr(value, "__file__", None)

    @declare(singleton=True, filename=filename)
    def value_factory() -> Any:
        return value

    return value_factory
