from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from inspect import Parameter
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from factory_di._internal.declarations import InjectionRequest, PlaceholderArgument

if TYPE_CHECKING:
    from typing_extensions import Self


def _frozen_mapping(values: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True, slots=True)
class DecoratedFactory:
    """A registered factory with its parsed dependency metadata.

    ``parameters`` holds the signature parameter each injection request binds
    to, in the same order as ``injection_requests``.
    """

    factory: Callable[..., Any]
    injection_requests: tuple[InjectionRequest, ...] = ()
    parameters: tuple[Parameter, ...] = ()
    is_singleton: bool = False
    filename: str | None = None
    register_source: str | None = None

    @property
    def placeholder_args(self) -> tuple[PlaceholderArgument, ...]:
        """Return the requests left open for invocation time."""
        return tuple(
            PlaceholderArgument(name=request.name, is_optional=request.is_optional)
            for request in self.injection_requests
            if request.is_placeholder
        )


@dataclass(frozen=True, slots=True)
class InjectorMeta:
    """Process-scoped registration settings."""

    register_source_file: str | None = None
    skip_trace_errors: bool = False


@dataclass(frozen=True, slots=True)
class InjectorState:
    """Immutable snapshot of registrations, cached singletons, and meta.

    Every mutation derives a new snapshot; earlier snapshots stay valid and
    can be read concurrently.
    """

    registered: Mapping[str, DecoratedFactory] = field(default_factory=_frozen_mapping)
    singletons: Mapping[str, Any] = field(default_factory=_frozen_mapping)
    meta: InjectorMeta = field(default_factory=InjectorMeta)

    def with_registered(self, item_name: str, factory: DecoratedFactory) -> Self:
        """Return a snapshot with ``item_name`` added or replaced.

        Args:
            item_name: Registry key.
            factory: Decorated factory stored under the key.

        """
        return replace(
            self,
            registered=_frozen_mapping({**self.registered, item_name: factory}),
        )

    def with_singleton(self, item_name: str, value: Any) -> Self:
        """Return a snapshot caching ``value`` as the singleton for ``item_name``.

        Args:
            item_name: Registry key of the singleton factory.
            value: Produced value to cache.

        """
        return replace(
            self,
            singletons=_frozen_mapping({**self.singletons, item_name: value}),
        )

    def without_singleton(self, item_name: str) -> Self:
        """Return a snapshot without the cached singleton for ``item_name``."""
        singletons = {name: value for name, value in self.singletons.items() if name != item_name}
        return replace(self, singletons=_frozen_mapping(singletons))

    def without_singletons(self) -> Self:
        """Return a snapshot with an empty singleton cache."""
        return replace(self, singletons=_frozen_mapping())

    def with_meta(self, **changes: Any) -> Self:
        """Return a snapshot with updated meta fields."""
        return replace(self, meta=replace(self.meta, **changes))
