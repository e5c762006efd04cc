from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import Any, Final

from factory_di._internal.declarations import PlaceholderArgument


class _Absent:
    """Marker for a value that was not supplied, so the parameter default applies."""

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent()


@dataclass(frozen=True, slots=True)
class BoundSlot:
    """One parameter of a bound factory: a bound value or an open placeholder."""

    parameter: Parameter
    value: Any = ABSENT
    is_placeholder: bool = False


class ResolvedFactory(ABC):
    """Common shape of everything the resolver hands back."""

    filename: str | None = None
    register_source: str | None = None
    is_singleton: bool = False
    is_not_found: bool = False

    @property
    def placeholder_args(self) -> tuple[PlaceholderArgument, ...]:
        return ()

    def as_callable(self) -> Callable[..., Any]:
        """Return the callable handed to callers that want the factory itself."""
        return self

    @abstractmethod
    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Produce the item."""


@dataclass(frozen=True, eq=False)
class BoundFactory(ResolvedFactory):
    """A factory with its dependencies bound and its placeholders still open.

    Calling it fills the placeholder gaps in declaration order with positional
    values, or by placeholder name with keyword values, then invokes the
    original factory. Missing values fall back to the parameter default, or
    ``None`` when the parameter has none.
    """

    factory: Callable[..., Any]
    slots: tuple[BoundSlot, ...] = ()
    placeholders: tuple[PlaceholderArgument, ...] = ()
    filename: str | None = None
    register_source: str | None = None
    is_singleton: bool = False

    @property
    def placeholder_args(self) -> tuple[PlaceholderArgument, ...]:
        return self.placeholders

    def as_callable(self) -> Callable[..., Any]:
        if not self.slots:
            return self.factory
        return self

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if len(args) > len(self.placeholders):
            msg = (
                f"{self._factory_name()} takes {len(self.placeholders)} placeholder arguments "
                f"but {len(args)} were given"
            )
            raise TypeError(msg)

        placeholder_names = {placeholder.name for placeholder in self.placeholders}
        unknown_names = sorted(set(kwargs) - placeholder_names)
        if unknown_names:
            msg = f"{self._factory_name()} got unexpected placeholder arguments: {', '.join(unknown_names)}"
            raise TypeError(msg)

        duplicated_names = [
            placeholder.name for placeholder in self.placeholders[: len(args)] if placeholder.name in kwargs
        ]
        if duplicated_names:
            msg = f"{self._factory_name()} got multiple values for placeholder arguments: {', '.join(duplicated_names)}"
            raise TypeError(msg)

        pending_values = iter(args)
        call_args: list[Any] = []
        call_kwargs: dict[str, Any] = {}
        placeholder_index = 0
        for slot in self.slots:
            value = slot.value
            if slot.is_placeholder:
                placeholder = self.placeholders[placeholder_index]
                placeholder_index += 1
                value = next(pending_values, ABSENT)
                if value is ABSENT:
                    value = kwargs.get(placeholder.name, ABSENT)

            if value is ABSENT:
                value = None if slot.parameter.default is Parameter.empty else slot.parameter.default

            if slot.parameter.kind is Parameter.POSITIONAL_ONLY:
                call_args.append(value)
            else:
                call_kwargs[slot.parameter.name] = value

        return self.factory(*call_args, **call_kwargs)

    def _factory_name(self) -> str:
        return getattr(self.factory, "__qualname__", repr(self.factory))


@dataclass(frozen=True, eq=False)
class SingletonFactory(ResolvedFactory):
    """A cache hit for an already produced singleton value."""

    value: Any
    filename: str | None = None
    register_source: str | None = None
    is_singleton: bool = True

    def __call__(self) -> Any:
        return self.value


@dataclass(frozen=True, eq=False)
class AbsentFactory(ResolvedFactory):
    """Stand-in for an optional dependency that is not registered."""

    is_not_found: bool = True

    def __call__(self) -> None:
        return None
