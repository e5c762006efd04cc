"""Tests for the exception hierarchy and history traces."""

import pytest

from factory_di import declare
from factory_di._internal.history import ResolutionRecord
from factory_di.container import Container
from factory_di.exceptions import (
    FactoryDICyclicDependencyError,
    FactoryDIError,
    FactoryDIInvalidInjectError,
    FactoryDIInvalidItemNameError,
    FactoryDIInvalidRegistrationError,
    FactoryDIMissingRegisterSourceError,
    FactoryDINotRegisteredError,
    FactoryDIParameterCountError,
    FactoryDIPlaceholderMissingError,
    FactoryDIResolveError,
)


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        ("error_type", "parent_type"),
        [
            (FactoryDIInvalidItemNameError, FactoryDIError),
            (FactoryDIInvalidRegistrationError, FactoryDIError),
            (FactoryDIMissingRegisterSourceError, FactoryDIInvalidRegistrationError),
            (FactoryDIInvalidInjectError, FactoryDIError),
            (FactoryDIParameterCountError, FactoryDIInvalidInjectError),
            (FactoryDIResolveError, FactoryDIError),
            (FactoryDINotRegisteredError, FactoryDIResolveError),
            (FactoryDICyclicDependencyError, FactoryDIResolveError),
            (FactoryDIPlaceholderMissingError, FactoryDIError),
        ],
    )
    def test_subclasses(self, error_type: type[Exception], parent_type: type[Exception]) -> None:
        assert issubclass(error_type, parent_type)
        assert issubclass(error_type, Exception)

    def test_error_without_history_renders_message_only(self) -> None:
        error = FactoryDIError("boom")

        assert str(error) == "boom"
        assert error.history == ()
        assert error.trace == ""


class TestHistoryTrace:
    def test_trace_lists_newest_record_first(self) -> None:
        error = FactoryDIError(
            "boom",
            [
                ResolutionRecord(name="a", filepath="a.py", register_source="main.py"),
                ResolutionRecord(name="b"),
            ],
        )

        assert str(error) == (
            "boom"
            "\n    at b (?)"
            "\n        registered in [?]"
            "\n    at a (a.py)"
            "\n        registered in [main.py]"
        )

    def test_resolve_error_trace_follows_dependency_path(self, container: Container) -> None:
        @declare(inject=["b"], filename="a_factory.py")
        def a_factory(b):  # type: ignore[no-untyped-def]
            return b

        @declare(inject=["c"], filename="b_factory.py")
        def b_factory(c):  # type: ignore[no-untyped-def]
            return c

        container.set_register_source("registry.py")
        container.register("a", a_factory)
        container.register("b", b_factory)

        with pytest.raises(FactoryDINotRegisteredError) as exc_info:
            container.resolve("a")

        lines = str(exc_info.value).splitlines()
        assert lines[0] == "FactoryDI Resolve Error: The item 'c' has not been registered."
        assert lines[1:] == [
            "    at c (?)",
            "        registered in [?]",
            "    at b (b_factory.py)",
            "        registered in [registry.py]",
            "    at a (a_factory.py)",
            "        registered in [registry.py]",
        ]

    def test_dependency_placeholder_error_reports_parent_path(self, container: Container) -> None:
        @declare(inject=["missing?", "required"])
        def a_factory(missing, required):  # type: ignore[no-untyped-def]
            return missing, required

        container.register("a", a_factory)
        container.register("required", lambda z: z)

        with pytest.raises(FactoryDIPlaceholderMissingError) as exc_info:
            container.resolve("a")

        assert [record.name for record in exc_info.value.history] == ["a"]
        assert exc_info.value.message.endswith("non-injected 'z' argument.")
