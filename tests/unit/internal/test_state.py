from __future__ import annotations

import pytest

from factory_di._internal.declarations import InjectionRequest, PlaceholderArgument
from factory_di._internal.history import ResolutionRecord, add_to_history, render_history_trace
from factory_di._internal.resolved import AbsentFactory
from factory_di._internal.state import DecoratedFactory, InjectorMeta, InjectorState


class TestInjectorState:
    def test_default_state_is_empty(self) -> None:
        state = InjectorState()

        assert dict(state.registered) == {}
        assert dict(state.singletons) == {}
        assert state.meta == InjectorMeta()

    def test_with_registered_returns_new_snapshot(self) -> None:
        state = InjectorState()
        factory = DecoratedFactory(factory=lambda: None)

        updated = state.with_registered("item", factory)

        assert updated.registered["item"] is factory
        assert "item" not in state.registered

    def test_singleton_helpers_copy_on_write(self) -> None:
        state = InjectorState().with_singleton("a", 1).with_singleton("b", 2)

        without_a = state.without_singleton("a")
        cleared = state.without_singletons()

        assert dict(state.singletons) == {"a": 1, "b": 2}
        assert dict(without_a.singletons) == {"b": 2}
        assert dict(cleared.singletons) == {}

    def test_mappings_are_read_only(self) -> None:
        state = InjectorState().with_singleton("a", 1)

        with pytest.raises(TypeError):
            state.singletons["b"] = 2  # type: ignore[index]

    def test_with_meta_keeps_other_fields(self) -> None:
        state = InjectorState(meta=InjectorMeta(register_source_file="main.py"))

        updated = state.with_meta(skip_trace_errors=True)

        assert updated.meta == InjectorMeta(register_source_file="main.py", skip_trace_errors=True)
        assert state.meta.skip_trace_errors is False


def test_decorated_factory_lists_placeholders_in_order() -> None:
    factory = DecoratedFactory(
        factory=lambda a, b, c: None,
        injection_requests=(
            InjectionRequest(name="a", is_placeholder=True),
            InjectionRequest(name="b"),
            InjectionRequest(name="c", is_optional=True, is_placeholder=True),
        ),
    )

    assert factory.placeholder_args == (
        PlaceholderArgument(name="a"),
        PlaceholderArgument(name="c", is_optional=True),
    )


class TestHistory:
    def test_add_to_history_reads_source_metadata(self) -> None:
        source = DecoratedFactory(factory=lambda: None, filename="item.py", register_source="main.py")

        history = add_to_history((), "item", source)

        assert history == (ResolutionRecord(name="item", filepath="item.py", register_source="main.py"),)

    def test_add_to_history_does_not_modify_input(self) -> None:
        history = (ResolutionRecord(name="first"),)

        extended = add_to_history(history, "second")

        assert history == (ResolutionRecord(name="first"),)
        assert [record.name for record in extended] == ["first", "second"]

    def test_absent_source_is_marked_not_found(self) -> None:
        history = add_to_history((), "missing", AbsentFactory())

        assert history[0].not_found is True

    def test_render_empty_history(self) -> None:
        assert render_history_trace(()) == ""
