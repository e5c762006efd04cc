from __future__ import annotations

import pytest

from factory_di import Container, FactoryDISettings

pytest_plugins = ["factory_di.integrations.pytest_plugin"]


def test_plugin_container_skips_trace_errors(factory_di_container: Container) -> None:
    factory_di_container.register("service", lambda: "service")

    assert factory_di_container.resolve("service") == "service"
    assert factory_di_container.state.meta.skip_trace_errors is True


def test_plugin_container_is_fresh_per_test(factory_di_container: Container) -> None:
    assert "service" not in factory_di_container.state.registered


def test_plugin_container_resolves_itself(factory_di_container: Container) -> None:
    assert factory_di_container.resolve("factory_di") is factory_di_container


class TestSettingsOverride:
    @pytest.fixture()
    def factory_di_settings(self) -> FactoryDISettings:
        return FactoryDISettings(
            register_source="suite.py",
            skip_trace_errors=True,
            container_item_name="suite_container",
        )

    def test_overridden_settings_are_used(self, factory_di_container: Container) -> None:
        factory_di_container.register("service", lambda: "service")

        assert factory_di_container.state.registered["service"].register_source == "suite.py"
        assert factory_di_container.resolve("suite_container") is factory_di_container
        assert "factory_di" not in factory_di_container.state.registered
