from __future__ import annotations

import pytest

from factory_di.container import Container
from factory_di.settings import FactoryDISettings


@pytest.fixture()
def factory_di_settings() -> FactoryDISettings:
    """Settings used by ``factory_di_container``.

    Override this fixture to change container defaults for a test module.
    Trace errors are skipped by default so tests can register factories
    without filenames or register sources.

    """
    return FactoryDISettings(skip_trace_errors=True)


@pytest.fixture()
def factory_di_container(factory_di_settings: FactoryDISettings) -> Container:
    """Return a fresh container per test.

    Enable the fixtures with ``pytest_plugins = ["factory_di.integrations.pytest_plugin"]``
    in the root ``conftest.py``.

    Args:
        factory_di_settings: Settings the container is built from.

    """
    return Container(settings=factory_di_settings)
