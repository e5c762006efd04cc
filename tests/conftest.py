"""Shared pytest fixtures for factory-di tests."""

import pytest

from factory_di.container import Container


@pytest.fixture()
def container() -> Container:
    """Container with trace errors skipped."""
    container = Container()
    container.set_skip_trace_errors(True)
    return container


@pytest.fixture()
def traced_container() -> Container:
    """Container that enforces register sources and warns on missing filenames."""
    return Container(skip_trace_errors=False)
