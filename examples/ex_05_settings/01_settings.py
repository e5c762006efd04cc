"""Container defaults from pydantic settings.

``FactoryDISettings`` reads ``FACTORY_DI_*`` environment variables. Pass an
instance explicitly to pin the defaults regardless of the environment.
"""

from __future__ import annotations

import os

from factory_di import Container, FactoryDISettings


def main() -> None:
    os.environ["FACTORY_DI_REGISTER_SOURCE"] = "env-registry.py"
    os.environ["FACTORY_DI_SKIP_TRACE_ERRORS"] = "true"

    env_settings = FactoryDISettings()
    print(f"register_source={env_settings.register_source}")  # => register_source=env-registry.py
    print(f"skip_trace_errors={env_settings.skip_trace_errors}")  # => skip_trace_errors=True

    container = Container(settings=env_settings)
    container.register("answer", 42)
    print(f"source={container.state.registered['answer'].register_source}")  # => source=env-registry.py

    settings = FactoryDISettings(container_item_name="app_container", skip_trace_errors=True)
    app_container = Container(settings=settings)
    print(f"self_resolved={app_container.resolve('app_container') is app_container}")  # => self_resolved=True


if __name__ == "__main__":
    main()
