from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONTAINER_ITEM_NAME = "factory_di"


class FactoryDISettings(BaseSettings):
    """Container defaults read from ``FACTORY_DI_*`` environment variables.

    Explicit ``Container`` keyword arguments take precedence over these
    values.
    """

    model_config = SettingsConfigDict(env_prefix="FACTORY_DI_", frozen=True)

    register_source: str | None = None
    """Register source label applied to registrations that do not pass one."""

    skip_trace_errors: bool = False
    """Skip register-source errors and missing-filename warnings."""

    container_item_name: str = DEFAULT_CONTAINER_ITEM_NAME
    """Reserved name the container registers itself under."""
