"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from pydantic import ValidationError

from concensor.config import Settings
from concensor.util.di import PROVIDERS, get_provider
from concensor.util.error import ConfigurationError
from concensor.util.logging import setup_logging
from concensor.util.observability import configure_logfire


def load_settings() -> Settings:
    """Load settings from the environment.

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Logging and Logfire are configured from the environment first.

    Returns:
        Configured DI container with production providers
    """
    settings = load_settings()
    setup_logging(settings)
    configure_logfire(settings)

    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
