"""Errors raised while wiring the engine, before any domain code runs."""


class UtilError(Exception):
    """Base for startup and wiring failures."""


class ConfigurationError(UtilError):
    """Settings could not be loaded from the environment or ``.env``."""


class DependencyInjectionError(UtilError):
    """No provider implementation matches a requested component."""
