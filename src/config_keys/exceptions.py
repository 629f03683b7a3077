"""Exceptions for config-keys."""

from typing import Any


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error creating, reading or writing a configuration file."""

    pass


class TransformerError(ConfigError):
    """Error converting a node into the type a key expects.

    Args:
        message: Description of the failure
        path: Path of the offending node, when known
    """

    def __init__(self, message: str, path: tuple[Any, ...] | None = None):
        super().__init__(message)
        self.path = path


class NoDefaultConfigError(ConfigError):
    """A key was used without a document while no default document is registered."""

    pass
