"""Registry for the default configuration document."""

import logging

from .config_file import ConfigFile
from .exceptions import NoDefaultConfigError

logger = logging.getLogger(__name__)


class DefaultConfigRegistry:
    """Holds the document that keys read from when none is passed.

    The last ``set`` wins. There is no locking: register the document during
    start-up, before other threads use keys.
    """

    def __init__(self, config: ConfigFile | None = None):
        self._config = config

    def set(self, config: ConfigFile) -> None:
        self._config = config
        logger.debug(f"Default configuration set to {config.path}")

    def get(self) -> ConfigFile | None:
        return self._config

    def has(self) -> bool:
        return self._config is not None

    def require(self) -> ConfigFile:
        """Get the default document.

        Raises:
            NoDefaultConfigError: If no document has been registered
        """
        if self._config is None:
            raise NoDefaultConfigError("No default configuration file has been set")
        return self._config

    def reset(self) -> None:
        self._config = None
        logger.debug("Default configuration cleared")


default_registry = DefaultConfigRegistry()


def set_default_config(config: ConfigFile) -> None:
    """Register the document used by keys called without one."""
    default_registry.set(config)


def get_default_config() -> ConfigFile | None:
    return default_registry.get()


def has_default_config() -> bool:
    return default_registry.has()


def reset_default_config() -> None:
    default_registry.reset()
