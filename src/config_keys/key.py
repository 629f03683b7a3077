"""Reusable keys for reading and writing configuration values."""

import copy
import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from .config_file import ConfigFile
from .exceptions import ConfigFileError
from .exceptions import NoDefaultConfigError
from .exceptions import TransformerError
from .registry import DefaultConfigRegistry
from .registry import default_registry
from .transformers import Transformer
from .utils import coerce_value
from .utils import format_path

logger = logging.getLogger(__name__)

_UNSET: Any = object()


@dataclass(frozen=True)
class ConfigKey:
    """A path into a configuration document with an optional default.

    Keys hold no document state, so one key can be read from and written to
    any number of documents. When no document is passed, the key uses the
    registry's default document.

    Reads never fail on bad data: a missing path, a value of the wrong shape
    or a failed transformation all give the default (the latter two are
    logged). Using a key with no document while the registry is empty raises
    ``NoDefaultConfigError``.

    Attributes:
        path: Non-empty tuple of map keys and list indices
        default: Value returned when nothing usable is stored
        transformer: Converts the resolved node (e.g. ``INTEGER_LIST``)
        value_type: Scalar type values are coerced to; inferred from a
            non-None ``default`` when omitted
        registry: Where to find the default document
    """

    path: tuple[Any, ...]
    default: Any = field(default=None, hash=False)
    transformer: Transformer | None = field(default=None, hash=False)
    value_type: type | None = None
    registry: DefaultConfigRegistry = field(default=default_registry, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "path", tuple(self.path))
        if not self.path:
            raise ValueError("A configuration key needs at least one path segment")
        if self.value_type is None and self.transformer is None and self.default is not None:
            object.__setattr__(self, "value_type", type(self.default))

    # ===== Construction =====

    @classmethod
    def of_single(cls, segment: Any, default: Any = None, **kwargs: Any) -> "ConfigKey":
        """Key for one top-level segment, taken as-is (dots are not split)."""
        return cls((segment,), default, **kwargs)

    @classmethod
    def of_path(cls, *segments: Any, default: Any = None, **kwargs: Any) -> "ConfigKey":
        """Key for a multi-level path.

        Example:
            >>> ConfigKey.of_path("server", "port", default=8080).dotted
            'server.port'
        """
        return cls(segments, default, **kwargs)

    @classmethod
    def of_dotted(cls, dotted: str, default: Any = None, **kwargs: Any) -> "ConfigKey":
        """Key for a dot-separated path such as ``"server.port"``."""
        return cls(tuple(dotted.split(".")), default, **kwargs)

    @property
    def dotted(self) -> str:
        return format_path(self.path)

    # ===== Access =====

    def get(self, config: ConfigFile | None = None, default: Any = _UNSET) -> Any:
        """Read the value stored at this key.

        Args:
            config: Document to read (default: the registry's default document)
            default: Replaces the key's own default for this call

        Returns:
            The stored value, transformed or coerced, or a copy of the default

        Raises:
            NoDefaultConfigError: If ``config`` is None and no default is set
        """
        config = self._resolve(config)
        fallback = self.default if default is _UNSET else default
        node = config.at(*self.path)

        value = node.value
        if value is None:
            return copy.deepcopy(fallback)

        if self.transformer is not None:
            try:
                return self.transformer.transform(node)
            except TransformerError as e:
                logger.warning(f"Improper value for '{self.dotted}' in {config.path}: {e}")
                return copy.deepcopy(fallback)

        value_type = self.value_type
        if value_type is None and fallback is not None:
            value_type = type(fallback)
        if value_type is None:
            return value

        try:
            return coerce_value(value, value_type)
        except TransformerError as e:
            logger.warning(f"Improper value type for '{self.dotted}' in {config.path}: {e}")
            return copy.deepcopy(fallback)

    def set(self, value: Any, config: ConfigFile | None = None) -> bool:
        """Store a value at this key and save the document.

        The in-memory tree keeps the new value even when saving fails.

        Args:
            value: New value; None removes the node
            config: Document to write (default: the registry's default document)

        Returns:
            True if saved, False if the document could not be written

        Raises:
            NoDefaultConfigError: If ``config`` is None and no default is set
        """
        config = self._resolve(config)
        config.at(*self.path).set_value(value)

        try:
            config.save()
        except ConfigFileError as e:
            logger.error(f"Failed to save '{self.dotted}' to {config.path}: {e}")
            return False
        return True

    def _resolve(self, config: ConfigFile | None) -> ConfigFile:
        if config is not None:
            return config
        try:
            return self.registry.require()
        except NoDefaultConfigError as e:
            raise NoDefaultConfigError(f"Attempted to use '{self.dotted}' without a configuration file") from e
