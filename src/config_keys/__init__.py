"""config-keys: Typed keys over configuration files.

This library lets callers declare a key (a path into a configuration tree)
once, then read or write the value at that path in any loaded document, with
default-value fallback and optional conversion into typed collections.

Four formats are supported: HOCON, JSON, lenient Gson-style JSON and YAML.
Documents can be created from a bundled template, and a template's values can
be merged into an existing file without overwriting what is already there.

Public API:
    ConfigFile: A loaded configuration document (strict: raises ConfigFileError)
    open_config: Open or create a document, inferring the format from the suffix
    ConfigKey: Reusable path with default, coercion and transformer
    ConfigNode: A node in a loaded configuration tree
    ConfigFormat: Enum for HOCON/GSON/JSON/YAML
    PackageResource: A template bundled inside a Python package
    DefaultConfigRegistry, set_default_config, get_default_config,
        has_default_config, reset_default_config: The default document
    ConfigError, ConfigFileError, TransformerError, NoDefaultConfigError: Exception types

Example:
    ```python
    from pathlib import Path
    from config_keys import ConfigKey, PackageResource, open_config, set_default_config
    from config_keys import transformers

    config = open_config(
        Path.home() / ".myapp" / "settings.conf",
        template=PackageResource("myapp", "defaults.conf"),
        merge=True,
    )
    set_default_config(config)

    LEVEL = ConfigKey.of_path("logging", "level", default="info")
    PORTS = ConfigKey.of_path("server", "ports", transformer=transformers.INTEGER_LIST)

    level = LEVEL.get()
    LEVEL.set("debug")
    ports = PORTS.get(default=[8080])
    ```
"""

from .config_file import ConfigFile
from .config_file import open_config
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import NoDefaultConfigError
from .exceptions import TransformerError
from .key import ConfigKey
from .models import ConfigFormat
from .models import PackageResource
from .node import ConfigNode
from .registry import DefaultConfigRegistry
from .registry import get_default_config
from .registry import has_default_config
from .registry import reset_default_config
from .registry import set_default_config

__version__ = "0.1.0"

__all__ = [
    "ConfigFile",
    "open_config",
    "ConfigKey",
    "ConfigNode",
    "ConfigFormat",
    "PackageResource",
    "DefaultConfigRegistry",
    "set_default_config",
    "get_default_config",
    "has_default_config",
    "reset_default_config",
    "ConfigError",
    "ConfigFileError",
    "TransformerError",
    "NoDefaultConfigError",
]
