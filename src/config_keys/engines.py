"""Format engines that turn configuration text into node trees and back."""

import json
import logging
import re
from abc import ABC
from abc import abstractmethod
from pathlib import Path
from typing import Any
from typing import Protocol

import yaml
from pyhocon import ConfigFactory
from pyhocon.config_tree import ConfigTree
from pyhocon.config_tree import NoneValue
from pyhocon.converter import HOCONConverter

from .exceptions import ConfigFileError
from .models import ConfigFormat
from .node import ConfigNode

logger = logging.getLogger(__name__)

_PLAIN_KEY = re.compile(r"^[A-Za-z0-9_-]+$")


class Template(Protocol):
    """Anything a template can be read from: Path, Traversable or PackageResource."""

    def read_bytes(self) -> bytes: ...


class ConfigEngine(ABC):
    """Parser/serializer pair for one configuration format."""

    format: ConfigFormat

    def parse(self, text: str) -> Any:
        """Parse document text into plain data.

        Empty documents parse to an empty mapping.
        """
        if not text.strip():
            return {}
        return self._parse(text)

    @abstractmethod
    def _parse(self, text: str) -> Any: ...

    @abstractmethod
    def serialize(self, data: Any) -> str: ...


class HoconEngine(ConfigEngine):
    """HOCON, the commented-tree format.

    Comments read from disk are not written back on save.
    """

    format = ConfigFormat.HOCON

    def _parse(self, text: str) -> Any:
        return _from_hocon(ConfigFactory.parse_string(text))

    def serialize(self, data: Any) -> str:
        return HOCONConverter.to_hocon(_to_hocon(data)) + "\n"


class JsonEngine(ConfigEngine):
    """Strict JSON."""

    format = ConfigFormat.JSON

    def _parse(self, text: str) -> Any:
        return json.loads(text)

    def serialize(self, data: Any) -> str:
        return json.dumps(data, indent=4, ensure_ascii=False) + "\n"


class GsonEngine(ConfigEngine):
    """JSON that tolerates raw control characters inside strings.

    Otherwise as strict as ``JsonEngine``; output uses the two-space indent of Gson.
    """

    format = ConfigFormat.GSON

    def _parse(self, text: str) -> Any:
        return json.loads(text, strict=False)

    def serialize(self, data: Any) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


class YamlEngine(ConfigEngine):
    """YAML."""

    format = ConfigFormat.YAML

    def _parse(self, text: str) -> Any:
        data = yaml.safe_load(text)
        return data if data is not None else {}

    def serialize(self, data: Any) -> str:
        return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


_ENGINES: dict[ConfigFormat, ConfigEngine] = {
    ConfigFormat.HOCON: HoconEngine(),
    ConfigFormat.GSON: GsonEngine(),
    ConfigFormat.JSON: JsonEngine(),
    ConfigFormat.YAML: YamlEngine(),
}


def get_engine(fmt: ConfigFormat) -> ConfigEngine:
    """Get the shared engine for a format."""
    return _ENGINES[fmt]


class ConfigLoader:
    """Binds a format engine to one file on disk.

    Args:
        path: Location of the configuration file
        engine: Engine used to parse and serialize it
    """

    def __init__(self, path: Path, engine: ConfigEngine):
        self.path = Path(path)
        self.engine = engine

    def load(self) -> ConfigNode:
        """Read and parse the file.

        Raises:
            ConfigFileError: If the file cannot be read or parsed
        """
        try:
            text = self.path.read_text(encoding="utf-8")
            return ConfigNode.from_data(self.engine.parse(text))
        except Exception as e:
            raise ConfigFileError(f"Failed to load configuration from {self.path}: {e}") from e

    def save(self, node: ConfigNode) -> None:
        """Serialize a tree and write it to the file.

        Raises:
            ConfigFileError: If the tree cannot be serialized or written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(self.engine.serialize(node.to_data()), encoding="utf-8")
        except Exception as e:
            raise ConfigFileError(f"Failed to write configuration to {self.path}: {e}") from e
        logger.debug(f"Saved {self.engine.format.value} configuration to {self.path}")

    def __repr__(self) -> str:
        return f"ConfigLoader({self.path}, {self.engine.format.value})"


def load_template(template: Template, engine: ConfigEngine) -> ConfigNode:
    """Parse a template through an engine into an independent tree.

    Raises:
        ConfigFileError: If the template cannot be read or parsed
    """
    try:
        text = template.read_bytes().decode("utf-8")
        return ConfigNode.from_data(engine.parse(text))
    except Exception as e:
        raise ConfigFileError(f"Failed to load template {template}: {e}") from e


def _from_hocon(value: Any) -> Any:
    if isinstance(value, ConfigTree):
        return {_unquote(key): _from_hocon(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_from_hocon(item) for item in value]
    if isinstance(value, NoneValue):
        return None
    return value


def _to_hocon(value: Any) -> Any:
    if isinstance(value, dict):
        tree = ConfigTree()
        for key, item in value.items():
            tree.put(_quote(str(key)), _to_hocon(item))
        return tree
    if isinstance(value, list):
        return [_to_hocon(item) for item in value]
    return value


def _quote(key: str) -> str:
    # keys outside the unquoted-key alphabet would be read back as paths
    if _PLAIN_KEY.match(key):
        return key
    return '"' + key.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _unquote(key: Any) -> Any:
    return key.strip('"') if isinstance(key, str) else key
