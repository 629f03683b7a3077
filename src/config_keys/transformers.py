"""Transformers that turn nodes into typed collections."""

from abc import ABC
from abc import abstractmethod
from typing import Any

from .exceptions import TransformerError
from .node import ConfigNode
from .utils import coerce_value
from .utils import format_path


class Transformer(ABC):
    """Converts a resolved node into the value a key hands back.

    Transformers are stateless and never modify the node, so one instance
    can be shared by any number of keys.
    """

    @abstractmethod
    def transform(self, node: ConfigNode) -> Any:
        """Convert ``node``.

        Raises:
            TransformerError: If the node does not have the expected shape
        """


class NodeTransformer(Transformer):
    """Pass-through for keys that want the node itself."""

    def transform(self, node: ConfigNode) -> ConfigNode:
        return node


class ListTransformer(Transformer):
    """Reads a list node into a list, keeping document order.

    Args:
        element_type: Type each element is coerced to (None keeps raw values)
    """

    def __init__(self, element_type: type | None = None):
        self.element_type = element_type

    def transform(self, node: ConfigNode) -> list[Any]:
        return list(_elements(node, self.element_type))


class SetTransformer(Transformer):
    """Reads a list node into a set; duplicates collapse.

    Args:
        element_type: Type each element is coerced to (None keeps raw values)
    """

    def __init__(self, element_type: type | None = None):
        self.element_type = element_type

    def transform(self, node: ConfigNode) -> set[Any]:
        try:
            return set(_elements(node, self.element_type))
        except TypeError as e:
            raise TransformerError(f"Unhashable element under '{format_path(node.path)}': {e}", node.path) from e


class MapTransformer(Transformer):
    """Reads a map node into a dict.

    Args:
        key_type: Type each key is coerced to (None keeps raw keys)
        value_type: Type each value is coerced to (None keeps raw values)
    """

    def __init__(self, key_type: type | None = str, value_type: type | None = None):
        self.key_type = key_type
        self.value_type = value_type

    def transform(self, node: ConfigNode) -> dict[Any, Any]:
        if not node.has_map_children():
            raise TransformerError(f"Node '{format_path(node.path)}' is not a map", node.path)

        result = {}
        for key, child in node.children_map().items():
            result[_coerce(key, self.key_type, node)] = _coerce(child.value, self.value_type, child)
        return result


def _elements(node: ConfigNode, element_type: type | None):
    if not node.has_list_children():
        raise TransformerError(f"Node '{format_path(node.path)}' is not a list", node.path)
    for child in node.children_list():
        yield _coerce(child.value, element_type, child)


def _coerce(value: Any, value_type: type | None, node: ConfigNode) -> Any:
    if value_type is None:
        return value
    try:
        return coerce_value(value, value_type)
    except TransformerError as e:
        raise TransformerError(f"Bad value under '{format_path(node.path)}': {e}", node.path) from e


NODE = NodeTransformer()

# Basic list transformers
STRING_LIST = ListTransformer(str)
BOOLEAN_LIST = ListTransformer(bool)
INTEGER_LIST = ListTransformer(int)
FLOAT_LIST = ListTransformer(float)

# Basic set transformers
STRING_SET = SetTransformer(str)
BOOLEAN_SET = SetTransformer(bool)
INTEGER_SET = SetTransformer(int)
FLOAT_SET = SetTransformer(float)

# Basic map transformers
STRING_MAP = MapTransformer(str, str)
BOOLEAN_MAP = MapTransformer(str, bool)
INTEGER_MAP = MapTransformer(str, int)
FLOAT_MAP = MapTransformer(str, float)
