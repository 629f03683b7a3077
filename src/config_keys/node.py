"""Path-addressable configuration tree."""

from typing import Any

from .utils import format_path


class ConfigNode:
    """A node in a loaded configuration tree.

    A node holds exactly one of: nothing (null), a scalar, an ordered list of
    child nodes, or a mapping of keys to child nodes. Looking up a path that
    does not exist yields a *virtual* node which remembers where it would
    live; the tree only changes once a value is set on it.

    Args:
        key: Key of this node in its parent (map key or list index)
        parent: Parent node, or None for a root
    """

    def __init__(self, key: Any = None, parent: "ConfigNode | None" = None):
        self._key = key
        self._parent = parent
        self._value: Any = None
        self._attached = parent is None

    @classmethod
    def from_data(cls, data: Any, key: Any = None, parent: "ConfigNode | None" = None) -> "ConfigNode":
        """Build an attached tree from plain Python data."""
        node = cls(key, parent)
        node._attached = True
        node._assign(data)
        return node

    # ===== Navigation =====

    @property
    def key(self) -> Any:
        return self._key

    @property
    def parent(self) -> "ConfigNode | None":
        return self._parent

    @property
    def path(self) -> tuple[Any, ...]:
        """Keys leading from the root to this node."""
        segments = []
        node: ConfigNode | None = self
        while node is not None and node._parent is not None:
            segments.append(node._key)
            node = node._parent
        return tuple(reversed(segments))

    def at(self, *path: Any) -> "ConfigNode":
        """Resolve a descendant node.

        Missing segments produce virtual nodes; nothing is created on read.

        Args:
            *path: Map keys or list indices, outermost first

        Returns:
            The node at ``path`` (``self`` when no segments are given)
        """
        node = self
        for segment in path:
            node = node._child(segment)
        return node

    def _child(self, segment: Any) -> "ConfigNode":
        if isinstance(self._value, dict) and segment in self._value:
            return self._value[segment]
        if isinstance(self._value, list) and isinstance(segment, int) and 0 <= segment < len(self._value):
            return self._value[segment]
        return ConfigNode(segment, parent=self)

    # ===== Shape =====

    @property
    def is_virtual(self) -> bool:
        """True when this node is not (yet) part of its tree."""
        return not self._attached

    @property
    def is_empty(self) -> bool:
        if isinstance(self._value, (dict, list)):
            return not self._value
        return self._value is None

    def has_list_children(self) -> bool:
        return isinstance(self._value, list)

    def has_map_children(self) -> bool:
        return isinstance(self._value, dict)

    def children_list(self) -> list["ConfigNode"]:
        return list(self._value) if isinstance(self._value, list) else []

    def children_map(self) -> dict[Any, "ConfigNode"]:
        return dict(self._value) if isinstance(self._value, dict) else {}

    # ===== Values =====

    @property
    def value(self) -> Any:
        """Plain value of this node: a scalar, dict, list or None."""
        if not self._attached:
            return None
        return self.to_data()

    def get_value(self, default: Any = None) -> Any:
        value = self.value
        return default if value is None else value

    def to_data(self) -> Any:
        """Convert this subtree to plain dicts, lists and scalars."""
        if isinstance(self._value, dict):
            return {key: child.to_data() for key, child in self._value.items()}
        if isinstance(self._value, list):
            return [child.to_data() for child in self._value]
        return self._value

    def set_value(self, value: Any) -> "ConfigNode":
        """Replace the value of this node.

        Virtual nodes and their virtual ancestors are attached to the tree. A
        null ancestor becomes a list when the segment below it is an int, and
        a map otherwise.
        Setting None removes the node from its parent.

        Args:
            value: Scalar, dict, list, tuple, set or another ConfigNode

        Returns:
            This node
        """
        if value is None:
            self._detach()
            return self
        self._assign(value)
        self._attach()
        return self

    def _assign(self, data: Any) -> None:
        if isinstance(data, ConfigNode):
            data = data.to_data()
        if isinstance(data, dict):
            self._value = {key: ConfigNode.from_data(item, key=key, parent=self) for key, item in data.items()}
        elif isinstance(data, (list, tuple, set, frozenset)):
            self._value = [ConfigNode.from_data(item, key=index, parent=self) for index, item in enumerate(data)]
        else:
            self._value = data

    def _attach(self) -> None:
        if self._attached:
            return
        parent = self._parent
        assert parent is not None
        parent._attach()
        parent._adopt(self)
        self._attached = True

    def _adopt(self, child: "ConfigNode") -> None:
        if self._value is None and isinstance(child._key, int) and not isinstance(child._key, bool):
            self._value = []
        if isinstance(self._value, list) and isinstance(child._key, int):
            if 0 <= child._key < len(self._value):
                self._value[child._key] = child
            else:
                child._key = len(self._value)
                self._value.append(child)
            return
        if not isinstance(self._value, dict):
            self._value = {}
        self._value[child._key] = child

    def _detach(self) -> None:
        self._value = None
        parent = self._parent
        if parent is None or not self._attached:
            return
        if isinstance(parent._value, dict) and parent._value.get(self._key) is self:
            del parent._value[self._key]
        elif isinstance(parent._value, list) and self in parent._value:
            parent._value.remove(self)
            for index, sibling in enumerate(parent._value):
                sibling._key = index
        self._attached = False

    # ===== Merging =====

    def merge_values_from(self, other: "ConfigNode") -> "ConfigNode":
        """Adopt values from ``other`` wherever this tree has none.

        Map children are merged recursively. A non-null scalar or list already
        present here is never replaced, so merging the same tree twice
        changes nothing the second time.

        Args:
            other: Tree to take missing values from (not modified)

        Returns:
            This node
        """
        if other.has_map_children():
            if self._value is None:
                self._value = {}
                self._attach()
            elif not isinstance(self._value, dict):
                return self
            for key, child in other.children_map().items():
                existing = self._value.get(key)
                if existing is None:
                    self._value[key] = ConfigNode.from_data(child.to_data(), key=key, parent=self)
                else:
                    existing.merge_values_from(child)
        elif other.value is not None and self._value is None:
            self.set_value(other)
        return self

    def copy(self) -> "ConfigNode":
        """Deep copy of this subtree as a new root."""
        return ConfigNode.from_data(self.to_data())

    def __repr__(self) -> str:
        state = "virtual" if self.is_virtual else repr(self.to_data())
        return f"ConfigNode({format_path(self.path) or '<root>'}: {state})"
