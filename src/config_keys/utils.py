"""Utility functions for config-keys."""

from typing import Any

from .exceptions import TransformerError

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def format_path(path: tuple[Any, ...]) -> str:
    """Render a node path for log and error messages.

    Examples:
        >>> format_path(("server", "ports", 0))
        'server.ports.0'
    """
    return ".".join(str(segment) for segment in path)


def coerce_value(value: Any, value_type: type) -> Any:
    """Coerce a scalar value read from a document to ``value_type``.

    Only lossless conversions between scalars are attempted. Maps and lists
    never coerce to a scalar type.

    Args:
        value: Raw value stored in a node
        value_type: Type the caller expects

    Returns:
        The value as an instance of ``value_type``

    Raises:
        TransformerError: If the value cannot be represented as ``value_type``

    Examples:
        >>> coerce_value("7", int)
        7
        >>> coerce_value("off", bool)
        False
    """
    if value is None:
        raise TransformerError(f"Cannot coerce null to {value_type.__name__}")

    if value_type in (str, bool, int, float) and isinstance(value, (dict, list, tuple, set)):
        raise TransformerError(f"Cannot coerce {type(value).__name__} to {value_type.__name__}")

    if value_type is str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    if value_type is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise TransformerError(f"Cannot coerce {value!r} to bool")

    if value_type is int:
        if isinstance(value, bool):
            raise TransformerError(f"Cannot coerce {value!r} to int")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError as e:
                raise TransformerError(f"Cannot coerce {value!r} to int") from e
        raise TransformerError(f"Cannot coerce {value!r} to int")

    if value_type is float:
        if isinstance(value, bool):
            raise TransformerError(f"Cannot coerce {value!r} to float")
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError as e:
                raise TransformerError(f"Cannot coerce {value!r} to float") from e
        raise TransformerError(f"Cannot coerce {value!r} to float")

    if isinstance(value, value_type):
        return value
    raise TransformerError(f"Cannot coerce {type(value).__name__} to {value_type.__name__}")
