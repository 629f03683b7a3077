"""Data models for config-keys."""

from dataclasses import dataclass
from enum import Enum
from importlib import resources
from pathlib import Path


class ConfigFormat(Enum):
    """On-disk configuration format.

    Fixed for a document at construction time.
    """

    HOCON = "hocon"
    GSON = "gson"
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def from_path(cls, path: Path) -> "ConfigFormat":
        """Infer the format from a file suffix.

        GSON shares the .json suffix with JSON and must be requested explicitly.

        Raises:
            ValueError: If the suffix is not recognised
        """
        suffix = Path(path).suffix.lower()
        suffix_map = {
            ".conf": cls.HOCON,
            ".hocon": cls.HOCON,
            ".json": cls.JSON,
            ".yaml": cls.YAML,
            ".yml": cls.YAML,
        }
        if suffix not in suffix_map:
            raise ValueError(f"Cannot infer configuration format from '{path}'")
        return suffix_map[suffix]


@dataclass(frozen=True)
class PackageResource:
    """A template file bundled inside an installed Python package.

    Attributes:
        package: Dotted name of the package holding the resource
        name: Resource path relative to the package directory
    """

    package: str
    name: str

    def read_bytes(self) -> bytes:
        return resources.files(self.package).joinpath(self.name).read_bytes()

    def __str__(self) -> str:
        return f"{self.package}:{self.name}"
