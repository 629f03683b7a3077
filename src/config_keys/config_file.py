"""Configuration documents bound to a file and a format."""

import logging
from pathlib import Path
from typing import Any

from .engines import ConfigLoader
from .engines import Template
from .engines import get_engine
from .engines import load_template
from .exceptions import ConfigFileError
from .models import ConfigFormat
from .node import ConfigNode

logger = logging.getLogger(__name__)


class ConfigFile:
    """A loaded configuration document.

    Owns the in-memory tree for one file together with the loader that reads
    and writes it. The format never changes after construction.

    This is the strict surface: ``save`` and ``reload`` raise
    ``ConfigFileError``. Use ``try_load`` for a loader that logs and returns
    None instead.

    Args:
        loader: Loader bound to the file on disk
        root: Tree loaded from that file
    """

    def __init__(self, loader: ConfigLoader, root: ConfigNode):
        self._loader = loader
        self._root = root

    @property
    def path(self) -> Path:
        return self._loader.path

    @property
    def directory(self) -> Path:
        """Directory holding the configuration file."""
        return self._loader.path.parent

    @property
    def format(self) -> ConfigFormat:
        return self._loader.engine.format

    @property
    def loader(self) -> ConfigLoader:
        return self._loader

    @property
    def root(self) -> ConfigNode:
        return self._root

    def at(self, *path: Any) -> ConfigNode:
        """Get the node at ``path``.

        Absent paths give a virtual node rather than an error. With no
        segments, returns the root.
        """
        return self._root.at(*path)

    get_node = at

    def save(self) -> None:
        """Write the in-memory tree to disk.

        Raises:
            ConfigFileError: If the file cannot be written
        """
        self._loader.save(self._root)

    def reload(self) -> None:
        """Replace the in-memory tree with the file's current contents.

        Unsaved changes are discarded.

        Raises:
            ConfigFileError: If the file cannot be read or parsed
        """
        self._root = self._loader.load()
        logger.debug(f"Reloaded configuration from {self.path}")

    # ===== Construction =====

    @classmethod
    def load(
        cls,
        path: Path,
        fmt: ConfigFormat | None = None,
        template: Template | None = None,
        overwrite: bool = False,
        merge: bool = False,
    ) -> "ConfigFile":
        """Open a configuration file, creating it if needed.

        1. With ``overwrite``, an existing file is deleted first.
        2. A missing file is created from ``template`` (byte copy), or empty.
        3. The file is loaded with the engine for ``fmt``.
        4. With ``merge`` and a ``template``, a file that already existed
           gets the template's missing values and is saved straight away.

        Args:
            path: Location of the configuration file
            fmt: Format of the file (default: inferred from the suffix)
            template: Bundled defaults to seed or merge from
            overwrite: Replace an existing file with the template
            merge: Merge template values into an existing file

        Returns:
            The loaded document

        Raises:
            ConfigFileError: If any filesystem or parse step fails
            ValueError: If ``fmt`` is omitted and cannot be inferred
        """
        path = Path(path)
        fmt = fmt or ConfigFormat.from_path(path)
        engine = get_engine(fmt)

        if overwrite:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise ConfigFileError(f"Failed to delete {path}: {e}") from e

        fresh = False
        if not path.exists():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                if template is not None:
                    path.write_bytes(template.read_bytes())
                else:
                    path.touch()
            except Exception as e:
                raise ConfigFileError(f"Failed to create {path}: {e}") from e
            fresh = True
            logger.info(f"Created configuration file {path}" + (f" from {template}" if template is not None else ""))

        loader = ConfigLoader(path, engine)
        root = loader.load()

        if not fresh and merge and template is not None:
            root.merge_values_from(load_template(template, engine))
            loader.save(root)
            logger.info(f"Merged template {template} into {path}")

        return cls(loader, root)

    @classmethod
    def try_load(
        cls,
        path: Path,
        fmt: ConfigFormat | None = None,
        template: Template | None = None,
        overwrite: bool = False,
        merge: bool = False,
    ) -> "ConfigFile | None":
        """Like ``load``, but log failures and return None instead of raising."""
        try:
            return cls.load(path, fmt, template=template, overwrite=overwrite, merge=merge)
        except (ConfigFileError, ValueError):
            logger.exception(f"Failed to load configuration file at {path}")
            return None

    @classmethod
    def load_hocon(
        cls, path: Path, template: Template | None = None, overwrite: bool = False, merge: bool = False
    ) -> "ConfigFile":
        return cls.load(path, ConfigFormat.HOCON, template=template, overwrite=overwrite, merge=merge)

    @classmethod
    def load_gson(
        cls, path: Path, template: Template | None = None, overwrite: bool = False, merge: bool = False
    ) -> "ConfigFile":
        return cls.load(path, ConfigFormat.GSON, template=template, overwrite=overwrite, merge=merge)

    @classmethod
    def load_json(
        cls, path: Path, template: Template | None = None, overwrite: bool = False, merge: bool = False
    ) -> "ConfigFile":
        return cls.load(path, ConfigFormat.JSON, template=template, overwrite=overwrite, merge=merge)

    @classmethod
    def load_yaml(
        cls, path: Path, template: Template | None = None, overwrite: bool = False, merge: bool = False
    ) -> "ConfigFile":
        return cls.load(path, ConfigFormat.YAML, template=template, overwrite=overwrite, merge=merge)

    def __repr__(self) -> str:
        return f"ConfigFile({self.path}, {self.format.value})"


def open_config(
    path: Path,
    template: Template | None = None,
    overwrite: bool = False,
    merge: bool = False,
    fmt: ConfigFormat | None = None,
) -> ConfigFile:
    """Open or create a configuration document.

    Shorthand for ``ConfigFile.load`` with the format inferred from the
    file suffix unless ``fmt`` is given.
    """
    return ConfigFile.load(path, fmt, template=template, overwrite=overwrite, merge=merge)
