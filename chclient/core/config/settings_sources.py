"""
File based settings sources for chclient connection settings.

Each source reads one or more YAML, TOML or JSON files into a flat dict of
ConnectionSettings fields. Files are merged in order so later files win, and
a file that is missing or cannot be read is skipped with a warning.
"""

import json
from pathlib import Path
from typing import Any, Callable, ClassVar, Dict, List, Optional, Sequence, Tuple, Type, Union

from loguru import logger
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

PathLike = Union[str, Path]

DEFAULT_CONFIG_NAMES = (
    'chclient.yaml',
    'chclient.yml',
    'chclient.toml',
    'chclient.json',
    '.chclient.yaml',
    '.chclient.yml',
    '.chclient.toml',
    '.chclient.json',
)


def _load_yaml(path: Path) -> Any:
    import yaml

    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


def _load_toml(path: Path) -> Any:
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib

    with open(path, 'rb') as f:
        return tomllib.load(f)


def _load_json(path: Path) -> Any:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


class FileConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by configuration files of one format.

    Subclasses set ``loader`` to the function parsing a single file.
    Documents that are not mappings contribute nothing.
    """

    loader: ClassVar[Callable[[Path], Any]]
    suffixes: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, settings_cls: Type[BaseSettings], config_file: Union[PathLike, Sequence[PathLike]]):
        """
        Initialize the source and read its files.

        Args:
            settings_cls: The settings class
            config_file: One path or several, lowest precedence first
        """
        super().__init__(settings_cls)
        paths = [config_file] if isinstance(config_file, (str, Path)) else list(config_file)
        self.config_files = [Path(p) for p in paths]
        self._data = self._read_all()

    def _read_all(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for path in self.config_files:
            if not path.exists():
                logger.warning(f"Config file {path} not found")
                continue
            try:
                document = type(self).loader(path)
            except Exception as e:
                logger.warning(f"Failed to load config file {path}: {e}")
                continue
            if isinstance(document, dict):
                data.update(document)
            else:
                logger.debug(f"Ignoring config file {path}, top level is not a mapping")
        return data

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        """Get field value from the merged file data."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> Dict[str, Any]:
        """Return the merged file data."""
        return dict(self._data)

    def __repr__(self) -> str:
        return f'{type(self).__name__}(config_files={[str(p) for p in self.config_files]})'


class YamlConfigSettingsSource(FileConfigSettingsSource):
    """Settings source for YAML files."""

    loader = staticmethod(_load_yaml)
    suffixes = ('.yaml', '.yml')


class TomlConfigSettingsSource(FileConfigSettingsSource):
    """Settings source for TOML files."""

    loader = staticmethod(_load_toml)
    suffixes = ('.toml',)


class JsonConfigSettingsSource(FileConfigSettingsSource):
    """Settings source for JSON files."""

    loader = staticmethod(_load_json)
    suffixes = ('.json',)


_SOURCE_BY_SUFFIX: Dict[str, Type[FileConfigSettingsSource]] = {
    suffix: source_cls
    for source_cls in (YamlConfigSettingsSource, TomlConfigSettingsSource, JsonConfigSettingsSource)
    for suffix in source_cls.suffixes
}


def create_config_sources(
    settings_cls: Type[BaseSettings],
    config_files: Optional[Sequence[PathLike]] = None,
) -> List[FileConfigSettingsSource]:
    """
    Create one settings source per file, picked by file suffix.

    Args:
        settings_cls: Settings class
        config_files: Files in order of precedence, lowest first

    Returns:
        Settings sources in the same order; unknown formats are skipped
    """
    sources = []
    for config_file in config_files or ():
        path = Path(config_file)
        source_cls = _SOURCE_BY_SUFFIX.get(path.suffix.lower())
        if source_cls is None:
            logger.warning(f"Unknown config file format: {path}")
            continue
        sources.append(source_cls(settings_cls, path))
    return sources


def find_config_files(
    base_dirs: Optional[Sequence[PathLike]] = None,
    config_names: Optional[Sequence[str]] = None,
) -> List[Path]:
    """
    Find configuration files in the user and working directories.

    Args:
        base_dirs: Directories to search, lowest precedence first; defaults to
            ~/.chclient, ~/.config/chclient and the working directory
        config_names: File names to look for in each directory

    Returns:
        Existing files, lowest precedence first
    """
    if base_dirs is None:
        dirs = [Path.home() / '.chclient', Path.home() / '.config' / 'chclient', Path.cwd()]
    else:
        dirs = [Path(d) for d in base_dirs]

    names = DEFAULT_CONFIG_NAMES if config_names is None else tuple(config_names)
    return [
        directory / name
        for directory in dirs if directory.is_dir()
        for name in names if (directory / name).is_file()
    ]
