"""Config file formats. Currently supported are:
    - YAML
    - TOML
    - INI
    - JSON

Every format gets loaded into its third-party dict-like data structure
(round-trip preserving where the library supports it). Config entries can be
accessed with a `path-like` name.

Example:
    >>> c = ConfigFile('odsync.yaml')
    ... c.retrieve('Document/AUTOSAVE')
    True
"""
import collections
import io
import json
import os
from typing import Any, Callable, Dict

import configobj
import ruamel.yaml
import tomlkit


SEP: str = '/'
"""Separator character for name -> key path conversion."""

ROOT_NAME: str = ''
"""Empty string denoting the root config entry."""


def guess_config_format(filepath: str) -> str:
    """Guess config format from file extension.

    Args:
        filepath: Path to guess from.

    Returns:
        Config format.

    Example:
        >>> guess_config_format('this/is/it.yml')
        'yaml'
    """
    _, ext = os.path.splitext(filepath)
    fmt = ext[1:].lower()
    if fmt == 'yml':
        return 'yaml'

    return fmt


def _load_yaml(stream) -> dict:
    data = ruamel.yaml.YAML().load(stream)
    if data is None:
        return ruamel.yaml.CommentedMap()

    return data


def _load_toml(stream) -> dict:
    return tomlkit.loads(stream.read())


def _load_ini(stream) -> dict:
    return configobj.ConfigObj(io.StringIO(stream.read()))


def _load_json(stream) -> dict:
    return json.load(stream)


LOADERS: Dict[str, Callable] = {
    'yaml': _load_yaml,
    'toml': _load_toml,
    'ini': _load_ini,
    'json': _load_json,
}
"""Config format -> loader function."""


def _plain(data) -> Any:
    """Convert third-party mapping / sequence containers to builtins."""
    if isinstance(data, collections.abc.Mapping):
        return {str(k): _plain(v) for k, v in data.items()}

    if isinstance(data, list):
        return [_plain(v) for v in data]

    if hasattr(data, 'unwrap'):  # tomlkit items
        return data.unwrap()

    return data


class ConfigFile(collections.abc.Mapping):

    """Read-only config file. Format guessed from file extension."""

    def __init__(self, filepath: str):
        """Args:
            filepath: Config file path.
        """
        configFormat = guess_config_format(filepath)
        if configFormat not in LOADERS:
            raise ValueError(f'No config implementation for {configFormat}!')

        self.filepath = filepath
        self.configFormat = configFormat
        self.data: dict = {}
        if os.path.exists(self.filepath):
            self.reload()

    def reload(self):
        """Reload config data from disk."""
        load = LOADERS[self.configFormat]
        with open(self.filepath) as fp:
            self.data = _plain(load(fp))

    def retrieve(self, name: str = ROOT_NAME) -> Any:
        """Retrieve config entry of a given name. Root object by default."""
        if name == ROOT_NAME:
            return self.data

        d = self.data
        for key in name.split(SEP):
            d = d[key]

        return d

    def __getitem__(self, key):
        return self.data[key]

    def __iter__(self):
        return iter(self.data)

    def __len__(self):
        return len(self.data)

    def __str__(self):
        return f'{type(self).__name__}({self.filepath!r})'
