"""
Configuration management for kvstreams.

Two unrelated surfaces live here: ``StreamsConfig``, the process-wide runtime
defaults used by spillable containers and reports, and ``SectionConfig``, a
loader that flattens named sections of a YAML file into one lookup object.
The stream classes themselves never read configuration.
"""

import os
import tempfile
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, Optional, Union

import psutil
import yaml

from kvstreams.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigSectionError,
)


@dataclass
class StreamsConfig:
    """Global configuration for kvstreams operations."""

    # Spilling
    spill_threshold: int = 10_000  # items kept in memory per container
    pressure_check_interval: int = 1000  # appends between memory checks
    external_storage_path: str = field(default_factory=lambda: os.path.join(tempfile.gettempdir(), "kvstreams"))

    # Memory limits
    memory_limit: int = field(default_factory=lambda: int(psutil.virtual_memory().total * 0.8))
    memory_threshold: float = 0.8  # spill early at 80% usage

    # Reporting
    report_max_lines: int = 2000

    _instance: ClassVar[Optional['StreamsConfig']] = None

    @classmethod
    def get_instance(cls) -> 'StreamsConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """Set default configuration values."""
        instance = cls.get_instance()
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

    def under_memory_pressure(self) -> bool:
        """True when used memory has reached ``memory_threshold`` of the effective limit."""
        mem = psutil.virtual_memory()
        total = min(mem.total, self.memory_limit)
        if total <= 0:
            return True
        return mem.used / total >= self.memory_threshold


class SectionConfig(MutableMapping):
    """
    Flat key/value view over selected sections of a YAML file.

    The file is a mapping of section names to mappings of settings::

        database:
          connection_string: postgres://localhost/inventory
        silos:
          temp_dir: /var/tmp/
          connection_string: postgres://localhost/silos

    Sections are applied in the order given, so a key that appears in
    several of them takes the value from the last one. Values are read
    with ``conf["key"]`` or ``conf.key``; attribute access returns None
    for keys that are not present.
    """

    def __init__(self, yaml_path: Union[str, 'os.PathLike[str]'], *sections: str):
        if not isinstance(yaml_path, (str, os.PathLike)):
            raise ConfigError(
                f"Configuration setup wasn't supplied a valid YAML file path - "
                f"instead it got a {type(yaml_path).__name__}"
            )
        yaml_path = os.fspath(yaml_path)

        if not os.path.exists(yaml_path):
            raise ConfigFileNotFoundError(f"Configuration setup can't find the specified YAML file {yaml_path}")
        if not os.access(yaml_path, os.R_OK):
            raise ConfigFileNotFoundError(f"Configuration setup can't read the specified YAML file {yaml_path}")

        try:
            with open(yaml_path, 'r', encoding='utf-8') as f:
                document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigParseError(
                f"Configuration setup did not correctly parse the specified YAML file {yaml_path}: {e}"
            ) from e

        if not isinstance(document, dict):
            raise ConfigParseError(
                f"Configuration setup parsed the specified YAML file {yaml_path}, "
                f"but it's not a simple mapping (it's a {type(document).__name__})"
            )

        if not sections:
            raise ConfigSectionError(f"Configuration setup needs at least one section name for {yaml_path}")

        self.path = yaml_path
        self.sections = sections
        self._values: Dict[str, Any] = {}

        for section in sections:
            if not isinstance(section, str):
                raise ConfigSectionError(
                    f"Configuration setup found a section name of class {type(section).__name__}; "
                    f"section names must be strings"
                )
            if section not in document:
                raise ConfigSectionError(
                    f"Configuration setup could not find a section named {section} "
                    f"in the specified YAML file {yaml_path}"
                )
            data = document[section]
            if data is None:
                continue
            if not isinstance(data, dict):
                raise ConfigSectionError(
                    f"Configuration setup expected that the section named {section} from the specified "
                    f"YAML file {yaml_path} would be a mapping, but instead it's a {type(data).__name__}"
                )
            for key, value in data.items():
                self._values[str(key)] = value

    def __getitem__(self, key: str) -> Any:
        return self._values[str(key)]

    def __setitem__(self, key: str, value: Any) -> None:
        self._values[str(key)] = value

    def __delitem__(self, key: str) -> None:
        del self._values[str(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not real attributes.
        if name.startswith('_'):
            raise AttributeError(name)
        return self._values.get(name)

    def __repr__(self) -> str:
        return f"<SectionConfig {self.path} sections={list(self.sections)}>"


# Global configuration instance
config = StreamsConfig.get_instance()
