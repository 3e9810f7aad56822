"""
Configuration management package for chclient.

This package provides:
- Strongly-typed option descriptors with environment overridable defaults
- The immutable Configuration consumed by client sessions
- A resolver merging layered configurations and property maps
- Connection settings loaded from environment variables and config files
"""

from .configuration import Configuration, get_buffer_size
from .connection_settings import ConnectionSettings
from .options import (
    ClientDefaults,
    ClientOption,
    OptionDescriptor,
    parse_key_value_pairs,
    parse_option_value,
)
from .resolver import ConfigurationResolver, build_configuration
from .settings_sources import (
    JsonConfigSettingsSource,
    TomlConfigSettingsSource,
    YamlConfigSettingsSource,
    create_config_sources,
    find_config_files,
)

__all__ = [
    "ClientDefaults",
    "ClientOption",
    "Configuration",
    "ConfigurationResolver",
    "ConnectionSettings",
    "OptionDescriptor",
    "build_configuration",
    "get_buffer_size",
    "parse_key_value_pairs",
    "parse_option_value",
    "YamlConfigSettingsSource",
    "TomlConfigSettingsSource",
    "JsonConfigSettingsSource",
    "create_config_sources",
    "find_config_files",
]
