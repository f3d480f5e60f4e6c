"""Configuration module for safelog."""

from safelog.config.models import (
    DEFAULT_CONFIG_TEMPLATE,
    DEFAULT_HEADER_GROUPS,
    DEFAULT_MAX_CAUSES,
    SerializerConfig,
    get_config_file,
    load_config,
    parse_paths_string,
)

__all__ = [
    "DEFAULT_CONFIG_TEMPLATE",
    "DEFAULT_HEADER_GROUPS",
    "DEFAULT_MAX_CAUSES",
    "SerializerConfig",
    "get_config_file",
    "load_config",
    "parse_paths_string",
]
