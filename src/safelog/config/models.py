"""
Serializer configuration.

Configuration can be passed in code as a :class:`SerializerConfig`, or loaded
from a YAML file with :func:`load_config`.

Environment Variables:
    SAFELOG_CONFIG: Path to the YAML configuration file
        (default: ~/.config/safelog/config.yaml)
    SAFELOG_REDACT_PATHS: Comma-separated redaction paths appended to the
        file's ``redact_paths``
        Example: "password,user.token,headers.authorization"
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from safelog.exceptions import ConfigError
from safelog.redaction.engine import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)

# Header groups HTTP client configs carry for per-method defaults
DEFAULT_HEADER_GROUPS: tuple[str, ...] = ("common", "delete", "get", "head", "post", "put", "patch")

DEFAULT_MAX_CAUSES = 32

# Environment variable names
ENV_CONFIG_PATH = "SAFELOG_CONFIG"
ENV_REDACT_PATHS = "SAFELOG_REDACT_PATHS"

DEFAULT_CONFIG_TEMPLATE = """\
# safelog configuration

# Field paths removed from every logged body, at any depth
redact_paths:
  - password
  - user.token

# Header groups dropped from outbound request headers
excluded_header_groups: [common, delete, get, head, post, put, patch]

# Limits for nested payloads and exception cause chains
max_depth: 64
max_causes: 32
"""


class SerializerConfig(BaseModel):
    """Settings shared by every serializer built from one registry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    redact_paths: tuple[str, ...] = Field(
        default=(),
        description="Paths removed wherever their key chain occurs (e.g. 'password', 'user.token').",
    )
    excluded_header_groups: tuple[str, ...] = Field(
        default=DEFAULT_HEADER_GROUPS,
        description="Header names dropped from outbound request headers.",
    )
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        le=1000,
        description="Maximum container nesting accepted by the redaction engine.",
    )
    max_causes: int = Field(
        default=DEFAULT_MAX_CAUSES,
        ge=1,
        le=1000,
        description="Maximum number of 'Caused by' links in a flattened stack.",
    )


def get_config_file() -> Path:
    """Get the config file path. Computed at runtime for test compatibility."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "safelog" / "config.yaml"


def parse_paths_string(paths_str: str) -> list[str]:
    """Parse a comma-separated string of redaction paths.

    Args:
        paths_str: Comma-separated paths.

    Returns:
        List of paths, trimmed and filtered.
    """
    return [p.strip() for p in paths_str.split(",") if p.strip()]


def load_config(path: Path | str | None = None) -> SerializerConfig:
    """Load serializer configuration.

    Args:
        path: YAML file to read. When omitted, the file named by
            ``SAFELOG_CONFIG`` or the default location is used, and a missing
            file simply yields the defaults.

    Returns:
        The validated configuration, with ``SAFELOG_REDACT_PATHS`` appended.

    Raises:
        ConfigError: If an explicit *path* does not exist, or the file is not
            valid YAML or holds invalid values.
    """
    config_file = Path(path) if path is not None else get_config_file()

    data: dict[str, object] = {}
    if config_file.exists():
        try:
            loaded = yaml.safe_load(config_file.read_text()) or {}
        except (yaml.YAMLError, OSError) as e:
            raise ConfigError(f"Failed to read config file {config_file}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file {config_file} must contain a mapping")
        data = dict(loaded)
        logger.debug("Loaded safelog config from %s", config_file)
    elif path is not None:
        raise ConfigError(f"Config file not found: {config_file}")

    env_paths = os.environ.get(ENV_REDACT_PATHS)
    if env_paths:
        file_paths = data.get("redact_paths") or []
        if not isinstance(file_paths, list):
            raise ConfigError("'redact_paths' must be a list of strings")
        data["redact_paths"] = [*file_paths, *parse_paths_string(env_paths)]

    try:
        return SerializerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid safelog configuration: {e}") from e
