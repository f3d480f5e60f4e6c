"""safelog package."""

from .config.models import SerializerConfig, load_config
from .exceptions import (
    CauseChainTooLongError,
    ConfigError,
    CyclicReferenceError,
    MaxDepthExceededError,
    SafeLogError,
)
from .logging import SerializerFilter, install_serializers
from .redaction import RedactionPath, sanitize
from .serializers import (
    SERIALIZER_NAMES,
    EntityKind,
    classify,
    default_serializers,
    flatten_stack,
    serialize_any,
    serialize_err,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CauseChainTooLongError",
    "ConfigError",
    "CyclicReferenceError",
    "EntityKind",
    "MaxDepthExceededError",
    "RedactionPath",
    "SERIALIZER_NAMES",
    "SafeLogError",
    "SerializerConfig",
    "SerializerFilter",
    "classify",
    "default_serializers",
    "flatten_stack",
    "install_serializers",
    "load_config",
    "sanitize",
    "serialize_any",
    "serialize_err",
]
