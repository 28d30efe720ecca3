"""
Core components of the configuration layer.

This submodule contains the configuration record, component references,
loader settings and the error taxonomy.
"""

from recconfig.core.errors import (
    AmbiguousComponentError,
    ConfigurationError,
    ConfigurationValidationError,
    InvalidPathError,
    InvalidRecommenderError,
    RecordFrozenError,
    ScriptSyntaxError,
    TypeMismatchError,
    UnknownPathError,
    UnresolvedComponentError,
)
from recconfig.core.reference import ComponentReference
from recconfig.core.record import ConfigurationRecord, is_valid_path
from recconfig.core.config import LoaderConfig, create_config

__all__ = [
    "AmbiguousComponentError",
    "ComponentReference",
    "ConfigurationError",
    "ConfigurationRecord",
    "ConfigurationValidationError",
    "InvalidPathError",
    "InvalidRecommenderError",
    "LoaderConfig",
    "RecordFrozenError",
    "ScriptSyntaxError",
    "TypeMismatchError",
    "UnknownPathError",
    "UnresolvedComponentError",
    "create_config",
    "is_valid_path",
]
