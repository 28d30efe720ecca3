"""
Component catalog of the configuration layer.

This submodule describes the components a configuration can reference and
validates module parameters against their declarations.
"""

from recconfig.components.spec import (
    ComponentKind,
    ComponentSpec,
    ParameterKind,
    ParameterSpec,
)
from recconfig.components.registry import ComponentRegistry, default_registry
from recconfig.components.validation import coerce_parameter, validate_parameters

__all__ = [
    "ComponentKind",
    "ComponentRegistry",
    "ComponentSpec",
    "ParameterKind",
    "ParameterSpec",
    "coerce_parameter",
    "default_registry",
    "validate_parameters",
]
