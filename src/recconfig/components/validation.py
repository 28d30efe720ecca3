"""
Parameter validation for module configurations.

Checks the overrides a script assigns below ``module`` against the module's
declared parameters: unknown paths, value types, component kinds and minimums.
Every problem is collected before anything is raised.
"""

import math
from typing import Any, Dict, List, Mapping

from pydantic import TypeAdapter, ValidationError

from utils.common_utils import get_logger
from recconfig.core.errors import (
    ConfigurationError,
    ConfigurationValidationError,
    TypeMismatchError,
    UnknownPathError,
)
from recconfig.core.reference import ComponentReference
from recconfig.components.spec import ComponentSpec, ParameterKind, ParameterSpec

logger = get_logger(__name__)

_ADAPTERS = {
    ParameterKind.INT: TypeAdapter(int),
    ParameterKind.FLOAT: TypeAdapter(float),
    ParameterKind.BOOL: TypeAdapter(bool),
    ParameterKind.STR: TypeAdapter(str),
}


def coerce_parameter(param: ParameterSpec, value: Any, registry):
    """
    Convert one assigned value to the type its parameter declares.

    Args:
        param: Parameter description
        value: Value from the configuration record
        registry: ComponentRegistry used for component parameters

    Returns:
        The coerced value; component parameters return the canonical reference
    """
    path = f"module.{param.path}"

    if param.kind == ParameterKind.COMPONENT:
        if not isinstance(value, ComponentReference):
            raise TypeMismatchError(path, f"{param.component_kind.value} component", value)
        spec = registry.resolve(value, kind=param.component_kind)
        if spec.kind != param.component_kind:
            raise TypeMismatchError(
                path, f"{param.component_kind.value} component", str(value)
            )
        return spec.reference

    if isinstance(value, ComponentReference):
        raise TypeMismatchError(path, param.kind.value, str(value))
    # bool is an int subclass; only BOOL parameters take booleans
    if isinstance(value, bool) and param.kind != ParameterKind.BOOL:
        raise TypeMismatchError(path, param.kind.value, value)
    if isinstance(value, str) and param.kind in (ParameterKind.INT, ParameterKind.FLOAT):
        raise TypeMismatchError(path, param.kind.value, value)

    try:
        coerced = _ADAPTERS[param.kind].validate_python(value)
    except ValidationError:
        raise TypeMismatchError(path, param.kind.value, value) from None
    if param.kind == ParameterKind.FLOAT and not math.isfinite(coerced):
        raise TypeMismatchError(path, "finite float", value)

    if param.minimum is not None and coerced < param.minimum:
        raise TypeMismatchError(path, f"{param.kind.value} >= {param.minimum:g}", value)
    return coerced


def validate_parameters(
    module: ComponentSpec,
    overrides: Mapping[str, Any],
    registry,
    strict: bool = True,
    source=None,
) -> Dict[str, Any]:
    """
    Validate the overrides assigned below ``module``.

    Args:
        module: Module component the overrides configure
        overrides: Paths relative to ``module`` mapped to assigned values
        registry: ComponentRegistry for component parameters
        strict: Unknown paths are errors when True, logged and kept when False
        source: Where the overrides came from, for error messages

    Returns:
        Dictionary of validated (coerced) overrides

    Raises:
        ConfigurationValidationError: if any override is invalid
    """
    validated = {}
    errors: List[ConfigurationError] = []

    for path, value in overrides.items():
        param = module.parameter(path)
        if param is None:
            if strict:
                errors.append(UnknownPathError(f"module.{path}", module.name))
            else:
                logger.warning(
                    f"Unknown property module.{path} for {module.name}; passing it through"
                )
                validated[path] = value
            continue
        try:
            validated[path] = coerce_parameter(param, value, registry)
        except ConfigurationError as e:
            errors.append(e)

    if errors:
        raise ConfigurationValidationError(errors, source=source)
    return validated
