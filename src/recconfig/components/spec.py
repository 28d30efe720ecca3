"""
Component and parameter descriptions.

These pydantic models describe the property vocabulary of the recommender host:
which components exist, what kind each one is, and which parameters a module
accepts below the ``module`` path together with their defaults.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from recconfig.core.reference import ComponentReference
from recconfig.core.record import is_valid_path


class ComponentKind(str, Enum):
    """Kinds of component a configuration can reference."""

    MODULE = "module"
    BASELINE = "baseline"
    CLAMP = "clamp"
    SIMILARITY = "similarity"
    NORMALIZER = "normalizer"


class ParameterKind(str, Enum):
    """Value types a module parameter can take."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STR = "str"
    COMPONENT = "component"


class ParameterSpec(BaseModel):
    """A parameter accepted by a module, addressed relative to ``module``."""

    path: str = Field(description="Path relative to the module, e.g. knn.similarityDamping")
    kind: ParameterKind
    default: Optional[Any] = Field(
        default=None, description="Host default; None means unset"
    )
    component_kind: Optional[ComponentKind] = Field(
        default=None, description="Required component kind for component parameters"
    )
    minimum: Optional[float] = None
    description: str = ""

    @field_validator("path")
    @classmethod
    def check_path(cls, value):
        if not is_valid_path(value):
            raise ValueError(f"Invalid parameter path: {value!r}")
        return value

    @model_validator(mode="after")
    def check_component_kind(self):
        if self.kind == ParameterKind.COMPONENT and self.component_kind is None:
            raise ValueError(f"Component parameter {self.path} needs a component_kind")
        if self.kind != ParameterKind.COMPONENT and self.component_kind is not None:
            raise ValueError(f"Scalar parameter {self.path} cannot have a component_kind")
        return self

    def default_value(self) -> Any:
        """Default as it would appear in a record (component names become references)."""
        if self.default is None:
            return None
        if self.kind == ParameterKind.COMPONENT:
            return ComponentReference(self.default)
        return self.default


class ComponentSpec(BaseModel):
    """A component the host knows how to instantiate."""

    name: str = Field(description="Fully-qualified component name")
    kind: ComponentKind
    aliases: List[str] = Field(default_factory=list)
    description: str = ""
    parameters: List[ParameterSpec] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        if not ComponentReference.is_valid_name(value):
            raise ValueError(f"Invalid component name: {value!r}")
        return value

    @model_validator(mode="after")
    def check_parameters(self):
        if self.parameters and self.kind != ComponentKind.MODULE:
            raise ValueError(f"Only modules declare parameters ({self.name})")
        seen = set()
        for param in self.parameters:
            if param.path in seen:
                raise ValueError(f"Duplicate parameter {param.path} on {self.name}")
            seen.add(param.path)
        return self

    @property
    def short_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def reference(self) -> ComponentReference:
        return ComponentReference(self.name)

    @property
    def display_name(self) -> str:
        """First alias if there is one, otherwise the short name."""
        return self.aliases[0] if self.aliases else self.short_name

    def parameter(self, path: str) -> Optional[ParameterSpec]:
        for param in self.parameters:
            if param.path == path:
                return param
        return None

    def defaults(self) -> Dict[str, Any]:
        """Host defaults for every parameter that has one."""
        return {
            param.path: param.default_value()
            for param in self.parameters
            if param.default is not None
        }
