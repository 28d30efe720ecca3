"""
Models for the configuration service API.

This module defines Pydantic models for API requests and responses.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ParseRequest(BaseModel):
    """Configuration script parse request model."""

    script: str = Field(description="Configuration script text (rec.<path> = <value> lines)")
    name: Optional[str] = Field(
        default=None,
        description="Algorithm name used when the script does not assign rec.name",
    )
    strict: bool = Field(
        default=True, description="Treat unknown properties as errors"
    )

    @field_validator("script")
    @classmethod
    def ensure_script(cls, value):
        """Ensure the script is not blank."""
        if not value.strip():
            raise ValueError("script is required and cannot be empty")
        return value


class AlgorithmResponse(BaseModel):
    """Configured algorithm response model."""

    name: str
    module: str = Field(description="Fully-qualified module component name")
    parameters: Dict[str, Any] = Field(
        default_factory=dict, description="Overrides assigned below module"
    )
    effective_parameters: Dict[str, Any] = Field(
        default_factory=dict, description="Module defaults overlaid by the overrides"
    )
    attributes: Dict[str, Any] = Field(default_factory=dict)
    source: Optional[str] = None
    script: str = Field(default="", description="Normalized configuration script")


class AlgorithmListResponse(BaseModel):
    """Available algorithm configurations."""

    algorithms: List[AlgorithmResponse] = Field(default_factory=list)


class ParameterResponse(BaseModel):
    """Module parameter model."""

    path: str
    kind: str
    default: Optional[Any] = None
    component_kind: Optional[str] = None
    description: str = ""


class ComponentResponse(BaseModel):
    """Catalog component model."""

    name: str
    kind: str
    aliases: List[str] = Field(default_factory=list)
    description: str = ""
    parameters: List[ParameterResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Configuration error response model."""

    error: str = Field(description="Summary of the failure")
    errors: List[str] = Field(
        default_factory=list, description="Individual problems, one per property"
    )


def component_to_response(spec) -> ComponentResponse:
    """Convert a ComponentSpec into its API model."""
    return ComponentResponse(
        name=spec.name,
        kind=spec.kind.value,
        aliases=list(spec.aliases),
        description=spec.description,
        parameters=[
            ParameterResponse(
                path=p.path,
                kind=p.kind.value,
                default=p.default,
                component_kind=p.component_kind.value if p.component_kind else None,
                description=p.description,
            )
            for p in spec.parameters
        ],
    )
