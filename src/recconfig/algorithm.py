"""
Algorithm instance module.

An AlgorithmInstance is what a configuration script configures: a named
recommender module plus the parameter overrides assigned below ``module``.
Building one resolves every component reference, validates the overrides and
hands the record off (freezes it).
"""

from typing import Any, Dict, List, Optional

from utils.common_utils import get_logger
from recconfig.core.errors import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidRecommenderError,
    TypeMismatchError,
    UnknownPathError,
)
from recconfig.core.reference import ComponentReference
from recconfig.core.record import ConfigurationRecord
from recconfig.components.registry import default_registry
from recconfig.components.spec import ComponentKind, ComponentSpec
from recconfig.components.validation import validate_parameters

logger = get_logger(__name__)

NAME_PATH = "name"
MODULE_PATH = "module"
ATTRIBUTES_PREFIX = "attributes"


def _plain(value):
    return str(value) if isinstance(value, ComponentReference) else value


class AlgorithmInstance:
    """A recommender algorithm configured by one configuration record."""

    def __init__(
        self,
        name: str,
        module: ComponentSpec,
        parameters: Optional[Dict[str, Any]] = None,
        attributes: Optional[Dict[str, Any]] = None,
        record: Optional[ConfigurationRecord] = None,
        source: Optional[str] = None,
    ):
        self.name = name
        self.module = module
        self.parameters = dict(parameters or {})
        self.attributes = dict(attributes or {})
        self.record = record if record is not None else ConfigurationRecord()
        self.source = source

    @classmethod
    def from_record(
        cls,
        record: ConfigurationRecord,
        registry=None,
        name: Optional[str] = None,
        strict: bool = True,
        source: Optional[str] = None,
    ) -> "AlgorithmInstance":
        """
        Build an algorithm instance from a configuration record.

        Args:
            record: Record produced by a configuration script
            registry: ComponentRegistry (built-in catalog when None)
            name: Name used when the record does not assign ``name``
            strict: Whether unknown paths are errors
            source: Where the record came from, for error messages

        Returns:
            AlgorithmInstance: configured instance; ``record`` is frozen
        """
        registry = registry if registry is not None else default_registry()
        errors: List[ConfigurationError] = []

        module_ref = record.get(MODULE_PATH)
        if module_ref is None:
            raise InvalidRecommenderError(source, "No recommender configured")
        if not isinstance(module_ref, ComponentReference):
            raise ConfigurationValidationError(
                [TypeMismatchError(MODULE_PATH, "module component", module_ref)],
                source=source,
            )

        module = registry.resolve(module_ref, kind=ComponentKind.MODULE)
        if module.kind != ComponentKind.MODULE:
            raise ConfigurationValidationError(
                [TypeMismatchError(MODULE_PATH, "module component", str(module_ref))],
                source=source,
            )

        record_name = record.get(NAME_PATH)
        if record_name is not None and (not isinstance(record_name, str) or not record_name.strip()):
            errors.append(TypeMismatchError(NAME_PATH, "non-empty str", record_name))
            record_name = None
        if record_name is not None:
            algo_name = record_name
        elif name is not None:
            algo_name = name
        else:
            algo_name = module.display_name

        attributes = record.subtree(ATTRIBUTES_PREFIX)
        for path in record.paths():
            if path in (NAME_PATH, MODULE_PATH):
                continue
            if path.startswith(MODULE_PATH + ".") or path.startswith(ATTRIBUTES_PREFIX + "."):
                continue
            if strict:
                errors.append(UnknownPathError(path))
            else:
                logger.warning(f"Ignoring unknown property {path!r} in {source or algo_name}")

        try:
            parameters = validate_parameters(
                module,
                record.subtree(MODULE_PATH),
                registry,
                strict=strict,
                source=source,
            )
        except ConfigurationValidationError as e:
            errors.extend(e.errors)
            parameters = {}

        if errors:
            raise ConfigurationValidationError(errors, source=source)

        record.freeze()
        logger.info(f"Configured algorithm {algo_name} using {module.name}")
        return cls(
            name=algo_name,
            module=module,
            parameters=parameters,
            attributes=attributes,
            record=record,
            source=source,
        )

    def effective_parameters(self) -> Dict[str, Any]:
        """Module defaults overlaid by this instance's overrides."""
        overrides = ConfigurationRecord(self.parameters)
        return overrides.apply_to(self.module.defaults())

    def get_parameter(self, path: str, default: Any = None) -> Any:
        return self.effective_parameters().get(path, default)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly summary of the configured algorithm."""
        return {
            "name": self.name,
            "module": self.module.name,
            "parameters": {k: _plain(v) for k, v in self.parameters.items()},
            "effective_parameters": {
                k: _plain(v) for k, v in self.effective_parameters().items()
            },
            "attributes": {k: _plain(v) for k, v in self.attributes.items()},
            "source": self.source,
        }

    def __repr__(self):
        return f"<AlgorithmInstance {self.name} ({self.module.name})>"
