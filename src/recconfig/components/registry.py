"""
Component registry module.

This module provides the registry that resolves component references written
in configuration scripts to the ComponentSpec describing them.
"""

import pathlib
from typing import Dict, Iterator, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from utils.common_utils import get_logger
from recconfig.core.errors import (
    AmbiguousComponentError,
    ConfigurationError,
    UnresolvedComponentError,
)
from recconfig.core.reference import ComponentReference
from recconfig.components.catalog import builtin_components
from recconfig.components.spec import ComponentKind, ComponentSpec

logger = get_logger(__name__)

_CATALOG_ADAPTER = TypeAdapter(List[ComponentSpec])


class ComponentRegistry:
    """Registry of components known to the host, indexed by name and alias."""

    def __init__(self, components=None):
        """
        Initialize component registry.

        Args:
            components: Iterable of ComponentSpec to register
        """
        self._components: Dict[str, ComponentSpec] = {}
        self._aliases: Dict[str, str] = {}
        for spec in components or []:
            self.register(spec)

    def register(self, spec: ComponentSpec, replace: bool = False) -> ComponentSpec:
        """
        Register a component.

        Args:
            spec: Component description
            replace: Replace an existing component with the same name

        Returns:
            The registered spec
        """
        if spec.name in self._components and not replace:
            raise ValueError(f"Component already registered: {spec.name}")
        for alias in spec.aliases:
            owner = self._aliases.get(alias)
            if owner is not None and owner != spec.name:
                raise ValueError(f"Alias {alias!r} already used by {owner}")

        old = self._components.get(spec.name)
        if old is not None:
            for alias in old.aliases:
                self._aliases.pop(alias, None)

        self._components[spec.name] = spec
        for alias in spec.aliases:
            self._aliases[alias] = spec.name
        logger.debug(f"Registered {spec.kind.value} component {spec.name}")
        return spec

    def resolve(
        self,
        ref: Union[str, ComponentReference],
        kind: Optional[ComponentKind] = None,
    ) -> ComponentSpec:
        """
        Resolve a component reference.

        Fully-qualified names and aliases match exactly. A bare name (no
        package) also matches a component's short name when exactly one
        component has it; ``kind`` narrows that search.

        Args:
            ref: Component name or reference
            kind: Optional kind used to narrow short-name matches

        Returns:
            The matching ComponentSpec
        """
        name = str(ref)
        spec = self._components.get(name)
        if spec is None and name in self._aliases:
            spec = self._components[self._aliases[name]]
        if spec is not None:
            return spec

        if "." not in name:
            candidates = [
                s
                for s in self._components.values()
                if s.short_name == name and (kind is None or s.kind == kind)
            ]
            if len(candidates) == 1:
                return candidates[0]
            if len(candidates) > 1:
                raise AmbiguousComponentError(name, [s.name for s in candidates])

        raise UnresolvedComponentError(name, kind.value if kind else None)

    def get(self, ref) -> Optional[ComponentSpec]:
        try:
            return self.resolve(ref)
        except UnresolvedComponentError:
            return None

    def by_kind(self, kind: Union[ComponentKind, str]) -> List[ComponentSpec]:
        kind = ComponentKind(kind)
        return [s for s in self._components.values() if s.kind == kind]

    def modules(self) -> List[ComponentSpec]:
        return self.by_kind(ComponentKind.MODULE)

    def load_catalog(self, path: Union[str, pathlib.Path], replace: bool = False) -> int:
        """
        Register components from a JSON catalog file (a list of ComponentSpec objects).

        Args:
            path: Path to the JSON file
            replace: Replace components that are already registered

        Returns:
            Number of components registered
        """
        path = pathlib.Path(path)
        try:
            specs = _CATALOG_ADAPTER.validate_json(path.read_bytes())
        except OSError as e:
            raise ConfigurationError(f"Cannot read component catalog {path}: {e}") from e
        except ValidationError as e:
            raise ConfigurationError(f"Invalid component catalog {path}: {e}") from e

        for spec in specs:
            self.register(spec, replace=replace)
        logger.info(f"Loaded {len(specs)} components from {path}")
        return len(specs)

    def __contains__(self, ref) -> bool:
        return self.get(ref) is not None

    def __iter__(self) -> Iterator[ComponentSpec]:
        return iter(list(self._components.values()))

    def __len__(self) -> int:
        return len(self._components)


def default_registry(catalog_path=None) -> ComponentRegistry:
    """
    Create a registry holding the built-in catalog.

    Args:
        catalog_path: Optional JSON catalog registered on top of the built-ins

    Returns:
        ComponentRegistry: Populated registry
    """
    registry = ComponentRegistry(builtin_components())
    if catalog_path:
        registry.load_catalog(catalog_path, replace=True)
    return registry
