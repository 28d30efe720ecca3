"""
Configuration record module.

A ConfigurationRecord maps dotted property paths to values. Scripts populate one
record by sequential assignment; the record is then handed to the host, which
overlays it on its own defaults.
"""

import math
import re
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from recconfig.core.reference import ComponentReference
from recconfig.core.errors import InvalidPathError, RecordFrozenError

_PATH_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")

_VALUE_TYPES = (ComponentReference, bool, int, float, str)


def is_valid_path(path) -> bool:
    """Return True if ``path`` is one or more identifiers joined by dots."""
    return isinstance(path, str) and bool(_PATH_PATTERN.fullmatch(path))


def join_path(*parts: str) -> str:
    return ".".join(p for p in parts if p)


class ConfigurationRecord:
    """Ordered mapping of dotted property paths to configuration values."""

    def __init__(
        self, assignments: Optional[Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]] = None
    ):
        self._values: Dict[str, Any] = {}
        self._history: List[Tuple[str, Any]] = []
        self._frozen = False
        if assignments is not None:
            self.update(assignments)

    # -- mutation ---------------------------------------------------------

    def set(self, path: str, value: Any) -> None:
        """
        Assign ``value`` at ``path``, replacing any earlier assignment.

        Args:
            path: Dotted property path, e.g. ``module.core.baseline``
            value: A ComponentReference or a scalar (int, float, bool, str)
        """
        if self._frozen:
            raise RecordFrozenError(path)
        if not is_valid_path(path):
            raise InvalidPathError(path)
        if value is None:
            raise ValueError(f"Cannot assign None to {path!r}; use unset()")
        if not isinstance(value, _VALUE_TYPES):
            raise TypeError(
                f"Unsupported value for {path!r}: {type(value).__name__}"
            )
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"Cannot assign non-finite number {value!r} to {path!r}")
        self._values[path] = value
        self._history.append((path, value))

    def unset(self, path: str) -> None:
        """Drop the override at ``path`` so the host default shows through."""
        if self._frozen:
            raise RecordFrozenError(path)
        if path not in self._values:
            raise KeyError(path)
        del self._values[path]

    def update(self, assignments: Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]) -> None:
        items = assignments.items() if isinstance(assignments, Mapping) else assignments
        for path, value in items:
            self.set(path, value)

    def freeze(self) -> "ConfigurationRecord":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- access -----------------------------------------------------------

    def get(self, path: str, default: Any = None) -> Any:
        return self._values.get(path, default)

    def __getitem__(self, path: str) -> Any:
        return self._values[path]

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __delitem__(self, path: str) -> None:
        self.unset(path)

    def __contains__(self, path) -> bool:
        return path in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other):
        if isinstance(other, ConfigurationRecord):
            return self._values == other._values
        return NotImplemented

    def __repr__(self):
        state = " frozen" if self._frozen else ""
        return f"<ConfigurationRecord{state} {self._values!r}>"

    def paths(self) -> List[str]:
        return list(self._values)

    def items(self):
        return self._values.items()

    @property
    def history(self) -> List[Tuple[str, Any]]:
        """Every assignment in the order it was applied, including overwritten ones."""
        return list(self._history)

    def subtree(self, prefix: str) -> Dict[str, Any]:
        """
        Get the assignments below ``prefix`` with the prefix stripped.

        ``module.knn.similarityDamping`` becomes ``knn.similarityDamping`` for
        prefix ``module``. The assignment to ``prefix`` itself is not included.
        """
        if not is_valid_path(prefix):
            raise InvalidPathError(prefix)
        lead = prefix + "."
        return {
            path[len(lead):]: value
            for path, value in self._values.items()
            if path.startswith(lead)
        }

    def apply_to(self, defaults: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Overlay this record on a mapping of host defaults.

        Args:
            defaults: Host-supplied default values keyed by path

        Returns:
            New dictionary; paths not assigned here keep their default value
        """
        merged = dict(defaults)
        merged.update(self._values)
        return merged

    def copy(self) -> "ConfigurationRecord":
        """Unfrozen copy carrying the current assignments (history is not kept)."""
        return ConfigurationRecord(self._values.items())

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary with component references rendered as their names."""
        return {
            path: str(value) if isinstance(value, ComponentReference) else value
            for path, value in self._values.items()
        }
