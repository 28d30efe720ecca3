"""
Component references.

A component reference is the bare dotted name a configuration script assigns
(e.g. ``org.grouplens.lenskit.baseline.ItemUserMeanPredictor``). The host
instantiates the component; the configuration layer only carries its name.
"""

import re

_NAME_PATTERN = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")


class ComponentReference:
    """Immutable reference to a component by name."""

    __slots__ = ("_name",)

    def __init__(self, name: str):
        if isinstance(name, ComponentReference):
            name = name.name
        if not isinstance(name, str) or not _NAME_PATTERN.fullmatch(name):
            raise ValueError(f"Invalid component name: {name!r}")
        object.__setattr__(self, "_name", name)

    def __setattr__(self, key, value):
        raise AttributeError("ComponentReference is immutable")

    @property
    def name(self) -> str:
        return self._name

    @property
    def short_name(self) -> str:
        return self._name.rsplit(".", 1)[-1]

    @property
    def package(self) -> str:
        if "." not in self._name:
            return ""
        return self._name.rsplit(".", 1)[0]

    @classmethod
    def is_valid_name(cls, name) -> bool:
        return isinstance(name, str) and bool(_NAME_PATTERN.fullmatch(name))

    def __eq__(self, other):
        if isinstance(other, ComponentReference):
            return self._name == other._name
        return NotImplemented

    def __hash__(self):
        return hash(("ComponentReference", self._name))

    def __str__(self):
        return self._name

    def __repr__(self):
        return f"ComponentReference({self._name!r})"
