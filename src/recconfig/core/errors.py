"""
Exceptions raised while building, loading and validating algorithm configurations.

Every error derives from ConfigurationError so callers can catch the whole family.
"""

from typing import List, Optional


class ConfigurationError(Exception):
    """Base class for configuration errors."""


class InvalidPathError(ConfigurationError):
    """A property path is not a dotted sequence of identifiers."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Invalid property path: {path!r}")


class RecordFrozenError(ConfigurationError):
    """A configuration record was modified after it was handed off."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"Cannot modify {path!r}: configuration record is frozen"
        else:
            message = "Configuration record is frozen"
        super().__init__(message)


class ScriptSyntaxError(ConfigurationError):
    """A line of a configuration script could not be parsed."""

    def __init__(self, message: str, source=None, line: int = 0, text: str = ""):
        self.source = source
        self.line = line
        self.text = text
        location = f"{source or '<script>'}:{line}"
        super().__init__(f"{location}: {message}: {text.strip()!r}")


class UnresolvedComponentError(ConfigurationError):
    """A component reference names nothing in the registry."""

    def __init__(self, name: str, kind: Optional[str] = None):
        self.name = name
        self.kind = kind
        if kind:
            message = f"Unknown {kind} component: {name}"
        else:
            message = f"Unknown component: {name}"
        super().__init__(message)


class AmbiguousComponentError(UnresolvedComponentError):
    """A short component name matches more than one registered component."""

    def __init__(self, name: str, candidates: List[str]):
        self.candidates = sorted(candidates)
        ConfigurationError.__init__(
            self,
            f"Component name {name!r} is ambiguous: {', '.join(self.candidates)}",
        )
        self.name = name
        self.kind = None


class UnknownPathError(ConfigurationError):
    """A property path is not part of the configured module's vocabulary."""

    def __init__(self, path: str, owner: Optional[str] = None):
        self.path = path
        self.owner = owner
        if owner:
            message = f"Unknown property {path!r} for {owner}"
        else:
            message = f"Unknown property {path!r}"
        super().__init__(message)


class TypeMismatchError(ConfigurationError):
    """A value does not fit the type declared for its property."""

    def __init__(self, path: str, expected: str, value):
        self.path = path
        self.expected = expected
        self.value = value
        super().__init__(f"Property {path!r} expects {expected}, got {value!r}")


class ConfigurationValidationError(ConfigurationError):
    """Aggregate of every problem found while validating one configuration."""

    def __init__(self, errors: List[ConfigurationError], source=None):
        self.errors = list(errors)
        self.source = source
        lines = "; ".join(str(e) for e in self.errors)
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{len(self.errors)} configuration error(s): {lines}")


class InvalidRecommenderError(ConfigurationError):
    """A configuration source does not define a usable recommender."""

    def __init__(self, source, message: str):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)
