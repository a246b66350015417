"""Build error types.

Every BuildError is fatal: the first one raised aborts the build before any
artifact is written. Warnings never abort and are only recorded.
"""

from __future__ import annotations

from dataclasses import dataclass


class BuildError(Exception):
    """Raised when the build cannot continue."""

    pass


class ConfigError(BuildError):
    """Raised for an invalid build configuration or registry manifest."""

    pass


class SourceNotFoundError(BuildError):
    """Raised when the source document does not exist."""

    def __init__(self, path: str):
        super().__init__(f"source file not found: {path}")
        self.path = path


class SourceReadError(BuildError):
    """Raised when the source document exists but cannot be read or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read source file {path}: {reason}")
        self.path = path
        self.reason = reason


class ArtifactWriteError(BuildError):
    """Raised when a build artifact cannot be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot write artifact {path}: {reason}")
        self.path = path
        self.reason = reason


class UnresolvedComponentError(BuildError):
    """Raised when a declared component has no registered type."""

    def __init__(self, name: str):
        super().__init__(f"{name} component type not found on build classpath")
        self.name = name


class MissingAttributeError(BuildError):
    """Base for a required attribute that is absent or blank."""

    def __init__(self, message: str, component: str, attribute: str):
        super().__init__(message)
        self.component = component
        self.attribute = attribute


class MissingElementAttributeError(MissingAttributeError):
    """A visual component's element lacks a required attribute."""

    def __init__(self, component: str, attribute: str, tag: str):
        super().__init__(
            f"{attribute} attribute is required on <{tag}> element "
            f"for component {component}",
            component,
            attribute,
        )
        self.tag = tag


class MissingDeclarationAttributeError(MissingAttributeError):
    """A service component's declaration lacks a required attribute."""

    def __init__(self, component: str, attribute: str, site: str):
        super().__init__(
            f"{attribute} attribute is required on the declaration of "
            f"component {component}: {site}",
            component,
            attribute,
        )
        self.site = site


class DisallowedTagError(BuildError):
    """A visual component is attached to an element it does not support."""

    def __init__(self, component: str, tag: str, allowed: list[str]):
        super().__init__(
            f"<{tag}> tag is not allowed for component {component} "
            f"(allowed: {', '.join(allowed)})"
        )
        self.component = component
        self.tag = tag
        self.allowed = allowed


@dataclass
class BuildWarning:
    """A non-fatal diagnostic."""

    message: str
