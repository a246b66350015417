"""Registry modules for component types and class tags."""

from .components import VISUAL_BASE_TYPE, ComponentRegistry, TypeResolver
from .tags import get_unconflicted_class_tag, short_name

__all__ = [
    "VISUAL_BASE_TYPE",
    "ComponentRegistry",
    "TypeResolver",
    "get_unconflicted_class_tag",
    "short_name",
]
