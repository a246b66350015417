"""Component type registry.

Maps component type names to ComponentDescriptor objects. The registry is
populated before the build starts; the validator only calls resolve().
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field, ValidationError

from slpc.compiler.errors import ConfigError
from slpc.compiler.ir import Category, ComponentDescriptor, Rule

logger = logging.getLogger(__name__)

# Canonical base type of all visual components
VISUAL_BASE_TYPE = "slplayer.ui.DisplayObject"


class TypeResolver(Protocol):
    """Anything that can map a component name to its descriptor."""

    def resolve(self, name: str) -> ComponentDescriptor | None: ...


class ManifestEntry(BaseModel):
    """One component in a registry manifest."""

    name: str
    extends: str | None = None
    category: Category | None = None
    rules: list[Rule] = Field(default_factory=list)


class RegistryManifest(BaseModel):
    components: list[ManifestEntry] = Field(default_factory=list)


class ComponentRegistry:
    """Registry of component descriptors.

    Example:
        registry = ComponentRegistry()
        registry.register_type("ui.Gallery", extends=VISUAL_BASE_TYPE)
        registry.resolve("ui.Gallery").category  # Category.VISUAL
    """

    def __init__(self, descriptors: list[ComponentDescriptor] | None = None):
        self._descriptors: dict[str, ComponentDescriptor] = {}
        self.register(ComponentDescriptor(name=VISUAL_BASE_TYPE, category=Category.VISUAL))
        for descriptor in descriptors or []:
            self.register(descriptor)

    def __contains__(self, name: str) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def register(self, descriptor: ComponentDescriptor) -> None:
        """Register a descriptor whose category is already known."""
        self._descriptors[descriptor.name] = descriptor

    def register_type(
        self,
        name: str,
        extends: str | None = None,
        rules: list[Rule] | None = None,
    ) -> ComponentDescriptor:
        """Register a type, deriving its category from its parent.

        A type is visual when its parent is the visual base type or a
        registered visual type. Parents are registered first, so the parent's
        category already covers the rest of the chain.
        """
        descriptor = ComponentDescriptor(
            name=name,
            category=self._category_from_parent(extends),
            rules=rules or [],
        )
        self.register(descriptor)
        return descriptor

    def resolve(self, name: str) -> ComponentDescriptor | None:
        return self._descriptors.get(name)

    def _category_from_parent(self, extends: str | None) -> Category:
        if extends is None:
            return Category.SERVICE
        if extends == VISUAL_BASE_TYPE:
            return Category.VISUAL
        parent = self._descriptors.get(extends)
        if parent is None:
            logger.debug(f"Parent type {extends} is not registered, treating as service")
            return Category.SERVICE
        return parent.category

    @classmethod
    def from_manifest(cls, path: str | Path) -> ComponentRegistry:
        """Load a registry from a JSON manifest.

        Entries may extend entries defined later in the file; parents are
        always registered before their children.

        Raises:
            ConfigError: If the manifest is missing, malformed or cyclic
        """
        manifest_path = Path(path)
        try:
            manifest = RegistryManifest.model_validate_json(
                manifest_path.read_text(encoding="utf-8")
            )
        except OSError as e:
            raise ConfigError(f"cannot read component manifest {path}: {e}") from e
        except ValidationError as e:
            raise ConfigError(f"invalid component manifest {path}: {e}") from e

        registry = cls()
        names = {entry.name for entry in manifest.components}
        pending = list(manifest.components)
        while pending:
            deferred = []
            for entry in pending:
                if entry.category is not None:
                    registry.register(
                        ComponentDescriptor(
                            name=entry.name, category=entry.category, rules=entry.rules
                        )
                    )
                elif entry.extends in names and entry.extends not in registry:
                    deferred.append(entry)
                else:
                    registry.register_type(entry.name, extends=entry.extends, rules=entry.rules)
            if len(deferred) == len(pending):
                cyclic = ", ".join(entry.name for entry in deferred)
                raise ConfigError(f"cyclic extends in component manifest {path}: {cyclic}")
            pending = deferred

        logger.debug(f"Loaded {len(manifest.components)} component types from {path}")
        return registry
