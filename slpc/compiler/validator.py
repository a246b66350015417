"""Component validator - checks declared components against their rules.

Visual components are checked on every element they attach to; service
components are checked once against their own declaration attributes.
The first violation raises and aborts the build.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import (
    DisallowedTagError,
    MissingDeclarationAttributeError,
    MissingElementAttributeError,
    UnresolvedComponentError,
)
from .ir import AllowedTags, ComponentDeclaration, ComponentDescriptor, RequiresAttributes

if TYPE_CHECKING:
    from slpc.registries.components import TypeResolver

    from .context import BuildContext
    from .document import Document, Element

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class ComponentValidator:
    """Validates every declared component of a build."""

    def __init__(self, document: Document, ctx: BuildContext, resolver: TypeResolver):
        self.document = document
        self.ctx = ctx
        self.resolver = resolver

    def validate(self) -> None:
        """Validate all declared components, in declaration order.

        Raises:
            BuildError: On the first unresolved component or rule violation
        """
        for name, declaration in self.ctx.components.items():
            descriptor = self.resolver.resolve(name)
            if descriptor is None:
                raise UnresolvedComponentError(name)
            self.ctx.descriptors[name] = descriptor

            if descriptor.is_visual:
                self._validate_visual(descriptor)
            else:
                self._validate_service(descriptor, declaration)

    def matching_elements(self, name: str) -> list[Element]:
        """Elements a visual component attaches to.

        Class-tag matches first, then elements carrying the raw type name
        as a class when it differs from the tag.
        """
        class_tag = self.ctx.class_tag(name)
        elements = self.document.find_by_class(class_tag)
        if name != class_tag:
            seen = {id(el) for el in elements}
            elements += [el for el in self.document.find_by_class(name) if id(el) not in seen]
        return elements

    def _validate_visual(self, descriptor: ComponentDescriptor) -> None:
        elements = self.matching_elements(descriptor.name)
        logger.debug(f"Visual component {descriptor.name} matches {len(elements)} element(s)")

        for rule in descriptor.rules:
            if isinstance(rule, RequiresAttributes):
                for element in elements:
                    for attribute in rule.names:
                        if _is_blank(element.get_attribute(attribute)):
                            raise MissingElementAttributeError(
                                descriptor.name, attribute, element.tag_name
                            )
            elif isinstance(rule, AllowedTags):
                allowed = {tag.upper() for tag in rule.names}
                for element in elements:
                    if element.tag_name not in allowed:
                        raise DisallowedTagError(descriptor.name, element.tag_name, rule.names)

    def _validate_service(
        self, descriptor: ComponentDescriptor, declaration: ComponentDeclaration
    ) -> None:
        for rule in descriptor.rules:
            if not isinstance(rule, RequiresAttributes):
                continue
            for attribute in rule.names:
                if _is_blank(declaration.attributes.get(attribute)):
                    raise MissingDeclarationAttributeError(
                        descriptor.name, attribute, declaration.site
                    )


def check_components(document: Document, ctx: BuildContext, resolver: TypeResolver) -> None:
    """Validate every component declared in ctx.

    Convenience wrapper around ComponentValidator.
    """
    ComponentValidator(document, ctx, resolver).validate()
