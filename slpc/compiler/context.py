"""Build context for accumulating facts during one build.

Created by BuildPipeline for a single invocation and discarded when it
returns. Every phase reads from and writes to this context only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from slpc.registries.tags import get_unconflicted_class_tag

from .errors import BuildWarning
from .ir import ComponentDeclaration, ComponentDescriptor, OutputTarget

logger = logging.getLogger(__name__)

# Compile-time flags
NO_AUTO_START = "noAutoStart"
EMBED_HTML = "embedHtml"
DISABLE_FAST_INIT = "disableFastInit"
JS_MODERN = "js_modern"


@dataclass
class BuildContext:
    """Accumulates analysis results for the emission phase.

    This is the single source of truth for all state gathered during a
    build: flags, runtime parameters, declared components and their
    resolved descriptors.
    """

    target: OutputTarget

    # Compile-time flags (never carried into the generated program)
    flags: set[str] = field(default_factory=set)

    # Runtime parameters from <meta> tags
    meta_parameters: dict[str, str] = field(default_factory=dict)

    # Declared components, in first-declaration order
    components: dict[str, ComponentDeclaration] = field(default_factory=dict)

    # Filled by the validator
    descriptors: dict[str, ComponentDescriptor] = field(default_factory=dict)

    class_tags: dict[str, str] = field(default_factory=dict)
    exposed_name_override: str | None = None
    exposed_name: str | None = None
    warnings: list[BuildWarning] = field(default_factory=list)

    def set_flag(self, name: str) -> None:
        self.flags.add(name)

    def has_flag(self, name: str) -> bool:
        return name in self.flags

    @property
    def embed_html(self) -> bool:
        """Embedding is on by default, opt-in for JS targets."""
        return not self.target.is_js or self.has_flag(EMBED_HTML)

    def declare_component(self, name: str, attributes: dict[str, str], site: str = "") -> None:
        """Declare a component. A later declaration replaces the attribute set."""
        self.components[name] = ComponentDeclaration(
            name=name, attributes=dict(attributes), site=site
        )

    def class_tag(self, name: str) -> str:
        """Class tag for a visual component, fixed for the whole build.

        The validator matches elements with it and the program builder puts
        it on the component's registration.
        """
        if name not in self.class_tags:
            self.class_tags[name] = get_unconflicted_class_tag(name, self.components)
        return self.class_tags[name]

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(BuildWarning(message=message))
