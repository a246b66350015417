"""Component declaration scanning.

<script data-slp-use="Name1 Name2" data-foo="bar"> declares Name1 and Name2,
both configured with {"data-foo": "bar"}.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import BuildContext
    from .document import Document, Element

logger = logging.getLogger(__name__)

DATA_PREFIX = "data-"
USE_ATTRIBUTE = "data-slp-use"


def declaration_attributes(element: Element) -> dict[str, str]:
    """data- attributes of a tag, without the declaration attribute itself."""
    return {
        name: element.get_attribute(name)
        for name in element.attributes
        if name.startswith(DATA_PREFIX) and name != USE_ATTRIBUTE
    }


def scan_component_declarations(document: Document, ctx: BuildContext) -> None:
    """Record component declarations and clean up the declaring tags."""
    for script in document.find_all("script"):
        declared = script.get_attribute(USE_ATTRIBUTE)
        if declared and declared.strip():
            site = script.start_tag()
            attributes = declaration_attributes(script)
            for name in declared.split():
                if name in ctx.components:
                    logger.debug(f"Component {name} redeclared, replacing its attributes")
                ctx.declare_component(name, attributes, site=site)

        has_src = bool(script.get_attribute("src"))
        has_body = bool(script.text.strip())
        if not has_src and not has_body:
            script.remove()
        else:
            script.remove_attribute(USE_ATTRIBUTE)
