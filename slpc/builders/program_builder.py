"""Initialization program builder."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from slpc.compiler.context import NO_AUTO_START
from slpc.compiler.ir import (
    AppendLaunchCall,
    AppendMainInitCall,
    AssignEmbeddedHtml,
    BuildArgsMap,
    EmitAction,
    Import,
    InitializationProgram,
    RegisterComponent,
    SetOnLoadLaunch,
)

if TYPE_CHECKING:
    from slpc.compiler.context import BuildContext
    from slpc.compiler.document import Document

logger = logging.getLogger(__name__)


class ProgramBuilder:
    """Builds the ordered InitializationProgram from a validated context.

    Call order matters: components, then embedded markup, then entry wiring.

    Example:
        builder = ProgramBuilder(document, ctx)
        builder.include_components()
        builder.embed_html()
        builder.add_entry_wiring()
        program = builder.build()
    """

    EMBED_TARGET = "body"

    def __init__(self, document: Document, ctx: BuildContext):
        self.document = document
        self.ctx = ctx
        self.actions: list[EmitAction] = []
        self._args_counter = 0

    def include_components(self) -> None:
        """Import and register every declared component.

        Only visual components get their declaration attributes as
        registration arguments; service attributes are validated but
        not forwarded. Visual registrations carry the class tag the
        validator matched elements with.
        """
        for name, declaration in self.ctx.components.items():
            self.actions.append(Import(name=name))

            descriptor = self.ctx.descriptors.get(name)
            if descriptor is None or not descriptor.is_visual:
                self.actions.append(RegisterComponent(name=name))
                continue

            var_name = None
            if declaration.attributes:
                var_name = f"args{self._args_counter}"
                self._args_counter += 1
                self.actions.append(
                    BuildArgsMap(var_name=var_name, entries=dict(declaration.attributes))
                )
            self.actions.append(
                RegisterComponent(name=name, args_var=var_name, class_tag=self.ctx.class_tag(name))
            )

    def embed_html(self) -> None:
        """Embed the body markup in the program, unless disabled for the target."""
        if not self.ctx.embed_html:
            return
        literal = json.dumps(self.document.body.inner_html)
        logger.debug(f"Embedding {len(literal)} characters of markup")
        self.actions.append(AssignEmbeddedHtml(target=self.EMBED_TARGET, literal=literal))

    def add_entry_wiring(self) -> None:
        """Add the launch call and, unless noAutoStart, the main init call."""
        if self.ctx.target.is_js and not self.ctx.embed_html:
            # The markup is only there once the page has loaded
            self.actions.append(SetOnLoadLaunch())
        else:
            self.actions.append(AppendLaunchCall())

        if not self.ctx.has_flag(NO_AUTO_START):
            self.actions.append(AppendMainInitCall())

    def build(self) -> InitializationProgram:
        return InitializationProgram(
            actions=list(self.actions),
            meta_parameters=dict(self.ctx.meta_parameters),
            exposed_name=self.ctx.exposed_name,
        )


def generate_program(document: Document, ctx: BuildContext) -> InitializationProgram:
    """Run every builder step in order and return the program."""
    builder = ProgramBuilder(document, ctx)
    builder.include_components()
    builder.embed_html()
    builder.add_entry_wiring()
    return builder.build()
