"""Build pipeline.

Runs every phase once, in order:
1. Load the source document
2. Process <meta> directives (flags, exposed name, runtime parameters)
3. Scan component declarations on <script> tags
4. Validate components against their registered rules
5. Build the initialization program (components, embedded markup, entry)
6. Settle JS packaging (js_modern flag, exposed name)
7. Write artifacts

Phases 1-6 only touch the in-memory document and the BuildContext, so a
failure in any of them leaves nothing on disk. If one artifact write fails,
the artifacts already written are removed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from slpc.builders.program_builder import generate_program
from slpc.renderers.js import render_js

from .context import BuildContext
from .declarations import scan_component_declarations
from .document import Document, load_document
from .errors import BuildWarning
from .ir import InitializationProgram
from .meta_directives import process_meta_directives
from .packager import html_artifact, pack_for_js, write_artifacts
from .validator import check_components

if TYPE_CHECKING:
    from slpc.config import BuildConfig
    from slpc.registries.components import TypeResolver

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Everything one build produced."""

    program: InitializationProgram
    document: Document
    flags: set[str]
    exposed_name: str | None = None
    warnings: list[BuildWarning] = field(default_factory=list)
    artifacts: list[Path] = field(default_factory=list)


class BuildPipeline:
    """Runs one build.

    Example:
        pipeline = BuildPipeline(BuildConfig(source="index.html"), registry)
        result = pipeline.run()
    """

    def __init__(
        self,
        config: BuildConfig,
        resolver: TypeResolver,
        document: Document | None = None,
    ):
        self.config = config
        self.resolver = resolver
        self.document = document

    def run(self, write: bool = True) -> BuildResult:
        """Run all phases.

        Args:
            write: Write the program and HTML artifacts to disk

        Returns:
            BuildResult for this invocation

        Raises:
            BuildError: On the first failure, before anything is written
        """
        document = self.document
        if document is None:
            logger.info(f"Loading {self.config.source}")
            document = load_document(self.config.source)

        ctx = BuildContext(target=self.config.target, flags=set(self.config.defines))

        process_meta_directives(document, ctx)
        scan_component_declarations(document, ctx)
        logger.info(f"Declared components: {', '.join(ctx.components) or 'none'}")

        check_components(document, ctx, self.resolver)

        program = generate_program(document, ctx)

        pack_for_js(ctx, self.config)
        program.exposed_name = ctx.exposed_name

        result = BuildResult(
            program=program,
            document=document,
            flags=set(ctx.flags),
            exposed_name=ctx.exposed_name,
            warnings=list(ctx.warnings),
        )
        if write:
            result.artifacts = self._write_artifacts(document, ctx, program)
        return result

    def _write_artifacts(
        self, document: Document, ctx: BuildContext, program: InitializationProgram
    ) -> list[Path]:
        # Everything is rendered before the first write
        content = render_js(program) if ctx.target.is_js else program.to_json()
        files = [(Path(self.config.output_path), content)]
        html = html_artifact(document, ctx, self.config)
        if html is not None:
            files.append(html)
        return write_artifacts(files)
