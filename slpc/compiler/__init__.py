"""Compiler package for markup documents.

Phases:
1. meta_directives - Classify <meta> tags into flags, exposed name, parameters
2. declarations    - Collect data-slp-use component declarations
3. validator       - Check declared components against registered rules
4. packager        - Settle JS output settings and write the HTML artifact

All phases accumulate facts into BuildContext. The full build is run by
slpc.compiler.pipeline.BuildPipeline.
"""

from slpc.compiler.context import BuildContext
from slpc.compiler.declarations import scan_component_declarations
from slpc.compiler.document import Document, Element, load_document, parse_document
from slpc.compiler.errors import BuildError, BuildWarning
from slpc.compiler.meta_directives import process_meta_directives
from slpc.compiler.packager import pack_for_js, split_output_path, write_html_artifact
from slpc.compiler.validator import ComponentValidator, check_components

__all__ = [
    "BuildContext",
    "BuildError",
    "BuildWarning",
    "ComponentValidator",
    "Document",
    "Element",
    "check_components",
    "load_document",
    "pack_for_js",
    "parse_document",
    "process_meta_directives",
    "scan_component_declarations",
    "split_output_path",
    "write_html_artifact",
]
