"""
Command line entry point for building an application from a markup document.

Usage:
    slpc index.html --target js --output build/app.js --registry components.json
"""

import argparse
import logging
import sys

from slpc.compiler.errors import BuildError
from slpc.compiler.pipeline import BuildPipeline, BuildResult
from slpc.config import DEFAULT_SOURCE, BuildConfig
from slpc.registries.components import ComponentRegistry, TypeResolver

logger = logging.getLogger(__name__)


def build(
    source: str = DEFAULT_SOURCE,
    resolver: TypeResolver | None = None,
    **options,
) -> BuildResult:
    """Build the application described by the source document.

    Args:
        source: Path of the markup document
        resolver: Component type resolver; defaults to the registry named
            by the config, or an empty registry
        **options: BuildConfig overrides (target, output, exposed_name, ...)

    On any BuildError, prints "ERROR : <message>" and exits with status 1.
    """
    try:
        config = BuildConfig.from_env(source=source, **options)
        if resolver is None:
            if config.registry is not None:
                resolver = ComponentRegistry.from_manifest(config.registry)
            else:
                resolver = ComponentRegistry()
        return BuildPipeline(config, resolver).run()
    except BuildError as e:
        print(f"ERROR : {e}")
        sys.exit(1)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Build an application from a markup document")
    parser.add_argument(
        "source", nargs="?", default=DEFAULT_SOURCE, help="Source document (default: index.html)"
    )
    parser.add_argument("--target", choices=["js", "native"], help="Output target")
    parser.add_argument("-o", "--output", help="Program output path (e.g., bin/index.js)")
    parser.add_argument("--exposed-name", help="Public entry symbol for JS output")
    parser.add_argument("--registry", help="Component manifest (JSON)")
    parser.add_argument(
        "-D",
        "--define",
        action="append",
        default=[],
        help="Set a compile-time flag (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    result = build(
        args.source,
        target=args.target,
        output=args.output,
        exposed_name=args.exposed_name,
        registry=args.registry,
        defines=set(args.define),
    )

    for artifact in result.artifacts:
        print(f"✅ Wrote {artifact}")
    if result.warnings:
        print(f"   {len(result.warnings)} warning(s)")


if __name__ == "__main__":
    main()
