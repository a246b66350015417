"""JS target packaging.

Settles the exposed name and build flags for JS output and writes the
processed document next to the generated script.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .context import JS_MODERN
from .errors import ArtifactWriteError

if TYPE_CHECKING:
    from slpc.config import BuildConfig

    from .context import BuildContext
    from .document import Document

logger = logging.getLogger(__name__)


def split_output_path(output: str) -> tuple[str, str]:
    """Split an output path into (directory, base name).

    The directory keeps its trailing separator so that directory + name
    rebuilds a path. The base name runs from the last separator to the
    last dot, or to the end when there is no extension.

    Example:
        split_output_path("build/app.js")  # ("build/", "app")
    """
    start = max(output.rfind("/"), output.rfind("\\")) + 1
    end = output.rfind(".")
    if end < start:
        end = len(output)
    return output[:start], output[start:end]


def pack_for_js(ctx: BuildContext, config: BuildConfig) -> None:
    """Finalize JS output settings. No-op for other targets."""
    if not ctx.target.is_js:
        return

    _, base_name = split_output_path(config.output_path)

    if not ctx.has_flag(JS_MODERN):
        ctx.set_flag(JS_MODERN)

    if config.exposed_name:
        ctx.warn(f"Exposed name already set to {config.exposed_name}, keeping it")
        ctx.exposed_name = config.exposed_name
    elif ctx.exposed_name_override:
        ctx.exposed_name = ctx.exposed_name_override
    else:
        ctx.exposed_name = base_name

    logger.debug(f"Exposed name: {ctx.exposed_name}")


def html_artifact_path(config: BuildConfig) -> Path:
    directory, base_name = split_output_path(config.output_path)
    return Path(f"{directory}{base_name}.html")


def html_artifact(
    document: Document, ctx: BuildContext, config: BuildConfig
) -> tuple[Path, str] | None:
    """The (path, markup) of the processed document written beside the JS output.

    None for non-JS targets and when the markup is embedded in the program.
    """
    if not ctx.target.is_js or ctx.embed_html:
        return None
    return html_artifact_path(config), document.to_html()


def write_artifacts(files: list[tuple[Path, str]]) -> list[Path]:
    """Write every (path, content) pair, or none of them.

    Files already written by this call are removed when a later write fails.

    Raises:
        ArtifactWriteError: On the first write failure
    """
    written: list[Path] = []
    for path, content in files:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            for done in written:
                done.unlink(missing_ok=True)
            raise ArtifactWriteError(str(path), e.strerror or str(e)) from e
        written.append(path)
        logger.info(f"Wrote {path}")
    return written


def write_html_artifact(document: Document, ctx: BuildContext, config: BuildConfig) -> Path | None:
    """Write the processed document beside the JS output.

    Returns:
        The written path, or None when nothing was written
    """
    artifact = html_artifact(document, ctx, config)
    if artifact is None:
        return None
    return write_artifacts([artifact])[0]
