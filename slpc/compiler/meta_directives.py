"""<meta> directive processing.

Each named <meta> tag is one of:
1. A compile-time flag (reserved name set to "true", or any name set to
   "compile-flag"). The tag is removed.
2. The jsExposedName override (JS targets only). The tag is removed.
3. A runtime parameter. The tag stays in the document.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .context import DISABLE_FAST_INIT, EMBED_HTML, NO_AUTO_START

if TYPE_CHECKING:
    from .context import BuildContext
    from .document import Document

logger = logging.getLogger(__name__)

RESERVED_FLAGS = frozenset({NO_AUTO_START, EMBED_HTML, DISABLE_FAST_INIT})
COMPILE_FLAG_VALUE = "compile-flag"
EXPOSED_NAME_META = "jsExposedName"


def process_meta_directives(document: Document, ctx: BuildContext) -> None:
    """Classify every named <meta> tag and record it in the context."""
    for meta in document.find_all("meta"):
        key = meta.get_attribute("name")
        if key is None:
            # http-equiv / charset tags
            continue
        value = meta.get_attribute("content")

        if (key in RESERVED_FLAGS and value == "true") or value == COMPILE_FLAG_VALUE:
            logger.debug(f"Compile-time flag: {key}")
            ctx.set_flag(key)
            meta.remove()
            continue

        if ctx.target.is_js and key == EXPOSED_NAME_META:
            if value is None or not value.strip():
                ctx.warn(
                    f"Invalid {EXPOSED_NAME_META} value, the default exposed name is kept"
                )
            else:
                ctx.exposed_name_override = value.strip()
            meta.remove()
            continue

        ctx.meta_parameters[key] = value if value is not None else ""
