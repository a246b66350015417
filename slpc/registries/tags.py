"""Class tag resolution for visual components.

A visual component finds its elements by a class name. The short type name
is used unless another declared component shares it, in which case the full
name keeps the match unambiguous.
"""

from __future__ import annotations

from collections.abc import Iterable


def short_name(name: str) -> str:
    """Type name without its package path."""
    return name.rsplit(".", 1)[-1]


def get_unconflicted_class_tag(name: str, names: Iterable[str]) -> str:
    """Return the class tag for component name among the declared names."""
    tag = short_name(name)
    for other in names:
        if other != name and short_name(other) == tag:
            return name
    return tag
