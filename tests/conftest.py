"""Shared test fixtures and helpers."""

import os

import pytest

from slpc.compiler.context import BuildContext
from slpc.compiler.document import parse_document
from slpc.compiler.ir import AllowedTags, OutputTarget, RequiresAttributes
from slpc.config import ENV_VARS
from slpc.registries.components import VISUAL_BASE_TYPE, ComponentRegistry


def make_page(body: str, head: str = "") -> str:
    """Wrap body (and optional head) markup in a full HTML page."""
    return (
        "<!DOCTYPE html>\n"
        f"<html><head>{head}</head>"
        f"<body>{body}</body></html>"
    )


def make_ctx(target: OutputTarget = OutputTarget.JS, flags=None) -> BuildContext:
    return BuildContext(target=target, flags=set(flags or []))


@pytest.fixture
def registry() -> ComponentRegistry:
    """Registry with a few visual and service components."""
    registry = ComponentRegistry()
    registry.register_type(
        "ui.Gallery",
        extends=VISUAL_BASE_TYPE,
        rules=[RequiresAttributes(names=["data-src"])],
    )
    registry.register_type("ui.Slideshow", extends="ui.Gallery")
    registry.register_type(
        "ui.Label",
        extends=VISUAL_BASE_TYPE,
        rules=[AllowedTags(names=["SPAN", "P"])],
    )
    registry.register_type(
        "services.Tracker",
        rules=[RequiresAttributes(names=["data-account"])],
    )
    return registry


@pytest.fixture
def write_page(tmp_path):
    """Write an HTML page into tmp_path and return its path."""

    def _write(body: str, head: str = "", name: str = "index.html"):
        path = tmp_path / name
        path.write_text(make_page(body, head), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def page_document():
    """Parse a page built from body/head markup."""

    def _parse(body: str, head: str = ""):
        return parse_document(make_page(body, head))

    return _parse


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty tmp_path with no SLPC_* variables set."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # .env files load straight into os.environ
    for var in ENV_VARS:
        os.environ.pop(var, None)
