"""Tests for the build entry point."""

import json
import sys
from pathlib import Path

import pytest

from slpc.main import build, main
from slpc.registries.components import VISUAL_BASE_TYPE


pytestmark = pytest.mark.usefixtures("clean_env")


def test_build_defaults_to_index_html(tmp_path, write_page):
    write_page("<p>x</p>")

    result = build()

    assert result.artifacts == [Path("bin/index.js"), Path("bin/index.html")]
    assert (tmp_path / "bin" / "index.html").exists()
    assert result.exposed_name == "index"


def test_build_missing_source_exits(capsys):
    with pytest.raises(SystemExit) as exc_info:
        build("missing.html")

    assert exc_info.value.code == 1
    assert capsys.readouterr().out.startswith("ERROR : source file not found")


def test_build_unresolved_component_exits(write_page, capsys):
    write_page('<script data-slp-use="ui.Gallery"></script>')

    with pytest.raises(SystemExit) as exc_info:
        build()

    assert exc_info.value.code != 0
    assert capsys.readouterr().out == (
        "ERROR : ui.Gallery component type not found on build classpath\n"
    )


def test_build_with_resolver(write_page, registry):
    write_page('<script data-slp-use="ui.Gallery"></script>')

    result = build(resolver=registry, output="out/app.js")

    assert result.artifacts[0].name == "app.js"


def test_main_with_registry_manifest(tmp_path, write_page, monkeypatch, capsys):
    write_page(
        '<script data-slp-use="ui.Gallery"></script><div class="Gallery" data-src="a"></div>'
    )
    manifest = tmp_path / "components.json"
    manifest.write_text(
        json.dumps({"components": [{"name": "ui.Gallery", "extends": VISUAL_BASE_TYPE}]}),
        encoding="utf-8",
    )
    monkeypatch.setattr(
        sys,
        "argv",
        ["slpc", "index.html", "--registry", str(manifest), "-o", "build/app.js", "-D", "debug"],
    )

    main()

    out = capsys.readouterr().out
    assert "build/app.js" in out
    assert (tmp_path / "build" / "app.html").exists()


def test_main_bad_manifest_exits(tmp_path, write_page, monkeypatch, capsys):
    write_page("<p>x</p>")
    monkeypatch.setattr(sys, "argv", ["slpc", "--registry", str(tmp_path / "none.json")])

    with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1
    assert capsys.readouterr().out.startswith("ERROR : cannot read component manifest")


def test_build_non_utf8_source_exits(tmp_path, capsys):
    (tmp_path / "index.html").write_bytes(b"<html><body>\xff\xfe</body></html>")

    with pytest.raises(SystemExit) as exc_info:
        build()

    assert exc_info.value.code == 1
    assert capsys.readouterr().out.startswith("ERROR : cannot read source file index.html")


def test_build_unwritable_output_exits(tmp_path, write_page, capsys):
    write_page("<p>x</p>")
    (tmp_path / "blocker").write_text("", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        build(output="blocker/app.js")

    assert exc_info.value.code == 1
    assert capsys.readouterr().out.startswith("ERROR : cannot write artifact blocker/app.js")
