"""Tests for component declaration scanning."""

from slpc.compiler.declarations import declaration_attributes, scan_component_declarations
from slpc.compiler.document import Element
from tests.conftest import make_ctx


def test_declaration_shares_attributes_between_names(page_document):
    doc = page_document(
        '<script data-slp-use="ui.Gallery ui.Label" data-foo="bar" type="x"></script>'
    )
    ctx = make_ctx()

    scan_component_declarations(doc, ctx)

    assert list(ctx.components) == ["ui.Gallery", "ui.Label"]
    assert ctx.components["ui.Gallery"].attributes == {"data-foo": "bar"}
    assert ctx.components["ui.Label"].attributes == {"data-foo": "bar"}


def test_redeclaration_replaces_attributes():
    """The last declaration's attribute set wins; attributes are not merged."""
    from slpc.compiler.document import parse_document

    doc = parse_document(
        '<script data-slp-use="Foo" data-a="1"></script>'
        '<script data-slp-use="Foo" data-b="2"></script>'
    )
    ctx = make_ctx()

    scan_component_declarations(doc, ctx)

    assert ctx.components["Foo"].attributes == {"data-b": "2"}


def test_declaration_site_recorded(page_document):
    doc = page_document('<script data-slp-use="Foo" data-a="1"></script>')
    ctx = make_ctx()

    scan_component_declarations(doc, ctx)

    assert ctx.components["Foo"].site == '<script data-slp-use="Foo" data-a="1">'


def test_empty_declaration_tag_removed(page_document):
    doc = page_document('<script data-slp-use="Foo"></script><p>x</p>')
    ctx = make_ctx()

    scan_component_declarations(doc, ctx)

    assert doc.find_all("script") == []
    assert doc.body.inner_html == "<p>x</p>"


def test_external_script_kept_without_declaration_attribute(page_document):
    doc = page_document('<script data-slp-use="Foo" src="lib.js" data-a="1"></script>')
    ctx = make_ctx()

    scan_component_declarations(doc, ctx)

    (script,) = doc.find_all("script")
    assert script.attributes == {"src": "lib.js", "data-a": "1"}


def test_inline_script_kept_with_body(page_document):
    doc = page_document('<script data-slp-use="Foo">start();</script>')
    ctx = make_ctx()

    scan_component_declarations(doc, ctx)

    (script,) = doc.find_all("script")
    assert script.to_html() == "<script>start();</script>"


def test_blank_declaration_declares_nothing(page_document):
    doc = page_document('<script data-slp-use="  " src="lib.js"></script>')
    ctx = make_ctx()

    scan_component_declarations(doc, ctx)

    assert ctx.components == {}
    assert doc.find_all("script")[0].to_html() == '<script src="lib.js"></script>'


def test_plain_scripts_without_content_are_removed(page_document):
    doc = page_document("<script>   </script><script>run();</script>")
    ctx = make_ctx()

    scan_component_declarations(doc, ctx)

    assert [s.text for s in doc.find_all("script")] == ["run();"]


def test_declaration_attributes_filters_prefix():
    el = Element(
        "script",
        {"data-slp-use": "Foo", "data-x": "1", "type": "text/javascript", "data-y": None},
    )

    assert declaration_attributes(el) == {"data-x": "1", "data-y": ""}
