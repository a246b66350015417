"""Tests for the JavaScript renderer."""

import json

from slpc.compiler.ir import (
    AppendLaunchCall,
    AppendMainInitCall,
    AssignEmbeddedHtml,
    BuildArgsMap,
    Import,
    InitializationProgram,
    RegisterComponent,
    SetOnLoadLaunch,
)
from slpc.renderers.js import render_js


def test_render_components():
    program = InitializationProgram(
        actions=[
            Import(name="ui.Gallery"),
            BuildArgsMap(var_name="args0", entries={"data-src": "a.json"}),
            RegisterComponent(name="ui.Gallery", args_var="args0"),
            Import(name="services.Tracker"),
            RegisterComponent(name="services.Tracker"),
        ]
    )

    js = render_js(program)

    assert 'slp.use("ui.Gallery");' in js
    assert 'var args0 = {"data-src": "a.json"};' in js
    assert 'application.registerComponent("ui.Gallery", args0);' in js
    assert 'application.registerComponent("services.Tracker");' in js
    assert js.index('slp.use("ui.Gallery")') < js.index('slp.use("services.Tracker")')


def test_render_visual_registration_with_class_tag():
    program = InitializationProgram(
        actions=[
            RegisterComponent(name="ui.Gallery", args_var="args0", class_tag="Gallery"),
            RegisterComponent(name="ui.Label", class_tag="Label"),
        ]
    )

    js = render_js(program)

    assert 'application.registerComponent("ui.Gallery", args0, "Gallery");' in js
    assert 'application.registerComponent("ui.Label", null, "Label");' in js


def test_render_meta_parameters_and_exposed_name():
    program = InitializationProgram(meta_parameters={"theme": "dark"}, exposed_name="Shop")

    js = render_js(program)

    assert 'new slp.Application({"theme": "dark"});' in js
    assert 'root["Shop"] = { application: application, init: init };' in js


def test_render_embedded_html():
    markup = '<p class="x">"hi"</p>'
    program = InitializationProgram(
        actions=[AssignEmbeddedHtml(literal=json.dumps(markup)), AppendLaunchCall()]
    )

    js = render_js(program)

    assert f"var htmlContent = {json.dumps(markup)};" in js
    assert "root.document.body.innerHTML = htmlContent;" in js
    assert "initCalls.push(function () { application.launch(); });" in js


def test_render_onload_launch():
    js = render_js(InitializationProgram(actions=[SetOnLoadLaunch()]))

    assert "root.onload = function (e) { application.launch(); };" in js


def test_main_calls_init_only_with_main_init_call():
    with_init = render_js(InitializationProgram(actions=[AppendMainInitCall()]))
    without_init = render_js(InitializationProgram())

    assert "function main() {\n    init();\n  }" in with_init
    assert "function main() {\n  }" in without_init
