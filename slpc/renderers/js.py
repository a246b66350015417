"""JavaScript rendering of an InitializationProgram.

The rendered script expects the component runtime to be loaded as the
global `slp` object, providing `slp.use(name)` and `slp.Application`.
"""

from __future__ import annotations

import json

from slpc.compiler.ir import (
    AppendLaunchCall,
    AppendMainInitCall,
    AssignEmbeddedHtml,
    BuildArgsMap,
    EmitAction,
    Import,
    InitializationProgram,
    RegisterComponent,
    SetOnLoadLaunch,
)

INDENT = "  "


class JsRenderer:
    """Renders program actions to JavaScript lines.

    Dispatches each action to emit_{ClassName}.
    """

    def __init__(self, program: InitializationProgram):
        self.program = program
        self.body: list[str] = []
        self.main_calls: list[str] = []

    def emit(self, action: EmitAction) -> None:
        method = getattr(self, f"emit_{type(action).__name__}")
        method(action)

    def emit_Import(self, action: Import) -> None:
        self.body.append(f"slp.use({json.dumps(action.name)});")

    def emit_BuildArgsMap(self, action: BuildArgsMap) -> None:
        self.body.append(f"var {action.var_name} = {json.dumps(action.entries)};")

    def emit_RegisterComponent(self, action: RegisterComponent) -> None:
        args = [json.dumps(action.name)]
        if action.args_var:
            args.append(action.args_var)
        if action.class_tag:
            if not action.args_var:
                args.append("null")
            args.append(json.dumps(action.class_tag))
        self.body.append(f"application.registerComponent({', '.join(args)});")

    def emit_AssignEmbeddedHtml(self, action: AssignEmbeddedHtml) -> None:
        self.body.append(f"var htmlContent = {action.literal};")
        self.body.append(
            f"initCalls.push(function () {{ root.document.{action.target}.innerHTML = htmlContent; }});"
        )

    def emit_SetOnLoadLaunch(self, action: SetOnLoadLaunch) -> None:
        self.body.append("root.onload = function (e) { application.launch(); };")

    def emit_AppendLaunchCall(self, action: AppendLaunchCall) -> None:
        self.body.append("initCalls.push(function () { application.launch(); });")

    def emit_AppendMainInitCall(self, action: AppendMainInitCall) -> None:
        self.main_calls.append("init();")

    def render(self) -> str:
        for action in self.program.actions:
            self.emit(action)

        lines = []
        lines.append("// Generated by slpc. Do not edit.")
        lines.append("(function (root) {")
        lines.append(f'{INDENT}"use strict";')
        lines.append(f"{INDENT}var slp = root.slp;")
        lines.append(
            f"{INDENT}var application = new slp.Application({json.dumps(self.program.meta_parameters)});"
        )
        lines.append(f"{INDENT}var initCalls = [];")
        lines.extend(f"{INDENT}{line}" for line in self.body)
        lines.append("")
        lines.append(f"{INDENT}function init() {{")
        lines.append(f"{INDENT * 2}for (var i = 0; i < initCalls.length; i++) {{ initCalls[i](); }}")
        lines.append(f"{INDENT}}}")
        lines.append(f"{INDENT}function main() {{")
        lines.extend(f"{INDENT * 2}{call}" for call in self.main_calls)
        lines.append(f"{INDENT}}}")
        if self.program.exposed_name:
            lines.append(
                f"{INDENT}root[{json.dumps(self.program.exposed_name)}] = "
                "{ application: application, init: init };"
            )
        lines.append(f"{INDENT}main();")
        lines.append("})(this);")
        lines.append("")
        return "\n".join(lines)


def render_js(program: InitializationProgram) -> str:
    """Render the program as a self-contained JavaScript bootstrap."""
    return JsRenderer(program).render()
