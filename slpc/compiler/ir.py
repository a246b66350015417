"""Intermediate Representation (IR) for the build compiler.

This module defines the typed IR shared by the analysis and emission phases:
- Component descriptors and their validation rules (registry side)
- Component declarations scanned from the source document
- The ordered initialization program produced by the program builder

Uses Pydantic for serialization and discriminated unions for polymorphism.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

# =============================================================================
# Enums
# =============================================================================


class Category(str, Enum):
    """Component category."""

    VISUAL = "visual"
    SERVICE = "service"


class OutputTarget(str, Enum):
    """Build output target."""

    JS = "js"
    NATIVE = "native"

    @property
    def is_js(self) -> bool:
        return self is OutputTarget.JS


# =============================================================================
# Rules
# =============================================================================


class RequiresAttributes(BaseModel):
    """Every listed attribute must be present and non-blank."""

    kind: Literal["requires_attributes"] = "requires_attributes"
    names: list[str]


class AllowedTags(BaseModel):
    """Matched elements must use one of the listed tag names."""

    kind: Literal["allowed_tags"] = "allowed_tags"
    names: list[str]


Rule = Annotated[
    RequiresAttributes | AllowedTags,
    Field(discriminator="kind"),
]


# =============================================================================
# Components
# =============================================================================


class ComponentDescriptor(BaseModel):
    """Registered component type with its category and rules."""

    name: str
    category: Category = Category.SERVICE
    rules: list[Rule] = Field(default_factory=list)

    @property
    def is_visual(self) -> bool:
        return self.category is Category.VISUAL


class ComponentDeclaration(BaseModel):
    """A component declared with data-slp-use on a script tag."""

    name: str
    attributes: dict[str, str] = Field(default_factory=dict)
    # Opening markup of the declaring tag, for diagnostics
    site: str = ""


# =============================================================================
# Initialization program
# =============================================================================


class Import(BaseModel):
    type: Literal["import"] = "import"
    name: str


class BuildArgsMap(BaseModel):
    type: Literal["build_args_map"] = "build_args_map"
    var_name: str
    entries: dict[str, str] = Field(default_factory=dict)


class RegisterComponent(BaseModel):
    """Register a component with the application.

    Visual components carry the class tag their elements were matched by.
    """

    type: Literal["register_component"] = "register_component"
    name: str
    args_var: str | None = None
    class_tag: str | None = None


class AssignEmbeddedHtml(BaseModel):
    """Assign the embedded markup holder to the runtime root element.

    The literal is the JSON-serialized markup, as it appears in generated code.
    """

    type: Literal["assign_embedded_html"] = "assign_embedded_html"
    target: str = "body"
    literal: str

    @property
    def markup(self) -> str:
        """Deserialized markup held by the literal."""
        return json.loads(self.literal)


class SetOnLoadLaunch(BaseModel):
    type: Literal["set_onload_launch"] = "set_onload_launch"


class AppendLaunchCall(BaseModel):
    type: Literal["append_launch_call"] = "append_launch_call"


class AppendMainInitCall(BaseModel):
    type: Literal["append_main_init_call"] = "append_main_init_call"


EmitAction = Annotated[
    Import
    | BuildArgsMap
    | RegisterComponent
    | AssignEmbeddedHtml
    | SetOnLoadLaunch
    | AppendLaunchCall
    | AppendMainInitCall,
    Field(discriminator="type"),
]


class InitializationProgram(BaseModel):
    """Ordered initialization program.

    This is the output of the program builder and input to the code
    assembly step (see slpc.renderers).
    """

    actions: list[EmitAction] = Field(default_factory=list)

    # Runtime parameters from <meta> tags
    meta_parameters: dict[str, str] = Field(default_factory=dict)

    # Public entry symbol (JS targets only)
    exposed_name: str | None = None

    def actions_of(self, action_type: type[BaseModel]) -> list[BaseModel]:
        """Return the actions of the given model type, in program order."""
        return [a for a in self.actions if isinstance(a, action_type)]

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> InitializationProgram:
        """Deserialize from JSON string."""
        return cls.model_validate_json(json_str)
