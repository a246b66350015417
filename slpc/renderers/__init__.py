"""Code assembly for initialization programs."""

from .js import JsRenderer, render_js

__all__ = ["JsRenderer", "render_js"]
