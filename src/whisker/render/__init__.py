"""Rendering layer — the renderer protocol, the Kida adapter, and minification."""

from whisker.render.base import RenderContext, Renderer, RenderResult
from whisker.render.kida import KidaRenderer
from whisker.render.minify import HtmlMinifier, minifier_from_config

__all__ = [
    "HtmlMinifier",
    "KidaRenderer",
    "RenderContext",
    "RenderResult",
    "Renderer",
    "minifier_from_config",
]
