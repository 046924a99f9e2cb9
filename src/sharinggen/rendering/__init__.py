"""Textual renderers for synthesized decision trees."""

from .java_source import STYLES, RenderConfig, render, render_methods, render_nested

__all__ = ["STYLES", "RenderConfig", "render", "render_methods", "render_nested"]
