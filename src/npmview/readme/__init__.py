"""README rendering: Markdown -> highlighted, link-resolved, sanitized HTML."""

from .highlighter import Highlighter, get_highlighter
from .renderer import ReadmeRenderer, RenderRules, render_readme_html
from .sanitizer import SanitizerPolicy, sanitize_html
from .urls import resolve_image_url, resolve_url

__all__ = [
    "Highlighter",
    "get_highlighter",
    "ReadmeRenderer",
    "RenderRules",
    "render_readme_html",
    "SanitizerPolicy",
    "sanitize_html",
    "resolve_image_url",
    "resolve_url",
]
