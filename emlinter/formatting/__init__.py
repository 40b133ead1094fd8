"""Markup and CSS formatting passes."""

from emlinter.formatting.css import format_css_block, format_inline_css
from emlinter.formatting.markup import HtmlFormatter, format_html
from emlinter.formatting.minify import minify_css, minify_html

__all__ = [
    "HtmlFormatter",
    "format_css_block",
    "format_html",
    "format_inline_css",
    "minify_css",
    "minify_html",
]
