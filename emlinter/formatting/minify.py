"""HTML email minifier.

Collapses whitespace and strips comments while leaving Outlook conditional
comments alone. ``<style>`` blocks are either minified or kept untouched, and
the ``<head>`` can be preserved verbatim.
"""

from __future__ import annotations

import re

from emlinter.models import MinifyOptions

_HEAD_PLACEHOLDER = "<!--EMLINTER_HEAD_PLACEHOLDER-->"
_STYLE_PLACEHOLDER = "<!--EMLINTER_STYLE_PLACEHOLDER_{}-->"

_HEAD_BLOCK = re.compile(r"<head[^>]*>.*?</head>", re.IGNORECASE | re.DOTALL)
_STYLE_BLOCK = re.compile(r"(<style[^>]*>)(.*?)(</style>)", re.IGNORECASE | re.DOTALL)
_HTML_COMMENT = re.compile(
    r"<!--(?!\[if gte mso 9\]|\[endif\]|EMLINTER_HEAD_PLACEHOLDER|EMLINTER_STYLE_PLACEHOLDER_).*?-->",
    re.DOTALL,
)
_CSS_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_BREAKS = re.compile(r"[\r\n\t]+")
_CSS_DELIMITER_SPACE = re.compile(r"\s*([;:{},])\s*")
_MULTI_SPACE = re.compile(r"\s{2,}")
_BETWEEN_TAGS = re.compile(r">\s+<")


def minify_css(css: str) -> str:
    """Strip comments and redundant whitespace from stylesheet text."""
    css = _CSS_COMMENT.sub("", css)
    css = _LINE_BREAKS.sub("", css)
    css = _CSS_DELIMITER_SPACE.sub(r"\1", css)
    css = _MULTI_SPACE.sub(" ", css)
    return css.strip()


def minify_html(html: str, options: MinifyOptions | None = None) -> str:
    """Return *html* on as few bytes as the options allow."""
    options = options or MinifyOptions()

    head: str | None = None
    if options.keep_head:
        match = _HEAD_BLOCK.search(html)
        if match:
            head = match.group(0)
            html = html[:match.start()] + _HEAD_PLACEHOLDER + html[match.end():]

    styles: dict[str, str] = {}

    def stash_style(match: re.Match[str]) -> str:
        placeholder = _STYLE_PLACEHOLDER.format(len(styles))
        if options.keep_styles:
            styles[placeholder] = match.group(0)
        else:
            styles[placeholder] = match.group(1) + minify_css(match.group(2)) + match.group(3)
        return placeholder

    html = _STYLE_BLOCK.sub(stash_style, html)

    html = _HTML_COMMENT.sub("", html)
    html = _LINE_BREAKS.sub(" ", html)
    html = _MULTI_SPACE.sub(" ", html)
    html = _BETWEEN_TAGS.sub("><", html)
    html = html.strip()

    if head is not None:
        html = html.replace(_HEAD_PLACEHOLDER, head, 1)
    for placeholder, block in styles.items():
        html = html.replace(placeholder, block, 1)
    return html
