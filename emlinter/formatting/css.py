"""CSS formatting for inline ``style`` attributes and ``<style>`` blocks."""

from __future__ import annotations

import re

from emlinter.models import StyleDeclaration

DEFAULT_TAB = "  "

_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")


def parse_declarations(css: str) -> list[StyleDeclaration]:
    """Split a ``;``-separated declaration list, keeping source order.

    Only the first ``:`` separates property from value, so values such as
    ``url(http://...)`` survive. Segments without a colon, or with an empty
    property or value, are dropped.
    """
    declarations: list[StyleDeclaration] = []
    for segment in css.split(";"):
        if not segment.strip():
            continue
        prop, sep, value = segment.partition(":")
        if not sep:
            continue
        prop, value = prop.strip(), value.strip()
        if prop and value:
            declarations.append(StyleDeclaration(prop, value))
    return declarations


def format_inline_css(css: str) -> str:
    """Normalize an inline style to ``prop: value; prop: value``.

    A trailing ``;`` is kept only if the source had one and at least one
    declaration survived.
    """
    declarations = parse_declarations(css)
    if not declarations:
        return ""
    joined = "; ".join(str(d) for d in declarations)
    if css.strip().endswith(";"):
        joined += ";"
    return joined


def format_css_block(css: str, base_indent: str = "", tab: str = DEFAULT_TAB) -> str:
    """Format stylesheet text into one selector, declaration or brace per line.

    Nesting (``@media`` and friends) is tracked with a plain depth counter,
    so selectors at any depth are handled the same way.
    """
    css = _WHITESPACE.sub(" ", _COMMENT.sub("", css)).strip()

    lines: list[str] = []
    depth = 0
    buf: list[str] = []

    def emit(text: str) -> None:
        lines.append(base_indent + tab * depth + text)

    for char in css:
        if char == "{":
            selector = "".join(buf).strip()
            emit(f"{selector} {{" if selector else "{")
            buf = []
            depth += 1
        elif char == "}":
            pending = "".join(buf).strip()
            if pending:
                emit(pending + ";")
            buf = []
            depth = max(0, depth - 1)
            emit("}")
        elif char == ";":
            pending = "".join(buf).strip()
            if pending:
                emit(pending + ";")
            buf = []
        else:
            buf.append(char)

    # Text after the last brace or semicolon, e.g. a lone declaration.
    rest = "".join(buf).strip()
    if rest:
        emit(rest)

    return "\n".join(_space_after_colon(line) for line in lines)


def _space_after_colon(line: str) -> str:
    if ":" not in line or "{" in line:
        return line
    prop, _, value = line.partition(":")
    return f"{prop.rstrip()}: {value.lstrip()}"
