"""Static, BeautifulSoup-backed implementation of ``RenderedDocument``.

There is no layout engine here: computed colours come from a simplified
cascade over legacy presentational attributes, ``<style>`` rules and inline
``style`` attributes, with ``color`` inherited from the parent element.
It is good enough for HTML email, where nearly all styling is inline.
"""

from __future__ import annotations

import logging
import re
from typing import Collection, Iterator

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from soupsieve import SelectorSyntaxError

from emlinter.formatting.css import parse_declarations
from emlinter.models import ComputedStyle
from emlinter.utils.contrast import Color, hex_to_color

logger = logging.getLogger(__name__)

DEFAULT_TEXT_COLOR = "rgb(0, 0, 0)"
TRANSPARENT = "rgba(0, 0, 0, 0)"

NAMED_COLORS: dict[str, Color] = {
    "black": (0, 0, 0),
    "silver": (192, 192, 192),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "white": (255, 255, 255),
    "maroon": (128, 0, 0),
    "red": (255, 0, 0),
    "purple": (128, 0, 128),
    "fuchsia": (255, 0, 255),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "olive": (128, 128, 0),
    "yellow": (255, 255, 0),
    "navy": (0, 0, 128),
    "blue": (0, 0, 255),
    "teal": (0, 128, 128),
    "aqua": (0, 255, 255),
    "orange": (255, 165, 0),
}

_CSS_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_URL = re.compile(r"url\([^)]*\)", re.IGNORECASE)
_COLOR_TOKEN = re.compile(r"rgba?\([^)]*\)|#[0-9a-fA-F]{3,6}\b|[a-zA-Z]+")
_IMPORTANT = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


def _device(color: Color) -> str:
    r, g, b = color
    return f"rgb({r}, {g}, {b})"


def to_device_color(value: str) -> str:
    """Render a declared CSS colour the way a browser reports it.

    Hex and named colours become ``rgb(r, g, b)``, ``transparent`` becomes
    ``rgba(0, 0, 0, 0)``; ``rgb()``/``rgba()`` pass through. Anything else
    is returned unchanged.
    """
    value = value.strip()
    lowered = value.lower()
    if lowered == "transparent":
        return TRANSPARENT
    if lowered.startswith("rgb"):
        return lowered
    if lowered.startswith("#"):
        color = hex_to_color(lowered)
        return _device(color) if color else value
    if lowered in NAMED_COLORS:
        return _device(NAMED_COLORS[lowered])
    return value


def _first_color_token(value: str) -> str | None:
    for token in _COLOR_TOKEN.findall(_URL.sub(" ", value)):
        lowered = token.lower()
        if lowered.startswith("rgb") or lowered == "transparent" or lowered in NAMED_COLORS:
            return token
        if lowered.startswith("#") and hex_to_color(lowered):
            return token
    return None


def color_declarations(css: str) -> dict[str, str]:
    """Extract ``color`` and ``background-color`` from a declaration list."""
    found: dict[str, str] = {}
    for decl in parse_declarations(css):
        prop = decl.property.lower()
        value = _IMPORTANT.sub("", decl.value)
        if prop in ("color", "background-color"):
            found[prop] = value
        elif prop == "background":
            # The shorthand resets the colour when it names none.
            found["background-color"] = _first_color_token(value) or "transparent"
    return found


def iter_style_rules(css: str) -> Iterator[tuple[str, str]]:
    """Yield ``(selector, body)`` for each top-level rule, skipping at-rules."""
    depth = 0
    prelude: list[str] = []
    body: list[str] = []
    selector = ""
    for char in _CSS_COMMENT.sub("", css):
        if char == "{":
            if depth == 0:
                selector = "".join(prelude).strip()
                prelude, body = [], []
            else:
                body.append(char)
            depth += 1
        elif char == "}":
            if depth == 0:
                continue
            depth -= 1
            if depth == 0:
                if selector and not selector.startswith("@"):
                    yield selector, "".join(body)
            else:
                body.append(char)
        elif depth == 0:
            # @import and @charset statements end at a semicolon.
            if char == ";":
                prelude = []
            else:
                prelude.append(char)
        else:
            body.append(char)


def _legacy_color(value: str) -> str:
    color = hex_to_color(value)
    return _device(color) if color else value


class StaticDocument:
    """A parsed HTML document that answers computed-style queries."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup
        self._sheet: dict[int, dict[str, str]] = {}
        self._computed: dict[int, ComputedStyle] = {}
        self._apply_stylesheets()

    @classmethod
    def from_html(cls, html: str) -> StaticDocument:
        return cls(BeautifulSoup(html, "html.parser"))

    # ------------------------------------------------------------------
    # RenderedDocument protocol
    # ------------------------------------------------------------------

    def query_all_elements(self, exclude: Collection[str]) -> Iterator[Tag]:
        for tag in self.soup.find_all(True):
            if tag.name.lower() not in exclude:
                yield tag

    def tag_name(self, element: Tag) -> str:
        return element.name.lower()

    def direct_text(self, element: Tag) -> list[str]:
        return [
            str(child)
            for child in element.children
            if isinstance(child, NavigableString) and not isinstance(child, PreformattedString)
        ]

    def text_content(self, element: Tag) -> str:
        return element.get_text()

    def parent(self, element: Tag) -> Tag | None:
        parent = element.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return parent

    def resolve_computed_style(self, element: Tag) -> ComputedStyle:
        key = id(element)
        cached = self._computed.get(key)
        if cached is not None:
            return cached

        declared = self._declared(element)
        parent = self.parent(element)

        color = declared.get("color", "inherit").strip().lower()
        if color in ("inherit", "currentcolor"):
            color = self.resolve_computed_style(parent).color if parent is not None else DEFAULT_TEXT_COLOR
        else:
            color = to_device_color(declared["color"])

        background = declared.get("background-color", "transparent").strip().lower()
        if background == "inherit" and parent is not None:
            background = self.resolve_computed_style(parent).background_color
        else:
            background = to_device_color(background)

        style = ComputedStyle(color=color, background_color=background)
        self._computed[key] = style
        return style

    # ------------------------------------------------------------------
    # Cascade
    # ------------------------------------------------------------------

    def _apply_stylesheets(self) -> None:
        for style_tag in self.soup.find_all("style"):
            for selector_list, body in iter_style_rules(style_tag.get_text()):
                declarations = color_declarations(body)
                if not declarations:
                    continue
                for selector in selector_list.split(","):
                    self._apply_rule(selector.strip(), declarations)

    def _apply_rule(self, selector: str, declarations: dict[str, str]) -> None:
        if not selector:
            return
        try:
            matched = self.soup.select(selector)
        except (SelectorSyntaxError, NotImplementedError):
            logger.debug("Skipping unsupported selector %r", selector)
            return
        for tag in matched:
            self._sheet.setdefault(id(tag), {}).update(declarations)

    def _declared(self, element: Tag) -> dict[str, str]:
        declared: dict[str, str] = {}
        bgcolor = element.get("bgcolor")
        if isinstance(bgcolor, str) and bgcolor.strip():
            declared["background-color"] = _legacy_color(bgcolor.strip())
        legacy_text = element.get("color") if element.name == "font" else None
        if element.name == "body":
            legacy_text = element.get("text")
        if isinstance(legacy_text, str) and legacy_text.strip():
            declared["color"] = _legacy_color(legacy_text.strip())

        declared.update(self._sheet.get(id(element), {}))

        inline = element.get("style")
        if isinstance(inline, str):
            declared.update(color_declarations(inline))
        return declared
