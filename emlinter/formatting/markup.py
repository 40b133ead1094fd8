"""HTML re-indentation formatter.

Markup is split into tokens by a small character-scanning state machine and
re-serialized one tag, comment or text run per line, indented by nesting
depth. The formatter is best-effort: it never validates nesting, and stray
closing tags simply floor the indent at zero.

Usage::

    formatted = format_html("<p>Hello</p>")
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator

from emlinter.formatting.css import DEFAULT_TAB, format_css_block, format_inline_css
from emlinter.models import Token, TokenKind

logger = logging.getLogger(__name__)

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Content of these tags is emitted verbatim (style content is CSS-formatted).
RAW_CONTENT_TAGS = frozenset({"script", "style", "pre", "textarea"})

_TRAILING_LINE = re.compile(r"\n[ \t]*\Z")


def _is_name_char(ch: str) -> bool:
    return ch.isalnum() or ch in ":-_."


class _Tokenizer:
    """Single left-to-right pass over one document.

    Every scan either consumes the characters it reads or fails in constant
    time, so tokenizing is linear in the input length. Once an attribute
    quote is found that never closes, quotes stop being tracked for the rest
    of the document and each tag ends at its first ``>``.
    """

    def __init__(self, html: str) -> None:
        self.html = html
        self.last_gt = html.rfind(">")
        self.track_quotes = True
        self.tokens: list[Token] = []

    def run(self) -> list[Token]:
        html = self.html
        pos = text_start = 0
        while True:
            lt = html.find("<", pos)
            if lt == -1:
                break
            end, token = self._scan_markup(lt)
            if token is None:
                pos = end
                continue
            self._add_text(html[text_start:lt])
            self.tokens.append(token)
            pos = text_start = end
            if token.kind is TokenKind.OPEN and token.name in RAW_CONTENT_TAGS:
                close = _find_raw_close(html, end, token.name)
                self._add_text(html[end:close])
                pos = text_start = close

        self._add_text(html[text_start:])
        return self.tokens

    def _add_text(self, text: str) -> None:
        if text.strip():
            self.tokens.append(Token(TokenKind.TEXT, text))

    def _scan_markup(self, start: int) -> tuple[int, Token | None]:
        """Read the markup construct beginning at ``html[start] == "<"``.

        Returns ``(end, token)``; ``token`` is None when the ``<`` does not
        start a tag, comment or directive and should be read as text.
        """
        html = self.html
        n = len(html)
        if html.startswith("<!--", start):
            close = html.find("-->", start + 4)
            end = n if close == -1 else close + 3
            return end, Token(TokenKind.COMMENT, html[start:end])

        # Tags and directives need a ">" somewhere ahead.
        if start > self.last_gt:
            return start + 1, None

        nxt = html[start + 1] if start + 1 < n else ""
        if nxt in ("!", "?"):
            close = html.find(">", start)
            return close + 1, Token(TokenKind.DIRECTIVE, html[start:close + 1])

        closing = nxt == "/"
        name_start = start + 2 if closing else start + 1
        if name_start >= n or not html[name_start].isalpha():
            return start + 1, None

        name_end = name_start
        while name_end < n and _is_name_char(html[name_end]):
            name_end += 1
        name = html[name_start:name_end].lower()

        if closing:
            close = html.find(">", name_end)
            return close + 1, Token(TokenKind.CLOSE, html[start:close + 1], name)

        end = self._scan_tag_end(name_end)
        raw = html[start:end]
        if raw.endswith("/>") or name in VOID_ELEMENTS:
            return end, Token(TokenKind.SELF_CLOSING, raw, name)
        return end, Token(TokenKind.OPEN, raw, name)

    def _scan_tag_end(self, pos: int) -> int:
        """Return the index just past the ``>`` closing a tag.

        Quotes only open a value when they follow ``=``, so a ``>`` inside a
        quoted attribute value does not end the tag. A quote that never
        closes falls back to the first ``>`` after *pos*.
        """
        html = self.html
        first_gt = html.find(">", pos)
        if not self.track_quotes:
            return first_gt + 1

        quote = ""
        last = ""
        n = len(html)
        while pos < n:
            ch = html[pos]
            if quote:
                if ch == quote:
                    quote = ""
            elif ch in "\"'" and last == "=":
                quote = ch
            elif ch == ">":
                return pos + 1
            if not ch.isspace():
                last = ch
            pos += 1

        logger.debug("Unclosed attribute quote; ending tags at the first '>' from here on")
        self.track_quotes = False
        return first_gt + 1


def _find_raw_close(html: str, pos: int, name: str) -> int:
    pattern = re.compile(rf"</{re.escape(name)}(?=[\s/>]|\Z)", re.IGNORECASE)
    match = pattern.search(html, pos)
    return match.start() if match else len(html)


def tokenize(html: str) -> list[Token]:
    """Split *html* into tokens, dropping whitespace-only text.

    Everything between a ``script``/``style``/``pre``/``textarea`` open tag
    and its matching close tag becomes a single text token.
    """
    return _Tokenizer(html).run()


@dataclass
class FormatState:
    """Mutable state of one formatting pass."""

    indent_level: int = 0
    raw_region: str | None = None
    parts: list[str] = field(default_factory=list)
    last_was_raw_text: bool = False


class HtmlFormatter:
    """Re-indents markup with a fixed indent unit per nesting level."""

    def __init__(self, indent: str = DEFAULT_TAB) -> None:
        self.indent = indent

    def format(self, html: str) -> str:
        """Return *html* re-indented; empty input gives empty output."""
        state = FormatState()
        for token in tokenize(html):
            self._handle(token, state)
        if state.raw_region is not None:
            logger.debug("Input ended inside <%s>", state.raw_region)
        return "".join(state.parts).strip()

    def _newline(self, state: FormatState) -> str:
        return "\n" + self.indent * state.indent_level

    def _handle(self, token: Token, state: FormatState) -> None:
        if state.raw_region is not None:
            if token.kind is TokenKind.CLOSE and token.name == state.raw_region:
                self._leave_raw_region(state)
            elif token.kind is TokenKind.TEXT and state.raw_region == "style":
                self._emit_style_text(token, state)
                return
            else:
                state.parts.append(token.raw)
                state.last_was_raw_text = token.kind is TokenKind.TEXT
                return

        state.last_was_raw_text = False

        if token.kind is TokenKind.CLOSE:
            state.indent_level = max(0, state.indent_level - 1)
            state.parts.append(self._newline(state) + token.raw)
        elif token.is_tag:
            state.parts.append(self._newline(state) + _rewrite_style_attribute(token.raw))
            if token.kind is TokenKind.OPEN:
                state.indent_level += 1
                if token.name in RAW_CONTENT_TAGS:
                    state.raw_region = token.name
        elif token.kind in (TokenKind.COMMENT, TokenKind.DIRECTIVE):
            state.parts.append(self._newline(state) + token.raw)
        else:
            text = token.raw.strip()
            if text:
                state.parts.append(self._newline(state) + text)

    def _leave_raw_region(self, state: FormatState) -> None:
        # The close tag brings its own newline and indent.
        if state.last_was_raw_text:
            state.parts[-1] = _TRAILING_LINE.sub("", state.parts[-1])
        state.raw_region = None
        state.last_was_raw_text = False

    def _emit_style_text(self, token: Token, state: FormatState) -> None:
        css = format_css_block(token.raw, self.indent * state.indent_level, self.indent)
        if css:
            state.parts.append("\n" + css)


def _iter_attributes(tag: str) -> Iterator[tuple[str, int, int, str, str]]:
    """Yield ``(name, start, end, quote, value)`` for each attribute of *tag*.

    ``start``/``end`` span the whole ``name=value`` text. Iteration stops at
    a quoted value that never closes.
    """
    n = len(tag)
    i = 1
    while i < n and _is_name_char(tag[i]):
        i += 1
    while i < n:
        ch = tag[i]
        if ch == ">":
            return
        if ch.isspace() or ch in "/=\"'":
            i += 1
            continue

        start = i
        while i < n and not tag[i].isspace() and tag[i] not in "=>/":
            i += 1
        name = tag[start:i]

        j = i
        while j < n and tag[j].isspace():
            j += 1
        if j >= n or tag[j] != "=":
            yield name, start, i, "", ""
            continue

        j += 1
        while j < n and tag[j].isspace():
            j += 1
        if j < n and tag[j] in "\"'":
            quote = tag[j]
            close = tag.find(quote, j + 1)
            if close == -1:
                return
            yield name, start, close + 1, quote, tag[j + 1:close]
            i = close + 1
        else:
            k = j
            while k < n and not tag[k].isspace() and tag[k] != ">":
                k += 1
            yield name, start, k, "", tag[j:k]
            i = k


def _rewrite_style_attribute(tag: str) -> str:
    for name, start, end, quote, value in _iter_attributes(tag):
        if name.lower() == "style" and quote:
            return tag[:start] + f"style={quote}{format_inline_css(value)}{quote}" + tag[end:]
    return tag


def format_html(html: str, indent: str = DEFAULT_TAB) -> str:
    """Format *html* with a fresh :class:`HtmlFormatter`."""
    return HtmlFormatter(indent).format(html)
