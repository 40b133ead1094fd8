"""Shared data models used across the formatter and the contrast analyzer."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field


class TokenKind(str, enum.Enum):
    """Kind of a markup token produced by the tokenizer."""

    OPEN = "open"
    CLOSE = "close"
    SELF_CLOSING = "self_closing"
    COMMENT = "comment"
    DIRECTIVE = "directive"
    TEXT = "text"


@dataclass(frozen=True)
class Token:
    """A single markup token.

    ``name`` is the lower-cased tag name for tag tokens and ``""`` otherwise.
    """

    kind: TokenKind
    raw: str
    name: str = ""

    @property
    def is_tag(self) -> bool:
        return self.kind in (TokenKind.OPEN, TokenKind.CLOSE, TokenKind.SELF_CLOSING)


@dataclass(frozen=True)
class StyleDeclaration:
    """One ``property: value`` pair from a CSS declaration list."""

    property: str
    value: str

    def __str__(self) -> str:
        return f"{self.property}: {self.value}"


@dataclass(frozen=True)
class ComputedStyle:
    """Effective colours of an element, as device colour strings."""

    color: str
    background_color: str


@dataclass(frozen=True)
class AnalysisResult:
    """A text/background colour pair that fails contrast in at least one mode."""

    original_text_color: str
    original_bg_color: str
    light_mode_contrast: float
    dark_mode_contrast: float
    passes_light: bool
    passes_dark: bool
    suggestion: str
    element_tag: str
    element_text: str

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass
class ContrastReport:
    """Findings of one analysis run, with the name of the analyzed source."""

    source_name: str
    results: list[AnalysisResult] = field(default_factory=list)

    @property
    def failing_light_count(self) -> int:
        return sum(1 for r in self.results if not r.passes_light)

    @property
    def failing_dark_count(self) -> int:
        return sum(1 for r in self.results if not r.passes_dark)


@dataclass
class MinifyOptions:
    """Switches for the HTML minifier."""

    keep_head: bool = False
    keep_styles: bool = False
