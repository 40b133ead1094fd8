"""Dark-mode colour contrast analyzer.

Walks a rendered document and reports every distinct text/background colour
pair that misses the WCAG AA threshold either as rendered ("light mode") or
under a full-page ``filter: invert(1)`` ("dark mode"). Each finding carries a
single suggested text colour that works in both.
"""

from __future__ import annotations

import logging
from typing import Any

from emlinter.dom.base import RenderedDocument
from emlinter.models import AnalysisResult, ComputedStyle
from emlinter.solver import DEFAULT_STEP, suggest
from emlinter.utils.contrast import (
    WCAG_AA_NORMAL,
    color_from_device_string,
    color_to_hex,
    contrast_ratio,
    hex_to_color,
    invert,
    is_transparent,
    passes_aa,
)

logger = logging.getLogger(__name__)

EXCLUDED_TAGS = frozenset({"script", "style", "meta", "link"})
DEFAULT_BACKGROUND = "#ffffff"
MAX_ELEMENT_TEXT = 50
ELLIPSIS = "..."


class ContrastAnalyzer:
    """Checks text contrast in light and inverted dark rendering.

    Usage::

        analyzer = ContrastAnalyzer()
        results = analyzer.analyze(StaticDocument.from_html(html))
    """

    def __init__(self, threshold: float = WCAG_AA_NORMAL, step: float = DEFAULT_STEP) -> None:
        self.threshold = threshold
        self.step = step

    def analyze(self, document: RenderedDocument) -> list[AnalysisResult]:
        """Return one finding per failing colour pair, in document order.

        An empty list means every text colour pair passed (or there was no
        text at all).
        """
        results: list[AnalysisResult] = []
        seen_pairs: set[tuple[str, str]] = set()

        for element in document.query_all_elements(EXCLUDED_TAGS):
            if not any(text.strip() for text in document.direct_text(element)):
                continue
            finding = self._check_element(document, element, seen_pairs)
            if finding is not None:
                results.append(finding)

        logger.debug("Contrast analysis found %d failing pair(s)", len(results))
        return results

    def _check_element(
        self,
        document: RenderedDocument,
        element: Any,
        seen_pairs: set[tuple[str, str]],
    ) -> AnalysisResult | None:
        style = document.resolve_computed_style(element)
        text = hex_to_color(color_from_device_string(style.color))
        background = hex_to_color(self._effective_background(document, element, style))
        if text is None or background is None:
            logger.debug(
                "Skipping <%s>: unparseable colours %r / %r",
                document.tag_name(element), style.color, style.background_color,
            )
            return None

        text_hex, bg_hex = color_to_hex(text), color_to_hex(background)
        if (text_hex, bg_hex) in seen_pairs:
            return None
        seen_pairs.add((text_hex, bg_hex))

        light = contrast_ratio(text, background)
        dark = contrast_ratio(invert(text), invert(background))
        passes_light = passes_aa(light, threshold=self.threshold)
        passes_dark = passes_aa(dark, threshold=self.threshold)
        if passes_light and passes_dark:
            return None

        return AnalysisResult(
            original_text_color=text_hex,
            original_bg_color=bg_hex,
            light_mode_contrast=round(light, 2),
            dark_mode_contrast=round(dark, 2),
            passes_light=passes_light,
            passes_dark=passes_dark,
            suggestion=suggest(text_hex, bg_hex, step=self.step),
            element_tag=document.tag_name(element),
            element_text=_truncate(document.text_content(element).strip()),
        )

    def _effective_background(
        self, document: RenderedDocument, element: Any, style: ComputedStyle
    ) -> str:
        """First non-transparent background from *element* up to the root."""
        background = style.background_color
        current = element
        while current is not None:
            if not is_transparent(background):
                return color_from_device_string(background)
            current = document.parent(current)
            if current is not None:
                background = document.resolve_computed_style(current).background_color
        return DEFAULT_BACKGROUND


def _truncate(text: str) -> str:
    if len(text) > MAX_ELEMENT_TEXT:
        return text[:MAX_ELEMENT_TEXT] + ELLIPSIS
    return text


def analyze_html(html: str, threshold: float = WCAG_AA_NORMAL) -> list[AnalysisResult]:
    """Analyze an HTML string through a :class:`StaticDocument`."""
    from emlinter.dom.static import StaticDocument

    return ContrastAnalyzer(threshold).analyze(StaticDocument.from_html(html))
