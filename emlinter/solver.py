"""Universal colour solver.

Finds one text colour that reads well both on the original background and
under a full-page colour-inversion dark mode. The text colour's hue and
saturation are kept; only its lightness is searched.
"""

from __future__ import annotations

import logging

from emlinter.utils.contrast import (
    Color,
    color_to_hex,
    contrast_ratio,
    hex_to_color,
    hsl_to_rgb,
    invert,
    rgb_to_hsl,
)

logger = logging.getLogger(__name__)

DEFAULT_STEP = 0.01


def worst_case_contrast(text: Color, background: Color) -> float:
    """The lower of the light-mode and inverted dark-mode contrast ratios."""
    light = contrast_ratio(text, background)
    dark = contrast_ratio(invert(text), invert(background))
    return min(light, dark)


def suggest(text_hex: str, bg_hex: str, *, step: float = DEFAULT_STEP) -> str:
    """Return the lightness variant of *text_hex* with the best worst-case contrast.

    Lightness is sampled from 0.0 to 1.0 in increments of *step*; on ties the
    darkest candidate wins. When no sample beats the original colour, the
    original is returned as lower-case ``#rrggbb``; input that cannot be
    parsed is returned unchanged.
    """
    text = hex_to_color(text_hex)
    background = hex_to_color(bg_hex)
    if text is None or background is None:
        logger.debug("Cannot solve for unparseable pair %r on %r", text_hex, bg_hex)
        return text_hex

    hue, saturation, _ = rgb_to_hsl(*text)
    best = text
    best_score = worst_case_contrast(text, background)

    samples = round(1 / step)
    for i in range(samples + 1):
        candidate = hsl_to_rgb(hue, saturation, min(1.0, i * step))
        score = worst_case_contrast(candidate, background)
        if score > best_score:
            best, best_score = candidate, score

    return color_to_hex(best)
