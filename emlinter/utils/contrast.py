"""WCAG 2.1 contrast ratio and colour-space utilities.

Implements the relative luminance and contrast ratio calculations defined in
WCAG 2.1 Success Criterion 1.4.3 (Contrast (Minimum)), plus the hex, device
string and HSL conversions the analyzer and the colour solver need.

Colours are ``(r, g, b)`` tuples with 0-255 integer channels.
"""

from __future__ import annotations

import re

Color = tuple[int, int, int]

WCAG_AA_NORMAL = 4.5
WCAG_AA_LARGE = 3.0

_HEX6 = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)
_HEX3 = re.compile(r"^#?([0-9a-f])([0-9a-f])([0-9a-f])$", re.IGNORECASE)
# Alpha of rgba(r, g, b, a) and of rgb(r g b / a).
_ALPHA_COMMA = re.compile(r"^rgba?\((?:[^,)]*,){3}([^,)]*)\)$")
_ALPHA_SLASH = re.compile(r"^rgba?\([^/)]*/([^)]*)\)$")


def _clamp(v: float) -> int:
    return max(0, min(255, round(v)))


def hex_to_color(value: str) -> Color | None:
    """Parse ``#rrggbb`` or ``#rgb`` (``#`` optional, any case).

    Returns None for anything else; named colours and ``rgb()`` strings are
    not understood here.
    """
    value = value.strip()
    match = _HEX6.match(value)
    if match:
        return (int(match.group(1), 16), int(match.group(2), 16), int(match.group(3), 16))
    match = _HEX3.match(value)
    if match:
        return tuple(int(nibble * 2, 16) for nibble in match.groups())  # type: ignore[return-value]
    return None


def color_to_hex(color: Color) -> str:
    """Serialize a colour as lower-case ``#rrggbb``."""
    r, g, b = color
    return f"#{r:02x}{g:02x}{b:02x}"


def color_from_device_string(value: str) -> str:
    """Convert a computed-style colour such as ``rgb(255, 0, 0)`` to hex.

    Both comma and space separated channel lists are accepted; an alpha
    component (``rgba()`` or ``/ a``) is ignored. Strings that do not start
    with ``rgb`` are returned unchanged, as are ``rgb`` strings whose
    channels are not numbers.
    """
    if not value or not value.startswith("rgb"):
        return value
    open_paren = value.find("(")
    close_paren = value.find(")", open_paren + 1)
    if open_paren == -1 or close_paren == -1:
        return value
    body = value[open_paren + 1:close_paren].split("/")[0]
    sep = "," if "," in body else None
    parts = [p.strip() for p in body.split(sep) if p.strip()]
    if len(parts) < 3:
        return value
    try:
        channels = tuple(_clamp(float(p)) for p in parts[:3])
    except ValueError:
        return value
    return color_to_hex(channels)  # type: ignore[arg-type]


def _srgb_to_linear(v: float) -> float:
    """Convert an sRGB channel (0-1) to linear light."""
    if v <= 0.03928:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


def relative_luminance(r: int, g: int, b: int) -> float:
    """Compute relative luminance for an sRGB color (0-255 per channel).

    Per WCAG 2.1: L = 0.2126*R + 0.7152*G + 0.0722*B
    where R, G, B are linearized sRGB values.
    """
    rl = _srgb_to_linear(r / 255.0)
    gl = _srgb_to_linear(g / 255.0)
    bl = _srgb_to_linear(b / 255.0)
    return 0.2126 * rl + 0.7152 * gl + 0.0722 * bl


def contrast_ratio(color1: Color, color2: Color) -> float:
    """Compute the WCAG contrast ratio between two sRGB colors.

    Returns a value between 1.0 (identical) and 21.0 (black on white).
    """
    l1 = relative_luminance(*color1)
    l2 = relative_luminance(*color2)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def passes_aa(ratio: float, *, large_text: bool = False, threshold: float | None = None) -> bool:
    """Check whether a contrast ratio meets WCAG AA.

    The minimum is 4.5:1 for normal text and 3:1 for large text (>=18pt, or
    >=14pt bold). An explicit *threshold* replaces either minimum.
    """
    if threshold is None:
        threshold = WCAG_AA_LARGE if large_text else WCAG_AA_NORMAL
    return ratio >= threshold


def invert(color: Color) -> Color:
    """Colour as rendered under a full ``filter: invert(1)``."""
    r, g, b = color
    return (255 - r, 255 - g, 255 - b)


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Convert 0-255 RGB to ``(h, s, l)``, hue as a fraction of the circle."""
    rf, gf, bf = r / 255.0, g / 255.0, b / 255.0
    high = max(rf, gf, bf)
    low = min(rf, gf, bf)
    lightness = (high + low) / 2
    if high == low:
        return (0.0, 0.0, lightness)

    d = high - low
    saturation = d / (2 - high - low) if lightness > 0.5 else d / (high + low)
    if high == rf:
        hue = (gf - bf) / d + (6 if gf < bf else 0)
    elif high == gf:
        hue = (bf - rf) / d + 2
    else:
        hue = (rf - gf) / d + 4
    return (hue / 6, saturation, lightness)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> Color:  # noqa: E741
    """Convert ``(h, s, l)`` back to rounded 0-255 RGB."""
    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)
    return (_clamp(r * 255), _clamp(g * 255), _clamp(b * 255))


def is_transparent(value: str) -> bool:
    """True for ``transparent`` or an ``rgba()`` colour whose alpha is zero.

    Any other alpha counts as opaque; semi-transparent colours are not
    composited with what lies beneath.
    """
    value = value.strip().lower()
    if not value or value == "transparent":
        return True
    match = _ALPHA_COMMA.match(value) or _ALPHA_SLASH.match(value)
    if match is None:
        return False
    try:
        alpha = float(match.group(1).strip().rstrip("%"))
    except ValueError:
        return False
    return alpha == 0
