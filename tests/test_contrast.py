"""Tests for the colour-space and contrast utilities."""

from __future__ import annotations

import pytest

from emlinter.utils.contrast import (
    color_from_device_string,
    color_to_hex,
    contrast_ratio,
    hex_to_color,
    hsl_to_rgb,
    invert,
    is_transparent,
    passes_aa,
    relative_luminance,
    rgb_to_hsl,
)


class TestRelativeLuminance:
    def test_black(self) -> None:
        assert relative_luminance(0, 0, 0) == pytest.approx(0.0, abs=1e-6)

    def test_white(self) -> None:
        assert relative_luminance(255, 255, 255) == pytest.approx(1.0, abs=1e-4)

    def test_mid_gray(self) -> None:
        lum = relative_luminance(128, 128, 128)
        assert 0.2 < lum < 0.25  # ~0.2159

    def test_pure_red(self) -> None:
        lum = relative_luminance(255, 0, 0)
        assert 0.20 < lum < 0.22  # ~0.2126

    def test_monotonic_per_channel(self) -> None:
        for v in range(255):
            assert relative_luminance(v, 0, 0) <= relative_luminance(v + 1, 0, 0)
            assert relative_luminance(0, v, 0) <= relative_luminance(0, v + 1, 0)
            assert relative_luminance(0, 0, v) <= relative_luminance(0, 0, v + 1)

    @pytest.mark.parametrize("a", [0, 37, 128, 200, 255])
    @pytest.mark.parametrize("b", [0, 64, 191, 255])
    def test_monotonic_with_other_channels_set(self, a: int, b: int) -> None:
        for v in range(255):
            assert relative_luminance(v, a, b) <= relative_luminance(v + 1, a, b)
            assert relative_luminance(a, v, b) <= relative_luminance(a, v + 1, b)
            assert relative_luminance(a, b, v) <= relative_luminance(a, b, v + 1)


class TestContrastRatio:
    def test_black_on_white(self) -> None:
        ratio = contrast_ratio((0, 0, 0), (255, 255, 255))
        assert ratio == pytest.approx(21.0, abs=0.01)

    def test_identity(self) -> None:
        for color in [(0, 0, 0), (255, 255, 255), (12, 200, 99), (128, 128, 128)]:
            assert contrast_ratio(color, color) == pytest.approx(1.0)

    def test_symmetric(self) -> None:
        pairs = [((100, 50, 200), (200, 100, 50)), ((0, 0, 0), (119, 119, 119))]
        for a, b in pairs:
            assert contrast_ratio(a, b) == contrast_ratio(b, a)

    def test_light_gray_on_white(self) -> None:
        ratio = contrast_ratio((217, 217, 217), (255, 255, 255))
        assert ratio < 4.5


class TestPassesAA:
    def test_passes_normal(self) -> None:
        assert passes_aa(4.5) is True

    def test_fails_normal(self) -> None:
        assert passes_aa(4.4) is False

    def test_explicit_threshold(self) -> None:
        assert passes_aa(6.9, threshold=7.0) is False
        assert passes_aa(3.2, threshold=3.0) is True
        assert passes_aa(3.2, large_text=True, threshold=4.5) is False

    def test_passes_large_text(self) -> None:
        assert passes_aa(3.0, large_text=True) is True

    def test_fails_large_text(self) -> None:
        assert passes_aa(2.9, large_text=True) is False


class TestHexParsing:
    def test_six_digit(self) -> None:
        assert hex_to_color("#ABCDEF") == (171, 205, 239)
        assert hex_to_color("abcdef") == (171, 205, 239)

    def test_three_digit_expands(self) -> None:
        assert hex_to_color("#abc") == (0xAA, 0xBB, 0xCC)
        assert color_to_hex(hex_to_color("#abc")) == "#aabbcc"  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["#abcd", "red", "rgb(1, 2, 3)", "#ggg", "", "#1234567"])
    def test_rejects_other_forms(self, value: str) -> None:
        assert hex_to_color(value) is None

    @pytest.mark.parametrize("others", [(0, 0), (0x12, 0xAB), (0x80, 0x7F), (0xFF, 0xFF)])
    def test_round_trip_every_channel_value(self, others: tuple[int, int]) -> None:
        x, y = others
        for v in range(256):
            for color in [(v, x, y), (x, v, y), (x, y, v)]:
                hex_value = color_to_hex(color)
                assert hex_to_color(hex_value) == color
                assert color_to_hex(hex_to_color(hex_value.upper())) == hex_value  # type: ignore[arg-type]

    def test_round_trip_sample(self) -> None:
        for v in range(0, 0xFFFFFF + 1, 997):
            hex_value = f"#{v:06x}"
            assert color_to_hex(hex_to_color(hex_value)) == hex_value  # type: ignore[arg-type]


class TestDeviceStrings:
    def test_comma_separated(self) -> None:
        assert color_from_device_string("rgb(255, 0, 0)") == "#ff0000"

    def test_space_separated(self) -> None:
        assert color_from_device_string("rgb(0 128 255)") == "#0080ff"

    def test_alpha_ignored(self) -> None:
        assert color_from_device_string("rgba(10, 20, 30, 0.5)") == "#0a141e"

    def test_non_rgb_passes_through(self) -> None:
        assert color_from_device_string("#abcdef") == "#abcdef"
        assert color_from_device_string("transparent") == "transparent"

    def test_garbage_channels_unchanged(self) -> None:
        assert color_from_device_string("rgb(a, b, c)") == "rgb(a, b, c)"


class TestTransparency:
    @pytest.mark.parametrize(
        "value",
        ["", "transparent", "rgba(0, 0, 0, 0)", "rgba(255,255,255,0)", "rgb(0 0 0 / 0%)"],
    )
    def test_transparent(self, value: str) -> None:
        assert is_transparent(value) is True

    @pytest.mark.parametrize("value", ["rgb(255, 255, 255)", "rgba(0, 0, 0, 0.5)", "#000000"])
    def test_opaque(self, value: str) -> None:
        assert is_transparent(value) is False


class TestInvertAndHsl:
    def test_invert(self) -> None:
        assert invert((0, 0, 0)) == (255, 255, 255)
        assert invert((10, 128, 245)) == (245, 127, 10)

    def test_pure_red(self) -> None:
        assert rgb_to_hsl(255, 0, 0) == (0.0, 1.0, 0.5)
        assert hsl_to_rgb(0.0, 1.0, 0.5) == (255, 0, 0)

    def test_gray_has_no_saturation(self) -> None:
        h, s, l = rgb_to_hsl(119, 119, 119)  # noqa: E741
        assert s == 0.0
        assert hsl_to_rgb(h, s, l) == (119, 119, 119)

    def test_rgb_round_trip_within_one(self) -> None:
        for color in [(12, 200, 99), (250, 3, 180), (64, 64, 200), (199, 180, 20)]:
            back = hsl_to_rgb(*rgb_to_hsl(*color))
            assert all(abs(a - b) <= 1 for a, b in zip(color, back))

    def test_hsl_round_trip_on_grid(self) -> None:
        for h in (0.1, 0.3, 0.55, 0.8):
            for s in (0.4, 0.7, 1.0):
                for l in (0.45, 0.5, 0.55):  # noqa: E741
                    back = rgb_to_hsl(*hsl_to_rgb(h, s, l))
                    assert back == pytest.approx((h, s, l), abs=0.01)
