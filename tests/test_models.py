"""Tests for shared data models."""

from __future__ import annotations

import dataclasses

import pytest

from emlinter.models import (
    AnalysisResult,
    ContrastReport,
    MinifyOptions,
    StyleDeclaration,
    Token,
    TokenKind,
)


def _result(*, passes_light: bool = False, passes_dark: bool = False) -> AnalysisResult:
    return AnalysisResult(
        original_text_color="#999999",
        original_bg_color="#ffffff",
        light_mode_contrast=2.85,
        dark_mode_contrast=3.66,
        passes_light=passes_light,
        passes_dark=passes_dark,
        suggestion="#000000",
        element_tag="td",
        element_text="Footer",
    )


class TestToken:
    def test_is_tag(self) -> None:
        assert Token(TokenKind.OPEN, "<p>", "p").is_tag
        assert Token(TokenKind.SELF_CLOSING, "<br>", "br").is_tag
        assert not Token(TokenKind.TEXT, "hi").is_tag
        assert not Token(TokenKind.COMMENT, "<!-- c -->").is_tag

    def test_kind_is_string(self) -> None:
        assert TokenKind.CLOSE == "close"


class TestStyleDeclaration:
    def test_str(self) -> None:
        assert str(StyleDeclaration("color", "red")) == "color: red"


class TestAnalysisResult:
    def test_frozen(self) -> None:
        result = _result()
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.suggestion = "#111111"  # type: ignore[misc]

    def test_to_dict(self) -> None:
        data = _result().to_dict()
        assert data["original_text_color"] == "#999999"
        assert data["element_tag"] == "td"
        assert set(data) == {f.name for f in dataclasses.fields(AnalysisResult)}


class TestContrastReport:
    def test_empty(self) -> None:
        report = ContrastReport(source_name="a.html")
        assert report.results == []
        assert report.failing_light_count == 0
        assert report.failing_dark_count == 0

    def test_counts(self) -> None:
        report = ContrastReport(
            source_name="a.html",
            results=[_result(), _result(passes_light=True), _result(passes_dark=True)],
        )
        assert report.failing_light_count == 2
        assert report.failing_dark_count == 2


class TestMinifyOptions:
    def test_defaults(self) -> None:
        options = MinifyOptions()
        assert options.keep_head is False
        assert options.keep_styles is False
