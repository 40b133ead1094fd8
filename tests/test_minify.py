"""Tests for the HTML and CSS minifier."""

from __future__ import annotations

from emlinter.formatting.minify import minify_css, minify_html
from emlinter.models import MinifyOptions


class TestMinifyCss:
    def test_strips_comments_and_spaces(self) -> None:
        css = "a { color : red ; } /* c */\n b{x:y}"
        assert minify_css(css) == "a{color:red;}b{x:y}"

    def test_empty(self) -> None:
        assert minify_css("  /* nothing */ ") == ""


class TestMinifyHtml:
    def test_whitespace_between_tags_removed(self) -> None:
        assert minify_html("<div>\n  <p>Hi</p>\n</div>") == "<div><p>Hi</p></div>"

    def test_comments_removed_outlook_conditionals_kept(self) -> None:
        html = "<!-- x --><!--[if gte mso 9]><xml></xml><![endif]--><p>a</p>"
        assert minify_html(html) == "<!--[if gte mso 9]><xml></xml><![endif]--><p>a</p>"

    def test_style_block_minified(self) -> None:
        html = "<style>\n a { color: red; }\n</style>"
        assert minify_html(html) == "<style>a{color:red;}</style>"

    def test_keep_styles(self) -> None:
        html = "<style>\n a { color: red; }\n</style>\n<p> x </p>"
        result = minify_html(html, MinifyOptions(keep_styles=True))
        assert result == "<style>\n a { color: red; }\n</style><p> x </p>"

    def test_keep_head(self) -> None:
        html = "<head>\n<title>T</title>\n</head>\n<body>\n<p>x</p>\n</body>"
        result = minify_html(html, MinifyOptions(keep_head=True))
        assert result == "<head>\n<title>T</title>\n</head><body><p>x</p></body>"

    def test_multiple_style_blocks_restored_in_place(self) -> None:
        html = "<style>a{ x:y }</style><p>1</p><style>b{ z:w }</style>"
        assert minify_html(html) == "<style>a{x:y}</style><p>1</p><style>b{z:w}</style>"

    def test_empty(self) -> None:
        assert minify_html("") == ""
