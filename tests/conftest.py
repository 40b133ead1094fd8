"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_EMAIL = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
  /* brand */
  .muted { color: #999999; }
  @media (max-width: 600px) { .muted { color: #000000; } }
</style>
</head>
<body style="margin:0;padding:0;background-color:#ffffff;">
<table bgcolor="#ffffff"><tr>
<td style="color:#333333">Readable body copy</td>
<td class="muted">Low contrast footer</td>
<td class="muted">Another muted cell</td>
</tr></table>
<pre>
keep
  this
</pre>
</body>
</html>
"""


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Alias for pytest's tmp_path fixture."""
    return tmp_path


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_EMAIL


@pytest.fixture
def sample_html_file(tmp_path: Path) -> Path:
    """Write the sample email to disk and return its path."""
    path = tmp_path / "newsletter.html"
    path.write_text(SAMPLE_EMAIL, encoding="utf-8")
    return path
