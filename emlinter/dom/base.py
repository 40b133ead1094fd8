"""Protocol for rendered documents the contrast analyzer can read."""

from __future__ import annotations

from typing import Any, Collection, Iterable, Protocol, runtime_checkable

from emlinter.models import ComputedStyle


@runtime_checkable
class RenderedDocument(Protocol):
    """Read-only view of a rendered document.

    Elements are opaque handles; the analyzer only passes them back into the
    document's own methods. Implementations may wrap a browser page, a
    headless renderer, or a static parse (see ``StaticDocument``).
    """

    def query_all_elements(self, exclude: Collection[str]) -> Iterable[Any]:
        """Yield every element in document order, skipping tags in *exclude*."""
        ...

    def tag_name(self, element: Any) -> str:
        """Lower-case tag name of *element*."""
        ...

    def direct_text(self, element: Any) -> list[str]:
        """Contents of the text nodes that are direct children of *element*."""
        ...

    def text_content(self, element: Any) -> str:
        """All text inside *element*, descendants included."""
        ...

    def parent(self, element: Any) -> Any | None:
        """Parent element, or None at the document root."""
        ...

    def resolve_computed_style(self, element: Any) -> ComputedStyle:
        """Effective ``color`` and ``background-color`` as device strings."""
        ...
