"""Rendered-document handles consumed by the contrast analyzer."""

from emlinter.dom.base import RenderedDocument
from emlinter.dom.static import StaticDocument

__all__ = ["RenderedDocument", "StaticDocument"]
