"""Data models for the XML/JSON converter."""

from .element import XMLElement, TextLeaf, FoldedDocument
from .document import XMLDocument

__all__ = ["XMLElement", "TextLeaf", "FoldedDocument", "XMLDocument"]
