"""Ordered element tree produced by the XML parser."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union


@dataclass
class TextLeaf:
    """A single trimmed, non-empty run of character data."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValueError("value must be a string")
        if not self.value:
            raise ValueError("value cannot be empty")


@dataclass
class XMLElement:
    """
    An element with its attributes and ordered content.

    Unlike the JSON mapping, this tree keeps every sibling and the
    interleaving of text runs and child elements, so the lossy collapse
    into a mapping is a separate, explicit step.
    """

    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    content: List[Union["XMLElement", TextLeaf]] = field(default_factory=list)

    def __post_init__(self):
        """Validate element after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not self.name:
            raise ValueError("name cannot be empty")

        if not isinstance(self.attributes, dict):
            raise ValueError("attributes must be a dict")

        if not isinstance(self.content, list):
            raise ValueError("content must be a list")

    def append(self, node: Union["XMLElement", TextLeaf]) -> None:
        """Append a child element or text run."""
        self.content.append(node)

    @property
    def children(self) -> List["XMLElement"]:
        """Child elements in document order."""
        return [node for node in self.content if isinstance(node, XMLElement)]

    @property
    def text(self) -> Optional[str]:
        """The last text run, which is what survives the collapse."""
        for node in reversed(self.content):
            if isinstance(node, TextLeaf):
                return node.value
        return None

    def iter(self) -> Iterator["XMLElement"]:
        """Iterate over this element and all descendants, depth first."""
        stack = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def count_elements(self) -> int:
        """Count this element and all descendants."""
        return sum(1 for _ in self.iter())


@dataclass
class FoldedDocument:
    """Prolog plus root element, as read from an XML stream."""

    declaration: str
    doctype: str
    root: XMLElement
