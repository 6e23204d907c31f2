"""Collapser that folds an ordered element tree into the JSON mapping."""

import logging
from typing import Any, Dict, List, Optional, Tuple
from ..types import ConversionError, DEFAULT_MAX_DEPTH, ErrorType, TEXT_KEY, TreeProcessorInterface
from ..models import FoldedDocument, TextLeaf, XMLDocument, XMLElement


class ElementCollapser(TreeProcessorInterface):
    """
    Collapses an ``XMLElement`` tree into nested mappings.

    Each element becomes one mapping: its attributes first, then its text
    runs and child elements in document order. Keys are shared, so a later
    child overwrites an earlier sibling of the same name or an attribute of
    the same name, and the last text run wins. This is the only place the
    XML to JSON direction loses information.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the element collapser.

        Args:
            max_depth: Maximum nesting depth accepted
            logger: Optional logger instance
        """
        self.max_depth = max_depth
        self.logger = logger or logging.getLogger(__name__)

    def process(self, data: Any) -> XMLDocument:
        """
        Collapse a folded document into the intermediate representation.

        Args:
            data: FoldedDocument produced by the XML parser

        Returns:
            XMLDocument with prolog and collapsed mapping

        Raises:
            ValueError: If data is not a FoldedDocument
            ConversionError: If the tree is nested deeper than max_depth
        """
        if not isinstance(data, FoldedDocument):
            raise ValueError(f"ElementCollapser expects FoldedDocument, got {type(data).__name__}")

        tree = {data.root.name: self.collapse(data.root)}

        collisions = self.find_collisions(data.root)
        if collisions:
            self.logger.warning(f"Collapsing dropped {len(collisions)} overwritten entries: "
                                f"{', '.join(path for path, _ in collisions[:5])}")

        return XMLDocument(declaration=data.declaration, doctype=data.doctype, data=tree)

    def collapse(self, element: XMLElement, depth: int = 1) -> Dict[str, Any]:
        """
        Collapse one element and its descendants into a mapping.

        Args:
            element: Element to collapse
            depth: Nesting depth of ``element``

        Returns:
            Mapping of attributes, ``#text`` and child mappings
        """
        if depth > self.max_depth:
            raise ConversionError(
                f"Element nesting exceeds maximum depth of {self.max_depth}",
                ErrorType.DEPTH,
                context={"element": element.name},
            )

        mapping: Dict[str, Any] = dict(element.attributes)
        for node in element.content:
            if isinstance(node, TextLeaf):
                mapping[TEXT_KEY] = node.value
            else:
                mapping[node.name] = self.collapse(node, depth + 1)
        return mapping

    def find_collisions(self, element: XMLElement, path: str = "") -> List[Tuple[str, str]]:
        """
        List the entries the collapse will overwrite.

        Args:
            element: Root of the tree to inspect
            path: Slash-separated path of the parent

        Returns:
            List of (path, reason) pairs, reason being "attribute",
            "sibling" or "text"
        """
        current = f"{path}/{element.name}"
        collisions = []
        child_names = set()
        has_text = TEXT_KEY in element.attributes

        for node in element.content:
            if isinstance(node, TextLeaf):
                if has_text:
                    collisions.append((f"{current}/{TEXT_KEY}", "text"))
                has_text = True
                continue

            if node.name in child_names:
                collisions.append((f"{current}/{node.name}", "sibling"))
            elif node.name in element.attributes:
                collisions.append((f"{current}/{node.name}", "attribute"))
            child_names.add(node.name)
            collisions.extend(self.find_collisions(node, current))

        return collisions
