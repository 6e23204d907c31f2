"""Expander that unfolds the JSON mapping back into element trees."""

import logging
from typing import Any, Dict, List, Optional
from ..types import ConversionError, DEFAULT_MAX_DEPTH, ErrorType, TEXT_KEY, TreeProcessorInterface
from ..models import TextLeaf, XMLDocument, XMLElement


class MappingExpander(TreeProcessorInterface):
    """
    Expands the ``xml_data`` mapping into ``XMLElement`` trees.

    Within an element mapping a ``#text`` string becomes character data, a
    nested mapping becomes a child element and any other string becomes an
    attribute. Values of other JSON types are skipped.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the mapping expander.

        Args:
            max_depth: Maximum nesting depth accepted
            logger: Optional logger instance
        """
        self.max_depth = max_depth
        self.logger = logger or logging.getLogger(__name__)
        self.skipped_values = 0

    def process(self, data: Any) -> List[XMLElement]:
        """
        Expand every top-level entry of a document.

        Args:
            data: XMLDocument to expand

        Returns:
            One element tree per top-level entry, in mapping order

        Raises:
            ValueError: If data is not an XMLDocument
            ConversionError: If a top-level value is not an object or the
                mapping is nested deeper than max_depth
        """
        if not isinstance(data, XMLDocument):
            raise ValueError(f"MappingExpander expects XMLDocument, got {type(data).__name__}")

        self.skipped_values = 0
        roots = []
        for name, value in data.data.items():
            if not isinstance(value, dict):
                raise ConversionError(
                    f"Top-level element '{name}' must be an object, got {type(value).__name__}",
                    ErrorType.SHAPE,
                    context={"element": name},
                )
            roots.append(self.expand(name, value))

        if self.skipped_values:
            self.logger.debug(f"Skipped {self.skipped_values} values that are neither strings nor objects")
        self.logger.info(f"Expanded {len(roots)} top-level elements")
        return roots

    def expand(self, name: str, mapping: Dict[str, Any], depth: int = 1) -> XMLElement:
        """
        Expand one element mapping and its descendants.

        Args:
            name: Element name
            mapping: The element's mapping
            depth: Nesting depth of this element

        Returns:
            XMLElement with attributes, text and children in mapping order
        """
        if depth > self.max_depth:
            raise ConversionError(
                f"Element nesting exceeds maximum depth of {self.max_depth}",
                ErrorType.DEPTH,
                context={"element": name},
            )
        if not name:
            raise ConversionError("Cannot write an element with an empty name", ErrorType.ENCODE)

        element = XMLElement(name=name)
        for key, value in mapping.items():
            if isinstance(value, str):
                if key == TEXT_KEY:
                    if value:
                        element.append(TextLeaf(value))
                else:
                    element.attributes[key] = value
            elif isinstance(value, dict):
                element.append(self.expand(key, value, depth + 1))
            else:
                self.skipped_values += 1
        return element
