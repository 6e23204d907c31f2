"""XML output for the JSON to XML direction."""

import logging
from io import StringIO
from typing import List, Optional
from xml.sax.saxutils import XMLGenerator
from xml.sax.xmlreader import AttributesImpl

from ..models import TextLeaf, XMLDocument, XMLElement
from ..types import ConversionError, ErrorType
from ..utils.validation import ValidationUtils


class XMLWriter:
    """
    Writes the prolog and element trees as XML text.

    The declaration and doctype each go on their own line, even when empty.
    Element attributes are only written when ``emit_attributes`` is set;
    by default the JSON to XML direction drops them.

    With ``indent`` set, each start tag goes on a new line, and an element
    holding only text (or nothing) is closed on the same line.
    """

    def __init__(self, indent: Optional[str] = None, emit_attributes: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the XML writer.

        Args:
            indent: Indentation unit, or None for compact output
            emit_attributes: Write element attributes back out
            logger: Optional logger instance
        """
        self.indent = indent
        self.emit_attributes = emit_attributes
        self.logger = logger or logging.getLogger(__name__)
        self._reset()

    def _reset(self) -> None:
        self._depth = 0
        self._indented_in = False
        self._put_newline = False

    def write(self, document: XMLDocument, roots: List[XMLElement]) -> str:
        """
        Render a complete XML document.

        Args:
            document: Document providing the declaration and doctype
            roots: Top-level elements to write

        Returns:
            The XML text with surrounding whitespace stripped

        Raises:
            ConversionError: If a name cannot be written or output fails
        """
        self._reset()
        buffer = StringIO()
        try:
            buffer.write(document.declaration + "\n")
            buffer.write(document.doctype + "\n")

            generator = XMLGenerator(buffer, encoding="utf-8", short_empty_elements=False)
            for root in roots:
                self._write_element(generator, root)
        except (OSError, UnicodeError) as e:
            raise ConversionError(f"Failed to write XML: {e}", ErrorType.ENCODE) from e

        output = buffer.getvalue().strip()
        self.logger.debug(f"Wrote XML document of {len(output)} characters")
        return output

    def _write_element(self, generator: XMLGenerator, element: XMLElement) -> None:
        self._check_name(element.name, "element")

        attributes = {}
        if self.emit_attributes:
            for key, value in element.attributes.items():
                self._check_name(key, "attribute")
                attributes[key] = value

        self._write_indent(generator, 1)
        generator.startElement(element.name, AttributesImpl(attributes))

        for node in element.content:
            if isinstance(node, TextLeaf):
                generator.characters(node.value)
            else:
                self._write_element(generator, node)

        self._write_indent(generator, -1)
        generator.endElement(element.name)

    def _write_indent(self, generator: XMLGenerator, depth_delta: int) -> None:
        if not self.indent:
            return

        if depth_delta < 0:
            self._depth -= 1
            if self._indented_in:
                # Nothing but text since the matching start tag.
                self._indented_in = False
                return
            self._indented_in = False

        if self._put_newline:
            generator.ignorableWhitespace("\n")
        else:
            self._put_newline = True
        generator.ignorableWhitespace(self.indent * self._depth)

        if depth_delta > 0:
            self._depth += 1
            self._indented_in = True

    @staticmethod
    def _check_name(name: str, kind: str) -> None:
        try:
            ValidationUtils.validate_xml_name(name, kind)
        except ValueError as e:
            raise ConversionError(str(e), ErrorType.ENCODE, context={"name": name}) from e
