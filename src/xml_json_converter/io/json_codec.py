"""JSON serialization of the intermediate representation."""

import json
import logging
from typing import Any, Optional, Union
from ..models import XMLDocument
from ..types import ConversionError, ErrorType


class JSONCodec:
    """
    Encodes an ``XMLDocument`` as JSON text and decodes it back.

    Output is UTF-8 friendly (no ``\\u`` escapes for non-ASCII) and never
    escapes ``<``, ``>`` or ``&``; callers embedding it in HTML must escape
    it themselves.
    """

    def __init__(self, indent: Optional[str] = "\t",
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON codec.

        Args:
            indent: Indentation unit, or None for single-line output
            logger: Optional logger instance
        """
        self.indent = indent
        self.logger = logger or logging.getLogger(__name__)

    def encode(self, document: XMLDocument) -> str:
        """
        Serialize a document to JSON text, newline terminated.

        Raises:
            ConversionError: If the document cannot be serialized
        """
        try:
            text = json.dumps(document.to_dict(), ensure_ascii=False, indent=self.indent)
        except (TypeError, ValueError, RecursionError) as e:
            raise ConversionError(f"JSON encoding failed: {e}", ErrorType.ENCODE) from e

        self.logger.debug(f"Encoded document as {len(text)} characters of JSON")
        return text + "\n"

    def decode(self, json_input: Union[str, bytes]) -> XMLDocument:
        """
        Parse JSON text into a document.

        Args:
            json_input: JSON text, or bytes in UTF-8, UTF-16 or UTF-32

        Returns:
            XMLDocument built from the JSON object

        Raises:
            ConversionError: If the input is not valid JSON or has the wrong shape
        """
        return self.to_document(self.parse(json_input))

    def parse(self, json_input: Union[str, bytes]) -> Any:
        """
        Parse JSON text without checking its shape.

        Raises:
            ConversionError: If the input is empty or not valid JSON
        """
        if not json_input.strip():
            raise ConversionError("JSON input is empty", ErrorType.INPUT)

        try:
            return json.loads(json_input)
        except json.JSONDecodeError as e:
            raise ConversionError(
                f"Invalid JSON syntax: {e.msg} at line {e.lineno}, column {e.colno}",
                ErrorType.DECODE,
                context={"line": e.lineno, "column": e.colno},
            ) from e
        except (UnicodeDecodeError, RecursionError) as e:
            raise ConversionError(f"Unreadable JSON input: {e}", ErrorType.DECODE) from e

    def to_document(self, data: Any) -> XMLDocument:
        """
        Build a document from an already decoded JSON value.

        Raises:
            ConversionError: If ``data`` is not an object or a field has the wrong type
        """
        try:
            document = XMLDocument.from_dict(data)
        except ValueError as e:
            raise ConversionError(f"Invalid document: {e}", ErrorType.DECODE) from e

        self.logger.debug(f"Decoded document with top-level elements {document.root_names}")
        return document
