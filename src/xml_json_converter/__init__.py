"""
XML/JSON Converter - Bidirectional XML and JSON conversion.

Folds an XML document (prolog, elements, attributes and text) into a
JSON object and unfolds that object back into XML.
"""

from .converter import XMLJSONConverter, xml_json_convert
from .models import XMLDocument, XMLElement, TextLeaf, FoldedDocument
from .types import ConversionError, ConversionResult, Direction, ErrorType

__version__ = "1.0.0"
__all__ = [
    "XMLJSONConverter",
    "xml_json_convert",
    "XMLDocument",
    "XMLElement",
    "TextLeaf",
    "FoldedDocument",
    "ConversionError",
    "ConversionResult",
    "Direction",
    "ErrorType",
]
