"""Intermediate representation shared by both conversion directions."""

from dataclasses import dataclass, field
from typing import Any, Dict

DECLARATION_KEY = "xml_declaration"
DOCTYPE_KEY = "xml_document_type_definition"
DATA_KEY = "xml_data"


@dataclass
class XMLDocument:
    """
    The XML prolog together with the collapsed element mapping.

    ``data`` maps an element's local name to a mapping of its attributes,
    child elements and optional ``#text`` value. It is built once per
    conversion and never mutated afterwards.
    """

    declaration: str = ""
    doctype: str = ""
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate document after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate field types."""
        if not isinstance(self.declaration, str):
            raise ValueError(f"{DECLARATION_KEY} must be a string, got {type(self.declaration).__name__}")

        if not isinstance(self.doctype, str):
            raise ValueError(f"{DOCTYPE_KEY} must be a string, got {type(self.doctype).__name__}")

        if not isinstance(self.data, dict):
            raise ValueError(f"{DATA_KEY} must be an object, got {type(self.data).__name__}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to dictionary for JSON serialization."""
        return {
            DECLARATION_KEY: self.declaration,
            DOCTYPE_KEY: self.doctype,
            DATA_KEY: self.data,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'XMLDocument':
        """
        Create XMLDocument from a decoded JSON object.

        Missing string fields default to empty strings and a missing or
        null ``xml_data`` becomes an empty mapping.

        Raises:
            ValueError: If ``data`` is not a dict or a field has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Document must be a JSON object, got {type(data).__name__}")

        declaration = data.get(DECLARATION_KEY)
        doctype = data.get(DOCTYPE_KEY)
        xml_data = data.get(DATA_KEY)
        return cls(
            declaration=declaration if declaration is not None else "",
            doctype=doctype if doctype is not None else "",
            data=xml_data if xml_data is not None else {},
        )

    @property
    def root_names(self):
        """Top-level element names in mapping order."""
        return list(self.data.keys())
