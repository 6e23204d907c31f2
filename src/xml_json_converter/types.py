"""Core type definitions for the XML/JSON converter."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, BinaryIO, List, Optional, TextIO, Union


# Anything a conversion can read from: raw bytes, text, or an open file.
Source = Union[bytes, bytearray, str, BinaryIO, TextIO]

TEXT_KEY = "#text"
DEFAULT_MAX_DEPTH = 512
DEFAULT_CHUNK_SIZE = 64 * 1024


class Direction(Enum):
    """Enumeration of conversion directions."""
    XML_TO_JSON = "xml-to-json"
    JSON_TO_XML = "json-to-xml"


class ErrorType(Enum):
    """Enumeration of error types."""
    INPUT = "input"
    TOKENIZATION = "tokenization"
    DECODE = "decode"
    ENCODE = "encode"
    SHAPE = "shape"
    DEPTH = "depth"


@dataclass
class ConversionResult:
    """Result of a conversion call."""
    success: bool
    output: str
    direction: Direction
    errors: Optional[List[str]] = None
    suggested_action: Optional[str] = None


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str] = field(default_factory=list)


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    error_type: Optional[ErrorType] = None


class ConversionError(Exception):
    """Raised when a conversion aborts. The original exception is chained as __cause__."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


# Abstract base classes for interfaces

class ConverterInterface(ABC):
    """Abstract interface for the XML/JSON converter."""

    @abstractmethod
    def xml_to_json(self, source: Source) -> str:
        """Convert an XML document into its JSON representation."""
        pass

    @abstractmethod
    def json_to_xml(self, source: Source) -> str:
        """Convert a JSON representation back into an XML document."""
        pass

    @abstractmethod
    def convert(self, source: Source, to_json: bool) -> ConversionResult:
        """Convert in the requested direction without raising."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: Union[str, bytes], direction: Direction) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_conversion_error(self, error: ConversionError) -> ErrorResponse:
        """Handle conversion errors."""
        pass


class TreeProcessorInterface(ABC):
    """Abstract interface for the fold/unfold tree processors."""

    @abstractmethod
    def process(self, data: Any) -> Any:
        """Transform one tree representation into the other."""
        pass
