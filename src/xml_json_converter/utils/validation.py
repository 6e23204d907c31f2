"""Validation utilities for conversion input and XML names."""

import json
import re
from typing import Any, List, Union
from ..types import ValidationResult, ValidationError, ErrorType, DEFAULT_MAX_DEPTH
from ..models.document import DECLARATION_KEY, DOCTYPE_KEY, DATA_KEY

# Letters or underscore first, then letters, digits, '.', '-', '_' or ':'.
_XML_NAME = re.compile(r"^[^\W\d][\w.\-:]*$")

_BOMS = (b"\xef\xbb\xbf", b"\xff\xfe", b"\xfe\xff")


class ValidationUtils:
    """Utility class for validating conversion input."""

    @staticmethod
    def validate_json_string(json_string: Union[str, bytes],
                             max_depth: int = DEFAULT_MAX_DEPTH) -> ValidationResult:
        """
        Validate a JSON document in the converter's wire format.

        Args:
            json_string: JSON text or bytes to validate
            max_depth: Maximum nesting depth of ``xml_data``

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        # Check if input is empty
        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.INPUT,
                message="JSON input is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.DECODE,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except (UnicodeDecodeError, RecursionError) as e:
            errors.append(ValidationError(
                type=ErrorType.DECODE,
                message=f"Unreadable JSON input: {e}",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        return ValidationUtils.validate_document(data, max_depth)

    @staticmethod
    def validate_document(data: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> ValidationResult:
        """
        Validate an already decoded JSON value in the converter's wire format.

        Args:
            data: Decoded JSON value
            max_depth: Maximum nesting depth of ``xml_data``

        Returns:
            ValidationResult with validation details
        """
        errors, warnings = ValidationUtils._validate_document_structure(data, max_depth)

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _validate_document_structure(data: Any, max_depth: int) -> tuple[List[ValidationError], List[str]]:
        """Validate the shape of a decoded document."""
        errors = []
        warnings = []

        if not isinstance(data, dict):
            errors.append(ValidationError(
                type=ErrorType.DECODE,
                message=f"Root element must be an object, got {type(data).__name__}",
                location="root"
            ))
            return errors, warnings

        for key in (DECLARATION_KEY, DOCTYPE_KEY):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                errors.append(ValidationError(
                    type=ErrorType.DECODE,
                    message=f"{key} must be a string, got {type(value).__name__}",
                    location=key
                ))

        xml_data = data.get(DATA_KEY)
        if xml_data is None:
            warnings.append(f"{DATA_KEY} is missing; the document will have no elements")
            return errors, warnings

        if not isinstance(xml_data, dict):
            errors.append(ValidationError(
                type=ErrorType.DECODE,
                message=f"{DATA_KEY} must be an object, got {type(xml_data).__name__}",
                location=DATA_KEY
            ))
            return errors, warnings

        for name, value in xml_data.items():
            if not isinstance(value, dict):
                errors.append(ValidationError(
                    type=ErrorType.SHAPE,
                    message=f"Top-level element '{name}' must be an object, got {type(value).__name__}",
                    location=f"{DATA_KEY}.{name}"
                ))

        if len(xml_data) > 1:
            warnings.append(f"{DATA_KEY} has {len(xml_data)} top-level elements; "
                            "the output will not be a well-formed document")

        depth = ValidationUtils._calculate_max_depth(xml_data)
        if depth > max_depth:
            errors.append(ValidationError(
                type=ErrorType.DEPTH,
                message=f"Nesting depth {depth} exceeds maximum of {max_depth}",
                location=DATA_KEY
            ))

        return errors, warnings

    @staticmethod
    def _calculate_max_depth(data: Any) -> int:
        """Calculate maximum object nesting depth below ``data``."""
        max_depth = 0
        stack = [(data, 0)]
        while stack:
            value, depth = stack.pop()
            if not isinstance(value, dict):
                continue
            max_depth = max(max_depth, depth)
            stack.extend((child, depth + 1) for child in value.values())
        return max_depth

    @staticmethod
    def validate_xml_input(xml_input: Union[str, bytes]) -> ValidationResult:
        """
        Cheap sanity check of XML input before tokenizing.

        Args:
            xml_input: XML text or bytes

        Returns:
            ValidationResult with validation details
        """
        errors = []

        if isinstance(xml_input, str):
            stripped = xml_input.lstrip("\ufeff").lstrip()
            starts_with_markup = stripped.startswith("<")
        else:
            stripped = xml_input
            for bom in _BOMS:
                if stripped.startswith(bom):
                    stripped = stripped[len(bom):]
                    break
            stripped = stripped.lstrip()
            # UTF-16 input without a BOM still starts with a '<' byte on one side.
            starts_with_markup = stripped[:1] == b"<" or stripped[1:2] == b"<"

        if not stripped:
            errors.append(ValidationError(
                type=ErrorType.INPUT,
                message="XML input is empty",
                location="input"
            ))
        elif not starts_with_markup:
            errors.append(ValidationError(
                type=ErrorType.TOKENIZATION,
                message="XML input must start with markup",
                location="line 1, column 1"
            ))

        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=[])

    @staticmethod
    def validate_xml_name(name: Any, kind: str = "element") -> None:
        """
        Check that ``name`` can be written as an element or attribute name.

        Raises:
            ValueError: With the specific reason when the name is invalid
        """
        if not isinstance(name, str):
            raise ValueError(f"{kind} name must be a string")
        if not name:
            raise ValueError(f"{kind} name cannot be empty")
        if any(ch.isspace() for ch in name):
            raise ValueError(f"Invalid {kind} name {name!r}: whitespace not allowed")
        if not _XML_NAME.match(name):
            raise ValueError(f"Invalid {kind} name {name!r}")
