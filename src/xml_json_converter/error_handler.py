"""Error handling implementation for the XML/JSON converter."""

import logging
from typing import Any, Optional, Union
from .types import (
    ConversionError,
    Direction,
    ErrorHandlerInterface,
    ErrorResponse,
    ErrorType,
    ValidationError,
    ValidationResult,
    DEFAULT_MAX_DEPTH,
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Input validation and error triage for conversions.

    Every conversion failure is fatal to the call that raised it, so
    ``handle_conversion_error`` never reports a recoverable error. It only
    tells the caller what to fix before trying again.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            max_depth: Maximum nesting depth accepted in JSON input
            logger: Optional logger instance for error reporting
        """
        self.max_depth = max_depth
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: Union[str, bytes], direction: Direction) -> ValidationResult:
        """
        Validate conversion input.

        Args:
            input_data: XML or JSON text or bytes
            direction: Which conversion the input is for

        Returns:
            ValidationResult with validation details
        """
        try:
            if direction == Direction.JSON_TO_XML:
                result = ValidationUtils.validate_json_string(input_data, self.max_depth)
            else:
                result = ValidationUtils.validate_xml_input(input_data)
        except (TypeError, AttributeError) as e:
            self.logger.error(f"Unexpected error during input validation: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.INPUT,
                    message=f"Validation failed with unexpected error: {str(e)}",
                    location="input"
                )],
                warnings=[]
            )

        for warning in result.warnings:
            self.logger.warning(warning)
        return result

    def validate_document(self, data: Any) -> ValidationResult:
        """
        Validate a decoded JSON document before it is expanded into XML.

        Args:
            data: Value returned by the JSON parser

        Returns:
            ValidationResult with validation details
        """
        result = ValidationUtils.validate_document(data, self.max_depth)
        for warning in result.warnings:
            self.logger.warning(warning)
        return result

    def handle_conversion_error(self, error: ConversionError) -> ErrorResponse:
        """
        Describe a conversion error and how to fix the input.

        Args:
            error: ConversionError to handle

        Returns:
            ErrorResponse with a suggested action
        """
        self.logger.error(f"Conversion error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.TOKENIZATION:
            action = self._describe_tokenization_error(error)
        elif error.error_type == ErrorType.DECODE:
            action = ("Check that the input is a JSON object with string fields "
                      "'xml_declaration' and 'xml_document_type_definition' "
                      "and an object field 'xml_data'.")
        elif error.error_type == ErrorType.SHAPE:
            action = ("Every top-level entry of 'xml_data' must be an object. "
                      "Wrap text content as {\"#text\": \"...\"}.")
        elif error.error_type == ErrorType.ENCODE:
            action = ("Check element and attribute names are valid XML names "
                      "and that the output location is writable.")
        elif error.error_type == ErrorType.DEPTH:
            action = "Reduce the nesting depth of the document or raise max_depth."
        elif error.error_type == ErrorType.INPUT:
            action = "Check that the input exists, is readable and is not empty."
        else:
            action = "Unknown error type. Please check logs and retry."

        return ErrorResponse(
            can_recover=False,
            suggested_action=action,
            error_type=error.error_type
        )

    def _describe_tokenization_error(self, error: ConversionError) -> str:
        location = ""
        if isinstance(error.context, dict) and error.context.get("line") is not None:
            location = f" near line {error.context['line']}, column {error.context.get('column')}"
        return f"Fix the malformed XML{location} and retry."
