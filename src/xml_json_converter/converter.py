"""Conversion entry points for XML and JSON."""

import logging
from typing import Optional
from .types import (
    ConverterInterface,
    ConversionError,
    ConversionResult,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MAX_DEPTH,
    Direction,
    Source,
    ValidationResult,
)
from .parser import XMLParser
from .processors import ElementCollapser, MappingExpander
from .io import JSONCodec, SourceReader, XMLWriter
from .error_handler import ErrorHandler
from .profiler import PerformanceProfiler


class XMLJSONConverter(ConverterInterface):
    """
    Converts XML documents to JSON and back.

    XML to JSON keeps the declaration, the doctype, every attribute and the
    text of each element, but collapses same-named siblings (the last one
    wins). JSON to XML rebuilds elements and text; attributes are dropped
    unless ``emit_attributes`` is set.
    """

    def __init__(self, json_indent: Optional[str] = "\t",
                 xml_indent: Optional[str] = None,
                 emit_attributes: bool = False,
                 max_depth: int = DEFAULT_MAX_DEPTH,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 forbid_entities: bool = True,
                 enable_profiling: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the converter.

        Args:
            json_indent: Indentation of JSON output (tab by default)
            xml_indent: Indentation of XML output, None for compact output
            emit_attributes: Write attributes back out when converting to XML
            max_depth: Maximum element nesting depth in either direction
            chunk_size: Bytes read from the input at a time
            forbid_entities: Reject XML documents that declare entities
            enable_profiling: Record performance metrics for each conversion
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.max_depth = max_depth
        self.chunk_size = chunk_size

        self.error_handler = ErrorHandler(max_depth=max_depth, logger=self.logger)
        self.parser = XMLParser(
            max_depth=max_depth,
            chunk_size=chunk_size,
            forbid_entities=forbid_entities,
            logger=self.logger
        )
        self.collapser = ElementCollapser(max_depth=max_depth, logger=self.logger)
        self.expander = MappingExpander(max_depth=max_depth, logger=self.logger)
        self.json_codec = JSONCodec(indent=json_indent, logger=self.logger)
        self.xml_writer = XMLWriter(
            indent=xml_indent,
            emit_attributes=emit_attributes,
            logger=self.logger
        )
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None
        self._last_element_count = 0

    def xml_to_json(self, source: Source) -> str:
        """
        Convert an XML document into its JSON representation.

        Args:
            source: XML as bytes, str or a readable file object

        Returns:
            JSON text, newline terminated

        Raises:
            ConversionError: If the XML is malformed or cannot be encoded
        """
        if isinstance(source, (str, bytes)):
            self._check_input(self.error_handler.validate_input(source, Direction.XML_TO_JSON))

        if self.profiler is None:
            return self._xml_to_json(source)

        with self.profiler.profile_operation("xml_to_json"):
            output = self._xml_to_json(source)
            self.profiler.stop_profiling(
                input_size=self.parser.bytes_read,
                output_size=len(output.encode("utf-8")),
                elements_processed=self.parser.element_count
            )
        return output

    def _xml_to_json(self, source: Source) -> str:
        self.logger.info("Starting XML to JSON conversion")
        folded = self.parser.parse(source)
        self._sample_performance()
        document = self.collapser.process(folded)
        self._sample_performance()
        return self.json_codec.encode(document)

    def json_to_xml(self, source: Source) -> str:
        """
        Convert a JSON representation back into an XML document.

        Args:
            source: JSON as bytes, str or a readable file object

        Returns:
            XML text with surrounding whitespace stripped

        Raises:
            ConversionError: If the JSON is malformed, has the wrong shape,
                or contains names that cannot be written as XML
        """
        reader = SourceReader(source, chunk_size=self.chunk_size, logger=self.logger)
        json_input = reader.read_all()

        if self.profiler is None:
            return self._json_to_xml(json_input)

        with self.profiler.profile_operation("json_to_xml"):
            output = self._json_to_xml(json_input)
            self.profiler.stop_profiling(
                input_size=reader.bytes_read,
                output_size=len(output.encode("utf-8")),
                elements_processed=self._last_element_count
            )
        return output

    def _json_to_xml(self, json_input: bytes) -> str:
        self.logger.info("Starting JSON to XML conversion")
        data = self.json_codec.parse(json_input)
        self._sample_performance()
        self._check_input(self.error_handler.validate_document(data))
        document = self.json_codec.to_document(data)
        roots = self.expander.process(document)
        self._sample_performance()
        self._last_element_count = sum(root.count_elements() for root in roots)
        return self.xml_writer.write(document, roots)

    def _sample_performance(self) -> None:
        if self.profiler is not None:
            self.profiler.sample_performance()

    def convert(self, source: Source, to_json: bool) -> ConversionResult:
        """
        Convert in the requested direction and report the outcome.

        Never raises for conversion failures: on error ``success`` is False,
        ``output`` is empty and ``errors`` holds the cause.

        Args:
            source: Input document
            to_json: True for XML to JSON, False for JSON to XML

        Returns:
            ConversionResult with the output or the errors
        """
        direction = Direction.XML_TO_JSON if to_json else Direction.JSON_TO_XML
        try:
            if to_json:
                output = self.xml_to_json(source)
            else:
                output = self.json_to_xml(source)
        except ConversionError as e:
            response = self.error_handler.handle_conversion_error(e)
            return ConversionResult(
                success=False,
                output="",
                direction=direction,
                errors=[str(e)],
                suggested_action=response.suggested_action
            )

        return ConversionResult(success=True, output=output, direction=direction)

    def _check_input(self, validation: ValidationResult) -> None:
        if validation.is_valid:
            return

        first = validation.errors[0]
        message = "; ".join(error.message for error in validation.errors)
        raise ConversionError(
            f"Invalid input: {message}",
            first.type,
            context={"errors": validation.errors}
        )


def xml_json_convert(source: Source, to_json: bool,
                     converter: Optional[XMLJSONConverter] = None) -> str:
    """
    Convert a document in the given direction.

    Args:
        source: XML or JSON as bytes, str or a readable file object
        to_json: True for XML to JSON, False for JSON to XML
        converter: Optional preconfigured converter

    Returns:
        The converted document

    Raises:
        ConversionError: If the conversion fails; the original error is
            chained as ``__cause__``
    """
    converter = converter or XMLJSONConverter()
    try:
        if to_json:
            return converter.xml_to_json(source)
        return converter.json_to_xml(source)
    except ConversionError as e:
        label = "XML to JSON" if to_json else "JSON to XML"
        raise ConversionError(
            f"{label} conversion error: {e}",
            e.error_type,
            context=e.context
        ) from e
