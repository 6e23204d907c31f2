"""Streaming XML parser that folds tokenizer events into an element tree."""

import logging
from typing import Dict, List, Optional
from xml.parsers import expat

from .io.source_reader import SourceReader
from .models import FoldedDocument, TextLeaf, XMLElement
from .types import (
    ConversionError,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MAX_DEPTH,
    ErrorType,
    Source,
)

DOCTYPE_OPEN = b"<!DOCTYPE"
DECLARATION_OPEN = b"<?xml"
DECLARATION_CLOSE = b"?>"
UTF8_BOM = b"\xef\xbb\xbf"


def local_name(name: str) -> str:
    """Strip the namespace prefix from a tag or attribute name."""
    return name.rsplit(":", 1)[-1]


def format_declaration(version: Optional[str], encoding: Optional[str], standalone: int) -> str:
    """Render an XML declaration from the parts expat reports."""
    parts = []
    if version is not None:
        parts.append(f'version="{version}"')
    if encoding is not None:
        parts.append(f'encoding="{encoding}"')
    if standalone != -1:
        parts.append(f'standalone="{"yes" if standalone else "no"}"')
    return f"<?xml {' '.join(parts)}?>"


def format_doctype(name: str, system_id: Optional[str], public_id: Optional[str]) -> str:
    """Render a doctype without its internal subset."""
    if public_id:
        return f'<!DOCTYPE {name} PUBLIC "{public_id}" "{system_id or ""}">'
    if system_id:
        return f'<!DOCTYPE {name} SYSTEM "{system_id}">'
    return f"<!DOCTYPE {name}>"


class _FoldingHandler:
    """
    Receives expat callbacks for a single parse and builds the element tree.

    The first processing instruction becomes the declaration and the first
    doctype is kept verbatim; later ones are ignored. Consecutive character
    data between two markup events forms one text run.
    """

    def __init__(self, parser, max_depth: int, forbid_entities: bool,
                 logger: logging.Logger):
        self.parser = parser
        self.max_depth = max_depth
        self.forbid_entities = forbid_entities
        self.logger = logger

        self.declaration: Optional[str] = None
        self.doctype: Optional[str] = None
        self.root: Optional[XMLElement] = None
        self.stack: List[XMLElement] = []
        self.text_parts: List[str] = []
        self.element_count = 0

        # Raw bytes seen before the root element, used to slice the prolog.
        self.prolog = bytearray()
        self.retain_prolog = True
        self.encoding: Optional[str] = None
        self._doctype_start: Optional[int] = None
        self._doctype_parts = None

    def install(self) -> None:
        parser = self.parser
        parser.ordered_attributes = True
        parser.specified_attributes = True
        parser.buffer_text = True
        parser.XmlDeclHandler = self.xml_declaration
        parser.ProcessingInstructionHandler = self.processing_instruction
        parser.StartDoctypeDeclHandler = self.start_doctype
        parser.EndDoctypeDeclHandler = self.end_doctype
        parser.StartElementHandler = self.start_element
        parser.EndElementHandler = self.end_element
        parser.CharacterDataHandler = self.characters
        parser.CommentHandler = self.comment
        parser.StartCdataSectionHandler = self.cdata_boundary
        parser.EndCdataSectionHandler = self.cdata_boundary
        parser.SkippedEntityHandler = self.skipped_entity
        if self.forbid_entities:
            parser.EntityDeclHandler = self.forbid_entity

    # Prolog

    def xml_declaration(self, version, encoding, standalone):
        if encoding and self.encoding is None:
            self.encoding = encoding
        if self.declaration is None:
            self.declaration = (self._slice_declaration()
                                or format_declaration(version, encoding, standalone))
            self.logger.debug(f"Captured declaration: {self.declaration}")

    def _slice_declaration(self) -> Optional[str]:
        """Cut the declaration out of the raw prolog exactly as written."""
        start = len(UTF8_BOM) if self.prolog.startswith(UTF8_BOM) else 0
        if not self.prolog.startswith(DECLARATION_OPEN, start):
            return None
        end = self.prolog.find(DECLARATION_CLOSE, start)
        if end < 0:
            return None
        raw = bytes(self.prolog[start:end + len(DECLARATION_CLOSE)])
        try:
            return raw.decode("ascii")
        except UnicodeDecodeError:
            return None

    def processing_instruction(self, target, data):
        self._flush_text()
        if self.declaration is None:
            self.declaration = f"<?{target} {data}?>"
            self.logger.debug(f"Captured declaration from processing instruction: {self.declaration}")

    def start_doctype(self, name, system_id, public_id, has_internal_subset):
        if self.doctype is not None:
            return
        self._doctype_parts = (name, system_id, public_id)
        index = self.parser.CurrentByteIndex
        if index >= 0:
            start = self.prolog.rfind(DOCTYPE_OPEN, 0, index + len(DOCTYPE_OPEN))
            self._doctype_start = start if start >= 0 else None

    def end_doctype(self):
        if self.doctype is not None or self._doctype_parts is None:
            return
        self.doctype = self._slice_doctype() or format_doctype(*self._doctype_parts)
        self._doctype_start = None
        self._doctype_parts = None
        self.logger.debug(f"Captured doctype: {self.doctype}")

    def _slice_doctype(self) -> Optional[str]:
        """Cut the doctype out of the raw prolog, internal subset included."""
        index = self.parser.CurrentByteIndex
        if self._doctype_start is None or index < 0:
            return None

        encoding = self.encoding or "utf-8"
        try:
            if ">".encode(encoding) != b">":
                return None
        except LookupError:
            return None

        end = self.prolog.find(b">", index)
        if end < 0:
            return None
        raw = bytes(self.prolog[self._doctype_start:end + 1])
        return raw.decode(encoding, errors="replace")

    def forbid_entity(self, *_args, **_kwargs):
        raise ConversionError("Entity declarations are not allowed", ErrorType.TOKENIZATION)

    def skipped_entity(self, name, is_parameter_entity):
        # Parameter entities only appear inside the DTD, which is kept as text.
        if is_parameter_entity:
            return
        raise ConversionError(
            f"Undefined entity '&{name};'",
            ErrorType.TOKENIZATION,
            context={"line": self.parser.CurrentLineNumber,
                     "column": self.parser.CurrentColumnNumber},
        )

    # Document body

    def start_element(self, name, attrs):
        self._flush_text()
        if len(self.stack) >= self.max_depth:
            raise ConversionError(
                f"Element nesting exceeds maximum depth of {self.max_depth}",
                ErrorType.DEPTH,
                context={"element": name, "line": self.parser.CurrentLineNumber},
            )

        attributes: Dict[str, str] = {}
        for key, value in zip(attrs[0::2], attrs[1::2]):
            attributes[local_name(key)] = value

        element = XMLElement(name=local_name(name), attributes=attributes)
        if self.stack:
            self.stack[-1].append(element)
        elif self.root is None:
            self.root = element
        self.stack.append(element)
        self.element_count += 1
        self.retain_prolog = False

    def end_element(self, name):
        self._flush_text()
        if self.stack:
            self.stack.pop()

    def characters(self, data):
        self.text_parts.append(data)

    def comment(self, data):
        self._flush_text()

    def cdata_boundary(self):
        self._flush_text()

    def _flush_text(self) -> None:
        if not self.text_parts:
            return
        run = "".join(self.text_parts).strip()
        self.text_parts = []
        if run and self.stack:
            self.stack[-1].append(TextLeaf(run))


class XMLParser:
    """
    XML parser that folds a byte stream into a ``FoldedDocument``.

    The input is fed to expat in chunks, so documents are tokenized as they
    are read. Every element keeps all of its siblings and text runs; the
    lossy collapse into a mapping happens later in ``ElementCollapser``.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 forbid_entities: bool = True,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the XML parser.

        Args:
            max_depth: Maximum element nesting depth accepted
            chunk_size: Number of bytes fed to the tokenizer at a time
            forbid_entities: Reject documents that declare entities
            logger: Optional logger instance
        """
        if max_depth <= 0:
            raise ValueError("max_depth must be positive")
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        self.max_depth = max_depth
        self.chunk_size = chunk_size
        self.forbid_entities = forbid_entities
        self.logger = logger or logging.getLogger(__name__)
        self.bytes_read = 0
        self.element_count = 0

    def parse(self, source: Source) -> FoldedDocument:
        """
        Parse an XML document.

        Args:
            source: XML as bytes, str or a readable file object

        Returns:
            FoldedDocument with the prolog and the ordered element tree

        Raises:
            ConversionError: If the input cannot be read or is not well-formed
        """
        reader = SourceReader(source, chunk_size=self.chunk_size, logger=self.logger)
        chunks = reader.iter_chunks()
        first_chunk = next(chunks, b"")

        # Text input has already been encoded to UTF-8 by the reader.
        parser = expat.ParserCreate("utf-8" if reader.is_text else None)
        handler = _FoldingHandler(parser, self.max_depth, self.forbid_entities, self.logger)
        if reader.is_text:
            handler.encoding = "utf-8"
        handler.install()

        try:
            self._feed(parser, handler, first_chunk)
            for chunk in chunks:
                self._feed(parser, handler, chunk)
            parser.Parse(b"", True)
        except expat.ExpatError as e:
            raise ConversionError(
                f"XML parsing failed: {e}",
                ErrorType.TOKENIZATION,
                context={"line": e.lineno, "column": e.offset},
            ) from e
        finally:
            self.bytes_read = reader.bytes_read

        if handler.root is None:
            raise ConversionError("XML document has no root element", ErrorType.TOKENIZATION)

        self.element_count = handler.element_count
        self.logger.info(f"Parsed XML with {handler.element_count} elements "
                         f"from {reader.bytes_read} bytes")

        return FoldedDocument(
            declaration=handler.declaration or "",
            doctype=handler.doctype or "",
            root=handler.root,
        )

    def _feed(self, parser, handler: _FoldingHandler, chunk: bytes) -> None:
        if not chunk:
            return
        if handler.retain_prolog:
            handler.prolog.extend(chunk)
        parser.Parse(chunk, False)
        if not handler.retain_prolog and handler.prolog:
            handler.prolog = bytearray()
