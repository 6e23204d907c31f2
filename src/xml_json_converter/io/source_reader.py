"""Input reading for the XML/JSON converter."""

import io
import logging
from typing import Iterator, Optional

from ..types import ConversionError, DEFAULT_CHUNK_SIZE, ErrorType, Source


class SourceReader:
    """
    Reads a conversion source as a sequence of byte chunks.

    Accepts bytes, str, or any object with a ``read`` method. Text is
    encoded as UTF-8, and ``is_text`` records that so the XML tokenizer can
    ignore a conflicting encoding declaration.
    """

    def __init__(self, source: Source, chunk_size: int = DEFAULT_CHUNK_SIZE,
                 logger: Optional[logging.Logger] = None):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.source = source
        self.chunk_size = chunk_size
        self.logger = logger or logging.getLogger(__name__)
        self.bytes_read = 0
        self.is_text = isinstance(source, (str, io.TextIOBase))

    def iter_chunks(self) -> Iterator[bytes]:
        """
        Yield the source as byte chunks.

        Raises:
            ConversionError: If the source type is unsupported or reading fails
        """
        source = self.source

        if isinstance(source, (bytes, bytearray)):
            yield from self._count(bytes(source))
            return

        if isinstance(source, str):
            yield from self._count(source.encode("utf-8"))
            return

        if not hasattr(source, "read"):
            raise ConversionError(
                f"Unsupported source type: {type(source).__name__}",
                ErrorType.INPUT,
            )

        while True:
            try:
                chunk = source.read(self.chunk_size)
            except (OSError, ValueError) as e:
                raise ConversionError(f"Failed to read input: {e}", ErrorType.INPUT) from e

            if not chunk:
                break
            if isinstance(chunk, str):
                self.is_text = True
                chunk = chunk.encode("utf-8")
            self.bytes_read += len(chunk)
            yield chunk

    def read_all(self) -> bytes:
        """Read the whole source into memory."""
        return b"".join(self.iter_chunks())

    def _count(self, data: bytes) -> Iterator[bytes]:
        self.bytes_read = len(data)
        for start in range(0, len(data), self.chunk_size):
            yield data[start:start + self.chunk_size]
