"""Input and output for the XML/JSON converter."""

from .source_reader import SourceReader
from .json_codec import JSONCodec
from .xml_writer import XMLWriter
from .file_writer import FileWriter

__all__ = ["SourceReader", "JSONCodec", "XMLWriter", "FileWriter"]
