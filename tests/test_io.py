"""Tests for input reading and file output."""

import io
import pytest
from xml_json_converter.io import FileWriter, SourceReader
from xml_json_converter.types import ConversionError, ErrorType


class _BrokenStream:
    def read(self, size=-1):
        raise OSError("device not ready")


class TestSourceReader:
    """Tests for SourceReader class."""

    def test_bytes_are_chunked(self):
        reader = SourceReader(b"abcdefg", chunk_size=3)

        assert list(reader.iter_chunks()) == [b"abc", b"def", b"g"]
        assert reader.bytes_read == 7
        assert reader.is_text is False

    def test_text_is_encoded(self):
        reader = SourceReader("café")

        assert reader.read_all() == "café".encode("utf-8")
        assert reader.is_text is True
        assert reader.bytes_read == 5

    def test_binary_stream(self):
        reader = SourceReader(io.BytesIO(b"<root/>"), chunk_size=2)

        assert reader.read_all() == b"<root/>"
        assert reader.bytes_read == 7
        assert reader.is_text is False

    def test_text_stream(self):
        reader = SourceReader(io.StringIO("<root/>"))

        assert reader.read_all() == b"<root/>"
        assert reader.is_text is True

    def test_empty_source(self):
        assert SourceReader(b"").read_all() == b""

    def test_unsupported_source(self):
        with pytest.raises(ConversionError) as exc_info:
            SourceReader(42).read_all()

        assert exc_info.value.error_type == ErrorType.INPUT
        assert "Unsupported source type: int" in str(exc_info.value)

    def test_read_failure(self):
        with pytest.raises(ConversionError) as exc_info:
            SourceReader(_BrokenStream()).read_all()

        assert exc_info.value.error_type == ErrorType.INPUT
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_closed_stream(self):
        stream = io.BytesIO(b"data")
        stream.close()

        with pytest.raises(ConversionError, match="Failed to read input"):
            SourceReader(stream).read_all()

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError, match="chunk_size must be positive"):
            SourceReader(b"", chunk_size=0)


class TestFileWriter:
    """Tests for FileWriter class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.writer = FileWriter()

    def test_write_output(self, temp_dir):
        target = temp_dir / "out.json"

        info = self.writer.write_output("{}\n", target)

        assert target.read_text(encoding="utf-8") == "{}\n"
        assert info["filename"] == "out.json"
        assert info["size"] == 3
        assert info["path"] == str(target.absolute())

    def test_write_creates_directories(self, temp_dir):
        target = temp_dir / "nested" / "dir" / "out.xml"

        self.writer.write_output("<root></root>", str(target))

        assert target.exists()

    def test_write_replaces_existing_file(self, temp_dir):
        target = temp_dir / "out.xml"
        target.write_text("old content that is longer", encoding="utf-8")

        self.writer.write_output("new", target)

        assert target.read_text(encoding="utf-8") == "new"
        assert not (temp_dir / ".out.xml.tmp").exists()

    def test_write_utf8(self, temp_dir):
        target = temp_dir / "out.xml"

        info = self.writer.write_output("<r>café</r>", target)

        assert target.read_bytes() == "<r>café</r>".encode("utf-8")
        assert info["size"] == 12

    def test_write_into_directory_path_fails(self, temp_dir):
        with pytest.raises(ConversionError) as exc_info:
            self.writer.write_output("x", temp_dir)

        assert exc_info.value.error_type == ErrorType.ENCODE
