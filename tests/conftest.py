"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_xml():
    """Document with prolog, attributes, text and an empty element."""
    return ('<?xml version="1.0" encoding="UTF-8"?>'
            '<!DOCTYPE root SYSTEM "example.dtd">'
            '<root><element attribute="value">Text Content</element><emptyElement/></root>')


@pytest.fixture
def sample_json():
    """JSON form of ``sample_xml``."""
    return (
        '{\n'
        '\t"xml_declaration": "<?xml version=\\"1.0\\" encoding=\\"UTF-8\\"?>",\n'
        '\t"xml_document_type_definition": "<!DOCTYPE root SYSTEM \\"example.dtd\\">",\n'
        '\t"xml_data": {\n'
        '\t\t"root": {\n'
        '\t\t\t"element": {\n'
        '\t\t\t\t"attribute": "value",\n'
        '\t\t\t\t"#text": "Text Content"\n'
        '\t\t\t},\n'
        '\t\t\t"emptyElement": {}\n'
        '\t\t}\n'
        '\t}\n'
        '}\n'
    )


@pytest.fixture
def catalog_xml():
    """Attribute-free document with unique child names at every level."""
    return ('<?xml version="1.0" encoding="UTF-8"?>\n'
            '<!DOCTYPE catalog SYSTEM "catalog.dtd">\n'
            '<catalog>\n'
            '  <title>Spring Catalog</title>\n'
            '  <book>\n'
            '    <name>Dune</name>\n'
            '    <author>Frank Herbert</author>\n'
            '    <price>9.99</price>\n'
            '  </book>\n'
            '  <notes/>\n'
            '</catalog>\n')
