"""Tests for validation utilities."""

import json
import pytest
from xml_json_converter.utils.validation import ValidationUtils
from xml_json_converter.types import ErrorType


class TestValidationUtils:
    """Tests for ValidationUtils class."""

    def test_validate_json_string_valid(self, sample_json):
        """Test validation of a converter JSON document."""
        result = ValidationUtils.validate_json_string(sample_json)

        assert result.is_valid
        assert len(result.errors) == 0
        assert result.warnings == []

    def test_validate_json_string_bytes(self):
        result = ValidationUtils.validate_json_string(b'{"xml_data": {"root": {}}}')

        assert result.is_valid

    def test_validate_json_string_empty(self):
        """Test validation of empty JSON string."""
        result = ValidationUtils.validate_json_string("   ")

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.INPUT
        assert "empty" in result.errors[0].message

    def test_validate_json_string_invalid_syntax(self):
        """Test validation of JSON with syntax errors."""
        result = ValidationUtils.validate_json_string('{"xml_data": {"root": }}')

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.DECODE
        assert "Invalid JSON syntax" in result.errors[0].message
        assert result.errors[0].location == "line 1, column 23"

    def test_validate_json_string_non_object_root(self):
        result = ValidationUtils.validate_json_string("[]")

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.DECODE
        assert result.errors[0].location == "root"

    def test_validate_json_string_wrong_prolog_types(self):
        result = ValidationUtils.validate_json_string(
            '{"xml_declaration": 1, "xml_document_type_definition": [], "xml_data": {}}'
        )

        assert not result.is_valid
        assert [error.location for error in result.errors] == [
            "xml_declaration", "xml_document_type_definition"
        ]
        assert all(error.type == ErrorType.DECODE for error in result.errors)

    def test_validate_json_string_data_not_object(self):
        result = ValidationUtils.validate_json_string('{"xml_data": "text"}')

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.DECODE
        assert result.errors[0].location == "xml_data"

    def test_validate_json_string_top_level_shape(self):
        result = ValidationUtils.validate_json_string('{"xml_data": {"root": "text"}}')

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.SHAPE
        assert result.errors[0].location == "xml_data.root"

    def test_validate_json_string_missing_data_warns(self):
        result = ValidationUtils.validate_json_string('{"xml_declaration": ""}')

        assert result.is_valid
        assert any("xml_data is missing" in warning for warning in result.warnings)

    def test_validate_json_string_multiple_roots_warns(self):
        result = ValidationUtils.validate_json_string('{"xml_data": {"a": {}, "b": {}}}')

        assert result.is_valid
        assert any("2 top-level elements" in warning for warning in result.warnings)

    def test_validate_json_string_depth(self):
        nested = {}
        current = nested
        for _ in range(5):
            current["child"] = {}
            current = current["child"]
        json_string = json.dumps({"xml_data": {"root": nested}})

        assert ValidationUtils.validate_json_string(json_string, max_depth=6).is_valid

        result = ValidationUtils.validate_json_string(json_string, max_depth=5)
        assert not result.is_valid
        assert result.errors[0].type == ErrorType.DEPTH
        assert "Nesting depth 6 exceeds maximum of 5" in result.errors[0].message

    def test_calculate_max_depth(self):
        assert ValidationUtils._calculate_max_depth({}) == 0
        assert ValidationUtils._calculate_max_depth({"root": {}}) == 1
        assert ValidationUtils._calculate_max_depth({"root": {"a": {"b": {}}, "c": "x"}}) == 3

    def test_validate_xml_input_valid(self, sample_xml):
        result = ValidationUtils.validate_xml_input(sample_xml)

        assert result.is_valid

    def test_validate_xml_input_leading_whitespace_and_bom(self):
        assert ValidationUtils.validate_xml_input("\ufeff  \n<root/>").is_valid
        assert ValidationUtils.validate_xml_input(b"\xef\xbb\xbf<root/>").is_valid
        assert ValidationUtils.validate_xml_input("<root/>".encode("utf-16")).is_valid

    def test_validate_xml_input_empty(self):
        result = ValidationUtils.validate_xml_input(b"  \n")

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.INPUT

    def test_validate_xml_input_not_markup(self):
        result = ValidationUtils.validate_xml_input('{"xml_data": {}}')

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.TOKENIZATION
        assert result.errors[0].message == "XML input must start with markup"

    @pytest.mark.parametrize("name", ["root", "_private", "ns:tag", "a.b-c_d", "café", "x1"])
    def test_validate_xml_name_valid(self, name):
        ValidationUtils.validate_xml_name(name)

    def test_validate_xml_name_invalid(self):
        with pytest.raises(ValueError, match="element name cannot be empty"):
            ValidationUtils.validate_xml_name("")

        with pytest.raises(ValueError, match="whitespace not allowed"):
            ValidationUtils.validate_xml_name("two words")

        with pytest.raises(ValueError, match="Invalid attribute name"):
            ValidationUtils.validate_xml_name("1abc", "attribute")

        with pytest.raises(ValueError, match="must be a string"):
            ValidationUtils.validate_xml_name(None)

    def test_validate_document_decoded_value(self):
        assert ValidationUtils.validate_document({"xml_data": {"root": {"#text": "x"}}}).is_valid

        result = ValidationUtils.validate_document({"xml_data": {"root": ["x"]}})
        assert not result.is_valid
        assert result.errors[0].type == ErrorType.SHAPE

    def test_validate_document_non_object(self):
        result = ValidationUtils.validate_document("text")

        assert not result.is_valid
        assert result.errors[0].location == "root"
