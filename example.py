#!/usr/bin/env python3
"""
Example usage of the XML/JSON Converter.

This script converts a small XML catalog to JSON, converts it back, and
shows what the JSON form keeps and what it drops.
"""

import json
import tempfile
from pathlib import Path
from xml_json_converter import XMLJSONConverter
from xml_json_converter.io import FileWriter


SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE catalog SYSTEM "catalog.dtd">
<catalog region="eu">
    <title>Spring Catalog</title>
    <book id="b1">
        <name>Dune</name>
        <author>Frank Herbert</author>
        <price currency="EUR">9.99</price>
    </book>
    <book id="b2">
        <name>Hyperion</name>
        <author>Dan Simmons</author>
    </book>
    <notes/>
</catalog>
"""


def main():
    """Main example function."""
    print("XML/JSON Converter Example")
    print("=" * 50)
    print(f"Original XML size: {len(SAMPLE_XML)} characters\n")

    converter = XMLJSONConverter(xml_indent="\t")

    result = converter.convert(SAMPLE_XML, to_json=True)
    if not result.success:
        print("❌ Failed to convert XML")
        for error in result.errors or []:
            print(f"   Error: {error}")
        return

    print("✅ XML to JSON:")
    print(result.output)

    # Both <book> elements share one key, so only the last survives.
    data = json.loads(result.output)["xml_data"]
    print(f"Books kept after collapsing siblings: {data['catalog']['book']['name']['#text']}\n")

    back = converter.convert(result.output, to_json=False)
    print("✅ JSON back to XML (attributes dropped):")
    print(back.output)
    print()

    with_attributes = XMLJSONConverter(xml_indent="\t", emit_attributes=True)
    print("✅ JSON back to XML (attributes kept):")
    print(with_attributes.json_to_xml(result.output))
    print()

    with tempfile.TemporaryDirectory() as temp_dir:
        file_info = FileWriter().write_output(result.output, Path(temp_dir) / "catalog.json")
        print(f"Wrote {file_info['filename']} ({file_info['size']} bytes)")

    broken = converter.convert("<catalog><book></catalog>", to_json=True)
    print(f"\nMalformed input: success={broken.success}")
    for error in broken.errors or []:
        print(f"   Error: {error}")
    print(f"   Suggested action: {broken.suggested_action}")


if __name__ == "__main__":
    main()
