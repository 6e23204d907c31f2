"""Command-line interface for the XML/JSON converter."""

import logging
import sys
import click
from typing import Optional
from . import __version__
from .converter import XMLJSONConverter
from .io import FileWriter
from .types import ConversionError, ConversionResult


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _emit(result: ConversionResult, output: Optional[str], verbose: bool) -> None:
    """Write a conversion result to a file or stdout, or report the failure."""
    if not result.success:
        click.echo("❌ Conversion failed:", err=True)
        for error in result.errors or []:
            click.echo(f"   • {error}", err=True)
        if result.suggested_action:
            click.echo(f"   → {result.suggested_action}", err=True)
        sys.exit(1)

    if output:
        try:
            file_info = FileWriter().write_output(result.output, output)
        except ConversionError as e:
            click.echo(f"❌ Error: {e}", err=True)
            sys.exit(1)
        if verbose:
            click.echo(f"✅ Wrote {file_info['size']} bytes to {file_info['path']}", err=True)
    else:
        click.echo(result.output, nl=not result.output.endswith("\n"))


def _report_profile(converter: XMLJSONConverter) -> None:
    if converter.profiler is not None:
        click.echo(converter.profiler.export_metrics("summary"), err=True)


@click.group()
@click.version_option(version=__version__)
def main():
    """XML/JSON Converter - Convert XML documents to JSON and back."""
    pass


@main.command()
@click.argument('input_file', type=click.File('rb'), default='-')
@click.option('--output', '-o', help='Output JSON file path (default: stdout)')
@click.option('--compact', is_flag=True, help='Write JSON on a single line')
@click.option('--allow-entities', is_flag=True, help='Accept documents that declare entities')
@click.option('--profile', is_flag=True, help='Report conversion performance on stderr')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def xml2json(input_file, output: Optional[str], compact: bool, allow_entities: bool,
             profile: bool, verbose: bool):
    """Convert an XML document to JSON."""
    _configure_logging(verbose)
    converter = XMLJSONConverter(
        json_indent=None if compact else "\t",
        forbid_entities=not allow_entities,
        enable_profiling=profile
    )
    result = converter.convert(input_file, to_json=True)
    _report_profile(converter)
    _emit(result, output, verbose)


@main.command()
@click.argument('input_file', type=click.File('rb'), default='-')
@click.option('--output', '-o', help='Output XML file path (default: stdout)')
@click.option('--indent/--no-indent', default=False, help='Indent nested elements with tabs')
@click.option('--emit-attributes', is_flag=True, help='Write string entries back as XML attributes')
@click.option('--profile', is_flag=True, help='Report conversion performance on stderr')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def json2xml(input_file, output: Optional[str], indent: bool, emit_attributes: bool,
             profile: bool, verbose: bool):
    """Convert a JSON document produced by xml2json back to XML."""
    _configure_logging(verbose)
    converter = XMLJSONConverter(
        xml_indent="\t" if indent else None,
        emit_attributes=emit_attributes,
        enable_profiling=profile
    )
    result = converter.convert(input_file, to_json=False)
    _report_profile(converter)
    _emit(result, output, verbose)


@main.command()
@click.argument('input_file', type=click.File('rb'), default='-')
@click.option('--to', 'target', type=click.Choice(['json', 'xml']), required=True,
              help='Output format')
@click.option('--output', '-o', help='Output file path (default: stdout)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def convert(input_file, target: str, output: Optional[str], verbose: bool):
    """Convert INPUT_FILE to the format given by --to."""
    _configure_logging(verbose)
    result = XMLJSONConverter().convert(input_file, to_json=target == 'json')
    _emit(result, output, verbose)


if __name__ == '__main__':
    main()
