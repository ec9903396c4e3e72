"""CLI entry point for unitfile.

Invoked as::

    unitfile [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m unitfile.cli.main

Commands
--------
check       Parse a unit file and report what was found
fmt         Re-serialize a unit file (verbatim, or grouped by section)
parse       Dump the parsed records to JSON or YAML
version     Show version information
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from unitfile.parser.parser import ParseResult

console = Console()
err_console = Console(stderr=True)


def _printable(text: str) -> str:
    """Replace undecodable input bytes so that rich can write ``text``."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _read_source(path: str) -> bytes:
    """Read a unit file as bytes, exiting on error."""
    try:
        return Path(path).read_bytes()
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {escape(path)}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {escape(path)}: {escape(str(exc))}")
        sys.exit(1)


def _parse_or_exit(source: bytes, path: str) -> "ParseResult":
    """Parse unit-file bytes, printing the error and exiting on failure."""
    from unitfile.errors import ParseError
    from unitfile.parser import parse

    try:
        return parse(source)
    except ParseError as exc:
        err_console.print(f"[red]Parse error[/red] in {escape(path)}:")
        err_console.print(f"  {escape(_printable(str(exc.cause)))}")
        err_console.print(
            f"  [dim]{len(exc.sections)} section(s), {len(exc.options)} option(s) "
            "parsed before the error[/dim]"
        )
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="unitfile")
def cli() -> None:
    """Round-trip parser and serializer for systemd unit files."""


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from unitfile import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]unitfile[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("file", type=click.Path(exists=False))
def check_command(file: str) -> None:
    """Parse a unit file and summarise its sections.

    FILE is the path to the unit file to check.
    """
    source = _read_source(file)
    result = _parse_or_exit(source, file)

    if not result.sections:
        console.print(f"[green]OK[/green] no sections in {escape(file)}")
        sys.exit(0)

    table = Table(title=f"Sections: {escape(file)}", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Section", style="bold")
    table.add_column("Entries", justify="right")

    for index, block in enumerate(result.sections, start=1):
        table.add_row(str(index), escape(_printable(block.section)), str(len(block.entries)))

    console.print(table)
    console.print(
        f"\n[green]OK[/green] {len(result.sections)} section(s), "
        f"{len(result.options)} option(s) in {escape(file)}"
    )


# ---------------------------------------------------------------------------
# fmt command
# ---------------------------------------------------------------------------


@cli.command(name="fmt")
@click.argument("file", type=click.Path(exists=False))
@click.option("--group", is_flag=True, default=False, help="Merge repeated sections into one block")
@click.option("--check", is_flag=True, default=False, help="Check if file is already formatted")
@click.option("--in-place", is_flag=True, default=False, help="Rewrite the file in place")
def fmt_command(file: str, group: bool, check: bool, in_place: bool) -> None:
    """Re-serialize a unit file.

    FILE is the path to the unit file to format.

    Comments are dropped and continued values are kept as parsed.
    Without --check or --in-place, prints the formatted output to stdout.
    """
    from unitfile.serializer import UnitSerializer

    source = _read_source(file)
    result = _parse_or_exit(source, file)

    serializer = UnitSerializer()
    if group:
        stream = serializer.serialize_options(result.options)
    else:
        stream = serializer.serialize_sections(result.sections)
    formatted = stream.read()

    if check:
        if formatted == source:
            console.print(f"[green]OK[/green] already formatted: {escape(file)}")
            sys.exit(0)
        else:
            console.print(f"[yellow]NEEDS FORMATTING[/yellow] {escape(file)}")
            sys.exit(1)
    elif in_place:
        Path(file).write_bytes(formatted)
        console.print(f"[green]Formatted[/green] {escape(file)}")
    else:
        syntax = Syntax(formatted.decode("utf-8", "replace"), "ini", line_numbers=True)
        console.print(syntax)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Dump format",
)
@click.option(
    "--sections/--options",
    "as_sections",
    default=True,
    help="Dump section blocks (default) or flat options",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def parse_command(file: str, output_format: str, as_sections: bool, output: str | None) -> None:
    """Parse a unit file and dump the records.

    FILE is the path to the unit file to parse.
    """
    from unitfile.ast import AstSerializer

    source = _read_source(file)
    result = _parse_or_exit(source, file)
    records = result.sections if as_sections else result.options

    serializer = AstSerializer()

    if output_format == "json":
        text = serializer.to_json(records, indent=2)
        lang = "json"
    else:
        text = serializer.to_yaml(records)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8", errors="surrogateescape")
        console.print(f"[green]Records written to[/green] {escape(output)}")
    else:
        syntax = Syntax(_printable(text), lang, line_numbers=True)
        console.print(syntax)


if __name__ == "__main__":
    cli()
