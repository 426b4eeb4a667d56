"""
Decode command - convert a binary file into binasc text.
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from binasc import Binasc, BinascError, FormatOptions
from binasc.config import DEFAULT_LINE_BYTES, DEFAULT_LINE_LENGTH

console = Console(stderr=True)
app = typer.Typer()


@app.command()
def decode(
    source: Path = typer.Argument(..., help="Binary file to convert"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Text output file (default: stdout)"
    ),
    hex_bytes: bool = typer.Option(True, "--hex/--no-hex", help="Show bytes as hex codes"),
    comments: bool = typer.Option(False, "--comments", "-c", help="Add ASCII/MIDI comments"),
    midi: bool = typer.Option(False, "--midi", "-m", help="Parse input as a MIDI file"),
    line_length: int = typer.Option(
        DEFAULT_LINE_LENGTH, "--line-length", "-l", help="Columns per line in ASCII mode"
    ),
    line_bytes: int = typer.Option(
        DEFAULT_LINE_BYTES, "--line-bytes", "-b", help="Hex bytes per line"
    ),
) -> None:
    """
    Convert a binary file into binasc text.

    Output style, in order of precedence:

    - [cyan]--midi[/cyan]: annotated MIDI file structure
    - [cyan]--comments[/cyan]: hex bytes with ASCII comment lines
    - hex bytes only (default)
    - [cyan]--no-hex[/cyan]: printable ASCII words only

    Examples:

        binasc decode song.mid --midi --comments

        binasc decode data.bin -c -b 16 -o data.txt
    """
    if not source.exists():
        console.print(f"[red]Error: File not found: {source}[/red]")
        raise typer.Exit(1)

    options = FormatOptions()
    options.set_hex_bytes(hex_bytes)
    options.set_comments(comments)
    options.set_midi(midi)
    if options.set_line_length(line_length) != line_length:
        console.print(f"[dim]Line length reset to {options.max_line_length}[/dim]")
    if options.set_line_bytes(line_bytes) != line_bytes:
        console.print(f"[dim]Line bytes reset to {options.max_line_bytes}[/dim]")

    codec = Binasc(options)

    try:
        with open(source, "rb") as binary:
            if output is None:
                codec.read_from_binary(sys.stdout, binary)
            else:
                output.parent.mkdir(parents=True, exist_ok=True)
                with open(output, "w", encoding="latin-1") as text:
                    codec.read_from_binary(text, binary)
    except BinascError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if output is not None:
        console.print(f"[green]Decoded:[/green] {source} -> {output}")


if __name__ == "__main__":
    app()
