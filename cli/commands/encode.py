"""
Encode command - convert binasc text into a binary file.
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from binasc import Binasc, BinascError

console = Console(stderr=True)
app = typer.Typer()


@app.command()
def encode(
    source: Path = typer.Argument(..., help="Text file in binasc notation"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Binary output file (default: stdout)"
    ),
) -> None:
    """
    Convert binasc text into the bytes it describes.

    Examples:

        binasc encode song.txt -o song.mid

        binasc encode bytes.txt > bytes.bin
    """
    if not source.exists():
        console.print(f"[red]Error: File not found: {source}[/red]")
        raise typer.Exit(1)

    codec = Binasc()

    try:
        # latin-1 maps every character of the text to exactly one byte
        with open(source, "r", encoding="latin-1") as text:
            if output is None:
                written = codec.write_to_binary(sys.stdout.buffer, text)
                sys.stdout.buffer.flush()
            else:
                output.parent.mkdir(parents=True, exist_ok=True)
                with open(output, "wb") as binary:
                    written = codec.write_to_binary(binary, text)
    except BinascError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if output is not None:
        console.print(f"[green]Encoded:[/green] {source} -> {output}")
        console.print(f"[dim]Output size: {written} bytes[/dim]")


if __name__ == "__main__":
    app()
