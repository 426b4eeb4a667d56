"""
Binasc - convert between binary files and readable ASCII byte codes.

A CLI for writing binary data from text and for dumping binary and MIDI
files as annotated text.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from binasc import __version__
from cli.commands.encode import encode
from cli.commands.decode import decode
from cli.commands.info import info

console = Console()

# Main app
app = typer.Typer(
    name="binasc",
    help="Convert between binary files and ASCII byte codes.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="encode")(encode)
app.command(name="decode")(decode)
app.command(name="info")(info)


def setup_logging(verbose: bool = False) -> None:
    """Send library log records to stderr through Rich."""
    logger = logging.getLogger("binasc")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]binasc[/bold] version {__version__}")
    console.print("[dim]Binary <-> ASCII converter with MIDI file parsing[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    Binasc - convert between binary files and ASCII byte codes.

    [bold]Quick Start:[/bold]

        binasc decode file.bin              # Hex dump
        binasc decode file.bin --comments   # Hex dump with ASCII comments
        binasc decode song.mid -m -c        # Annotated MIDI structure
        binasc encode song.txt -o song.mid  # Text back to binary
        binasc info song.mid                # MIDI file summary

    [bold]Text Notation:[/bold]

        7f              hex byte
        0101,1100       binary byte (high nibble, low nibble)
        2'1000  4u'-1   decimal with byte count and endianness
        '3.14   8'2.5   4- or 8-byte float
        "MThd"  +a      string, single character
        v200 t120 p0.5  MIDI VLV, tempo, pitch bend
        ; comment

    Use --help with any command for more details.
    """
    setup_logging(verbose)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
