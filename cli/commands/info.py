"""
Info command - summarise the structure of a MIDI file.
"""

from pathlib import Path

import typer
from rich.console import Console

from binasc import BinascError, MidiReader
from binasc.utils.validation import is_midi_file
from cli.display.tables import display_midi_info

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="MIDI file to analyze"),
    events: bool = typer.Option(False, "--events", "-e", help="List every event"),
) -> None:
    """
    Display MIDI header fields, tracks and length diagnostics.

    Examples:

        binasc info song.mid

        binasc info song.mid --events
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    if not is_midi_file(data):
        console.print(f"[red]Error: Not a MIDI file: {file}[/red]")
        raise typer.Exit(1)

    try:
        midi = MidiReader().parse_bytes(data)
    except BinascError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    display_midi_info(midi, str(file), len(data), show_events=events)


if __name__ == "__main__":
    app()
