"""
Rich table displays for MIDI file information.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from binasc.formats.midi.models import MidiFile, MidiTrack


console = Console()


def display_midi_info(midi: MidiFile, filepath: str, filesize: int, show_events: bool = False) -> None:
    """Display MIDI header and track summary with Rich formatting."""
    header = midi.header

    if header.is_smpte:
        division = f"SMPTE {header.smpte_frames} fps, {header.subframes} subframes"
    else:
        division = f"{header.ticks_per_quarter} ticks per quarter note"

    status = "[green]Valid[/green]" if not midi.diagnostics else "[yellow]Length errors[/yellow]"

    header_content = f"""[bold]File:[/bold] {filepath}
[bold]Size:[/bold] {filesize} bytes
[bold]Format:[/bold] Type-{header.format_type} ({header.format_name})
[bold]Tracks:[/bold] {header.track_count}
[bold]Division:[/bold] {division}
[bold]Status:[/bold] {status}"""

    if header.extra:
        header_content += f"\n[bold]Unknown Header Bytes:[/bold] {len(header.extra)}"
    if midi.trailing:
        header_content += f"\n[bold]Trailing Bytes:[/bold] {len(midi.trailing)}"

    console.print(
        Panel(
            header_content,
            title="[bold blue]MIDI File Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    track_table = Table(
        title="Tracks", box=box.ROUNDED, show_header=True, header_style="bold magenta"
    )
    track_table.add_column("#", style="dim", width=3)
    track_table.add_column("Declared", justify="right", width=10)
    track_table.add_column("Actual", justify="right", width=10)
    track_table.add_column("Events", justify="right", width=8)
    track_table.add_column("Status", width=14)

    for track in midi.tracks:
        ok = track.length_mismatch is None
        track_table.add_row(
            str(track.index),
            str(track.declared_length),
            str(track.consumed),
            str(len(track.events)),
            "[green]OK[/green]" if ok else "[red]Size error[/red]",
        )

    console.print(track_table)

    if show_events:
        for track in midi.tracks:
            display_track_events(track)


def display_track_events(track: MidiTrack) -> None:
    """Display the events of one track."""
    table = Table(
        title=f"Track {track.index} Events",
        box=box.SIMPLE,
        show_header=True,
        header_style="dim",
    )
    table.add_column("Delta", justify="right", width=8)
    table.add_column("Status", width=7)
    table.add_column("Data", width=40)
    table.add_column("Description", style="cyan")

    for event in track.events:
        status = "[dim]run[/dim]" if event.running_status else f"{event.status:02X}"
        table.add_row(str(event.delta), status, " ".join(event.tokens), event.label)

    console.print(table)
