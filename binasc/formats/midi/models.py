"""
Records produced by the MIDI structural parser.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from binasc.utils.vlv import format_vlv

FORMAT_NAMES = {
    0: "single track",
    1: "multitrack",
    2: "multisegment",
}

META_END_OF_TRACK = 0x2F

# Tempo meta-events store microseconds per quarter note
MICROSECONDS_PER_MINUTE = 60_000_000.0


@dataclass
class MidiHeader:
    """
    Contents of the MThd chunk.

    Attributes:
        length: Declared chunk length (normally 6)
        format_type: 0, 1 or 2
        track_count: Number of MTrk chunks that follow
        division: Raw 16-bit division field
        extra: Header bytes beyond the standard 6, passed through as-is
    """

    length: int
    format_type: int
    track_count: int
    division: int
    extra: bytes = b""

    @property
    def format_name(self) -> str:
        return FORMAT_NAMES.get(self.format_type, "unknown")

    @property
    def is_smpte(self) -> bool:
        return bool(self.division & 0x8000)

    @property
    def ticks_per_quarter(self) -> Optional[int]:
        return None if self.is_smpte else self.division

    @property
    def smpte_frames(self) -> Optional[int]:
        """Negative SMPTE frame rate stored in the high division byte."""
        if not self.is_smpte:
            return None
        return -(256 - (self.division >> 8))

    @property
    def subframes(self) -> Optional[int]:
        return (self.division & 0xFF) if self.is_smpte else None


@dataclass
class MidiEvent:
    """
    One decoded track event.

    Attributes:
        delta: Delta time in ticks
        status: Effective status byte
        running_status: True when the status byte was omitted in the file
        tokens: Payload in the text notation (after the status byte)
        label: Short description, e.g. "note-on C4"
        size: Number of bytes the event occupied
        meta_type: Meta-event type for status 0xFF
        delta_bytes: Delta time as stored in the file
    """

    delta: int
    status: int
    running_status: bool
    tokens: List[str]
    label: str
    size: int
    meta_type: Optional[int] = None
    delta_bytes: bytes = b""

    @property
    def is_end_of_track(self) -> bool:
        return self.status == 0xFF and self.meta_type == META_END_OF_TRACK

    def to_line(self, show_comments: bool = False) -> str:
        """Render the event as one line of the text notation."""
        head = "  " if self.running_status else f"{self.status:02x}"
        if self.delta_bytes:
            delta = " ".join(format_vlv(self.delta, self.delta_bytes))
        else:
            delta = f"v{self.delta}"
        line = f"{delta}\t" + " ".join([head] + self.tokens)
        if show_comments:
            line += f"\t; {self.label}"
        return line


@dataclass
class TrackLengthMismatch:
    """Bytes consumed by a track's events differ from its declared length."""

    track_index: int
    declared: int
    actual: int

    @property
    def annotation(self) -> str:
        return f"; TRACK SIZE ERROR, ACTUAL SIZE: {self.actual}"


@dataclass
class MidiTrack:
    """An MTrk chunk and its events."""

    index: int
    declared_length: int
    events: List[MidiEvent] = field(default_factory=list)
    consumed: int = 0

    @property
    def length_mismatch(self) -> Optional[TrackLengthMismatch]:
        if self.consumed == self.declared_length:
            return None
        return TrackLengthMismatch(self.index, self.declared_length, self.consumed)


@dataclass
class MidiFile:
    """Everything the structural parser read from a MIDI file."""

    header: MidiHeader
    tracks: List[MidiTrack] = field(default_factory=list)
    trailing: bytes = b""

    @property
    def diagnostics(self) -> List[TrackLengthMismatch]:
        return [t.length_mismatch for t in self.tracks if t.length_mismatch is not None]
