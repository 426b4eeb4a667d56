"""Test configuration and fixtures."""

import struct

import pytest


def build_chunk(tag: bytes, body: bytes, declared_length=None) -> bytes:
    """Build a MIDI chunk; declared_length overrides the real body length."""
    length = len(body) if declared_length is None else declared_length
    return tag + struct.pack(">I", length) + body


def build_header(format_type: int = 1, track_count: int = 2, division: int = 96) -> bytes:
    return build_chunk(b"MThd", struct.pack(">HHH", format_type, track_count, division))


# Conductor track: tempo 120, 4/4 time, track name, end of track
CONDUCTOR_EVENTS = bytes(
    [0x00, 0xFF, 0x51, 0x03, 0x07, 0xA1, 0x20]
    + [0x00, 0xFF, 0x58, 0x04, 0x04, 0x02, 0x18, 0x08]
    + [0x00, 0xFF, 0x03, 0x05]
    + list(b"Piano")
    + [0x00, 0xFF, 0x2F, 0x00]
)

# Note track: program change, note on, running-status note off,
# pitch bend, delayed note-off, end of track
NOTE_EVENTS = bytes(
    [0x00, 0xC0, 0x00]
    + [0x00, 0x90, 0x3C, 0x40]
    + [0x60, 0x3C, 0x00]
    + [0x00, 0xE0, 0x00, 0x40]
    + [0x81, 0x40, 0x80, 0x3C, 0x40]
    + [0x00, 0xFF, 0x2F, 0x00]
)


@pytest.fixture
def make_chunk():
    """Return the chunk builder."""
    return build_chunk


@pytest.fixture
def make_header():
    """Return the header chunk builder."""
    return build_header


@pytest.fixture
def conductor_events():
    return CONDUCTOR_EVENTS


@pytest.fixture
def note_events():
    return NOTE_EVENTS


@pytest.fixture
def midi_data():
    """Return a two-track type 1 MIDI file."""
    return (
        build_header(1, 2, 96)
        + build_chunk(b"MTrk", CONDUCTOR_EVENTS)
        + build_chunk(b"MTrk", NOTE_EVENTS)
    )


@pytest.fixture
def midi_file(tmp_path, midi_data):
    """Return path to the two-track MIDI file written to disk."""
    path = tmp_path / "song.mid"
    path.write_bytes(midi_data)
    return path
