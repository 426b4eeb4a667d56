"""Tests for the MIDI structural parser."""

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from binasc.codec import Binasc
from binasc.config import FormatOptions
from binasc.formats.midi.reader import MidiReader
from binasc.utils.validation import ChunkTagMismatch, MissingRunningStatus, StreamExhausted

EXPECTED_TEXT = """\
"MThd"
4'6
2'1
2'2
2'96

;;; TRACK 0 ----------------------------------
"MTrk"
4'28
v0\tff 51 v3 t120.0
v0\tff 58 v4 '4 '2 '24 '8
v0\tff 03 v5 "Piano"
v0\tff 2f v0

;;; TRACK 1 ----------------------------------
"MTrk"
4'23
v0\tc0 '0
v0\t90 '60 '64
v96\t   '60 '0
v0\te0 '0 '64
v192\t80 '60 '64
v0\tff 2f v0
"""


def decode(data: bytes, comments: bool = False) -> str:
    codec = Binasc(FormatOptions(parse_as_midi=True, show_comments=comments))
    return codec.decode(data)


class TestMidiHeader:
    """Test cases for header chunk parsing."""

    def test_header_fields(self, make_header):
        midi = MidiReader().parse_bytes(make_header(1, 0, 0x60))

        header = midi.header
        assert header.length == 6
        assert header.format_type == 1
        assert header.format_name == "multitrack"
        assert header.track_count == 0
        assert header.division == 0x60
        assert header.ticks_per_quarter == 96
        assert header.extra == b""
        assert midi.tracks == []

    def test_smpte_division(self, make_header):
        data = make_header(0, 0, 0xE728)
        out = io.StringIO()

        midi = MidiReader().parse_bytes(data, out)

        assert midi.header.is_smpte
        assert midi.header.smpte_frames == -25
        assert midi.header.subframes == 40
        assert out.getvalue().splitlines()[-2:] == ["1'-25", "1'40"]
        assert Binasc().encode(out.getvalue()) == data

    def test_unknown_header_bytes(self, make_chunk):
        data = make_chunk(b"MThd", bytes([0, 0, 0, 0, 0, 96, 0xAA, 0xBB]))
        out = io.StringIO()

        midi = MidiReader().parse_bytes(data, out)

        assert midi.header.length == 8
        assert midi.header.extra == b"\xaa\xbb"
        assert "aa bb" in out.getvalue().splitlines()
        assert Binasc().encode(out.getvalue()) == data

    def test_format_names(self, make_header):
        assert MidiReader().parse_bytes(make_header(0, 0)).header.format_name == "single track"
        assert MidiReader().parse_bytes(make_header(2, 0)).header.format_name == "multisegment"
        assert MidiReader().parse_bytes(make_header(7, 0)).header.format_name == "unknown"


class TestMidiReader:
    """Test cases for full file parsing."""

    def test_text_output(self, midi_data):
        assert decode(midi_data) == EXPECTED_TEXT

    def test_structure(self, midi_data):
        midi = MidiReader().parse_bytes(midi_data)

        assert len(midi.tracks) == 2
        conductor, notes = midi.tracks
        assert len(conductor.events) == 4
        assert len(notes.events) == 6
        assert conductor.declared_length == conductor.consumed == 28
        assert notes.declared_length == notes.consumed == 23
        assert notes.events[2].running_status
        assert notes.events[4].delta == 192
        assert notes.events[-1].is_end_of_track
        assert midi.diagnostics == []

    def test_comments(self, midi_data):
        lines = decode(midi_data, comments=True).splitlines()

        assert lines[0] == '"MThd"\t\t\t; MIDI header chunk marker'
        assert lines[2] == "2'1\t\t\t; file format: Type-1 (multitrack)"
        assert lines[4] == "2'96\t\t\t; ticks per quarter note"
        assert "v0\tff 51 v3 t120.0\t; tempo" in lines
        assert "v0\tff 03 v5 \"Piano\"\t; track name" in lines
        assert "v0\t90 '60 '64\t; note-on C4" in lines
        assert "v96\t   '60 '0\t; note-off C4" in lines
        assert "v0\tff 2f v0\t; end-of-track" in lines

    def test_roundtrip(self, midi_data):
        for comments in (False, True):
            assert Binasc().encode(decode(midi_data, comments)) == midi_data

    def test_running_status_resets_per_track(self, make_header, make_chunk):
        """A track may not inherit the previous track's running status."""
        data = (
            make_header(1, 2)
            + make_chunk(b"MTrk", bytes([0x00, 0x90, 0x3C, 0x40, 0x00, 0xFF, 0x2F, 0x00]))
            + make_chunk(b"MTrk", bytes([0x00, 0x3C, 0x00, 0x00, 0xFF, 0x2F, 0x00]))
        )

        with pytest.raises(MissingRunningStatus):
            MidiReader().parse_bytes(data)

    def test_trailing_bytes_kept(self, midi_data):
        data = midi_data + b"\x01\x02"
        text = decode(data)

        assert ";;; TRAILING BYTES" in text
        assert Binasc().encode(text) == data


class TestTrackLengthMismatch:
    """Test cases for the non-fatal track length diagnostic."""

    def test_mismatch_reported_once(self, make_header, make_chunk, conductor_events, note_events, caplog):
        data = (
            make_header(1, 2)
            + make_chunk(b"MTrk", conductor_events)
            + make_chunk(b"MTrk", note_events, declared_length=30)
        )
        out = io.StringIO()

        midi = MidiReader().parse_bytes(data, out)

        assert len(midi.tracks[1].events) == 6
        assert len(midi.diagnostics) == 1
        mismatch = midi.diagnostics[0]
        assert (mismatch.track_index, mismatch.declared, mismatch.actual) == (1, 30, 23)
        assert out.getvalue().count("TRACK SIZE ERROR") == 1
        assert "; TRACK SIZE ERROR, ACTUAL SIZE: 23" in out.getvalue()
        assert "declares 30 bytes" in caplog.text

    def test_mismatch_still_roundtrips(self, make_header, make_chunk, conductor_events):
        data = make_header(0, 1) + make_chunk(b"MTrk", conductor_events, declared_length=5)

        assert Binasc().encode(decode(data)) == data


class TestMidiErrors:
    """Test cases for fatal decode errors."""

    def test_bad_header_tag(self):
        with pytest.raises(ChunkTagMismatch) as excinfo:
            MidiReader().parse_bytes(b"MThx\x00\x00\x00\x06")

        assert excinfo.value.expected == "MThd"
        assert excinfo.value.index == 3
        assert excinfo.value.offset == 3

    def test_bad_track_tag_keeps_partial_output(self, make_header, make_chunk, conductor_events):
        data = make_header(1, 1) + make_chunk(b"XTrk", conductor_events)
        out = io.StringIO()

        with pytest.raises(ChunkTagMismatch) as excinfo:
            MidiReader().parse_bytes(data, out)

        assert excinfo.value.expected == "MTrk"
        assert excinfo.value.index == 0
        assert out.getvalue().startswith('"MThd"\n4\'6\n')

    def test_empty_input(self):
        with pytest.raises(StreamExhausted) as excinfo:
            MidiReader().parse_bytes(b"")

        assert excinfo.value.field == "header chunk tag"

    def test_truncated_track(self, midi_data):
        with pytest.raises(StreamExhausted):
            MidiReader().parse_bytes(midi_data[:-2])

    def test_missing_tracks(self, make_header):
        with pytest.raises(StreamExhausted) as excinfo:
            MidiReader().parse_bytes(make_header(1, 1))

        assert excinfo.value.field == "track chunk tag"


class TestPaddedVariableLengths:
    """Files that store delta times or lengths in a padded form."""

    def test_padded_delta_roundtrips(self, make_header, make_chunk):
        data = make_header(0, 1) + make_chunk(
            b"MTrk", bytes([0x80, 0x00, 0x90, 0x3C, 0x40, 0x00, 0xFF, 0x2F, 0x00])
        )

        text = decode(data)

        assert "80 00\t90 '60 '64" in text.splitlines()
        assert Binasc().encode(text) == data

    def test_padded_meta_length_roundtrips(self, make_header, make_chunk):
        data = make_header(0, 1) + make_chunk(
            b"MTrk", bytes([0x00, 0xFF, 0x03, 0x80, 0x01, 0x41, 0x00, 0xFF, 0x2F, 0x00])
        )

        for comments in (False, True):
            assert Binasc().encode(decode(data, comments)) == data
