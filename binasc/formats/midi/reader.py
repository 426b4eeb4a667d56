"""
Standard MIDI File structural parser.

Walks the MThd header chunk and every MTrk chunk, writing each field as a
line of binasc text (optionally commented) and collecting the decoded
structure in a MidiFile record.

Parser states:

    EXPECT_HEADER_TAG -> EXPECT_HEADER_BODY -> EXPECT_TRACK(0)
    -> EXPECT_TRACK_BODY(0) -> EXPECT_TRACK(1) -> ... -> DONE
"""

import io
import logging
from enum import Enum
from typing import BinaryIO, List, Optional, TextIO

from binasc.config import FormatOptions
from binasc.formats.midi.events import EventDecoder, hex_tokens
from binasc.formats.midi.models import MidiFile, MidiHeader, MidiTrack
from binasc.formats.midi.stream import ByteStream
from binasc.utils.byteorder import unpack_uint16, unpack_uint32
from binasc.utils.validation import MTHD, MTRK, check_chunk_tag

logger = logging.getLogger(__name__)

TRACK_SEPARATOR = "----------------------------------"


class ParserState(Enum):
    EXPECT_HEADER_TAG = "header tag"
    EXPECT_HEADER_BODY = "header body"
    EXPECT_TRACK = "track tag"
    EXPECT_TRACK_BODY = "track body"
    DONE = "done"


class MidiReader:
    """
    Reader that converts a MIDI file into annotated binasc text.

    Output lines are written as soon as they are decoded, so a fatal error
    leaves everything before the failure in the output.

    Example:
        reader = MidiReader(FormatOptions(show_comments=True))
        with open("song.mid", "rb") as f:
            midi = reader.parse(f, sys.stdout)
        print(midi.header.track_count)
    """

    def __init__(self, options: Optional[FormatOptions] = None):
        self.options = options or FormatOptions()
        self._stream: Optional[ByteStream] = None
        self._out: Optional[TextIO] = None
        self._header: Optional[MidiHeader] = None
        self._tracks: List[MidiTrack] = []
        self._decoder: Optional[EventDecoder] = None
        self._track_index = 0
        self._transitions = {
            ParserState.EXPECT_HEADER_TAG: self._read_header_tag,
            ParserState.EXPECT_HEADER_BODY: self._read_header_body,
            ParserState.EXPECT_TRACK: self._read_track_tag,
            ParserState.EXPECT_TRACK_BODY: self._read_track_body,
        }

    def parse_bytes(self, data: bytes, out: Optional[TextIO] = None) -> MidiFile:
        """Parse MIDI data held in memory."""
        return self.parse(io.BytesIO(data), out)

    def parse(self, source: BinaryIO, out: Optional[TextIO] = None) -> MidiFile:
        """
        Parse a MIDI file from a binary stream.

        Args:
            source: Readable binary stream (borrowed, not closed)
            out: Text stream receiving the binasc lines; None to only
                collect the structure

        Returns:
            The decoded MidiFile

        Raises:
            ChunkTagMismatch: If a chunk tag is not MThd / MTrk
            StreamExhausted: If the input ends inside a field
            UnsupportedStatus: If a track holds status 0xFE
        """
        self._stream = ByteStream(source)
        self._out = out
        self._header = None
        self._tracks = []
        self._track_index = 0
        self._decoder = EventDecoder(self._stream)

        state = ParserState.EXPECT_HEADER_TAG
        while state is not ParserState.DONE:
            state = self._transitions[state]()

        trailing = self._stream.read_rest()
        if trailing:
            logger.warning("%d bytes follow the last track", len(trailing))
            self._emit("")
            self._emit(";;; TRAILING BYTES")
            size = self.options.max_line_bytes
            for offset in range(0, len(trailing), size):
                self._emit(" ".join(hex_tokens(trailing[offset : offset + size])))

        return MidiFile(header=self._header, tracks=self._tracks, trailing=trailing)

    def _emit(self, text: str, comment: str = "") -> None:
        if self._out is None:
            return
        if comment and self.options.show_comments:
            text = f"{text}\t\t\t; {comment}"
        self._out.write(text + "\n")

    def _read_tag(self, expected: bytes, field: str) -> None:
        offset = self._stream.tell()
        tag = self._stream.read_exact(4, field)
        check_chunk_tag(tag, expected, offset)

    def _read_header_tag(self) -> ParserState:
        self._read_tag(MTHD, "header chunk tag")
        self._emit('"MThd"', "MIDI header chunk marker")
        return ParserState.EXPECT_HEADER_BODY

    def _read_header_body(self) -> ParserState:
        stream = self._stream

        length = unpack_uint32(stream.read_exact(4, "header length"))
        self._emit(f"4'{length}", "bytes to follow in header chunk")

        format_type = unpack_uint16(stream.read_exact(2, "file format"))
        track_count = unpack_uint16(stream.read_exact(2, "track count"))
        division = unpack_uint16(stream.read_exact(2, "division"))
        extra = stream.read_exact(max(0, length - 6), "unknown header bytes")

        header = MidiHeader(length, format_type, track_count, division, extra)
        self._header = header

        self._emit(
            f"2'{format_type}", f"file format: Type-{format_type} ({header.format_name})"
        )
        self._emit(f"2'{track_count}", "number of tracks")
        if header.is_smpte:
            self._emit(f"1'{header.smpte_frames}", "SMPTE frames/second")
            self._emit(f"1'{header.subframes}", "subframes per frame")
        else:
            self._emit(f"2'{division}", "ticks per quarter note")
        if extra:
            self._emit(" ".join(hex_tokens(extra)), "unknown header bytes")

        logger.debug(
            "Header: format %d, %d tracks, division 0x%04x", format_type, track_count, division
        )
        return ParserState.EXPECT_TRACK if track_count else ParserState.DONE

    def _read_track_tag(self) -> ParserState:
        self._emit("")
        self._emit(f";;; TRACK {self._track_index} {TRACK_SEPARATOR}")
        self._read_tag(MTRK, "track chunk tag")
        self._emit('"MTrk"', "MIDI track chunk marker")
        return ParserState.EXPECT_TRACK_BODY

    def _read_track_body(self) -> ParserState:
        stream = self._stream

        length = unpack_uint32(stream.read_exact(4, "track length"))
        self._emit(f"4'{length}", "bytes to follow in track chunk")

        track = MidiTrack(index=self._track_index, declared_length=length)
        self._tracks.append(track)

        decoder = self._decoder
        decoder.reset()
        start = stream.tell()
        while True:
            event = decoder.read_event()
            track.events.append(event)
            track.consumed = stream.tell() - start
            self._emit(event.to_line(self.options.show_comments))
            if event.is_end_of_track:
                break

        mismatch = track.length_mismatch
        if mismatch is not None:
            logger.warning(
                "Track %d declares %d bytes but its events use %d",
                track.index,
                mismatch.declared,
                mismatch.actual,
            )
            self._emit(mismatch.annotation)

        logger.debug("Track %d: %d events", track.index, len(track.events))

        self._track_index += 1
        if self._track_index < self._header.track_count:
            return ParserState.EXPECT_TRACK
        return ParserState.DONE
